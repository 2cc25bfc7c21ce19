import logging
import threading
from typing import Dict, Iterable, Optional

from errors import NotFoundError
from schemas import ProfileUpdate, User

logger = logging.getLogger(__name__)


class UserStore:
    def __init__(self, users: Iterable[User] = ()):
        self._users: Dict[str, User] = {u.id: u for u in users}
        self._lock = threading.Lock()

    def find(self, user_id: Optional[str]) -> Optional[User]:
        if not user_id:
            return None
        return self._users.get(user_id)

    def get_profile(self, user_id: str) -> User:
        user = self.find(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    def update_profile(self, user_id: str, changes: ProfileUpdate) -> User:
        fields = {
            k: (v.strip() if isinstance(v, str) else v)
            for k, v in changes.model_dump(exclude_unset=True, exclude_none=True).items()
        }
        with self._lock:
            user = self.get_profile(user_id)
            updated = user.model_copy(update=fields)
            self._users[user_id] = updated
        logger.info(f"Profile {user_id} updated: {sorted(fields)}")
        return updated
