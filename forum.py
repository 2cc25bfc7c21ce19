"""
Community forum: topic/reply lifecycle and vote aggregation.

All mutations run under a single process-wide lock because FastAPI executes
sync endpoints on a thread pool and the stores carry no version numbers.
Successful mutations are reported to the injected notifier; the notifier's
outcome never changes the result returned here.
"""

import logging
import threading
from typing import List, Optional

from bson import ObjectId

from errors import InvalidRequestError, NotFoundError
from notifications import Notifier, NullNotifier, topic_channel
from schemas import DEFAULT_AVATAR, Author, ForumCategory, Reply, Topic, User
from store import TopicRepository

logger = logging.getLogger(__name__)

UPVOTE = 1
DOWNVOTE = -1


def new_id() -> str:
    return str(ObjectId())


def author_snapshot(user: Optional[User], anonymous: bool = False) -> Author:
    if anonymous:
        return Author(name="Anonymous", profile_image=DEFAULT_AVATAR)
    if user is None:
        return Author(name="Anonymous User", profile_image=DEFAULT_AVATAR)
    return Author(name=user.name, profile_image=user.profile_image or DEFAULT_AVATAR)


# ---------- Serialization ----------

def render_reply(reply: Reply) -> dict:
    return reply.model_dump(by_alias=True, exclude={"parent_id"})


def topic_summary(topic: Topic) -> dict:
    """List view: `replies` is the number of top-level replies only."""
    d = topic.model_dump(by_alias=True)
    d["replies"] = topic.replies.top_level_count
    return d


def topic_detail(topic: Topic) -> dict:
    """Detail view: `replies` is the full nested structure in arrival order."""
    d = topic.model_dump(by_alias=True)
    d["replies"] = topic.replies.nested(render_reply)
    return d


# ---------- Service ----------

class ForumService:
    def __init__(self, topics: TopicRepository, notifier: Optional[Notifier] = None,
                 categories: Optional[List[ForumCategory]] = None,
                 max_reply_depth: Optional[int] = None):
        self.topics = topics
        # replies may sit at depths 0 .. max_reply_depth - 1; None means unbounded
        self.max_reply_depth = max_reply_depth
        self.notifier = notifier or NullNotifier()
        self.categories = list(categories or [])
        self._lock = threading.RLock()

    def _notify(self, event_type: str, payload, channel: Optional[str] = None) -> None:
        try:
            self.notifier.publish(event_type, payload, channel)
        except Exception as e:
            logger.error(f"Notification {event_type} failed: {e}")

    def _topic(self, topic_id: str) -> Topic:
        topic = self.topics.find(topic_id)
        if topic is None:
            raise NotFoundError("Topic not found")
        return topic

    def list_topics(self) -> List[dict]:
        with self._lock:
            return [topic_summary(t) for t in self.topics.list()]

    def list_categories(self) -> List[ForumCategory]:
        return list(self.categories)

    def get_topic(self, topic_id: str) -> dict:
        with self._lock:
            return topic_detail(self._topic(topic_id))

    def create_topic(self, title: str, category: str, content: str,
                     anonymous: bool, author: Author) -> dict:
        topic = Topic(
            id=new_id(),
            title=title.strip(),
            category=category.strip(),
            content=content.strip(),
            author=author,
            anonymous=anonymous,
        )
        with self._lock:
            self.topics.create(topic)
            created = topic_detail(topic)
        logger.info(f"Topic {topic.id} created in {topic.category!r}")
        self._notify("new-topic", created)
        return created

    def add_reply(self, topic_id: str, content: str, parent_id: Optional[str],
                  anonymous: bool, author: Author) -> dict:
        with self._lock:
            topic = self._topic(topic_id)
            # the arena only indexes this topic's replies, so a parent from
            # another topic is reported as missing
            if parent_id and parent_id not in topic.replies:
                raise NotFoundError("Parent comment not found")
            if parent_id and self.max_reply_depth is not None:
                if topic.replies.depth(parent_id) + 1 >= self.max_reply_depth:
                    raise InvalidRequestError(
                        f"Replies cannot be nested more than {self.max_reply_depth} levels deep"
                    )
            reply = Reply(
                id=new_id(),
                parent_id=parent_id or None,
                content=content.strip(),
                author=author,
                anonymous=anonymous,
            )
            topic.replies.attach(reply)
            self.topics.update(topic)
        created = render_reply(reply)
        created["replies"] = []
        logger.info(f"Reply {reply.id} added to topic {topic_id} (parent={reply.parent_id})")
        self._notify(
            "new-reply",
            {"topicId": topic_id, "reply": created, "parentId": reply.parent_id},
            topic_channel(topic_id),
        )
        return created

    # ---------- Votes ----------

    def vote_topic(self, topic_id: str, delta: int) -> int:
        if delta not in (UPVOTE, DOWNVOTE):
            raise ValueError(f"Vote delta must be +1 or -1, got {delta}")
        with self._lock:
            topic = self._topic(topic_id)
            topic.vote_score += delta
            self.topics.update(topic)
            score = topic.vote_score
        logger.info(f"Topic {topic_id} vote {delta:+d} -> {score}")
        self._notify("topic-vote-update", {"topicId": topic_id, "voteScore": score})
        return score

    def vote_reply(self, topic_id: str, reply_id: str, delta: int) -> int:
        if delta not in (UPVOTE, DOWNVOTE):
            raise ValueError(f"Vote delta must be +1 or -1, got {delta}")
        with self._lock:
            topic = self._topic(topic_id)
            reply = topic.replies.find(reply_id)
            reply.vote_score += delta
            self.topics.update(topic)
            score = reply.vote_score
        logger.info(f"Reply {reply_id} in topic {topic_id} vote {delta:+d} -> {score}")
        self._notify(
            "reply-vote-update",
            {"topicId": topic_id, "replyId": reply_id, "voteScore": score},
            topic_channel(topic_id),
        )
        return score
