import logging
import threading
from typing import Dict, List, Optional

from errors import NotFoundError
from schemas import Resource
from store import ResourceRepository

logger = logging.getLogger(__name__)

ALL = "all"


def matches(resource: Resource, category: Optional[str] = None,
            type: Optional[str] = None, search: Optional[str] = None) -> bool:
    if category and category != ALL and resource.category != category:
        return False
    if type and type != ALL and resource.type != type:
        return False
    term = (search or "").strip().lower()
    if term:
        haystack = (resource.title, resource.description, resource.category or "")
        return any(term in field.lower() for field in haystack)
    return True


class ResourceLibrary:
    def __init__(self, resources: ResourceRepository, file_urls: Dict[str, str],
                 categories: Optional[List[str]] = None):
        self.resources = resources
        self.file_urls = dict(file_urls)
        self.categories = list(categories or [])
        self._lock = threading.Lock()

    def list_resources(self, category: Optional[str] = None, type: Optional[str] = None,
                       search: Optional[str] = None) -> List[Resource]:
        return [r for r in self.resources.list() if matches(r, category, type, search)]

    def list_categories(self) -> List[str]:
        return list(self.categories)

    def get_resource(self, resource_id: str) -> Resource:
        resource = self.resources.find(resource_id)
        if resource is None:
            raise NotFoundError("Resource not found")
        return resource

    def _bump(self, resource_id: str, counter: str) -> int:
        with self._lock:
            value = self.resources.increment(resource_id, counter)
        if value is None:
            raise NotFoundError("Resource not found")
        logger.info(f"Resource {resource_id} {counter} -> {value}")
        return value

    def record_view(self, resource_id: str) -> int:
        return self._bump(resource_id, "views")

    def record_download(self, resource_id: str) -> int:
        return self._bump(resource_id, "downloads")

    def resolve_file_url(self, resource_id: str) -> str:
        resource = self.resources.find(resource_id)
        if resource is None or not resource.file:
            raise NotFoundError("Resource file not found")
        url = self.file_urls.get(resource.file)
        if not url:
            raise NotFoundError("File URL not found")
        return url
