"""
Repositories for topics and resources.

The in-memory implementations are the default datastore (seeded mock data,
reset on restart). The Mongo implementations are used when `database.db` is
configured; both honour the same contract so callers never change.
"""

import logging
from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Optional

from pymongo import ReturnDocument

from reply_tree import ReplyTree
from schemas import Reply, Resource, Topic

logger = logging.getLogger(__name__)


# ---------- Interfaces ----------

class TopicRepository(ABC):
    @abstractmethod
    def list(self) -> List[Topic]:
        """All topics, newest first."""

    @abstractmethod
    def find(self, topic_id: str) -> Optional[Topic]:
        ...

    @abstractmethod
    def create(self, topic: Topic) -> Topic:
        ...

    @abstractmethod
    def update(self, topic: Topic) -> Topic:
        """Persist counters and replies of an already created topic."""


class ResourceRepository(ABC):
    @abstractmethod
    def list(self) -> List[Resource]:
        ...

    @abstractmethod
    def find(self, resource_id: str) -> Optional[Resource]:
        ...

    @abstractmethod
    def increment(self, resource_id: str, counter: str) -> Optional[int]:
        """Add one to `counter` and return the new value, None if no match."""


# ---------- In-memory ----------

class InMemoryTopicRepository(TopicRepository):
    def __init__(self, topics: Iterable[Topic] = ()):
        self._topics: List[Topic] = list(topics)
        self._by_id: Dict[str, Topic] = {t.id: t for t in self._topics}

    def list(self) -> List[Topic]:
        return list(self._topics)

    def find(self, topic_id: str) -> Optional[Topic]:
        return self._by_id.get(topic_id)

    def create(self, topic: Topic) -> Topic:
        if topic.id in self._by_id:
            raise ValueError(f"Topic id already exists: {topic.id}")
        self._topics.insert(0, topic)
        self._by_id[topic.id] = topic
        return topic

    def update(self, topic: Topic) -> Topic:
        # objects are shared with callers, mutations are already visible
        return topic


class InMemoryResourceRepository(ResourceRepository):
    def __init__(self, resources: Iterable[Resource] = ()):
        self._resources: List[Resource] = list(resources)

    def list(self) -> List[Resource]:
        return list(self._resources)

    def find(self, resource_id: str) -> Optional[Resource]:
        return next((r for r in self._resources if r.id == resource_id), None)

    def increment(self, resource_id: str, counter: str) -> Optional[int]:
        resource = self.find(resource_id)
        if resource is None:
            return None
        value = getattr(resource, counter) + 1
        setattr(resource, counter, value)
        return value


# ---------- MongoDB ----------

def topic_to_document(topic: Topic) -> dict:
    doc = topic.model_dump(exclude={"id"})
    doc["_id"] = topic.id
    doc["replies"] = [r.model_dump() for r in topic.replies.records()]
    return doc


def topic_from_document(doc: dict) -> Topic:
    d = {**doc}
    d["id"] = str(d.pop("_id"))
    replies = d.pop("replies", None) or []
    topic = Topic(**d)
    return topic.with_replies(ReplyTree(Reply(**r) for r in replies))


class MongoTopicRepository(TopicRepository):
    def __init__(self, db, collection: str = "topic"):
        self.collection = db[collection]

    def list(self) -> List[Topic]:
        docs = self.collection.find({}).sort([("created_at", -1)])
        return [topic_from_document(d) for d in docs]

    def find(self, topic_id: str) -> Optional[Topic]:
        doc = self.collection.find_one({"_id": topic_id})
        return topic_from_document(doc) if doc else None

    def create(self, topic: Topic) -> Topic:
        self.collection.insert_one(topic_to_document(topic))
        return topic

    def update(self, topic: Topic) -> Topic:
        doc = topic_to_document(topic)
        doc.pop("_id")
        result = self.collection.replace_one({"_id": topic.id}, doc)
        if result.matched_count == 0:
            logger.warning(f"Topic {topic.id} vanished before update")
        return topic


class MongoResourceRepository(ResourceRepository):
    def __init__(self, db, collection: str = "resource", seed: Iterable[Resource] = ()):
        self.collection = db[collection]
        self._seed = list(seed)

    def ensure_seeded(self) -> int:
        if self.collection.count_documents({}) > 0:
            return 0
        docs = []
        for r in self._seed:
            doc = r.model_dump(exclude={"id"})
            doc["_id"] = r.id
            docs.append(doc)
        if docs:
            self.collection.insert_many(docs)
        return len(docs)

    @staticmethod
    def _to_model(doc: dict) -> Resource:
        d = {**doc}
        d["id"] = str(d.pop("_id"))
        return Resource(**d)

    def list(self) -> List[Resource]:
        return [self._to_model(d) for d in self.collection.find({})]

    def find(self, resource_id: str) -> Optional[Resource]:
        doc = self.collection.find_one({"_id": resource_id})
        return self._to_model(doc) if doc else None

    def increment(self, resource_id: str, counter: str) -> Optional[int]:
        doc = self.collection.find_one_and_update(
            {"_id": resource_id},
            {"$inc": {counter: 1}},
            return_document=ReturnDocument.AFTER,
        )
        return doc.get(counter, 0) if doc else None
