import pytest
from fastapi.testclient import TestClient

import main
from forum import ForumService
from lawyers import LawyerDirectory
from notifications import Notifier
from resources import ResourceLibrary
from seed import (
    RESOURCE_CATEGORIES,
    RESOURCE_FILE_URLS,
    seed_forum_categories,
    seed_lawyers,
    seed_resources,
    seed_topics,
    seed_users,
)
from store import InMemoryResourceRepository, InMemoryTopicRepository
from users import UserStore


class RecordingNotifier(Notifier):
    def __init__(self):
        self.events = []

    def publish(self, event_type, payload, channel=None):
        self.events.append({"event": event_type, "data": payload, "channel": channel})


# -----------------------------------------------------------------------------
# Services with fresh seed data per test
# -----------------------------------------------------------------------------
@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def forum(notifier):
    return ForumService(InMemoryTopicRepository(seed_topics()), notifier, seed_forum_categories())


@pytest.fixture
def library():
    return ResourceLibrary(InMemoryResourceRepository(seed_resources()), RESOURCE_FILE_URLS, RESOURCE_CATEGORIES)


@pytest.fixture
def directory():
    return LawyerDirectory(seed_lawyers())


@pytest.fixture
def users():
    return UserStore(seed_users())


# -----------------------------------------------------------------------------
# HTTP client wired to the fixtures above
# -----------------------------------------------------------------------------
@pytest.fixture
def client(forum, library, directory, users):
    main.app.dependency_overrides[main.get_forum] = lambda: forum
    main.app.dependency_overrides[main.get_library] = lambda: library
    main.app.dependency_overrides[main.get_directory] = lambda: directory
    main.app.dependency_overrides[main.get_users] = lambda: users
    yield TestClient(main.app)
    main.app.dependency_overrides.clear()
