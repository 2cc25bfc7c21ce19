import sys

import pytest

from errors import InvalidRequestError, NotFoundError
from forum import DOWNVOTE, UPVOTE, ForumService, author_snapshot
from notifications import Notifier
from schemas import Author, User
from seed import seed_topics
from store import InMemoryTopicRepository

AUTHOR = Author(name="Tester")


def by_id(topics, topic_id):
    return next(t for t in topics if t["id"] == topic_id)


# -----------------------------------------------------------------------------
# Topics
# -----------------------------------------------------------------------------
def test_create_topic_prepends_with_zero_counters(forum):
    created = forum.create_topic("T1", "Family Law", "C", False, AUTHOR)
    listed = forum.list_topics()
    assert listed[0]["id"] == created["id"]
    assert created["voteScore"] == 0
    assert created["views"] == 0
    assert created["replies"] == []
    assert created["author"] == {"name": "Tester", "profileImage": "/lawyer.png"}


def test_topic_ids_are_unique(forum):
    ids = {forum.create_topic(f"T{i}", "Other", "C", False, AUTHOR)["id"] for i in range(50)}
    assert len(ids) == 50


def test_anonymous_flag_keeps_author(forum):
    created = forum.create_topic("T", "Other", "C", True, AUTHOR)
    assert created["anonymous"] is True
    assert created["author"]["name"] == "Tester"


def test_list_reports_top_level_reply_count(forum):
    forum.add_reply("1", "nested", "r1-1", False, AUTHOR)
    forum.add_reply("1", "deeper", "r1-2", False, AUTHOR)
    topic = by_id(forum.list_topics(), "1")
    assert topic["replies"] == 2


def test_detail_keeps_insertion_order_at_every_level(forum):
    topic = forum.create_topic("T", "Other", "C", False, AUTHOR)
    first = forum.add_reply(topic["id"], "first", None, False, AUTHOR)
    second = forum.add_reply(topic["id"], "second", None, False, AUTHOR)
    child_a = forum.add_reply(topic["id"], "child a", first["id"], False, AUTHOR)
    child_b = forum.add_reply(topic["id"], "child b", first["id"], False, AUTHOR)

    replies = forum.get_topic(topic["id"])["replies"]
    assert [r["id"] for r in replies] == [first["id"], second["id"]]
    assert [r["id"] for r in replies[0]["replies"]] == [child_a["id"], child_b["id"]]
    assert replies[1]["replies"] == []


def test_parent_from_another_topic_is_not_found(forum):
    foreign = forum.add_reply("2", "in topic 2", None, False, AUTHOR)
    with pytest.raises(NotFoundError):
        forum.add_reply("1", "misplaced", foreign["id"], False, AUTHOR)
    assert len(forum.get_topic("1")["replies"]) == 2
    assert forum.get_topic("2")["replies"][0]["replies"] == []


def test_unknown_topic_is_not_found_everywhere(forum):
    with pytest.raises(NotFoundError):
        forum.get_topic("nope")
    with pytest.raises(NotFoundError):
        forum.add_reply("nope", "x", None, False, AUTHOR)
    with pytest.raises(NotFoundError):
        forum.vote_topic("nope", UPVOTE)
    with pytest.raises(NotFoundError):
        forum.vote_reply("nope", "r1-1", UPVOTE)


# -----------------------------------------------------------------------------
# Votes
# -----------------------------------------------------------------------------
def test_upvote_then_downvote_restores_score(forum):
    before = forum.get_topic("1")["voteScore"]
    assert forum.vote_topic("1", UPVOTE) == before + 1
    assert forum.vote_topic("1", DOWNVOTE) == before


def test_votes_have_no_floor_or_dedup(forum):
    for _ in range(20):
        score = forum.vote_topic("4", DOWNVOTE)
    assert score == 6 - 20


def test_deep_reply_vote_touches_only_that_node(forum):
    level1 = forum.add_reply("2", "L1", None, False, AUTHOR)
    level2 = forum.add_reply("2", "L2", level1["id"], False, AUTHOR)
    level3 = forum.add_reply("2", "L3", level2["id"], False, AUTHOR)

    assert forum.vote_reply("2", level3["id"], UPVOTE) == 1

    l1 = forum.get_topic("2")["replies"][0]
    assert l1["voteScore"] == 0
    assert l1["replies"][0]["voteScore"] == 0
    assert l1["replies"][0]["replies"][0]["voteScore"] == 1


def test_unknown_reply_vote_is_not_found(forum):
    with pytest.raises(NotFoundError):
        forum.vote_reply("1", "missing", DOWNVOTE)


def test_invalid_delta_rejected(forum):
    with pytest.raises(ValueError):
        forum.vote_topic("1", 5)


def test_end_to_end_scenario(forum):
    topic = forum.create_topic("T1", "Family Law", "C", False, AUTHOR)
    r1 = forum.add_reply(topic["id"], "R1", None, False, AUTHOR)
    r2 = forum.add_reply(topic["id"], "R2", r1["id"], False, AUTHOR)
    forum.vote_reply(topic["id"], r2["id"], UPVOTE)

    detail = forum.get_topic(topic["id"])
    assert detail["replies"][0]["replies"][0]["voteScore"] == 1
    assert detail["replies"][0]["voteScore"] == 0


# -----------------------------------------------------------------------------
# Author snapshots
# -----------------------------------------------------------------------------
def test_author_snapshot_rules():
    user = User(id="u", name="Asha", email="a@x.test", profile_image="/asha.png")
    assert author_snapshot(user).name == "Asha"
    assert author_snapshot(user).profile_image == "/asha.png"
    assert author_snapshot(None).name == "Anonymous User"
    assert author_snapshot(user, anonymous=True).name == "Anonymous"
    assert author_snapshot(user, anonymous=True).profile_image == "/lawyer.png"


def test_snapshot_is_not_a_live_link(forum):
    user = User(id="u", name="Before", email="a@x.test")
    created = forum.create_topic("T", "Other", "C", False, author_snapshot(user))
    user.name = "After"
    assert forum.get_topic(created["id"])["author"]["name"] == "Before"


# -----------------------------------------------------------------------------
# Notifications
# -----------------------------------------------------------------------------
def test_mutations_publish_events(forum, notifier):
    topic = forum.create_topic("T", "Other", "C", False, AUTHOR)
    reply = forum.add_reply(topic["id"], "R", None, False, AUTHOR)
    forum.vote_topic(topic["id"], UPVOTE)
    forum.vote_reply(topic["id"], reply["id"], DOWNVOTE)

    channel = f"topic-{topic['id']}"
    assert [(e["event"], e["channel"]) for e in notifier.events] == [
        ("new-topic", None),
        ("new-reply", channel),
        ("topic-vote-update", None),
        ("reply-vote-update", channel),
    ]
    assert notifier.events[1]["data"]["parentId"] is None
    assert notifier.events[3]["data"] == {"topicId": topic["id"], "replyId": reply["id"], "voteScore": -1}


def test_failed_lookups_publish_nothing(forum, notifier):
    with pytest.raises(NotFoundError):
        forum.vote_topic("nope", UPVOTE)
    assert notifier.events == []


class ExplodingNotifier(Notifier):
    def publish(self, event_type, payload, channel=None):
        raise RuntimeError("transport down")


def test_notifier_failure_does_not_reach_caller():
    service = ForumService(InMemoryTopicRepository(seed_topics()), ExplodingNotifier())
    assert service.vote_topic("1", UPVOTE) == 13
    created = service.create_topic("T", "Other", "C", False, AUTHOR)
    assert service.get_topic(created["id"])["title"] == "T"


def test_categories(forum):
    names = [c.name for c in forum.list_categories()]
    assert names == ["Housing & Tenant Issues", "Family Law", "Employment Law", "Small Claims"]


# -----------------------------------------------------------------------------
# Deep reply chains
# -----------------------------------------------------------------------------
def test_detail_handles_chain_deeper_than_recursion_limit(forum):
    levels = sys.getrecursionlimit() + 200
    topic = forum.create_topic("Deep", "Other", "C", False, AUTHOR)
    parent_id = None
    for i in range(levels):
        parent_id = forum.add_reply(topic["id"], f"level {i}", parent_id, False, AUTHOR)["id"]

    node = {"replies": forum.get_topic(topic["id"])["replies"]}
    depth = 0
    while node["replies"]:
        assert len(node["replies"]) == 1
        node = node["replies"][0]
        depth += 1
    assert depth == levels
    assert node["id"] == parent_id
    assert node["content"] == f"level {levels - 1}"


def test_reply_depth_limit():
    service = ForumService(InMemoryTopicRepository(seed_topics()), max_reply_depth=3)
    level0 = service.add_reply("2", "L0", None, False, AUTHOR)
    level1 = service.add_reply("2", "L1", level0["id"], False, AUTHOR)
    level2 = service.add_reply("2", "L2", level1["id"], False, AUTHOR)

    with pytest.raises(InvalidRequestError):
        service.add_reply("2", "L3", level2["id"], False, AUTHOR)

    assert service.add_reply("2", "sibling", level1["id"], False, AUTHOR)["content"] == "sibling"
    chain = service.get_topic("2")["replies"][0]["replies"][0]
    assert [r["content"] for r in chain["replies"]] == ["L2", "sibling"]
    assert chain["replies"][0]["replies"] == []
