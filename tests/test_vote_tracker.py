"""Tests for the session vote tracker."""

from unittest.mock import MagicMock

import redis

from perk_manager.services import vote_tracker
from perk_manager.services.vote_state import VoteState
from perk_manager.services.vote_tracker import SessionVoteTracker


def test_unknown_pair_defaults_to_no_vote() -> None:
    tracker = SessionVoteTracker()
    assert tracker.get("session-a", 1) is VoteState.NO_VOTE


def test_set_and_get_round_trip() -> None:
    tracker = SessionVoteTracker()
    tracker.set("session-a", 1, VoteState.UPVOTED)
    tracker.set("session-a", 2, VoteState.DOWNVOTED)

    assert tracker.get("session-a", 1) is VoteState.UPVOTED
    assert tracker.get("session-a", 2) is VoteState.DOWNVOTED
    assert tracker.snapshot("session-a") == {1: VoteState.UPVOTED, 2: VoteState.DOWNVOTED}


def test_setting_no_vote_removes_entry() -> None:
    tracker = SessionVoteTracker()
    tracker.set("session-a", 1, VoteState.UPVOTED)
    tracker.set("session-a", 1, VoteState.NO_VOTE)

    assert tracker.get("session-a", 1) is VoteState.NO_VOTE
    assert tracker.snapshot("session-a") == {}


def test_sessions_are_isolated() -> None:
    tracker = SessionVoteTracker()
    tracker.set("session-a", 1, VoteState.UPVOTED)

    assert tracker.get("session-b", 1) is VoteState.NO_VOTE
    assert tracker.snapshot("session-b") == {}


def test_clear_forgets_one_session_only() -> None:
    tracker = SessionVoteTracker()
    tracker.set("session-a", 1, VoteState.UPVOTED)
    tracker.set("session-b", 1, VoteState.DOWNVOTED)

    tracker.clear("session-a")

    assert tracker.snapshot("session-a") == {}
    assert tracker.get("session-b", 1) is VoteState.DOWNVOTED


def test_redis_backend_reads_hash_fields() -> None:
    client = MagicMock()
    client.hget.return_value = b"downvoted"
    client.hgetall.return_value = {b"3": b"upvoted", b"4": b"downvoted"}
    tracker = SessionVoteTracker(client, ttl_seconds=60)

    assert tracker.get("sid", 3) is VoteState.DOWNVOTED
    client.hget.assert_called_once_with("votes:sid", "3")
    assert tracker.snapshot("sid") == {3: VoteState.UPVOTED, 4: VoteState.DOWNVOTED}


def test_redis_backend_writes_with_expiry() -> None:
    client = MagicMock()
    pipe = client.pipeline.return_value
    tracker = SessionVoteTracker(client, ttl_seconds=60)

    tracker.set("sid", 3, VoteState.UPVOTED)
    pipe.hset.assert_called_once_with("votes:sid", "3", "upvoted")
    pipe.expire.assert_called_with("votes:sid", 60)
    pipe.execute.assert_called()

    tracker.set("sid", 3, VoteState.NO_VOTE)
    pipe.hdel.assert_called_once_with("votes:sid", "3")


def test_redis_backend_clear_deletes_hash() -> None:
    client = MagicMock()
    tracker = SessionVoteTracker(client)

    tracker.clear("sid")
    client.delete.assert_called_once_with("votes:sid")


def test_redis_missing_field_reads_as_no_vote() -> None:
    client = MagicMock()
    client.hget.return_value = None
    tracker = SessionVoteTracker(client)

    assert tracker.get("sid", 9) is VoteState.NO_VOTE


def test_redis_failure_falls_back_to_memory() -> None:
    client = MagicMock()
    client.hget.side_effect = redis.ConnectionError("down")
    tracker = SessionVoteTracker(client)

    assert tracker.get("sid", 1) is VoteState.NO_VOTE

    # Subsequent calls no longer touch Redis.
    tracker.set("sid", 1, VoteState.UPVOTED)
    assert tracker.get("sid", 1) is VoteState.UPVOTED
    client.pipeline.assert_not_called()


def test_process_tracker_uses_redis_only_when_configured(monkeypatch) -> None:
    from_url = MagicMock()
    monkeypatch.setattr(vote_tracker.redis, "from_url", from_url)

    monkeypatch.setattr(vote_tracker, "_TRACKER", None)
    monkeypatch.setattr(vote_tracker.settings, "redis_url", None)
    local_tracker = vote_tracker.get_vote_tracker()
    assert local_tracker._redis is None
    from_url.assert_not_called()
    assert vote_tracker.get_vote_tracker() is local_tracker

    monkeypatch.setattr(vote_tracker, "_TRACKER", None)
    monkeypatch.setattr(vote_tracker.settings, "redis_url", "redis://cache:6379/0")
    redis_tracker = vote_tracker.get_vote_tracker()
    from_url.assert_called_once_with("redis://cache:6379/0")
    assert redis_tracker._redis is from_url.return_value
