"""Session-scoped memory of how each login session last voted on each perk."""

from __future__ import annotations

import logging
from collections import defaultdict
from threading import Lock
from typing import Any, Final

import redis

from perk_manager.core.settings import settings
from perk_manager.services.vote_state import VoteState

logger = logging.getLogger(__name__)

_KEY_PREFIX: Final[str] = "votes"


class SessionVoteTracker:
    """Maps (session id, perk id) to the session's last vote on that perk.

    Absent entries read as ``VoteState.NO_VOTE``; writing ``NO_VOTE`` removes
    the entry. Backed by one Redis hash per session when a client is
    available, with the hash expiring after the session lifetime. Without
    Redis, or after a Redis failure, state lives in a process-local map.
    """

    def __init__(
        self,
        redis_client: Any | None = None,
        *,
        ttl_seconds: int | None = None,
    ) -> None:
        self._redis = redis_client
        self._ttl_seconds = ttl_seconds if ttl_seconds is not None else settings.session_ttl_seconds
        self._local: dict[str, dict[int, VoteState]] = defaultdict(dict)
        self._lock = Lock()

    @staticmethod
    def _key(session_id: str) -> str:
        return f"{_KEY_PREFIX}:{session_id}"

    def _drop_redis(self, exc: redis.RedisError) -> None:
        logger.warning("Vote tracker lost Redis, using in-memory state: %s", exc)
        self._redis = None

    def get(self, session_id: str, perk_id: int) -> VoteState:
        """Return the session's recorded state for a perk."""
        if self._redis is not None:
            try:
                raw = self._redis.hget(self._key(session_id), str(perk_id))
                return _decode_state(raw)
            except redis.RedisError as exc:
                self._drop_redis(exc)

        with self._lock:
            return self._local.get(session_id, {}).get(perk_id, VoteState.NO_VOTE)

    def set(self, session_id: str, perk_id: int, state: VoteState) -> None:
        """Record the session's state for a perk."""
        if self._redis is not None:
            try:
                key = self._key(session_id)
                pipe = self._redis.pipeline()
                if state is VoteState.NO_VOTE:
                    pipe.hdel(key, str(perk_id))
                else:
                    pipe.hset(key, str(perk_id), state.value)
                pipe.expire(key, int(self._ttl_seconds))
                pipe.execute()
                return
            except redis.RedisError as exc:
                self._drop_redis(exc)

        with self._lock:
            if state is VoteState.NO_VOTE:
                self._local.get(session_id, {}).pop(perk_id, None)
            else:
                self._local[session_id][perk_id] = state

    def snapshot(self, session_id: str) -> dict[int, VoteState]:
        """Return every perk the session currently has a vote on."""
        if self._redis is not None:
            try:
                raw_map = self._redis.hgetall(self._key(session_id))
                return {
                    int(_as_text(perk_id)): _decode_state(value)
                    for perk_id, value in raw_map.items()
                }
            except redis.RedisError as exc:
                self._drop_redis(exc)

        with self._lock:
            return dict(self._local.get(session_id, {}))

    def clear(self, session_id: str) -> None:
        """Forget all votes recorded for a session, e.g. on logout."""
        if self._redis is not None:
            try:
                self._redis.delete(self._key(session_id))
                return
            except redis.RedisError as exc:
                self._drop_redis(exc)

        with self._lock:
            self._local.pop(session_id, None)


def _as_text(value: bytes | str) -> str:
    if isinstance(value, bytes):
        return value.decode("utf-8")
    return value


def _decode_state(raw: bytes | str | None) -> VoteState:
    if raw is None:
        return VoteState.NO_VOTE
    try:
        return VoteState(_as_text(raw))
    except ValueError:
        logger.warning("Ignoring unknown vote state %r in tracker", raw)
        return VoteState.NO_VOTE


_TRACKER: SessionVoteTracker | None = None
_TRACKER_LOCK = Lock()


def get_vote_tracker() -> SessionVoteTracker:
    """Return the process-wide session vote tracker."""
    global _TRACKER
    with _TRACKER_LOCK:
        if _TRACKER is None:
            client = redis.from_url(settings.redis_url) if settings.redis_enabled else None
            _TRACKER = SessionVoteTracker(client)
        return _TRACKER
