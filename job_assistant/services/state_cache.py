"""Per-service state cache.

Each service instance owns one cache holding the last-known record per
user id. It is the source of truth when persistence is unconfigured or the
onboarding table is missing, and it is written before every persistence
attempt so it never falls behind a failed write.

No locking: concurrent read-then-write sequences for the same user may
interleave and the last writer wins.
"""

from typing import Generic, Protocol, TypeVar

T = TypeVar("T")


class StateCache(Protocol[T]):
    """Key-value cache keyed by user id."""

    def get(self, user_id: str) -> T | None: ...

    def set(self, user_id: str, value: T) -> None: ...


class InMemoryStateCache(Generic[T]):
    """Dict-backed StateCache for a single process."""

    def __init__(self) -> None:
        self._entries: dict[str, T] = {}

    def get(self, user_id: str) -> T | None:
        return self._entries.get(user_id)

    def set(self, user_id: str, value: T) -> None:
        self._entries[user_id] = value

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, user_id: object) -> bool:
        return user_id in self._entries
