"""Segmented concurrent map with atomic conditional primitives."""

import threading
from typing import Dict, Generic, Iterator, List, Optional, Tuple, TypeVar

V = TypeVar("V")

DEFAULT_SEGMENTS = 64


class _Segment(Generic[V]):
    __slots__ = ("lock", "entries")

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.entries: Dict[str, V] = {}


class ConcurrentMap(Generic[V]):
    """Thread-safe string-keyed map with put-if-absent, compare-and-replace and
    compare-and-remove.

    Keys are hashed onto independent segments, each guarded by its own lock
    that is held only for the duration of a single primitive. Operations on
    keys in different segments never wait on each other, and no caller holds
    a lock between two primitives.

    Conditional primitives compare values by identity, so a value only matches
    if it is the exact object previously read from the map.
    """

    def __init__(self, segments: int = DEFAULT_SEGMENTS):
        if segments < 1:
            raise ValueError("segments must be at least 1")
        self._segments: List[_Segment[V]] = [_Segment() for _ in range(segments)]

    def _segment_for(self, key: str) -> _Segment[V]:
        return self._segments[hash(key) % len(self._segments)]

    def get(self, key: str) -> Optional[V]:
        segment = self._segment_for(key)
        with segment.lock:
            return segment.entries.get(key)

    def put_if_absent(self, key: str, value: V) -> Optional[V]:
        """Insert value unless key is present.

        Returns:
            None if value was inserted, otherwise the value already present.
        """
        segment = self._segment_for(key)
        with segment.lock:
            existing = segment.entries.get(key)
            if existing is not None:
                return existing
            segment.entries[key] = value
            return None

    def replace(self, key: str, expected: V, value: V) -> bool:
        """Replace the value for key only if it is currently expected."""
        segment = self._segment_for(key)
        with segment.lock:
            if segment.entries.get(key) is not expected:
                return False
            segment.entries[key] = value
            return True

    def remove(self, key: str, expected: V) -> bool:
        """Remove key only if its current value is expected."""
        segment = self._segment_for(key)
        with segment.lock:
            if segment.entries.get(key) is not expected:
                return False
            del segment.entries[key]
            return True

    def items(self) -> Iterator[Tuple[str, V]]:
        """Iterate a per-segment snapshot of the entries.

        Entries changed after their segment was copied are not reflected.
        """
        for segment in self._segments:
            with segment.lock:
                snapshot = list(segment.entries.items())
            yield from snapshot

    def __len__(self) -> int:
        return sum(len(segment.entries) for segment in self._segments)
