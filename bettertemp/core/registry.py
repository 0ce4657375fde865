#!/usr/bin/env python3
"""
registry.py
--------------------
Process-wide bookkeeping of live temporary file paths.

The registry is the in-process half of collision avoidance: a path is
added once its file exists and removed when the file is unlinked or
finalized, and the naming lock serialises candidate selection between
threads. Cross-process exclusion is left to the filesystem (lock-marker
directories and exclusive create).

One default instance lives for the lifetime of the process; managers use
it unless another registry is injected.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import threading
from typing import Iterator, List, Set


class LiveFileRegistry:
    """
    Set of in-use temp file paths plus the naming mutex.

    Attributes:
        naming_lock: Held by TempfileManager only while choosing a name
    """

    def __init__(self) -> None:
        self._paths: Set[str] = set()
        self.naming_lock = threading.Lock()

    def add(self, path: str) -> None:
        """Record a freshly created path."""
        self._paths.add(path)

    def discard(self, path: str) -> None:
        """Forget a path; a no-op when it is already gone."""
        self._paths.discard(path)

    def snapshot(self) -> List[str]:
        """Return the live paths, sorted."""
        return sorted(self._paths)

    def __contains__(self, path: object) -> bool:
        return path in self._paths

    def __len__(self) -> int:
        return len(self._paths)

    def __iter__(self) -> Iterator[str]:
        return iter(self.snapshot())


_default_registry = LiveFileRegistry()


def default_registry() -> LiveFileRegistry:
    """Return the registry shared by every manager in this process."""
    return _default_registry
