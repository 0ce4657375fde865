#!/usr/bin/env python3
"""
naming.py
--------------------
Candidate filename generation for temporary files.

Names look like ``{prefix}{YYYYMMDD}-{pid}-{random36}-{attempt}{suffix}``.
The date keeps names sortable and easy to recognise; pid and a random
32-bit value make same-instant collisions between processes unlikely, and
the attempt counter gives the selection loop a way out of a real collision.

Usage:
    from bettertemp.core.naming import make_tmpname

    make_tmpname("foo", 0)              # 'foo20240115-4242-1fj3k9x-0'
    make_tmpname(("foo", ".txt"), 3)    # 'foo20240115-4242-q0z1e2-3.txt'
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import os
import random
import string
from datetime import date
from typing import Callable, Optional, Sequence, Tuple, Union

Basename = Union[str, Sequence[str]]

_DIGITS36 = string.digits + string.ascii_lowercase
_RANDOM_BITS = 32


def to_base36(value: int) -> str:
    """Render a non-negative integer in lowercase base 36."""
    if value < 0:
        raise ValueError(f"value must be non-negative, got {value}")
    if value == 0:
        return "0"
    digits = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(_DIGITS36[remainder])
    return "".join(reversed(digits))


def split_basename(basename: Basename) -> Tuple[str, str]:
    """
    Split a basename argument into (prefix, suffix).

    Args:
        basename: Prefix string, or a (prefix, suffix) pair

    Returns:
        Tuple of prefix and suffix; suffix is empty for a plain string

    Raises:
        TypeError: If basename is neither a string nor a 1-2 item sequence
    """
    if isinstance(basename, str):
        return basename, ""
    if isinstance(basename, (bytes, bytearray)):
        raise TypeError("basename must be str, not bytes")

    parts = list(basename)
    if not 1 <= len(parts) <= 2 or not all(isinstance(p, str) for p in parts):
        raise TypeError(f"basename must be a str or a (prefix, suffix) pair, got {basename!r}")
    prefix = parts[0]
    suffix = parts[1] if len(parts) == 2 else ""
    return prefix, suffix


def make_tmpname(
    basename: Basename,
    attempt: int,
    pid: Optional[int] = None,
    today: Optional[date] = None,
    rand: Optional[int] = None,
) -> str:
    """
    Build one candidate basename.

    Args:
        basename: Prefix string, or a (prefix, suffix) pair
        attempt: Collision retry counter from the caller's loop
        pid: Process id to embed; current process if None
        today: Date to embed; today if None
        rand: 32-bit random component; drawn fresh if None

    Returns:
        Candidate file name (no directory part)
    """
    if attempt < 0:
        raise ValueError(f"attempt must be non-negative, got {attempt}")

    prefix, suffix = split_basename(basename)
    stamp = (today or date.today()).strftime("%Y%m%d")
    pid = os.getpid() if pid is None else pid
    if rand is None:
        rand = random.getrandbits(_RANDOM_BITS)

    return f"{prefix}{stamp}-{pid}-{to_base36(rand)}-{attempt}{suffix}"


class NameGenerator:
    """
    Injectable source of candidate names.

    Managers hold one of these instead of calling make_tmpname directly so
    tests can pin the random component and the clock.

    Usage:
        generator = NameGenerator(rng=random.Random(7))
        generator.generate(("report", ".csv"), 0)
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        clock: Optional[Callable[[], date]] = None,
        pid_source: Callable[[], int] = os.getpid,
    ) -> None:
        self._rng = rng or random.SystemRandom()
        self._clock = clock or date.today
        self._pid_source = pid_source

    def generate(self, basename: Basename, attempt: int) -> str:
        """Return the candidate basename for this attempt."""
        return make_tmpname(
            basename,
            attempt,
            pid=self._pid_source(),
            today=self._clock(),
            rand=self._rng.getrandbits(_RANDOM_BITS),
        )
