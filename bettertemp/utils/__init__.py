"""
Utilities package for bettertemp.

- fs: Filesystem primitives (lock-markers, exclusive create, removal)

Import commonly-used utilities directly from this package:
    from bettertemp.utils import create_exclusive, remove_file
"""

# Filesystem utilities
from .fs import (
    path_exists,
    make_lock_marker,
    remove_lock_marker,
    create_exclusive,
    remove_file,
)

__all__ = [
    "path_exists",
    "make_lock_marker",
    "remove_lock_marker",
    "create_exclusive",
    "remove_file",
]
