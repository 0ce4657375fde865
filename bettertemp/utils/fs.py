#!/usr/bin/env python3
"""
fs.py
-------------------
Filesystem primitives used by the temporary file core.

Thin wrappers around os calls so the core reads in terms of what it does
(claim a lock-marker, create exclusively, remove a file) and so tests have
one place to inject failures.

Functions:
    path_exists: Whether anything exists at a path
    make_lock_marker: Atomically create the lock-marker directory
    remove_lock_marker: Remove a lock-marker directory if present
    create_exclusive: Create a new file with O_EXCL and return its descriptor
    remove_file: Delete a file, reporting refused deletes distinctly
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import os

# --- Local imports ---
from bettertemp.core.exceptions import UnlinkPermissionError

_EXCL_FLAGS = os.O_RDWR | os.O_CREAT | os.O_EXCL | getattr(os, "O_BINARY", 0)


def path_exists(path: str) -> bool:
    """Return True if a file, directory or dangling symlink is at path."""
    return os.path.lexists(path)


def make_lock_marker(path: str) -> None:
    """
    Create a lock-marker directory.

    mkdir is atomic and fails if the directory already exists, which makes
    it usable as a cross-process claim on the sibling candidate name.

    Raises:
        FileExistsError: If another actor holds the marker
        OSError: If the parent directory is missing or not writable
    """
    os.mkdir(path)


def remove_lock_marker(path: str) -> None:
    """Remove a lock-marker directory; a no-op when it is already gone."""
    try:
        os.rmdir(path)
    except FileNotFoundError:
        pass


def create_exclusive(path: str, permissions: int = 0o600, flags: int = 0) -> int:
    """
    Create a new file that must not exist yet.

    Args:
        path: File to create
        permissions: Mode bits for the new file (umask still applies)
        flags: Access flags from an io.open opener; read-write if 0

    Returns:
        Open file descriptor

    Raises:
        FileExistsError: If something already exists at path
        OSError: On permission, quota or disk errors
    """
    if flags:
        flags |= os.O_CREAT | os.O_EXCL | getattr(os, "O_BINARY", 0)
    else:
        flags = _EXCL_FLAGS
    return os.open(path, flags, permissions)


def remove_file(path: str) -> None:
    """
    Delete a file.

    Raises:
        UnlinkPermissionError: If the platform refuses (e.g. file still open on Windows)
        FileNotFoundError: If nothing is at path
        OSError: On any other deletion failure
    """
    try:
        os.unlink(path)
    except PermissionError as e:
        raise UnlinkPermissionError(path, e.strerror or str(e)) from e
