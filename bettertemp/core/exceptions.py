#!/usr/bin/env python3
"""
exceptions.py
--------------------
Custom exception classes for bettertemp.

This module defines the hierarchy of exceptions raised by the temporary
file subsystem. Everything derives from TempfileError so callers can catch
the whole family at once, or pick the specific failure they care about.

Exception Hierarchy:
    Exception (built-in)
    └── TempfileError - Base for all temporary file errors
        ├── NamingExhaustedError - No free filename after MAX_TRY rounds
        ├── CreationError - Exclusive file creation failed
        ├── NotFoundError - Operation on an already unlinked handle
        ├── UnlinkPermissionError - Platform refused to delete an open file
        └── ConfigError - Invalid or unreadable configuration

Usage:
    from bettertemp.core.exceptions import CreationError, TempfileError

    try:
        handle = manager.create("upload")
    except CreationError as e:
        logger.log_error(e, {"directory": str(e.path)})
    except TempfileError as e:
        logger.log_error(e)
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from typing import Optional


class TempfileError(Exception):
    """
    Base exception for temporary file errors.

    Catch this to handle any failure raised by bettertemp itself. Errors
    coming from the underlying file object (disk full on write, closed file
    on read) are not wrapped and propagate as the built-in exceptions.
    """

    pass


class NamingExhaustedError(TempfileError):
    """
    Exception for exhausted filename selection.

    Raised by TempfileManager.create when every retry of the candidate
    selection loop failed, typically because the target directory does not
    exist or is not writable, so the lock-marker could never be created.

    Attributes:
        path: Last candidate path that was attempted

    Examples:
        >>> raise NamingExhaustedError("/missing/foo20240115-42-1x2y3z-9", 10)
    """

    def __init__(self, path: Optional[str], tries: int) -> None:
        super().__init__(f"cannot generate tempfile `{path}' after {tries} tries")
        self.path = path
        self.tries = tries


class CreationError(TempfileError):
    """
    Exception for temporary file creation failures.

    Raised when the exclusive create of the chosen path fails for a reason
    other than a naming collision: permission denied, quota exceeded, disk
    full. Never retried. The originating OSError is chained as __cause__.

    Attributes:
        path: Path that could not be created

    Examples:
        >>> raise CreationError("/tmp/foo20240115-42-1x2y3z-0", "Permission denied")
    """

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Failed to create temporary file {path}: {reason}")
        self.path = path


class NotFoundError(TempfileError):
    """
    Exception for operations that need a path on an unlinked handle.

    Raised by Tempfile.reopen, and by Tempfile.size once the handle is both
    closed and unlinked, since there is nothing left to open or measure.

    Examples:
        >>> raise NotFoundError("Tempfile has been unlinked")
    """

    pass


class UnlinkPermissionError(TempfileError, PermissionError):
    """
    Exception for a refused deletion of a temporary file.

    Raised by the filesystem layer when the platform will not delete a file
    that is still open (Windows). Tempfile.unlink swallows it and leaves the
    handle in its not-unlinked state so the caller can retry after closing.

    Attributes:
        path: Path that could not be deleted
    """

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Cannot unlink {path}: {reason}")
        self.path = path


class ConfigError(TempfileError):
    """
    Exception for configuration failures.

    Raised when a TempfileConfig is built with invalid values or when a YAML
    configuration file cannot be read or parsed.

    Examples:
        >>> raise ConfigError("max_tries must be at least 1, got 0")
        >>> raise ConfigError("Unknown configuration keys: colour")
    """

    pass
