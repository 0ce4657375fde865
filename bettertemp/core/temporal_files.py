#!/usr/bin/env python3
"""
temporal_files.py
--------------------
Temporary file lifecycle: unique naming, open/close/unlink, and cleanup.

Provides temp file handles that behave like regular file objects, get a
name no other thread or process will pick, and are removed reliably:
explicitly, early while still open (POSIX unlink-before-close), or by a
finalizer when the handle is reclaimed or the interpreter exits.

Features:
    - Thread and inter-process safe name selection (registry check, lock-marker
      directory, exclusive create)
    - Files created with owner-only read/write permissions
    - Unlink-before-close, with refused deletes on Windows silently ignored
    - Finalizer that never deletes twice and never deletes a parent's file
      from a forked child
    - Manager-level cleanup statistics and context manager support

Classes:
    Tempfile: Handle for one temporary file
    TempfileManager: Creates handles and cleans up after them

Usage:
    from bettertemp.core.temporal_files import Tempfile, open_tempfile

    file = Tempfile("foo")
    file.write("hello world")
    file.rewind()
    file.read()         # 'hello world'
    file.close()
    file.unlink()       # deletes the temp file

    # Unlink right away; the open handle keeps working on POSIX
    file = Tempfile(("upload", ".bin"), mode="w+b")
    file.unlink()
    try:
        ...
    finally:
        file.close_and_unlink()

    # Close automatically at the end of the block
    with open_tempfile("foo") as file:
        file.write("data")

Automatic cleanup is best-effort. A process killed by a signal skips it;
prefer an explicit unlink() or close_and_unlink() in a finally block.

Name selection is safe across threads and processes. A single Tempfile is
not; guard it with a lock if several threads share it.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import io
import os
import weakref
from contextlib import contextmanager
from pathlib import Path
from typing import IO, Any, Dict, Iterator, List, Optional, Tuple, Union

# --- Local imports ---
from bettertemp.utils.fs import (
    create_exclusive,
    make_lock_marker,
    path_exists,
    remove_file,
    remove_lock_marker,
)
from .config import TempfileConfig
from .exceptions import CreationError, NamingExhaustedError, NotFoundError
from .logging_manager import TempfileLogger, safe_logger, setup_logger
from .naming import Basename, NameGenerator
from .registry import LiveFileRegistry, default_registry


def _cleanup(
    info: List[Any], creator_pid: int, logger: Optional[TempfileLogger]
) -> None:
    """
    Finalizer body for one Tempfile.

    ``info`` is the handle's mutable [path, file, registry] snapshot; it must
    never reference the handle itself or the handle would stay reachable.
    """
    # A forked child must leave the parent's temp file alone.
    if os.getpid() != creator_pid:
        return

    path, tmpfile, registry = info
    log = safe_logger(logger)

    if tmpfile is not None:
        try:
            tmpfile.close()
        except OSError as e:
            log.log_debug("Finalizer could not close temp file", {"path": path, "error": str(e)})

    if path is not None:
        try:
            if path_exists(path):
                remove_file(path)
                log.log_debug("Finalizer removed temp file", {"path": path})
        except OSError as e:
            log.log_debug("Finalizer could not remove temp file", {"path": path, "error": str(e)})
        if registry is not None:
            registry.discard(path)


class Tempfile:
    """
    Handle for one temporary file.

    Created with mode "w+" (configurable) and permissions 0600. Exposes the
    usual file operations explicitly; once closed they raise ValueError,
    like a closed file object.

    Attributes:
        path: Absolute path, or None once unlinked
    """

    def __init__(
        self,
        basename: Basename,
        directory: Optional[Union[str, Path]] = None,
        *,
        manager: Optional["TempfileManager"] = None,
        **options: Any,
    ) -> None:
        """
        Create a temporary file.

        Args:
            basename: Prefix string, or (prefix, suffix) pair for the file name
            directory: Target directory; configured or platform default if None
            manager: Manager to create through; the process default if None
            **options: Passed verbatim to io.open (mode, encoding, newline, ...)

        Raises:
            NamingExhaustedError: If no free name could be claimed
            CreationError: If the exclusive create failed
        """
        self._manager = manager if manager is not None else default_manager()
        self._path: Optional[str] = None
        self._file: Optional[IO[Any]] = None
        self._finalizer: Optional[weakref.finalize] = None

        config = self._manager.config
        mode = options.pop("mode", config.default_mode)
        self._binary = "b" in mode
        self._reopen_options = dict(options)

        path, lock = self._manager._claim_name(basename, directory)
        try:
            self._file = self._manager._open_exclusive(path, mode, options)
            self._path = path
            self._registry = self._manager.registry
            self._registry.add(path)
            self._creator_pid = os.getpid()
            self._finalizer_info: List[Any] = [path, self._file, self._registry]
            self._finalizer = weakref.finalize(
                self,
                _cleanup,
                self._finalizer_info,
                self._creator_pid,
                self._manager.finalizer_logger,
            )
            self._manager._track(self)
        finally:
            remove_lock_marker(lock)

        safe_logger(self._manager.logger).log_operation(
            "create_tempfile", {"path": path, "mode": mode}
        )

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def reopen(self) -> None:
        """
        Open or reopen the file read-write without truncating it.

        Raises:
            NotFoundError: If the file has been unlinked
        """
        if self._path is None:
            raise NotFoundError("Cannot reopen a tempfile that has been unlinked")
        self._close()
        mode = "r+b" if self._binary else "r+"
        self._file = io.open(self._path, mode, **self._reopen_options)
        self._finalizer_info[1] = self._file
        safe_logger(self._manager.logger).log_debug("Reopened tempfile", {"path": self._path})

    def close(self, unlink_now: bool = False) -> None:
        """
        Close the file, and delete it too if unlink_now is True.

        Closing twice is a no-op. You can still call unlink() later if you
        do not unlink now.
        """
        if unlink_now:
            self.close_and_unlink()
        else:
            self._close()

    def close_and_unlink(self) -> None:
        """Close and delete the file; same as close(unlink_now=True)."""
        self._close()
        if not self.unlinked:
            self.unlink()

    def unlink(self) -> None:
        """
        Delete the file from the filesystem.

        Works before close on POSIX systems: the directory entry goes away
        and the open handle keeps working. Platforms that refuse to delete
        an open file (Windows) make this a silent no-op; the handle is left
        not unlinked and close_and_unlink() will try again.

        Calling it on an already unlinked handle does nothing.
        """
        path = self._path
        if path is None:
            return

        log = safe_logger(self._manager.logger)
        # Delete first, then forget the path.
        try:
            if path_exists(path):
                self._unlink_file(path)
        except FileNotFoundError:
            pass
        except PermissionError as e:
            log.log_warning("Tempfile could not be unlinked while open", {"path": path, "error": str(e)})
            return

        self._registry.discard(path)
        self._path = None
        self._finalizer_info[0] = None
        if self._finalizer is not None:
            self._finalizer.detach()
        log.log_debug("Unlinked tempfile", {"path": path})

    delete = unlink

    def _close(self) -> None:
        tmpfile = self._file
        self._file = None
        self._finalizer_info[1] = None
        if tmpfile is not None:
            tmpfile.close()

    def _unlink_file(self, path: str) -> None:
        remove_file(path)

    # =========================================================================
    # State
    # =========================================================================

    @property
    def path(self) -> Optional[str]:
        """Full path of the file, or None once unlinked."""
        return self._path

    name = path

    @property
    def unlinked(self) -> bool:
        """Whether unlink() has been called and succeeded."""
        return self._path is None

    @property
    def closed(self) -> bool:
        return self._file is None or self._file.closed

    def size(self) -> int:
        """
        Size of the file in bytes, flushing pending writes first.

        Returns 0 once the handle is closed; no stat of the path is tried.

        Raises:
            NotFoundError: If the handle is closed and the file unlinked
        """
        if self._file is not None:
            self._file.flush()
            return os.fstat(self._file.fileno()).st_size
        if self._path is None:
            raise NotFoundError("Tempfile is closed and unlinked; size is unknown")
        return 0

    length = size

    def __len__(self) -> int:
        return self.size()

    def __repr__(self) -> str:
        return f"<Tempfile path={self._path!r} closed={self.closed}>"

    # =========================================================================
    # File operations
    # =========================================================================

    def _require_file(self) -> IO[Any]:
        if self._file is None:
            raise ValueError("I/O operation on closed tempfile")
        return self._file

    def write(self, data: Union[str, bytes]) -> int:
        return self._require_file().write(data)

    def writelines(self, lines: Any) -> None:
        self._require_file().writelines(lines)

    def read(self, size: int = -1) -> Union[str, bytes]:
        return self._require_file().read(size)

    def readline(self, size: int = -1) -> Union[str, bytes]:
        return self._require_file().readline(size)

    def readlines(self, hint: int = -1) -> List[Any]:
        return self._require_file().readlines(hint)

    def seek(self, offset: int, whence: int = io.SEEK_SET) -> int:
        return self._require_file().seek(offset, whence)

    def tell(self) -> int:
        return self._require_file().tell()

    def rewind(self) -> None:
        """Seek back to the start of the file."""
        self.seek(0)

    def truncate(self, size: Optional[int] = None) -> int:
        return self._require_file().truncate(size)

    def flush(self) -> None:
        self._require_file().flush()

    def fileno(self) -> int:
        return self._require_file().fileno()

    def stat(self) -> os.stat_result:
        """fstat of the open descriptor; works after unlink-before-close."""
        return os.fstat(self.fileno())

    def __iter__(self) -> Iterator[Any]:
        return iter(self._require_file())

    def __enter__(self) -> "Tempfile":
        return self

    def __exit__(
        self,
        exc_type: Optional[type],
        exc_val: Optional[BaseException],
        exc_tb: Optional[Any],
    ) -> None:
        """Close (but keep) the file on context exit."""
        del exc_type, exc_val, exc_tb
        self.close()


class TempfileManager:
    """
    Creates Tempfile handles and cleans up after them.

    Holds the configuration, the live-file registry and the name generator
    every handle it creates uses. Handles are tracked weakly, so the manager
    never keeps a temp file alive on its own.

    Usage:
        with TempfileManager(TempfileConfig(tmpdir=Path("/scratch"))) as manager:
            upload = manager.create(("upload", ".bin"), mode="w+b")
            ...
        # Every handle still alive is closed and unlinked on exit
    """

    def __init__(
        self,
        config: Optional[TempfileConfig] = None,
        registry: Optional[LiveFileRegistry] = None,
        logger: Optional[TempfileLogger] = None,
        name_generator: Optional[NameGenerator] = None,
    ) -> None:
        """
        Initialize temp file manager.

        Args:
            config: Manager configuration; defaults if None
            registry: Live-file registry; the process-wide one if None
            logger: Logger; built from config.log_dir when None and set
            name_generator: Candidate name source; a fresh one if None
        """
        self.config = config if config is not None else TempfileConfig()
        self.registry = registry if registry is not None else default_registry()
        if logger is None and self.config.log_dir is not None:
            logger = setup_logger(self.config.log_dir)
        self.logger = logger
        self.name_generator = name_generator or NameGenerator()
        self._handles: "weakref.WeakSet[Tempfile]" = weakref.WeakSet()

    @property
    def finalizer_logger(self) -> Optional[TempfileLogger]:
        """Logger handed to finalizers; only set in debug mode."""
        return self.logger if self.config.debug else None

    # =========================================================================
    # Creation
    # =========================================================================

    def create(
        self,
        basename: Basename,
        directory: Optional[Union[str, Path]] = None,
        **options: Any,
    ) -> Tempfile:
        """
        Create a temporary file.

        Args:
            basename: Prefix string, or (prefix, suffix) pair
            directory: Target directory; configured or platform default if None
            **options: Passed verbatim to io.open

        Returns:
            Open Tempfile handle

        Raises:
            NamingExhaustedError: If no free name could be claimed
            CreationError: If the exclusive create failed
        """
        return Tempfile(basename, directory, manager=self, **options)

    @contextmanager
    def open(
        self,
        basename: Basename,
        directory: Optional[Union[str, Path]] = None,
        **options: Any,
    ) -> Iterator[Tempfile]:
        """Create a Tempfile and close it when the block ends."""
        tempfile = self.create(basename, directory, **options)
        try:
            yield tempfile
        finally:
            tempfile.close()

    def _claim_name(
        self, basename: Basename, directory: Optional[Union[str, Path]]
    ) -> Tuple[str, str]:
        """
        Pick a free candidate path and claim it with a lock-marker.

        Returns:
            Tuple of (candidate path, lock-marker path)

        Raises:
            NamingExhaustedError: If every round of selection failed
        """
        tmpdir = self.config.resolve_tmpdir(directory)
        lock_suffix = self.config.lock_suffix
        log = safe_logger(self.logger)

        attempt = 0
        candidate: Optional[str] = None
        last_error: Optional[OSError] = None

        with self.registry.naming_lock:
            for failure in range(self.config.max_tries):
                try:
                    while True:
                        candidate = os.path.join(
                            tmpdir, self.name_generator.generate(basename, attempt)
                        )
                        lock = candidate + lock_suffix
                        attempt += 1
                        if not (
                            candidate in self.registry
                            or path_exists(lock)
                            or path_exists(candidate)
                        ):
                            break
                    make_lock_marker(lock)
                    return candidate, lock
                except OSError as e:
                    last_error = e
                    log.log_warning(
                        "Tempfile name selection failed, retrying",
                        {"candidate": candidate, "failure": failure + 1, "error": str(e)},
                    )

        error = NamingExhaustedError(candidate, self.config.max_tries)
        log.log_error(error, {"directory": tmpdir})
        raise error from last_error

    def _open_exclusive(self, path: str, mode: str, options: Dict[str, Any]) -> IO[Any]:
        """
        Create path with O_EXCL and wrap it in a file object.

        The file is removed again if io.open fails after creating it.

        Raises:
            CreationError: If the create or the wrap failed at the OS level
        """
        permissions = self.config.permissions
        created: List[int] = []

        def opener(file: str, flags: int) -> int:
            fd = create_exclusive(file, permissions, flags)
            created.append(fd)
            return fd

        try:
            return io.open(path, mode, opener=opener, **options)
        except Exception as e:
            if created:
                remove_file(path)
            if not isinstance(e, OSError):
                raise
            error = CreationError(path, e.strerror or str(e))
            safe_logger(self.logger).log_error(error, {"path": path})
            raise error from e

    # =========================================================================
    # Bookkeeping
    # =========================================================================

    def _track(self, tempfile: Tempfile) -> None:
        self._handles.add(tempfile)

    def live_handles(self) -> List[Tempfile]:
        """Handles created here that are still reachable and not unlinked."""
        return [handle for handle in list(self._handles) if not handle.unlinked]

    def cleanup(self) -> Dict[str, int]:
        """
        Close and unlink every reachable handle created by this manager.

        Returns:
            Dictionary with cleanup statistics
        """
        cleanup_stats = {"files_removed": 0, "already_unlinked": 0, "errors": 0}
        log = safe_logger(self.logger)

        for handle in list(self._handles):
            if handle.unlinked:
                handle.close()
                cleanup_stats["already_unlinked"] += 1
                continue
            path = handle.path
            try:
                handle.close_and_unlink()
            except OSError as e:
                cleanup_stats["errors"] += 1
                log.log_error(e, {"path": path})
                continue
            if handle.unlinked:
                cleanup_stats["files_removed"] += 1
            else:
                cleanup_stats["errors"] += 1

        log.log_operation("cleanup", cleanup_stats)
        return cleanup_stats

    def __enter__(self) -> "TempfileManager":
        """Context manager entry."""
        return self

    def __exit__(
        self,
        exc_type: Optional[type],
        exc_val: Optional[BaseException],
        exc_tb: Optional[Any],
    ) -> None:
        """Context manager exit with automatic cleanup."""
        del exc_type, exc_val, exc_tb
        self.cleanup()


_default_manager: Optional[TempfileManager] = None


def default_manager() -> TempfileManager:
    """Return the process-wide manager used by Tempfile() and open_tempfile()."""
    global _default_manager
    if _default_manager is None:
        _default_manager = TempfileManager()
    return _default_manager


@contextmanager
def open_tempfile(
    basename: Basename,
    directory: Optional[Union[str, Path]] = None,
    **options: Any,
) -> Iterator[Tempfile]:
    """
    Create a Tempfile with the default manager and close it after the block.

    The file is closed, not unlinked; the finalizer or an explicit unlink()
    removes it later.
    """
    with default_manager().open(basename, directory, **options) as tempfile:
        yield tempfile
