"""
bettertemp
==========

Temporary files that get unique names, behave like file objects, and are
removed reliably.

Names are picked so that no two threads or processes ever choose the same
one. A handle can be unlinked before it is closed (POSIX), closed without
being unlinked, or simply dropped: a finalizer then deletes the file when
the handle is reclaimed or the interpreter exits, never twice, and never
from a forked child on behalf of its parent.

Main Components:
    - core.temporal_files: Tempfile handle and TempfileManager
    - core.naming: Candidate filename generation
    - core.registry: Process-wide live-file registry and naming lock
    - core.config: TempfileConfig and YAML loading
    - core.logging_manager: Optional rotating-file logging
    - utils.fs: Filesystem primitives

Example Usage:
    >>> from bettertemp import Tempfile
    >>> file = Tempfile(("report", ".csv"))
    >>> file.write("a,b\\n")
    4
    >>> file.close()
    >>> file.unlink()

Version: 1.0.0
License: MIT
"""

__version__ = "1.0.0"

from bettertemp.core.config import MAX_TRY, TempfileConfig, load_config
from bettertemp.core.exceptions import (
    ConfigError,
    CreationError,
    NamingExhaustedError,
    NotFoundError,
    TempfileError,
    UnlinkPermissionError,
)
from bettertemp.core.logging_manager import TempfileLogger, safe_logger, setup_logger
from bettertemp.core.naming import NameGenerator, make_tmpname
from bettertemp.core.registry import LiveFileRegistry, default_registry
from bettertemp.core.temporal_files import (
    Tempfile,
    TempfileManager,
    default_manager,
    open_tempfile,
)

__all__ = [
    "MAX_TRY",
    "TempfileConfig",
    "load_config",
    "ConfigError",
    "CreationError",
    "NamingExhaustedError",
    "NotFoundError",
    "TempfileError",
    "UnlinkPermissionError",
    "TempfileLogger",
    "safe_logger",
    "setup_logger",
    "NameGenerator",
    "make_tmpname",
    "LiveFileRegistry",
    "default_registry",
    "Tempfile",
    "TempfileManager",
    "default_manager",
    "open_tempfile",
]
