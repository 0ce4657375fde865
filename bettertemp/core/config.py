#!/usr/bin/env python3
"""
config.py
--------------------
Configuration for temporary file managers.

A TempfileConfig carries the knobs a TempfileManager needs: where files go,
how hard to try when picking a name, which permissions and open mode new
files get, and where (if anywhere) to write logs. Configurations can be
built in code or read from a YAML mapping.

Usage:
    from bettertemp.core.config import TempfileConfig, load_config

    config = TempfileConfig(tmpdir=Path("/scratch"), max_tries=20)
    config = load_config(Path("bettertemp.yaml"))

Example YAML:
    tmpdir: /scratch/uploads
    max_tries: 10
    permissions: 0600
    default_mode: w+b
    log_dir: /var/log/myapp
    debug: true
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import tempfile
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

# --- Third party imports ---
import yaml

# --- Local imports ---
from .exceptions import ConfigError

MAX_TRY = 10


@dataclass
class TempfileConfig:
    """
    Configuration for a TempfileManager.

    Attributes:
        tmpdir: Default directory for new files; platform temp dir if None
        max_tries: Rounds of name selection before NamingExhaustedError
        permissions: Mode bits applied at exclusive create
        lock_suffix: Suffix of the transient lock-marker directory
        default_mode: Open mode used when the caller passes none
        log_dir: Directory for a TempfileLogger; no logging if None
        debug: Log finalizer cleanup and its failures
    """

    tmpdir: Optional[Path] = None
    max_tries: int = MAX_TRY
    permissions: int = 0o600
    lock_suffix: str = ".lock"
    default_mode: str = "w+"
    log_dir: Optional[Path] = None
    debug: bool = False

    def __post_init__(self) -> None:
        """Normalize paths and validate values."""
        if self.tmpdir is not None:
            self.tmpdir = Path(self.tmpdir)
        if self.log_dir is not None:
            self.log_dir = Path(self.log_dir)

        if not isinstance(self.max_tries, int) or self.max_tries < 1:
            raise ConfigError(f"max_tries must be at least 1, got {self.max_tries!r}")
        if not self.lock_suffix:
            raise ConfigError("lock_suffix must not be empty")
        if not isinstance(self.permissions, int) or not 0 <= self.permissions <= 0o777:
            raise ConfigError(f"permissions out of range: {self.permissions!r}")
        if "+" not in self.default_mode:
            raise ConfigError(
                f"default_mode must open for reading and writing, got {self.default_mode!r}"
            )

    def resolve_tmpdir(self, directory: Optional[Union[str, Path]] = None) -> str:
        """
        Pick the directory a new file goes into.

        Args:
            directory: Caller supplied directory, wins over the configured one

        Returns:
            Absolute directory path as a string
        """
        if directory is not None:
            chosen = Path(directory)
        elif self.tmpdir is not None:
            chosen = self.tmpdir
        else:
            chosen = Path(tempfile.gettempdir())
        return str(chosen.absolute())

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TempfileConfig":
        """
        Build a config from a plain mapping, rejecting unknown keys.

        Raises:
            ConfigError: If keys are unknown or values invalid
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown configuration keys: {', '.join(unknown)}")
        return cls(**data)


def load_config(path: Union[str, Path]) -> TempfileConfig:
    """
    Load a TempfileConfig from a YAML file.

    An empty file yields the defaults.

    Args:
        path: YAML file holding a single mapping

    Returns:
        Parsed configuration

    Raises:
        ConfigError: If the file is unreadable, malformed, or invalid
    """
    config_path = Path(path)
    try:
        content = config_path.read_text(encoding="utf-8")
        data = yaml.safe_load(content)
    except OSError as e:
        raise ConfigError(f"Cannot read configuration {config_path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"YAML parse error in {config_path}: {e}") from e

    if data is None:
        return TempfileConfig()
    if not isinstance(data, dict):
        raise ConfigError(
            f"Configuration {config_path} must be a mapping, got {type(data).__name__}"
        )
    return TempfileConfig.from_dict(data)
