"""
conftest.py
-----------
Shared pytest fixtures for bettertemp tests.

Provides fixtures for:
- Scratch directories
- Managers with an isolated registry
- Handle teardown so failed tests do not leave files behind
"""
import pytest
from pathlib import Path
from tempfile import TemporaryDirectory

from bettertemp.core.config import TempfileConfig
from bettertemp.core.registry import LiveFileRegistry
from bettertemp.core.temporal_files import TempfileManager


# ----- Path Fixtures -----

@pytest.fixture
def tmp_dir():
    """Create a temporary directory for test file operations."""
    with TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


# ----- Manager Fixtures -----

@pytest.fixture
def registry():
    """Fresh registry, independent of the process-wide one."""
    return LiveFileRegistry()


@pytest.fixture
def manager(tmp_dir, registry):
    """Manager writing into tmp_dir; unlinks whatever the test leaves."""
    mgr = TempfileManager(TempfileConfig(tmpdir=tmp_dir), registry=registry)
    yield mgr
    mgr.cleanup()
