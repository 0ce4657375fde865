#!/usr/bin/env python3
"""
conftest.py
-----------
Shared fixtures for integration tests.

These tests need a real interpreter exit (finalizers at shutdown, forked
children), so each scenario is a small script under scripts/ run in its
own process.

Fixtures:
    run_script: Run a scenario script and return its stdout
    spawn_script: Start a scenario script without waiting for it
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import os
import subprocess
import sys
from pathlib import Path
from typing import List

# --- Third-party imports ---
import pytest

SCRIPTS_DIR = Path(__file__).parent / "scripts"
PROJECT_ROOT = Path(__file__).resolve().parents[2]


def _command(script: str, *args: str) -> List[str]:
    return [sys.executable, str(SCRIPTS_DIR / script), *map(str, args)]


def _env() -> dict:
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(
        filter(None, [str(PROJECT_ROOT), env.get("PYTHONPATH")])
    )
    return env


@pytest.fixture
def run_script():
    """Run a scenario script to completion and return its stdout."""
    def run(script: str, *args: str) -> str:
        result = subprocess.run(
            _command(script, *args),
            capture_output=True,
            text=True,
            env=_env(),
            timeout=60,
        )
        if result.returncode != 0:
            raise AssertionError(
                f"Command failed: {' '.join(_command(script, *args))}\n{result.stderr}"
            )
        return result.stdout
    return run


@pytest.fixture
def spawn_script():
    """Start a scenario script; the caller collects it with communicate()."""
    def spawn(script: str, *args: str) -> subprocess.Popen:
        return subprocess.Popen(
            _command(script, *args),
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            env=_env(),
        )
    return spawn
