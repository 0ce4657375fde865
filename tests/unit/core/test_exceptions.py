"""
test_exceptions.py
------------------
Unit tests for bettertemp.core.exceptions module.
"""
import pytest

from bettertemp.core.exceptions import (
    ConfigError,
    CreationError,
    NamingExhaustedError,
    NotFoundError,
    TempfileError,
    UnlinkPermissionError,
)


class TestHierarchy:
    """All package errors share TempfileError as their base."""

    @pytest.mark.parametrize(
        "error",
        [
            NamingExhaustedError("/tmp/foo", 10),
            CreationError("/tmp/foo", "Permission denied"),
            NotFoundError("gone"),
            UnlinkPermissionError("/tmp/foo", "Access is denied"),
            ConfigError("bad"),
        ],
    )
    def test_base_class(self, error):
        assert isinstance(error, TempfileError)

    def test_unlink_permission_error_is_permission_error(self):
        """Callers catching PermissionError also see the refused unlink."""
        error = UnlinkPermissionError("/tmp/foo", "Access is denied")
        assert isinstance(error, PermissionError)
        assert error.path == "/tmp/foo"
        assert "Access is denied" in str(error)


class TestMessages:
    """Errors carry the path involved."""

    def test_naming_exhausted(self):
        error = NamingExhaustedError("/tmp/foo20240115-1-a-9", 10)
        assert error.path == "/tmp/foo20240115-1-a-9"
        assert error.tries == 10
        assert "cannot generate tempfile" in str(error)
        assert "/tmp/foo20240115-1-a-9" in str(error)

    def test_creation_error(self):
        error = CreationError("/tmp/foo", "Disk quota exceeded")
        assert error.path == "/tmp/foo"
        assert str(error) == "Failed to create temporary file /tmp/foo: Disk quota exceeded"
