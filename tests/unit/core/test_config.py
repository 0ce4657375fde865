"""
test_config.py
--------------
Unit tests for bettertemp.core.config module.

Tests TempfileConfig validation, directory resolution and YAML loading.
"""
import tempfile
from pathlib import Path

import pytest

from bettertemp.core.config import MAX_TRY, TempfileConfig, load_config
from bettertemp.core.exceptions import ConfigError


class TestTempfileConfig:
    """Tests for TempfileConfig dataclass."""

    def test_defaults(self):
        config = TempfileConfig()
        assert config.tmpdir is None
        assert config.max_tries == MAX_TRY == 10
        assert config.permissions == 0o600
        assert config.lock_suffix == ".lock"
        assert config.default_mode == "w+"
        assert config.debug is False

    def test_paths_are_normalized(self):
        config = TempfileConfig(tmpdir="/scratch", log_dir="/var/log/app")
        assert config.tmpdir == Path("/scratch")
        assert config.log_dir == Path("/var/log/app")

    @pytest.mark.parametrize("value", [0, -3, "10"])
    def test_invalid_max_tries(self, value):
        with pytest.raises(ConfigError):
            TempfileConfig(max_tries=value)

    def test_empty_lock_suffix(self):
        with pytest.raises(ConfigError):
            TempfileConfig(lock_suffix="")

    def test_permissions_out_of_range(self):
        with pytest.raises(ConfigError):
            TempfileConfig(permissions=0o1000)

    def test_mode_must_be_read_write(self):
        with pytest.raises(ConfigError):
            TempfileConfig(default_mode="w")

    def test_binary_mode_allowed(self):
        assert TempfileConfig(default_mode="w+b").default_mode == "w+b"


class TestResolveTmpdir:
    """Tests for TempfileConfig.resolve_tmpdir."""

    def test_caller_directory_wins(self, tmp_dir):
        config = TempfileConfig(tmpdir="/elsewhere")
        assert config.resolve_tmpdir(tmp_dir) == str(tmp_dir.absolute())

    def test_configured_directory(self, tmp_dir):
        config = TempfileConfig(tmpdir=tmp_dir)
        assert config.resolve_tmpdir() == str(tmp_dir.absolute())

    def test_platform_default(self):
        expected = str(Path(tempfile.gettempdir()).absolute())
        assert TempfileConfig().resolve_tmpdir() == expected

    def test_relative_directory_made_absolute(self):
        resolved = TempfileConfig().resolve_tmpdir("relative/dir")
        assert Path(resolved).is_absolute()


class TestLoadConfig:
    """Tests for load_config function."""

    def test_load_full_mapping(self, tmp_dir):
        config_file = tmp_dir / "bettertemp.yaml"
        config_file.write_text(
            "tmpdir: /scratch\n"
            "max_tries: 20\n"
            "permissions: 0640\n"
            "default_mode: w+b\n"
            "debug: true\n"
        )
        config = load_config(config_file)
        assert config.tmpdir == Path("/scratch")
        assert config.max_tries == 20
        assert config.permissions == 0o640
        assert config.default_mode == "w+b"
        assert config.debug is True

    def test_empty_file_gives_defaults(self, tmp_dir):
        config_file = tmp_dir / "empty.yaml"
        config_file.write_text("")
        assert load_config(config_file) == TempfileConfig()

    def test_unknown_keys_rejected(self, tmp_dir):
        config_file = tmp_dir / "bad.yaml"
        config_file.write_text("colour: blue\nmax_tries: 3\n")
        with pytest.raises(ConfigError, match="colour"):
            load_config(config_file)

    def test_non_mapping_rejected(self, tmp_dir):
        config_file = tmp_dir / "list.yaml"
        config_file.write_text("- a\n- b\n")
        with pytest.raises(ConfigError, match="mapping"):
            load_config(config_file)

    def test_yaml_syntax_error_wrapped(self, tmp_dir):
        config_file = tmp_dir / "broken.yaml"
        config_file.write_text("max_tries: [1, 2\n")
        with pytest.raises(ConfigError, match="YAML parse error"):
            load_config(config_file)

    def test_missing_file_wrapped(self, tmp_dir):
        with pytest.raises(ConfigError, match="Cannot read"):
            load_config(tmp_dir / "missing.yaml")

    def test_invalid_value_rejected(self, tmp_dir):
        config_file = tmp_dir / "zero.yaml"
        config_file.write_text("max_tries: 0\n")
        with pytest.raises(ConfigError):
            load_config(config_file)
