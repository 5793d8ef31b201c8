"""
Tests for configuration loading.
"""

import pytest

from putrecord.config import Config, load_config
from putrecord.enums import UploadMode
from putrecord.exceptions import ConfigError


class TestLoadConfig:
    """Tests for load_config."""

    def test_loads_all_variables_with_rkey(self, set_env, env_vars):
        """Test reading every variable, including RKEY."""
        set_env(RKEY="test-rkey")

        config = load_config()

        assert config.pds_url == "https://pds.test"
        assert config.identifier == "alice.test"
        assert config.password == "app-pass"
        assert config.collection == "com.example.note"
        assert config.rkey == "test-rkey"
        assert config.file_path == env_vars["FILE_PATH"]
        assert config.mode == UploadMode.UPDATE

    def test_create_mode_without_rkey(self, set_env):
        """Test RKEY is optional."""
        config = load_config()
        assert config.rkey is None
        assert config.mode == UploadMode.CREATE

    def test_empty_rkey_means_create(self, set_env):
        """Test an empty RKEY (e.g. unset CI secret) selects create mode."""
        set_env(RKEY="")
        config = load_config()
        assert config.rkey is None
        assert config.mode == UploadMode.CREATE

    def test_missing_variable(self, clean_env):
        """Test a clear error when nothing is set."""
        with pytest.raises(ConfigError, match="Missing required environment variable: PDS_URL"):
            load_config()

    @pytest.mark.parametrize(
        "missing", ["PDS_URL", "IDENTIFIER", "APP_PASSWORD", "COLLECTION", "FILE_PATH"]
    )
    def test_each_required_variable(self, env_vars, missing):
        """Test every required variable is checked."""
        environ = {k: v for k, v in env_vars.items() if k != missing}
        with pytest.raises(ConfigError, match=missing):
            load_config(environ)

    def test_empty_required_variable(self, env_vars):
        environ = dict(env_vars, COLLECTION="")
        with pytest.raises(ConfigError, match="COLLECTION"):
            load_config(environ)

    @pytest.mark.parametrize(
        "value, expected",
        [("true", True), ("1", True), ("YES", True), ("on", True), ("false", False), ("0", False), ("", False)],
    )
    def test_force_fields(self, env_vars, value, expected):
        """Test FORCE_FIELDS parsing."""
        config = load_config(dict(env_vars, FORCE_FIELDS=value))
        assert config.force_fields is expected

    def test_force_fields_default(self, env_vars):
        assert load_config(env_vars).force_fields is False

    def test_trailing_slash_removed(self, env_vars):
        config = load_config(dict(env_vars, PDS_URL="https://pds.test/"))
        assert config.pds_url == "https://pds.test"


class TestConfigModel:
    """Tests for the Config model itself."""

    def test_construct_by_field_name(self):
        """Test library users can build Config directly."""
        config = Config(
            pds_url="https://pds.test",
            identifier="alice.test",
            password="pw",
            collection="com.example.note",
            file_path="note.txt",
        )
        assert config.rkey is None
        assert config.force_fields is False

    def test_password_hidden_from_repr(self):
        config = Config(
            pds_url="https://pds.test",
            identifier="alice.test",
            password="super-secret",
            collection="com.example.note",
            file_path="note.txt",
        )
        assert "super-secret" not in repr(config)

    def test_assignment_validated(self):
        """Test flags set after construction are still parsed."""
        config = Config(
            pds_url="https://pds.test",
            identifier="alice.test",
            password="pw",
            collection="com.example.note",
            file_path="note.txt",
        )
        config.force_fields = "yes"
        assert config.force_fields is True
