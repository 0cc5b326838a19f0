"""Unit tests for configuration loading and the application context."""

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from src.app.runtime.config.config_data import (
    ConfigData,
    DatabaseConfig,
    LoggingConfig,
    PasswordHashingConfig,
    SecurityConfig,
)
from src.app.runtime.config.config_template import (
    apply_environment_overrides,
    load_templated_yaml,
    substitute_env_vars,
)
from src.app.runtime.config.settings import EnvironmentVariables
from src.app.runtime.context import AppContext, get_config, get_context, with_context


class TestSubstituteEnvVars:
    """Test cases for substitute_env_vars function."""

    def test_substitute_simple_env_var(self):
        with patch.dict(os.environ, {"TEST_VAR": "test_value"}):
            assert substitute_env_vars("${TEST_VAR}") == "test_value"

    def test_substitute_env_var_in_text(self):
        with patch.dict(os.environ, {"HOST": "localhost", "PORT": "8080"}):
            result = substitute_env_vars("Server running at http://${HOST}:${PORT}/api")
            assert result == "Server running at http://localhost:8080/api"

    def test_default_used_when_missing(self):
        with patch.dict(os.environ, {}, clear=True):
            assert substitute_env_vars("${MISSING_VAR:-sqlite://}") == "sqlite://"

    def test_empty_default(self):
        with patch.dict(os.environ, {}, clear=True):
            assert substitute_env_vars("${MISSING_VAR:-}") == ""

    def test_required_env_var_missing(self):
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(
                ValueError, match="Required environment variable MISSING_VAR not set"
            ):
                substitute_env_vars("${MISSING_VAR}")

    def test_custom_error_message(self):
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(ValueError, match="MISSING_VAR: needed for email"):
                substitute_env_vars("${MISSING_VAR:?needed for email}")


class TestEnvironmentOverrides:
    def test_prefixed_variables_promoted(self):
        with patch.dict(os.environ, {"TEST_DATABASE_URL": "sqlite://"}, clear=True):
            apply_environment_overrides("test")
            assert os.environ["DATABASE_URL"] == "sqlite://"

    def test_other_prefixes_ignored(self):
        with patch.dict(os.environ, {"PRODUCTION_DATABASE_URL": "x"}, clear=True):
            apply_environment_overrides("test")
            assert "DATABASE_URL" not in os.environ


class TestLoadTemplatedYaml:
    CONFIG = """
config:
  app:
    environment: test
  database:
    url: ${DATABASE_URL:-sqlite:///./default.db}
  security:
    password_hashing:
      iterations: ${HASH_ROUNDS:-1000}
  notifications:
    backend: ${NOTIFICATION_BACKEND:-log}
"""

    def test_load_with_defaults(self, tmp_path: Path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text(self.CONFIG)

        with patch.dict(os.environ, {"APP_ENVIRONMENT": "test"}, clear=True):
            config = load_templated_yaml(config_file)

        assert isinstance(config, ConfigData)
        assert config.app.environment == "test"
        assert config.database.url == "sqlite:///./default.db"
        assert config.security.password_hashing.iterations == 1000
        assert config.notifications.backend == "log"

    def test_load_with_environment_values(self, tmp_path: Path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text(self.CONFIG)

        env = {
            "APP_ENVIRONMENT": "test",
            "TEST_DATABASE_URL": "postgresql://db/users",
            "NOTIFICATION_BACKEND": "email",
        }
        with patch.dict(os.environ, env, clear=True):
            config = load_templated_yaml(config_file)

        assert config.database.url == "postgresql://db/users"
        assert config.notifications.backend == "email"

    def test_invalid_values_rejected(self, tmp_path: Path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text(self.CONFIG)

        with patch.dict(os.environ, {"NOTIFICATION_BACKEND": "pigeon"}, clear=True):
            with pytest.raises(ValueError, match="Invalid configuration"):
                load_templated_yaml(config_file)

    def test_malformed_yaml_rejected(self, tmp_path: Path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("config: [unclosed")

        with pytest.raises(ValueError, match="Error parsing YAML"):
            load_templated_yaml(config_file)

    def test_empty_file_rejected(self, tmp_path: Path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("")

        with pytest.raises(ValueError):
            load_templated_yaml(config_file)

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            load_templated_yaml(tmp_path / "absent.yaml")


class TestConfigModels:
    def test_defaults(self):
        config = ConfigData()

        assert config.database.url == "sqlite:///./users.db"
        assert config.database.is_sqlite
        assert config.notifications.enabled
        assert config.security.password_hashing.algorithm == "sha256"
        assert config.logging.file is None

    def test_iterations_must_be_positive(self):
        with pytest.raises(ValueError):
            PasswordHashingConfig(iterations=0)

    def test_sqlite_connection_string_unchanged(self):
        config = DatabaseConfig(url="sqlite:///./users.db", password_env_var="DB_PASS")
        assert config.connection_string == "sqlite:///./users.db"

    def test_password_injected_from_environment(self):
        config = DatabaseConfig(
            url="postgresql://app@db:5432/users", password_env_var="DB_PASS"
        )

        with patch.dict(os.environ, {"DB_PASS": "s3cret"}):
            assert config.connection_string == "postgresql://app:s3cret@db:5432/users"

    def test_missing_password_variable(self):
        config = DatabaseConfig(
            url="postgresql://app@db:5432/users", password_env_var="DB_PASS"
        )

        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(ValueError, match="DB_PASS"):
                _ = config.connection_string


class TestEnvironmentVariables:
    def test_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            env = EnvironmentVariables(_env_file=None)

        assert env.environment == "development"
        assert env.config_file == "config.yaml"

    def test_app_prefix(self):
        env_vars = {"APP_ENVIRONMENT": "test", "APP_CONFIG_FILE": "/etc/users.yaml"}
        with patch.dict(os.environ, env_vars, clear=True):
            env = EnvironmentVariables(_env_file=None)

        assert env.environment == "test"
        assert env.config_file == "/etc/users.yaml"


class TestContextManager:
    def test_default_context_available(self):
        context = get_context()

        assert isinstance(context, AppContext)
        assert context.config is get_config()

    def test_override_only_replaces_set_fields(self):
        original = get_config()

        override = ConfigData(database=DatabaseConfig(url="sqlite://"))
        with with_context(override):
            config = get_config()
            assert config.database.url == "sqlite://"
            assert config.database.pool_size == original.database.pool_size
            assert config.logging == original.logging
            assert config.notifications == original.notifications

        assert get_config() is original

    def test_nested_overrides(self):
        original = get_config()

        outer = ConfigData(database=DatabaseConfig(url="sqlite://"))
        inner = ConfigData(
            security=SecurityConfig(
                password_hashing=PasswordHashingConfig(iterations=10)
            )
        )
        with with_context(outer):
            with with_context(inner):
                config = get_config()
                assert config.database.url == "sqlite://"
                assert config.security.password_hashing.iterations == 10

            assert get_config().security == original.security

        assert get_config() is original

    def test_none_override_is_noop(self):
        original = get_config()

        with with_context(None):
            assert get_config() is original

    def test_rejects_other_types(self):
        with pytest.raises(ValueError):
            with with_context(LoggingConfig()):  # type: ignore[arg-type]
                pass
