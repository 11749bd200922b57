"""
Test cases for configuration loading.
"""

import pytest

from passguard.core.config import (
    EnvironmentLoader,
    GeneratorConfig,
    PasswordPolicyConfig,
    Settings,
    get_settings,
    reset_settings,
)
from passguard.core.enums import Environment, LogFormat, LogLevel
from passguard.core.errors import ConfigurationError


class TestDefaults:
    """Defaults reproduce the fixed policies."""

    def test_settings_defaults(self):
        settings = Settings()

        assert settings.environment == Environment.PRODUCTION
        assert settings.log_level == LogLevel.WARNING
        assert settings.log_format == LogFormat.PLAIN
        assert settings.password == PasswordPolicyConfig(8, 15, 4)
        assert settings.generator == GeneratorConfig(1, 15, 10_000, None)

    def test_to_dict(self):
        data = Settings().to_dict()

        assert data["environment"] == "prod"
        assert data["log_level"] == "WARNING"
        assert data["policy"]["strong_min_length"] == 8
        assert data["generator"]["max_attempts"] == 10_000

    def test_from_environment_without_variables(self, tmp_path):
        settings = Settings.from_environment(str(tmp_path / "missing.env"))

        assert settings == Settings()


class TestFromEnvironment:
    """PASSGUARD_* variables override the defaults."""

    def test_reads_all_variables(self, monkeypatch):
        monkeypatch.setenv("PASSGUARD_ENVIRONMENT", "development")
        monkeypatch.setenv("PASSGUARD_LOG_LEVEL", "debug")
        monkeypatch.setenv("PASSGUARD_LOG_FORMAT", "JSON")
        monkeypatch.setenv("PASSGUARD_STRONG_MIN_LENGTH", "12")
        monkeypatch.setenv("PASSGUARD_DEFAULT_MAX_LENGTH", "20")
        monkeypatch.setenv("PASSGUARD_CONSECUTIVE_LETTERS", "3")
        monkeypatch.setenv("PASSGUARD_GENERATOR_MIN_LENGTH", "6")
        monkeypatch.setenv("PASSGUARD_GENERATOR_MAX_LENGTH", "20")
        monkeypatch.setenv("PASSGUARD_GENERATOR_MAX_ATTEMPTS", "500")
        monkeypatch.setenv("PASSGUARD_GENERATOR_TIMEOUT_SECONDS", "2.5")

        settings = Settings.from_environment(None)

        assert settings.environment == Environment.DEVELOPMENT
        assert settings.log_level == LogLevel.DEBUG
        assert settings.log_format == LogFormat.JSON
        assert settings.password == PasswordPolicyConfig(12, 20, 3)
        assert settings.generator == GeneratorConfig(6, 20, 500, 2.5)

    def test_blank_value_falls_back_to_default(self, monkeypatch):
        monkeypatch.setenv("PASSGUARD_STRONG_MIN_LENGTH", "  ")

        assert Settings.from_environment(None).password.strong_min_length == 8

    def test_env_file(self, tmp_path, monkeypatch):
        env_file = tmp_path / ".env"
        env_file.write_text(
            "# passguard settings\n"
            "PASSGUARD_STRONG_MIN_LENGTH=10\n"
            'PASSGUARD_LOG_LEVEL="info"\n'
            "PASSGUARD_GENERATOR_MAX_ATTEMPTS='50'\n"
            "not a setting\n",
            encoding="utf-8",
        )
        monkeypatch.setenv("PASSGUARD_GENERATOR_MAX_ATTEMPTS", "75")

        settings = Settings.from_environment(str(env_file))

        assert settings.password.strong_min_length == 10
        assert settings.log_level == LogLevel.INFO
        assert settings.generator.max_attempts == 75

    @pytest.mark.parametrize(
        "key, value",
        [
            ("PASSGUARD_STRONG_MIN_LENGTH", "eight"),
            ("PASSGUARD_STRONG_MIN_LENGTH", "0"),
            ("PASSGUARD_GENERATOR_TIMEOUT_SECONDS", "soon"),
            ("PASSGUARD_LOG_LEVEL", "verbose"),
            ("PASSGUARD_LOG_FORMAT", "xml"),
            ("PASSGUARD_ENVIRONMENT", "staging"),
            ("PASSGUARD_GENERATOR_MAX_LENGTH", "2"),
        ],
    )
    def test_invalid_values(self, monkeypatch, key, value):
        monkeypatch.setenv(key, value)

        with pytest.raises(ConfigurationError):
            Settings.from_environment(None)

    def test_invalid_integer_names_the_variable(self, monkeypatch):
        monkeypatch.setenv("PASSGUARD_GENERATOR_MAX_ATTEMPTS", "lots")

        with pytest.raises(ConfigurationError) as exc_info:
            Settings.from_environment(None)

        assert exc_info.value.details["config_key"] == "PASSGUARD_GENERATOR_MAX_ATTEMPTS"
        assert exc_info.value.exit_code == 2

    def test_generator_cannot_outgrow_default_policy(self, monkeypatch):
        monkeypatch.setenv("PASSGUARD_GENERATOR_MIN_LENGTH", "16")
        monkeypatch.setenv("PASSGUARD_GENERATOR_MAX_LENGTH", "20")

        with pytest.raises(ConfigurationError, match="exceeds the default policy"):
            Settings.from_environment(None)


class TestEnvironmentLoader:
    """Typed getters."""

    def setup_method(self):
        self.loader = EnvironmentLoader(env_file=None, prefix="TEST_PASSGUARD_")

    def test_get_float(self, monkeypatch):
        monkeypatch.setenv("TEST_PASSGUARD_TIMEOUT", " 0.25 ")

        assert self.loader.get_float("TIMEOUT") == 0.25

    def test_missing_values_use_defaults(self):
        assert self.loader.get_integer("NOPE", 3) == 3
        assert self.loader.get_float("NOPE") is None
        assert self.loader.get_enum("NOPE", LogLevel.from_string, LogLevel.INFO) == LogLevel.INFO

    def test_get_integer_min_value(self, monkeypatch):
        monkeypatch.setenv("TEST_PASSGUARD_COUNT", "2")

        with pytest.raises(ConfigurationError, match=">= 5"):
            self.loader.get_integer("COUNT", min_value=5)


class TestCachedSettings:
    """Settings are loaded once until reset."""

    def test_cached_until_reset(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        first = get_settings()

        monkeypatch.setenv("PASSGUARD_STRONG_MIN_LENGTH", "9")
        assert get_settings() is first

        reset_settings()
        assert get_settings().password.strong_min_length == 9


class TestConfigValidation:
    """Config dataclasses validate themselves."""

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"strong_min_length": 0},
            {"default_max_length": 0},
            {"consecutive_letters": -1},
        ],
    )
    def test_policy_thresholds_must_be_positive(self, kwargs):
        with pytest.raises(ConfigurationError):
            PasswordPolicyConfig(**kwargs)

    @pytest.mark.parametrize(
        "password, generator",
        [
            (PasswordPolicyConfig(default_max_length=2), GeneratorConfig()),
            (PasswordPolicyConfig(default_max_length=1), GeneratorConfig(max_length=15)),
        ],
    )
    def test_settings_reject_lengths_that_cannot_hold_three_classes(self, password, generator):
        """Test a default policy capped below 3 characters can never be generated."""
        with pytest.raises(ConfigurationError, match="below 3 characters"):
            Settings(password=password, generator=generator)

    def test_settings_accept_smallest_usable_cap(self):
        settings = Settings(password=PasswordPolicyConfig(default_max_length=3))

        assert settings.password.default_max_length == 3

    def test_environment_cap_below_three_is_rejected(self, monkeypatch):
        monkeypatch.setenv("PASSGUARD_DEFAULT_MAX_LENGTH", "2")

        with pytest.raises(ConfigurationError) as exc_info:
            Settings.from_environment(None)

        assert exc_info.value.details["config_key"] == "password.default_max_length"
