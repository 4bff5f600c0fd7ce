"""Unit tests for config settings, loaders and gateway settings."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import ClassVar

import pytest

from mailgate.config import (
    ConfigError,
    DotenvSettingsLoader,
    EnvSettingsLoader,
    GatewaySettings,
    InvalidSettingValueError,
    MissingRequiredSettingError,
    Settings,
    SettingsFactory,
)


# ---------------------------------------------------------------------------
# Concrete settings class used across loader tests
# ---------------------------------------------------------------------------


@dataclass
class AppSettings(Settings):
    _prefix: ClassVar[str] = "APP"

    host: str = "localhost"
    port: int = 8080
    ratio: float = 0.5
    debug: bool = False
    base_url: str | None = None
    allowed_origins: list[str] = field(default_factory=list)


@dataclass
class RequiredSettings(Settings):
    _prefix: ClassVar[str] = "REQ"

    token: str


# ---------------------------------------------------------------------------
# EnvSettingsLoader
# ---------------------------------------------------------------------------


class TestEnvSettingsLoader:
    def test_defaults(self) -> None:
        settings = EnvSettingsLoader({}).load(AppSettings)
        assert settings == AppSettings()

    def test_coerces_types(self) -> None:
        settings = EnvSettingsLoader(
            {
                "APP_HOST": "example.com",
                "APP_PORT": "9000",
                "APP_RATIO": "0.25",
                "APP_DEBUG": "yes",
                "APP_BASE_URL": "https://x.test",
                "APP_ALLOWED_ORIGINS": "a.com, b.com,",
            }
        ).load(AppSettings)
        assert settings.host == "example.com"
        assert settings.port == 9000
        assert settings.ratio == 0.25
        assert settings.debug is True
        assert settings.base_url == "https://x.test"
        assert settings.allowed_origins == ["a.com", "b.com"]

    @pytest.mark.parametrize("falsy", ["false", "0", "no", "off"])
    def test_bool_false(self, falsy: str) -> None:
        assert EnvSettingsLoader({"APP_DEBUG": falsy}).load(AppSettings).debug is False

    def test_bad_int(self) -> None:
        with pytest.raises(InvalidSettingValueError) as exc_info:
            EnvSettingsLoader({"APP_PORT": "eighty"}).load(AppSettings)
        assert exc_info.value.setting_name == "APP_PORT"

    def test_missing_required(self) -> None:
        with pytest.raises(MissingRequiredSettingError) as exc_info:
            EnvSettingsLoader({}).load(RequiredSettings)
        assert exc_info.value.setting_name == "REQ_TOKEN"

    def test_reads_process_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("REQ_TOKEN", "from-env")
        assert EnvSettingsLoader().load(RequiredSettings).token == "from-env"


class TestDotenvSettingsLoader:
    def test_loads_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("REQ_TOKEN", raising=False)
        env_file = tmp_path / ".env"
        env_file.write_text("REQ_TOKEN=from-file\n")
        assert DotenvSettingsLoader(str(env_file)).load(RequiredSettings).token == "from-file"

    def test_environment_wins_by_default(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("REQ_TOKEN", "from-env")
        env_file = tmp_path / ".env"
        env_file.write_text("REQ_TOKEN=from-file\n")
        assert DotenvSettingsLoader(str(env_file)).load(RequiredSettings).token == "from-env"

    def test_override(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("REQ_TOKEN", "from-env")
        env_file = tmp_path / ".env"
        env_file.write_text("REQ_TOKEN=from-file\n")
        loader = DotenvSettingsLoader(str(env_file), override=True)
        assert loader.load(RequiredSettings).token == "from-file"


# ---------------------------------------------------------------------------
# SettingsFactory
# ---------------------------------------------------------------------------


class TestSettingsFactory:
    def test_later_loaders_win(self) -> None:
        settings = SettingsFactory.create(
            AppSettings,
            [EnvSettingsLoader({"APP_PORT": "1"}), EnvSettingsLoader({"APP_PORT": "2"})],
        )
        assert settings.port == 2

    def test_overrides_win(self) -> None:
        settings = SettingsFactory.create(AppSettings, [EnvSettingsLoader({"APP_PORT": "1"})], {"port": 3})
        assert settings.port == 3

    def test_override_fills_gap_left_by_loaders(self) -> None:
        settings = SettingsFactory.create(RequiredSettings, [EnvSettingsLoader({})], {"token": "t"})
        assert settings.token == "t"

    def test_partial_sources_combine(self) -> None:
        settings = SettingsFactory.create(
            AppSettings,
            [EnvSettingsLoader({"APP_HOST": "a.test"}), EnvSettingsLoader({"APP_PORT": "81"})],
        )
        assert (settings.host, settings.port) == ("a.test", 81)

    def test_invalid_value_propagates(self) -> None:
        with pytest.raises(InvalidSettingValueError) as exc_info:
            SettingsFactory.create(AppSettings, [EnvSettingsLoader({"APP_PORT": "eighty"})])
        assert exc_info.value.setting_name == "APP_PORT"

    def test_missing_required(self) -> None:
        with pytest.raises(MissingRequiredSettingError):
            SettingsFactory.create(RequiredSettings, [EnvSettingsLoader({})])

    def test_construction_failure_is_config_error(self) -> None:
        with pytest.raises(ConfigError):
            SettingsFactory.create(RequiredSettings, overrides={"token": "t", "unknown": 1})


# ---------------------------------------------------------------------------
# GatewaySettings
# ---------------------------------------------------------------------------


class TestGatewaySettings:
    def test_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MAILGATE_PUBLIC_KEY", "pub")
        monkeypatch.setenv("MAILGATE_PRIVATE_KEY", "priv")
        monkeypatch.setenv("MAILGATE_PROVIDER", "mailjet")
        monkeypatch.setenv("MAILGATE_TIMEOUT", "2.5")
        settings = GatewaySettings.load()
        assert settings.provider == "mailjet"
        assert settings.timeout == 2.5
        assert settings.base_url is None
        creds = settings.credentials()
        assert (creds.public_key, creds.private_key) == ("pub", "priv")

    def test_load_from_dotenv_with_overrides(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        for var in ("MAILGATE_PUBLIC_KEY", "MAILGATE_PRIVATE_KEY", "MAILGATE_PROVIDER"):
            monkeypatch.delenv(var, raising=False)
        env_file = tmp_path / ".env"
        env_file.write_text("MAILGATE_PUBLIC_KEY=user\nMAILGATE_PRIVATE_KEY=key\n")
        settings = GatewaySettings.load(str(env_file), log_level="DEBUG")
        assert settings.provider == "elastic_email"
        assert settings.log_level == "DEBUG"

    def test_missing_keys(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("MAILGATE_PUBLIC_KEY", raising=False)
        monkeypatch.delenv("MAILGATE_PRIVATE_KEY", raising=False)
        with pytest.raises(MissingRequiredSettingError):
            GatewaySettings.load()

    @pytest.mark.parametrize(
        ("var", "value", "setting_name"),
        [("MAILGATE_PROVIDER", "sendgrid", "provider"), ("MAILGATE_TIMEOUT", "abc", "MAILGATE_TIMEOUT")],
    )
    def test_load_reports_invalid_value(
        self, monkeypatch: pytest.MonkeyPatch, var: str, value: str, setting_name: str
    ) -> None:
        monkeypatch.setenv("MAILGATE_PUBLIC_KEY", "u")
        monkeypatch.setenv("MAILGATE_PRIVATE_KEY", "k")
        monkeypatch.setenv(var, value)
        with pytest.raises(InvalidSettingValueError) as exc_info:
            GatewaySettings.load()
        assert exc_info.value.setting_name == setting_name

    def test_load_combines_environment_and_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("MAILGATE_PUBLIC_KEY", raising=False)
        monkeypatch.delenv("MAILGATE_PRIVATE_KEY", raising=False)
        monkeypatch.setenv("MAILGATE_PROVIDER", "mailjet")
        settings = GatewaySettings.load(public_key="pub", private_key="priv")
        assert settings.provider == "mailjet"

    def test_unknown_provider(self) -> None:
        with pytest.raises(InvalidSettingValueError) as exc_info:
            GatewaySettings(public_key="p", private_key="k", provider="carrier-pigeon")
        assert exc_info.value.setting_name == "provider"

    def test_empty_key_not_echoed(self) -> None:
        with pytest.raises(InvalidSettingValueError) as exc_info:
            GatewaySettings(public_key="p", private_key="")
        assert exc_info.value.value is None

    @pytest.mark.parametrize(("field_name", "value"), [("timeout", 0.0), ("log_level", "LOUD")])
    def test_invalid_values(self, field_name: str, value: object) -> None:
        with pytest.raises(InvalidSettingValueError):
            GatewaySettings(public_key="p", private_key="k", **{field_name: value})

    def test_repr_hides_credentials(self) -> None:
        text = repr(GatewaySettings(public_key="visible-user", private_key="super-secret"))
        assert "super-secret" not in text
        assert "visible-user" not in text
