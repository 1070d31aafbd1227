"""Tests for paydesk.config: AppConfig frozen dataclass."""

from pathlib import Path

import pytest

from paydesk.config import AppConfig
from paydesk.errors import ConfigurationError


class TestAppConfig:
    def test_defaults(self) -> None:
        cfg = AppConfig()

        assert cfg.host == "127.0.0.1"
        assert cfg.port == 8000
        assert cfg.debug is False
        assert cfg.workers == 1
        assert cfg.template_dir is None
        assert cfg.autoescape is True
        assert cfg.charge_amount == 1000
        assert cfg.currency == "usd"

    def test_override(self) -> None:
        cfg = AppConfig(host="0.0.0.0", port=3000, debug=True, charge_amount=2500)

        assert cfg.host == "0.0.0.0"
        assert cfg.port == 3000
        assert cfg.debug is True
        assert cfg.charge_amount == 2500

    def test_frozen(self) -> None:
        cfg = AppConfig()

        with pytest.raises(AttributeError):
            cfg.debug = True  # type: ignore[misc]

    def test_template_dir_as_path(self) -> None:
        cfg = AppConfig(template_dir=Path("views"))
        assert cfg.template_dir == Path("views")


class TestFromEnv:
    def test_empty_environment_gives_defaults(self) -> None:
        assert AppConfig.from_env({}) == AppConfig()

    def test_reads_prefixed_variables(self) -> None:
        cfg = AppConfig.from_env(
            {
                "PAYDESK_PORT": "9000",
                "PAYDESK_DEBUG": "true",
                "PAYDESK_CURRENCY": "eur",
                "PAYDESK_CHARGE_AMOUNT": "4200",
                "PAYDESK_TEMPLATE_DIR": "views",
            }
        )
        assert cfg.port == 9000
        assert cfg.debug is True
        assert cfg.currency == "eur"
        assert cfg.charge_amount == 4200
        assert cfg.template_dir == "views"

    @pytest.mark.parametrize("raw", ["0", "false", "no", "off", ""])
    def test_false_booleans(self, raw: str) -> None:
        assert AppConfig.from_env({"PAYDESK_DEBUG": raw}).debug is False

    def test_ignores_unprefixed_and_unknown(self) -> None:
        cfg = AppConfig.from_env({"PORT": "1", "PAYDESK_NOPE": "x"})
        assert cfg.port == 8000

    def test_overrides_win(self) -> None:
        cfg = AppConfig.from_env({"PAYDESK_PORT": "9000"}, port=7000)
        assert cfg.port == 7000

    def test_bad_integer(self) -> None:
        with pytest.raises(ConfigurationError, match="PAYDESK_PORT"):
            AppConfig.from_env({"PAYDESK_PORT": "eighty"})
