"""Settings for the server, templates, logging and the charge offered."""

from collections.abc import Mapping
from dataclasses import dataclass, fields
from pathlib import Path

from paydesk.errors import ConfigurationError

ENV_PREFIX = "PAYDESK_"


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Every field has a default; pass only what differs::

        config = AppConfig(debug=True, port=3000, charge_amount=2500)
    """

    # Server
    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False
    workers: int = 1

    # Templates (bundled views are always available as a fallback)
    template_dir: str | Path | None = None
    autoescape: bool = True
    trim_blocks: bool = True
    lstrip_blocks: bool = True

    # Logging, configured by pounce
    log_level: str = "info"
    log_format: str = "json"

    # Payments
    charge_amount: int = 1000  # minor units (cents)
    currency: str = "usd"
    charge_description: str = "Paydesk payment"

    @classmethod
    def from_env(cls, environ: Mapping[str, str], **overrides: object) -> "AppConfig":
        """Build a config from ``PAYDESK_*`` variables.

        ``PAYDESK_PORT=9000`` sets ``port``, ``PAYDESK_DEBUG=true`` sets
        ``debug``, and so on. Unknown variables are ignored. Values are
        coerced to the field's default type; *overrides* win over the
        environment.

        Raises ``ConfigurationError`` if a value cannot be coerced.
        """
        values: dict[str, object] = {}
        defaults = cls()
        for f in fields(cls):
            raw = environ.get(f"{ENV_PREFIX}{f.name.upper()}")
            if raw is None:
                continue
            values[f.name] = _coerce(f.name, raw, getattr(defaults, f.name))
        values.update(overrides)
        return cls(**values)  # type: ignore[arg-type]


def _coerce(name: str, raw: str, default: object) -> object:
    if isinstance(default, bool):
        return raw.strip().lower() in ("1", "true", "yes", "on")
    if isinstance(default, int):
        try:
            return int(raw)
        except ValueError:
            msg = f"{ENV_PREFIX}{name.upper()} must be an integer, got {raw!r}"
            raise ConfigurationError(msg) from None
    return raw
