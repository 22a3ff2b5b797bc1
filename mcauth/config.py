"""Settings for the session client and logger.

Defaults work out of the box. A local ``privVars.py`` (same convention as the
scanner bot) can override them; any value still set to ``"..."`` is ignored.
"""

import importlib
import logging
from dataclasses import dataclass, fields, replace
from typing import Optional

from .exceptions import ConfigError

PLACEHOLDER = "..."

# privVars name -> Config field
_PRIV_VARS = {
    "SESSION_SERVER": "session_server",
    "USER_AGENT": "user_agent",
    "TIMEOUT": "timeout",
    "DEBUG": "debug",
    "LOG_LEVEL": "log_level",
    "LOG_FILE": "log_file",
    "DISCORD_WEBHOOK": "discord_webhook",
    "SENTRY_URI": "sentry_dsn",
}


@dataclass(frozen=True)
class Config:
    session_server: str = "https://sessionserver.mojang.com"
    user_agent: str = "mcauth"
    timeout: float = 10.0
    debug: bool = False
    log_level: int = logging.INFO
    log_file: Optional[str] = None
    discord_webhook: Optional[str] = None
    sentry_dsn: Optional[str] = None

    def __post_init__(self):
        if not self.session_server.startswith(("http://", "https://")):
            raise ConfigError(f"Session server must be an http(s) url: {self.session_server}")
        if self.timeout <= 0:
            raise ConfigError(f"Timeout must be positive, got {self.timeout}")
        if not self.user_agent:
            raise ConfigError("User agent must not be empty")

    @property
    def join_url(self) -> str:
        return self.session_server.rstrip("/") + "/session/minecraft/join"

    @classmethod
    def from_module(cls, name: str = "privVars", **overrides) -> "Config":
        """Build a config from a settings module, falling back to the defaults.

        Args:
            name (str, optional): module to import. Defaults to "privVars".
            **overrides: field values that win over the module

        Returns:
            Config: the loaded config

        Raises:
            ConfigError: if a value is invalid or the module exists but fails to import
        """
        values = {}
        try:
            module = importlib.import_module(name)
        except ModuleNotFoundError as err:
            if err.name != name and not name.startswith(f"{err.name}."):
                raise ConfigError(f"Settings module {name} failed to import: {err}") from err
            module = None
        except ImportError as err:
            raise ConfigError(f"Settings module {name} failed to import: {err}") from err

        if module is not None:
            for var, field in _PRIV_VARS.items():
                value = getattr(module, var, PLACEHOLDER)
                if value != PLACEHOLDER:
                    values[field] = value

        known = {f.name for f in fields(cls)}
        unknown = set(overrides) - known
        if unknown:
            raise ConfigError(f"Unknown config fields: {', '.join(sorted(unknown))}")
        values.update(overrides)

        try:
            values = cls._coerce(values)
        except (TypeError, ValueError) as err:
            raise ConfigError(f"Invalid config value: {err}") from err
        return replace(cls(), **values)

    @staticmethod
    def _coerce(values: dict) -> dict:
        out = dict(values)
        if "timeout" in out:
            out["timeout"] = float(out["timeout"])
        if "log_level" in out and isinstance(out["log_level"], str):
            level = logging.getLevelName(out["log_level"].upper())
            if not isinstance(level, int):
                raise ValueError(f"unknown log level {out['log_level']}")
            out["log_level"] = level
        if "debug" in out:
            out["debug"] = bool(out["debug"])
        return out
