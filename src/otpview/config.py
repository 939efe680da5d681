"""Global configuration — XDG paths, env vars, defaults."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from otpview.errors import ConfigError

_TRUTHY = ("1", "true", "yes", "on")


def _default_config_dir() -> Path:
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "otpview"
    return Path.home() / ".config" / "otpview"


@dataclass
class OtpViewConfig:
    """Application-wide configuration."""

    config_dir: Path = field(default_factory=_default_config_dir)
    tick_interval: float = 0.05
    copied_indicator_ms: int = 2000
    copy_enabled: bool = True
    mask: str = "******"
    verbose: bool = False

    @classmethod
    def load(cls) -> OtpViewConfig:
        """Load config from environment variables with XDG defaults."""
        config = cls()

        env_interval = os.environ.get("OTPVIEW_TICK_INTERVAL")
        if env_interval:
            config.tick_interval = _parse(env_interval, float, "OTPVIEW_TICK_INTERVAL")
            if config.tick_interval <= 0:
                raise ConfigError("OTPVIEW_TICK_INTERVAL must be positive")

        env_copied = os.environ.get("OTPVIEW_COPIED_MS")
        if env_copied:
            config.copied_indicator_ms = _parse(env_copied, int, "OTPVIEW_COPIED_MS")

        if os.environ.get("OTPVIEW_NO_COPY", "").strip().lower() in _TRUTHY:
            config.copy_enabled = False

        return config


def _parse(raw: str, kind: type, name: str):
    try:
        return kind(raw)
    except ValueError as e:
        raise ConfigError(f"Invalid value for {name}: {raw!r}") from e
