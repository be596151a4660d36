"""Session configuration for pyebula."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from pyebula._constants import (
    DEFAULT_CURRENT_WINDOW_KM,
    DEFAULT_TICK_INTERVAL_S,
    DEFAULT_TICK_STEP_S,
)
from pyebula.exceptions import EbulaConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _env_number(env_key: str, value: str, cast: type[float] | type[int]) -> float | int:
    try:
        return cast(value.strip())
    except ValueError as exc:
        raise EbulaConfigError(f"{env_key} must be a {cast.__name__}, got {value!r}") from exc


@dataclasses.dataclass(frozen=True)
class EbulaConfig:
    """Tracking session configuration.

    Parameters
    ----------
    tick_interval : float
        Real-world seconds between two auto-ticks.
    tick_step_seconds : int
        Simulated seconds the in-world clock advances per tick.
    auto_scroll_default : bool
        Initial value of ``LiveState.auto_scroll_enabled``.
    current_window_km : float
        Half-width of the band around the current position in which a
        timeline item counts as "current".
    """

    tick_interval: float = DEFAULT_TICK_INTERVAL_S
    tick_step_seconds: int = DEFAULT_TICK_STEP_S
    auto_scroll_default: bool = True
    current_window_km: float = DEFAULT_CURRENT_WINDOW_KM

    def __post_init__(self) -> None:
        if self.tick_interval <= 0:
            raise EbulaConfigError(f"tick_interval must be positive, got {self.tick_interval}")
        if self.tick_step_seconds == 0:
            raise EbulaConfigError("tick_step_seconds must be non-zero")
        if self.current_window_km < 0:
            raise EbulaConfigError(f"current_window_km must not be negative, got {self.current_window_km}")

    @classmethod
    def from_env(cls, **overrides: Any) -> EbulaConfig:
        """Create configuration from ``EBULA_*`` environment variables.

        Explicit keyword arguments override environment values.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        interval_env = env.get("EBULA_TICK_INTERVAL")
        if interval_env is not None:
            config_kwargs["tick_interval"] = _env_number("EBULA_TICK_INTERVAL", interval_env, float)

        step_env = env.get("EBULA_TICK_STEP_SECONDS")
        if step_env is not None:
            config_kwargs["tick_step_seconds"] = _env_number("EBULA_TICK_STEP_SECONDS", step_env, int)

        window_env = env.get("EBULA_CURRENT_WINDOW_KM")
        if window_env is not None:
            config_kwargs["current_window_km"] = _env_number("EBULA_CURRENT_WINDOW_KM", window_env, float)

        config_kwargs["auto_scroll_default"] = _env_bool(env.get("EBULA_AUTO_SCROLL"), True)

        config_kwargs.update(overrides)
        return cls(**config_kwargs)
