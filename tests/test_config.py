from __future__ import annotations

import pytest

from pyebula.config import EbulaConfig
from pyebula.exceptions import EbulaConfigError


def test_defaults() -> None:
    config = EbulaConfig()
    assert config.tick_interval == 1.0
    assert config.tick_step_seconds == 1
    assert config.auto_scroll_default is True
    assert config.current_window_km == 0.5


def test_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EBULA_TICK_INTERVAL", "0.25")
    monkeypatch.setenv("EBULA_TICK_STEP_SECONDS", "10")
    monkeypatch.setenv("EBULA_AUTO_SCROLL", "off")
    monkeypatch.setenv("EBULA_CURRENT_WINDOW_KM", "1.0")
    config = EbulaConfig.from_env()
    assert config.tick_interval == 0.25
    assert config.tick_step_seconds == 10
    assert config.auto_scroll_default is False
    assert config.current_window_km == 1.0


def test_overrides_win_over_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EBULA_TICK_INTERVAL", "0.25")
    config = EbulaConfig.from_env(tick_interval=2.0)
    assert config.tick_interval == 2.0


def test_unparsable_env_value(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EBULA_TICK_STEP_SECONDS", "fast")
    with pytest.raises(EbulaConfigError):
        EbulaConfig.from_env()


@pytest.mark.parametrize(
    "kwargs",
    [{"tick_interval": 0.0}, {"tick_step_seconds": 0}, {"current_window_km": -1.0}],
)
def test_invalid_values(kwargs: dict) -> None:
    with pytest.raises(EbulaConfigError):
        EbulaConfig(**kwargs)
