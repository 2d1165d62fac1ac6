from datetime import timezone
from zoneinfo import ZoneInfo

import pytest

from unwrapped_stats.config import Settings, resolve_timezone


def test_defaults() -> None:
    s = Settings()
    assert s.YEAR == "all"
    assert s.tzinfo is timezone.utc


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("YEAR", "2021")
    monkeypatch.setenv("TIMEZONE", "local")
    s = Settings()
    assert s.YEAR == "2021"
    assert s.tzinfo is None


def test_resolve_named_zone() -> None:
    assert resolve_timezone("Europe/Berlin") == ZoneInfo("Europe/Berlin")


def test_unknown_zone() -> None:
    with pytest.raises(ValueError, match="Unknown time zone"):
        resolve_timezone("Nowhere/Special")
