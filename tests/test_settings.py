import pytest

from hexhash.runtime import telemetry
from hexhash.settings import WatcherSettings, load_settings


def test_defaults_enable_everything(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("HEXHASH_ENABLED", raising=False)
    monkeypatch.delenv("HEXHASH_CHECK_PREFIX", raising=False)

    assert load_settings() == WatcherSettings(enabled=True, check_prefix=True)


@pytest.mark.parametrize("raw,expected", [("0", False), ("off", False), ("YES", True), ("1", True)])
def test_flags_are_read_from_environment(
    monkeypatch: pytest.MonkeyPatch, raw: str, expected: bool
) -> None:
    monkeypatch.setenv("HEXHASH_ENABLED", raw)
    monkeypatch.setenv("HEXHASH_CHECK_PREFIX", raw)

    settings = load_settings()

    assert settings.enabled is expected
    assert settings.check_prefix is expected


def test_configure_rejects_config_and_preset_together() -> None:
    with pytest.raises(ValueError):
        telemetry.configure(config=object(), preset="development")


def test_configure_rejects_unknown_preset() -> None:
    with pytest.raises(ValueError):
        telemetry.configure(preset="verbose")
