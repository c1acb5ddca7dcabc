import pytest

from signal_engine.config import (
    LONG_FORM_CHANNEL_IDS,
    PODCAST_SCORE_THRESHOLD,
    EngineConfig,
    Settings,
    load_engine_config,
)
from signal_engine.errors import ConfigurationError


def test_defaults():
    config = load_engine_config(Settings(_env_file=None))
    assert config.injury.window_hours == 48
    assert config.injury.medium_min_matches == 2
    assert config.podcast.threshold == PODCAST_SCORE_THRESHOLD == 4
    assert config.podcast.long_form_channels == frozenset(LONG_FORM_CHANNEL_IDS)
    assert config.transcript.context_radius == 1


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("ALERT_WINDOW_HOURS", "24")
    monkeypatch.setenv("PODCAST_SCORE_THRESHOLD", "5")
    monkeypatch.setenv("LONG_FORM_CHANNEL_IDS", "UC_a, UC_b")
    monkeypatch.setenv("NATIONAL_SOURCES", "ringer")

    config = load_engine_config(Settings(_env_file=None))

    assert config.injury.window_hours == 24
    assert config.podcast.threshold == 5
    assert config.podcast.long_form_channels == frozenset({"UC_a", "UC_b"})
    assert config.sources.national_sources == ("ringer",)


def test_invalid_threshold_falls_back_to_default(monkeypatch):
    monkeypatch.setenv("PODCAST_SCORE_THRESHOLD", "four")
    assert load_engine_config(Settings(_env_file=None)).podcast.threshold == 4


def test_non_positive_window_is_rejected():
    with pytest.raises(ConfigurationError):
        load_engine_config(Settings(_env_file=None, ALERT_WINDOW_HOURS=0))


def test_config_is_immutable():
    config = EngineConfig()
    with pytest.raises(AttributeError):
        config.injury.window_hours = 1
