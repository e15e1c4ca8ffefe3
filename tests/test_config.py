from datetime import timedelta

import pytest

from vocab_core.config import Settings, get_settings
from vocab_core.errors import ConfigError

ENV_VARS = (
    "VOCAB_REVIEW_COOLDOWN_MINUTES",
    "VOCAB_PRACTICE_LIMIT",
    "VOCAB_MASTERED_STABILITY",
    "VOCAB_TIMEZONE",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    settings = get_settings()

    assert settings == Settings()
    assert settings.review_cooldown == timedelta(minutes=50)
    assert settings.practice_limit == 20
    assert settings.mastered_stability == 30
    assert settings.timezone is None


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("VOCAB_REVIEW_COOLDOWN_MINUTES", "15")
    monkeypatch.setenv("VOCAB_PRACTICE_LIMIT", "5")
    monkeypatch.setenv("VOCAB_MASTERED_STABILITY", "21.5")

    settings = get_settings()

    assert settings.review_cooldown == timedelta(minutes=15)
    assert settings.practice_limit == 5
    assert settings.mastered_stability == 21.5


def test_blank_values_use_defaults(monkeypatch):
    monkeypatch.setenv("VOCAB_PRACTICE_LIMIT", "  ")
    assert get_settings().practice_limit == 20


@pytest.mark.parametrize("name, value", [
    ("VOCAB_PRACTICE_LIMIT", "many"),
    ("VOCAB_PRACTICE_LIMIT", "-3"),
    ("VOCAB_REVIEW_COOLDOWN_MINUTES", "soon"),
    ("VOCAB_REVIEW_COOLDOWN_MINUTES", "nan"),
    ("VOCAB_REVIEW_COOLDOWN_MINUTES", "inf"),
    ("VOCAB_MASTERED_STABILITY", "-inf"),
    ("VOCAB_TIMEZONE", "Not/AZone"),
])
def test_invalid_values(monkeypatch, name, value):
    monkeypatch.setenv(name, value)
    with pytest.raises(ConfigError):
        get_settings()
