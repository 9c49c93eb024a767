from pathlib import Path

import pytest

from transcribe_example.config import DEFAULT_SOURCE_MEDIA_URL, load_settings

_ENV_NAMES = (
    "SOURCE_MEDIA_URL",
    "DATA_DIR",
    "AWS_REGION",
    "AWS_DEFAULT_REGION",
    "BUCKET_PREFIX",
    "LANGUAGE_CODE",
    "POLL_INTERVAL_SECONDS",
    "MAX_WAIT_SECONDS",
    "HTTP_TIMEOUT_SECONDS",
    "CLEANUP_ON_FAILURE",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.chdir(tmp_path)
    for name in _ENV_NAMES:
        monkeypatch.delenv(name, raising=False)


def test_defaults(tmp_path: Path) -> None:
    settings = load_settings()

    assert settings.source_media_url == DEFAULT_SOURCE_MEDIA_URL
    assert settings.data_dir == (tmp_path / "data").resolve()
    assert settings.aws_region == "us-east-1"
    assert settings.language_code == "en-US"
    assert settings.poll_interval_seconds == 3.0
    assert settings.max_wait_seconds is None
    assert settings.cleanup_on_failure is True
    assert settings.log_level == "INFO"


def test_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("AWS_DEFAULT_REGION", "eu-west-1")
    monkeypatch.setenv("POLL_INTERVAL_SECONDS", "0.5")
    monkeypatch.setenv("MAX_WAIT_SECONDS", "600")
    monkeypatch.setenv("CLEANUP_ON_FAILURE", "0")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = load_settings()

    assert settings.aws_region == "eu-west-1"
    assert settings.poll_interval_seconds == 0.5
    assert settings.max_wait_seconds == 600.0
    assert settings.cleanup_on_failure is False
    assert settings.log_level == "DEBUG"


def test_invalid_number_raises(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("POLL_INTERVAL_SECONDS", "soon")

    with pytest.raises(ValueError):
        load_settings()


@pytest.mark.parametrize(
    ("name", "value"),
    [
        ("POLL_INTERVAL_SECONDS", "-3"),
        ("POLL_INTERVAL_SECONDS", "nan"),
        ("POLL_INTERVAL_SECONDS", "inf"),
        ("MAX_WAIT_SECONDS", "-1"),
        ("MAX_WAIT_SECONDS", "nan"),
        ("HTTP_TIMEOUT_SECONDS", "0"),
        ("HTTP_TIMEOUT_SECONDS", "-5"),
        ("CLEANUP_ON_FAILURE", "garbage"),
        ("LOG_LEVEL", "chatty"),
    ],
)
def test_out_of_range_values_raise(monkeypatch: pytest.MonkeyPatch, name: str, value: str) -> None:
    monkeypatch.setenv(name, value)

    with pytest.raises(ValueError, match=name):
        load_settings()


def test_zero_poll_interval_and_max_wait_are_allowed(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("POLL_INTERVAL_SECONDS", "0")
    monkeypatch.setenv("MAX_WAIT_SECONDS", "0")
    monkeypatch.setenv("CLEANUP_ON_FAILURE", "yes")

    settings = load_settings()

    assert settings.poll_interval_seconds == 0.0
    assert settings.max_wait_seconds == 0.0
    assert settings.cleanup_on_failure is True
