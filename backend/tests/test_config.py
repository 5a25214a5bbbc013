import sys

import pytest

from ytgateway.config import DEFAULT_PORT, Settings

ENV_VARS = ["PORT", "HOST", "LOG_LEVEL", "CORS_ORIGINS", "YTDLP_COMMAND", "STREAM_CHUNK_SIZE"]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.setattr("ytgateway.config.load_dotenv", lambda: None)
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    settings = Settings.from_env()

    assert settings.port == DEFAULT_PORT == 3500
    assert settings.host == "0.0.0.0"
    assert settings.cors_origins == ("*",)
    assert settings.ytdlp_command == (sys.executable, "-m", "yt_dlp")


def test_values_from_environment(monkeypatch):
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("CORS_ORIGINS", "https://a.example, https://b.example")
    monkeypatch.setenv("YTDLP_COMMAND", "/opt/bin/yt-dlp --force-ipv4")
    monkeypatch.setenv("STREAM_CHUNK_SIZE", "1024")

    settings = Settings.from_env()

    assert settings.port == 8080
    assert settings.log_level == "DEBUG"
    assert settings.cors_origins == ("https://a.example", "https://b.example")
    assert settings.ytdlp_command == ("/opt/bin/yt-dlp", "--force-ipv4")
    assert settings.chunk_size == 1024


@pytest.mark.parametrize("value", ["abc", "0", "-1"])
def test_invalid_port(monkeypatch, value):
    monkeypatch.setenv("PORT", value)
    with pytest.raises(ValueError, match="PORT"):
        Settings.from_env()
