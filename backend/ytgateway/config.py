import logging
import os
import shlex
import sys
from dataclasses import dataclass, field

from dotenv import load_dotenv

DEFAULT_PORT = 3500
DEFAULT_CHUNK_SIZE = 64 * 1024


def default_ytdlp_command() -> tuple[str, ...]:
    return (sys.executable, "-m", "yt_dlp")


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")
    return value


@dataclass(frozen=True)
class Settings:
    """Process-wide configuration, built once at startup."""

    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT
    log_level: str = "INFO"
    cors_origins: tuple[str, ...] = ("*",)
    ytdlp_command: tuple[str, ...] = field(default_factory=default_ytdlp_command)
    chunk_size: int = DEFAULT_CHUNK_SIZE

    @classmethod
    def from_env(cls) -> "Settings":
        load_dotenv()

        origins = tuple(
            o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()
        )
        command = os.getenv("YTDLP_COMMAND")

        return cls(
            host=os.getenv("HOST", "0.0.0.0"),
            port=_env_int("PORT", DEFAULT_PORT),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            cors_origins=origins or ("*",),
            ytdlp_command=tuple(shlex.split(command)) if command else default_ytdlp_command(),
            chunk_size=_env_int("STREAM_CHUNK_SIZE", DEFAULT_CHUNK_SIZE),
        )


def configure_logging(level: str = "INFO") -> None:
    if not logging.getLogger().hasHandlers():
        logging.basicConfig(
            level=level,
            format="[%(asctime)s] [%(levelname)s] %(name)s: %(message)s",
        )
