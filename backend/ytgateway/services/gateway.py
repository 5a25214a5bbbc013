"""
normalize -> validate -> act.

Each operation returns an explicit result; exceptions raised by the
resolver are translated here and never reach the HTTP layer.
"""
import logging
from typing import Iterator, Protocol

from ytgateway.models.schemas import (
    Failure,
    FailureReason,
    MediaDownload,
    MediaKind,
    Ok,
    Result,
    VideoInfo,
)
from ytgateway.services.urls import normalize_youtube_url, sanitize_title

logger = logging.getLogger(__name__)


class Resolver(Protocol):
    def is_valid(self, url: str) -> bool: ...

    def fetch_info(self, url: str) -> VideoInfo: ...

    def open_stream(self, url: str, kind: MediaKind) -> Iterator[bytes]: ...


def resolve_locator(raw: str | None, resolver: Resolver) -> Result[str]:
    url = normalize_youtube_url(raw)
    if not url:
        return Failure(FailureReason.INVALID_URL, f"unrecognized url: {raw!r}")

    if not resolver.is_valid(url):
        return Failure(FailureReason.INVALID_URL, f"resolver rejected: {url}")

    return Ok(url)


def _upstream_failure(operation: str, exc: Exception) -> Failure:
    logger.error("[%s] error: %s", operation, exc, exc_info=exc)
    return Failure(FailureReason.UPSTREAM, str(exc))


def lookup_info(raw: str | None, resolver: Resolver) -> Result[VideoInfo]:
    located = resolve_locator(raw, resolver)
    if isinstance(located, Failure):
        return located

    try:
        return Ok(resolver.fetch_info(located.value))
    except Exception as exc:
        return _upstream_failure("/info", exc)


def prepare_audio(raw: str | None, resolver: Resolver) -> Result[MediaDownload]:
    located = resolve_locator(raw, resolver)
    if isinstance(located, Failure):
        return located

    try:
        title = resolver.fetch_info(located.value).title
        chunks = resolver.open_stream(located.value, MediaKind.AUDIO)
    except Exception as exc:
        return _upstream_failure("/mp3", exc)

    return Ok(MediaDownload(title, "mp3", "audio/mpeg", chunks))


def prepare_video(raw: str | None, resolver: Resolver) -> Result[MediaDownload]:
    located = resolve_locator(raw, resolver)
    if isinstance(located, Failure):
        return located

    try:
        title = sanitize_title(resolver.fetch_info(located.value).title)
        chunks = resolver.open_stream(located.value, MediaKind.VIDEO)
    except Exception as exc:
        return _upstream_failure("/mp4", exc)

    return Ok(MediaDownload(title, "mp4", "video/mp4", chunks))
