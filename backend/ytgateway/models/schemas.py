from dataclasses import dataclass
from enum import Enum
from typing import Generic, Iterator, TypeVar, Union

from pydantic import BaseModel, Field

T = TypeVar("T")


class MediaKind(str, Enum):
    AUDIO = "audio"
    VIDEO = "video"


@dataclass(frozen=True)
class VideoInfo:
    title: str
    thumbnail: str | None = None


@dataclass(frozen=True)
class MediaDownload:
    """A download ready to be forwarded: headers plus the open byte stream."""

    filename_stem: str
    extension: str
    media_type: str
    chunks: Iterator[bytes]


# -------------------------------
# Result type
# -------------------------------
class FailureReason(str, Enum):
    INVALID_URL = "invalid_url"
    UPSTREAM = "upstream"


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class Failure:
    reason: FailureReason
    detail: str = ""


Result = Union[Ok[T], Failure]


# -------------------------------
# Response bodies
# -------------------------------
class InfoResponse(BaseModel):
    """Respuesta de /info; thumbnail se omite si no existe."""
    title: str = Field(..., description="Video title")
    thumbnail: str | None = Field(None, description="Third advertised thumbnail URL")


class HealthResponse(BaseModel):
    status: str = "ok"
