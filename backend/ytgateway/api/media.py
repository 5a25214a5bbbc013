from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import PlainTextResponse, Response, StreamingResponse

from ytgateway.models.schemas import (
    Failure,
    FailureReason,
    InfoResponse,
    MediaDownload,
    Result,
)
from ytgateway.services.gateway import (
    Resolver,
    lookup_info,
    prepare_audio,
    prepare_video,
)
from ytgateway.services.urls import attachment_header

router = APIRouter()

INVALID_URL = "Invalid url"


def get_resolver(request: Request) -> Resolver:
    return request.app.state.resolver


def _failure_response(failure: Failure, upstream_message: str) -> PlainTextResponse:
    if failure.reason is FailureReason.INVALID_URL:
        return PlainTextResponse(INVALID_URL, status_code=400)
    return PlainTextResponse(upstream_message, status_code=500)


def _download_response(
    result: Result[MediaDownload], upstream_message: str
) -> Response:
    if isinstance(result, Failure):
        return _failure_response(result, upstream_message)

    download = result.value
    return StreamingResponse(
        download.chunks,
        media_type=download.media_type,
        headers={
            "Content-Disposition": attachment_header(
                download.filename_stem, download.extension
            )
        },
    )


# -----------------------------
# ENDPOINTS
# -----------------------------
@router.get("/info", response_model=InfoResponse, response_model_exclude_none=True)
def video_info(
    url: str | None = Query(None),
    resolver: Resolver = Depends(get_resolver),
):
    result = lookup_info(url, resolver)
    if isinstance(result, Failure):
        return _failure_response(result, "Error fetching info")

    info = result.value
    return InfoResponse(title=info.title, thumbnail=info.thumbnail)


@router.get("/mp3")
def download_mp3(
    url: str | None = Query(None),
    resolver: Resolver = Depends(get_resolver),
):
    return _download_response(prepare_audio(url, resolver), "Error streaming audio")


@router.get("/mp4")
def download_mp4(
    url: str | None = Query(None),
    resolver: Resolver = Depends(get_resolver),
):
    return _download_response(prepare_video(url, resolver), "Error streaming video")
