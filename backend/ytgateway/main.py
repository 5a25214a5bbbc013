# cnrxad - 2026

import logging

import uvicorn
from fastapi import FastAPI, Response
from fastapi.middleware.cors import CORSMiddleware

from ytgateway.api.media import router as media_router
from ytgateway.config import Settings, configure_logging
from ytgateway.models.schemas import HealthResponse
from ytgateway.services.gateway import Resolver
from ytgateway.services.resolver import YtDlpResolver

logger = logging.getLogger(__name__)


# -------------------------------
# APP
# -------------------------------
def create_app(
    settings: Settings | None = None,
    resolver: Resolver | None = None,
) -> FastAPI:
    settings = settings or Settings.from_env()

    app = FastAPI(
        title="yt-gateway - API",
        description="YouTube info / mp3 / mp4 gateway",
        version="1.0.0",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["Content-Disposition"],
    )

    app.state.resolver = resolver or YtDlpResolver(
        command=settings.ytdlp_command,
        chunk_size=settings.chunk_size,
    )

    # Ping / healthcheck
    @app.get("/")
    def root():
        return Response(status_code=200)

    @app.get("/health", response_model=HealthResponse)
    def health():
        return HealthResponse()

    app.include_router(media_router)

    return app


# -------------------------------
# SERVER
# -------------------------------
def start_server(settings: Settings | None = None):
    settings = settings or Settings.from_env()
    configure_logging(settings.log_level)

    logger.info("Server on port %s", settings.port)
    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_config=None,
    )


if __name__ == "__main__":
    start_server()
