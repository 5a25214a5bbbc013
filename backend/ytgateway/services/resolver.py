import logging
import subprocess
import tempfile
from typing import IO, Any, Dict, Iterator, Sequence

from yt_dlp import YoutubeDL
from yt_dlp.extractor.youtube import YoutubeIE

from ytgateway.config import DEFAULT_CHUNK_SIZE, default_ytdlp_command
from ytgateway.models.schemas import MediaKind, VideoInfo

logger = logging.getLogger(__name__)

STREAM_FORMATS = {
    MediaKind.AUDIO: "bestaudio",
    MediaKind.VIDEO: "best[vcodec!=none][acodec!=none]",
}

THUMBNAIL_INDEX = 2
STDERR_TAIL_BYTES = 2048


class StreamError(RuntimeError):
    """yt-dlp terminó sin producir bytes."""

    def __init__(self, returncode: int | None, stderr: str):
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(
            f"yt-dlp exited with code {returncode}: {stderr or 'no output'}"
        )


def _read_tail(handle: IO[bytes]) -> str:
    handle.seek(0, 2)
    size = handle.tell()
    handle.seek(max(0, size - STDERR_TAIL_BYTES))
    return handle.read().decode("utf-8", "ignore").strip()


class YtDlpResolver:
    """Validación, metadatos y streams de YouTube vía yt-dlp."""

    def __init__(
        self,
        command: Sequence[str] | None = None,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ):
        self.command = tuple(command) if command else default_ytdlp_command()
        self.chunk_size = chunk_size

    def is_valid(self, url: str) -> bool:
        return bool(YoutubeIE.suitable(url))

    def fetch_info(self, url: str) -> VideoInfo:
        ydl_opts: Dict[str, Any] = {
            "quiet": True,
            "no_warnings": True,
            "noplaylist": True,
            "skip_download": True,
        }

        with YoutubeDL(ydl_opts) as ydl:  # type: ignore
            info = ydl.extract_info(url, download=False)

        thumbnails = info.get("thumbnails") or []
        thumbnail = None
        if len(thumbnails) > THUMBNAIL_INDEX:
            thumbnail = thumbnails[THUMBNAIL_INDEX].get("url")

        return VideoInfo(title=info.get("title") or "", thumbnail=thumbnail)

    def open_stream(self, url: str, kind: MediaKind) -> Iterator[bytes]:
        """
        Lanza yt-dlp escribiendo en stdout y lee el primer bloque antes de
        devolver, para que un fallo inmediato aún pueda responder 500.
        """
        cmd = [
            *self.command,
            "-f", STREAM_FORMATS[kind],
            "-o", "-",
            "--no-playlist",
            "--no-part",
            "--quiet",
            "--no-warnings",
            url,
        ]

        stderr = tempfile.TemporaryFile()
        try:
            process = subprocess.Popen(cmd, stdout=subprocess.PIPE, stderr=stderr)
        except OSError:
            stderr.close()
            raise

        if process.stdout is None:
            process.kill()
            stderr.close()
            raise StreamError(None, "stdout unavailable")

        first = process.stdout.read(self.chunk_size)
        if not first:
            returncode = process.wait()
            detail = _read_tail(stderr)
            process.stdout.close()
            stderr.close()
            raise StreamError(returncode, detail)

        return self._pump(process, first, stderr)

    def _pump(
        self,
        process: subprocess.Popen,
        first: bytes,
        stderr: IO[bytes],
    ) -> Iterator[bytes]:
        assert process.stdout is not None
        try:
            yield first
            for chunk in iter(lambda: process.stdout.read(self.chunk_size), b""):
                yield chunk

            returncode = process.wait()
            if returncode != 0:
                # Cabeceras ya enviadas: sólo queda cortar la conexión
                detail = _read_tail(stderr)
                logger.error("yt-dlp exited with code %s mid-stream: %s", returncode, detail)
                raise StreamError(returncode, detail)
        finally:
            if process.poll() is None:
                process.kill()
                process.wait()
            process.stdout.close()
            stderr.close()
