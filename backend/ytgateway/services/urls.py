import re
from urllib.parse import parse_qs, quote, urlparse

CANONICAL_HOST = "www.youtube.com"

_UNSAFE_TITLE_CHARS = re.compile(r"[^a-zA-Z0-9 _-]")
_UNSAFE_HEADER_CHARS = re.compile(r'["\\\x00-\x1f\x7f]')


# -------------------------------
# YouTube helpers
# -------------------------------
def extraer_video_id(raw: str) -> str | None:
    """
    Extrae el ID de vídeo de una URL watch?v= o youtu.be/<id>.
    Cualquier otra forma se considera inválida.
    """
    try:
        parsed = urlparse(raw)
        host = parsed.hostname
    except ValueError:
        return None

    if not parsed.scheme or not host:
        return None

    if "youtube.com" in host:
        values = parse_qs(parsed.query, keep_blank_values=True).get("v")
        return values[0] if values and values[0] else None

    if host == "youtu.be":
        segment = parsed.path[1:].split("/", 1)[0]
        return segment or None

    return None


def normalize_youtube_url(raw: str | None) -> str | None:
    """
    Devuelve la URL canónica https://www.youtube.com/watch?v=ID, o None.
    Las formas no canónicas provocan un 410 en el resolver.
    """
    if not raw:
        return None

    video_id = extraer_video_id(raw)
    if not video_id:
        return None

    return f"https://{CANONICAL_HOST}/watch?v={video_id}"


# -------------------------------
# Filenames / headers
# -------------------------------
def sanitize_title(title: str) -> str:
    return _UNSAFE_TITLE_CHARS.sub("", title)


def _header_safe(stem: str) -> bool:
    if _UNSAFE_HEADER_CHARS.search(stem):
        return False
    try:
        stem.encode("latin-1")
    except UnicodeEncodeError:
        return False
    return True


def attachment_header(stem: str, extension: str) -> str:
    filename = f"{stem}.{extension}"
    if _header_safe(stem):
        return f'attachment; filename="{filename}"'

    fallback = "".join(
        c if _header_safe(c) else "_" for c in stem
    )
    return (
        f'attachment; filename="{fallback}.{extension}"; '
        f"filename*=UTF-8''{quote(filename, safe='')}"
    )
