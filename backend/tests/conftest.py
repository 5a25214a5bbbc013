import pytest
from fastapi.testclient import TestClient

from ytgateway.config import Settings
from ytgateway.main import create_app
from ytgateway.models.schemas import MediaKind, VideoInfo

VALID_ID = "dQw4w9WgXcQ"
VALID_URL = f"https://www.youtube.com/watch?v={VALID_ID}"


class FakeResolver:
    """Resolver en memoria; registra las URLs recibidas."""

    def __init__(self, info=None, chunks=(b"abc", b"def"), valid=True):
        self.info = info or VideoInfo(title="Test: Video! (2024)", thumbnail="https://i.ytimg.com/3.jpg")
        self.chunks = list(chunks)
        self.valid = valid
        self.info_error = None
        self.stream_error = None
        self.validated = []
        self.streams = []

    def is_valid(self, url):
        self.validated.append(url)
        return self.valid

    def fetch_info(self, url):
        if self.info_error:
            raise self.info_error
        return self.info

    def open_stream(self, url, kind: MediaKind):
        if self.stream_error:
            raise self.stream_error
        self.streams.append((url, kind))
        return iter(self.chunks)


@pytest.fixture
def resolver():
    return FakeResolver()


@pytest.fixture
def client(resolver):
    app = create_app(Settings(), resolver=resolver)
    with TestClient(app) as c:
        yield c
