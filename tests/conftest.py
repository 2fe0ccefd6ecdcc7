import base64

import cv2
import numpy as np
import pytest

from photocritic.errors import InvocationError
from photocritic.vision.client import VisionClient

GOOD_REPLY = (
    '{"score":9,"composition":"Well framed.","lighting":"Soft.","subject":"Clear.",'
    '"strengths":["Good framing"],"suggestions":["Try closer","Use daylight","Simplify background"]}'
)


class StubVisionClient(VisionClient):
    """Records calls and returns a canned reply (or raises)."""

    def __init__(self, reply: str = GOOD_REPLY, error: Exception | None = None) -> None:
        self.reply = reply
        self.error = error
        self.calls: list[tuple[bytes, str | None]] = []

    async def analyze(self, image_bytes: bytes, prompt: str | None = None) -> str:
        self.calls.append((image_bytes, prompt))
        match self.error:
            case None:
                return self.reply
            case error:
                raise error


@pytest.fixture
def jpeg_bytes() -> bytes:
    ok, data = cv2.imencode(".jpg", np.full((8, 8, 3), 200, dtype=np.uint8))
    assert ok
    return data.tobytes()


@pytest.fixture
def jpeg_b64(jpeg_bytes) -> str:
    return base64.b64encode(jpeg_bytes).decode()


@pytest.fixture
def stub_vision() -> StubVisionClient:
    return StubVisionClient()


@pytest.fixture
def failing_vision() -> StubVisionClient:
    return StubVisionClient(error=InvocationError("throttled"))
