# ABOUTME: Shared pytest fixtures for converter tests
# ABOUTME: Provides isolated configuration and small in-memory images

import asyncio
import io

import httpx
import pytest
from PIL import Image

from hotel_converter.config import Config


@pytest.fixture
def config(tmp_path):
    """Configuration writing below a temporary directory with a short deadline."""
    return Config(
        output_dir=tmp_path / "output",
        batch_deadline_seconds=5,
        image_request_timeout=2,
        max_concurrent_downloads=4,
    )


@pytest.fixture
def png_bytes():
    """A valid 2x2 PNG image."""
    buffer = io.BytesIO()
    Image.new("RGB", (2, 2), color="red").save(buffer, format="PNG")
    return buffer.getvalue()


class TricklingByteStream(httpx.AsyncByteStream):
    """Response body delivered one byte at a time with a pause before each."""

    def __init__(self, content: bytes, delay: float):
        self.content = content
        self.delay = delay

    async def __aiter__(self):
        for byte in self.content:
            await asyncio.sleep(self.delay)
            yield bytes([byte])


@pytest.fixture
def trickling_response(png_bytes):
    """Factory for a 200 response whose image body arrives too slowly to finish."""

    def _make(delay: float = 0.1) -> httpx.Response:
        return httpx.Response(200, headers={"Content-Type": "image/png"}, stream=TricklingByteStream(png_bytes, delay))

    return _make
