# ABOUTME: Downloads hotel images, verifies they decode as real images, and stores them
# ABOUTME: Fail-soft by contract: every failure is logged and reported as False, never raised

import asyncio
import io
import uuid
from pathlib import Path, PurePosixPath
from types import TracebackType
from urllib.parse import urlparse

import httpx
from PIL import Image

from hotel_converter.config import Config, get_config
from hotel_converter.utils.logging import get_logger, log_api_call

DEFAULT_EXTENSION = "jpg"


class ImageValidationError(Exception):
    """Raised when a downloaded payload is not a usable image."""

    pass


def image_extension(url: str) -> str:
    """File extension taken from the URL path, ``jpg`` when there is none."""
    try:
        suffix = PurePosixPath(urlparse(url).path).suffix
    except ValueError:
        return DEFAULT_EXTENSION
    return suffix.lstrip(".") or DEFAULT_EXTENSION


def generate_image_filename(hotel_id: str, url: str) -> str:
    return f"{hotel_id}_{uuid.uuid4()}.{image_extension(url)}"


def image_dimensions(content: bytes) -> tuple[int, int]:
    """Decode ``content`` with Pillow and return its (width, height).

    Raises:
        ImageValidationError: If the bytes are not a decodable image
    """
    try:
        with Image.open(io.BytesIO(content)) as img:
            img.verify()
            return img.size
    except Exception as e:
        raise ImageValidationError(f"Payload is not a decodable image: {e}") from e


def validate_image(content: bytes) -> None:
    """Reject payloads that are not images or have a zero dimension.

    Guards against HTML error pages and truncated bodies served with a 200 status.
    """
    width, height = image_dimensions(content)
    if width <= 0 or height <= 0:
        raise ImageValidationError(f"Image has empty dimensions: {width}x{height}")


class ImageFetcher:
    """Fetches and stores hotel images with one attempt per URL.

    Use as an async context manager around a batch so one HTTP client (and its
    connection pool) is shared by every download. A client passed in by the
    caller is used as-is and left open.
    """

    def __init__(self, client: httpx.AsyncClient | None = None, config: Config | None = None):
        self.config = config or get_config()
        self.client = client
        self._owns_client = client is None
        self._semaphore: asyncio.Semaphore | None = None
        self.logger = get_logger(__name__)

    async def __aenter__(self) -> "ImageFetcher":
        # Bound to the running loop, so created per entry rather than in __init__
        self._semaphore = asyncio.Semaphore(self.config.max_concurrent_downloads)
        if self.client is None:
            self.client = httpx.AsyncClient(
                headers={"User-Agent": self.config.user_agent},
                timeout=self.config.image_request_timeout,
                follow_redirects=True,
            )
            self._owns_client = True
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if self._owns_client and self.client is not None:
            await self.client.aclose()
            self.client = None

    @log_api_call("image_host")
    async def _download(self, url: str) -> bytes:
        """Stream the image body, enforcing the configured size limit.

        Raises:
            httpx.HTTPError: On network failures and non-success status codes
            ImageValidationError: If the body exceeds the size limit
        """
        if self.client is None:
            raise RuntimeError("ImageFetcher must be entered with 'async with' before downloading")

        max_bytes = self.config.max_image_size_mb * 1024 * 1024

        async with self.client.stream("GET", url) as response:
            response.raise_for_status()

            content_length = response.headers.get("content-length")
            if content_length and content_length.isdigit() and int(content_length) > max_bytes:
                raise ImageValidationError(f"Image too large: {int(content_length)} bytes")

            image_data = bytearray()
            async for chunk in response.aiter_bytes():
                image_data.extend(chunk)
                if len(image_data) > max_bytes:
                    raise ImageValidationError("Image exceeded size limit during download")

        return bytes(image_data)

    async def fetch(self, url: str, hotel_id: str, images_dir: Path) -> bool:
        """Download one image, verify it, and save it under a generated name.

        Args:
            url: Image URL found in a hotel document
            hotel_id: Hotel the image belongs to, used as the filename prefix
            images_dir: Destination directory, created if absent

        Returns:
            True if a verified image was written, False on any failure
        """
        if self._semaphore is None:
            self.logger.warning("ImageFetcher used outside 'async with'", url=url, hotel_id=hotel_id)
            return False

        async with self._semaphore:
            try:
                # Total time cap; the client timeout only bounds each network operation
                async with asyncio.timeout(self.config.image_request_timeout):
                    content = await self._download(url)
                validate_image(content)

                image_path = images_dir / generate_image_filename(hotel_id, url)
                await asyncio.to_thread(images_dir.mkdir, parents=True, exist_ok=True)
                await asyncio.to_thread(image_path.write_bytes, content)

                self.logger.debug("Downloaded image", url=url, hotel_id=hotel_id, path=str(image_path))
                return True

            except Exception as e:
                self.logger.warning(
                    "Failed to download image",
                    url=url,
                    hotel_id=hotel_id,
                    error=str(e),
                    error_type=type(e).__name__,
                )
                return False
