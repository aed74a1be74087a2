# ABOUTME: Tests for batch orchestration of merging and image downloads
# ABOUTME: End-to-end runs against a temporary output directory with mocked image hosts

import asyncio
import json

import httpx
import pytest
import respx

from hotel_converter.core.converter import HotelConverterService
from hotel_converter.core.exceptions import DocumentDecodeError, HotelProcessingError, HotelValidationError
from hotel_converter.core.models import InputDocument
from hotel_converter.persistence import FileSystemOutputSink
from hotel_converter.services.images import ImageFetcher


class SlowImageFetcher(ImageFetcher):
    """Fetcher whose downloads never finish before the batch deadline."""

    def __init__(self, config):
        super().__init__(config=config)
        self.cancelled = 0

    async def fetch(self, url, hotel_id, images_dir):
        try:
            await asyncio.sleep(10)
        except asyncio.CancelledError:
            self.cancelled += 1
            raise
        return True


def _json_document(filename: str, content) -> InputDocument:
    return InputDocument(filename=filename, content=json.dumps(content).encode())


@pytest.fixture
def output_dir(config):
    return config.output_dir


@pytest.fixture
def service(config, output_dir):
    return HotelConverterService(sink=FileSystemOutputSink(output_dir), config=config)


def _read_result(result) -> dict:
    return json.loads(result.result_file.read_text())


@pytest.mark.asyncio
@respx.mock
async def test_end_to_end_batch(service, png_bytes):
    respx.get("http://img.example.com/a1.jpg").mock(return_value=httpx.Response(200, content=png_bytes))
    respx.get("http://img.example.com/b1.png").mock(return_value=httpx.Response(200, content=png_bytes))
    respx.get("http://unreachable.invalid/b2.jpg").mock(side_effect=httpx.ConnectError("unreachable"))

    documents = [
        _json_document("A-giata.json", {"name": "Alpha", "image": [{"url": "http://img.example.com/a1.jpg"}]}),
        InputDocument(filename="A-coah.xml", content=b"<hotel><rooms>12</rooms></hotel>"),
        _json_document(
            "B-giata.json",
            {"name": "Beta", "gallery": ["http://img.example.com/b1.png", "http://unreachable.invalid/b2.jpg"]},
        ),
    ]

    result = await service.process_files(documents)

    assert result.document_count == 3
    assert result.successful_image_count == 2

    hotels = _read_result(result)
    assert set(hotels) == {"A", "B"}
    assert hotels["A"]["giata"]["name"] == "Alpha"
    assert hotels["A"]["coa"] == {"rooms": "12"}
    assert hotels["B"]["giata"]["name"] == "Beta"
    assert hotels["B"]["coa"] is None

    images = sorted(path.name for path in result.images_location.iterdir())
    assert len(images) == 2
    assert [name.split("_")[0] for name in images] == ["A", "B"]
    assert result.images_location == result.output_location / "images"


@pytest.mark.asyncio
async def test_empty_batch_writes_empty_result(service, output_dir):
    result = await service.process_files([])

    assert result.document_count == 0
    assert result.successful_image_count == 0
    assert result.output_location.parent == output_dir.resolve()
    assert _read_result(result) == {}
    assert not result.images_location.exists()


@pytest.mark.asyncio
async def test_same_provider_twice_keeps_last(service):
    documents = [
        _json_document("7-giata.json", {"a": 1}),
        _json_document("7-coah.json", {"c": 3}),
        _json_document("7-giata.json", {"b": 2}),
    ]

    result = await service.process_files(documents)

    assert _read_result(result) == {"7": {"giata": {"b": 2}, "coa": {"c": 3}}}


@pytest.mark.asyncio
async def test_upload_without_filename_is_skipped(service):
    documents = [InputDocument(filename="", content=b"{}"), _json_document("7-giata.json", {"a": 1})]

    result = await service.process_files(documents)

    assert result.document_count == 2
    assert set(_read_result(result)) == {"7"}


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("filename", "message"),
    [
        ("7-giata.csv", "Unsupported file type"),
        ("7-other.json", "Unknown source kind"),
        ("hotel.json", "no hotel id prefix"),
    ],
)
async def test_invalid_upload_aborts_batch(service, output_dir, filename, message):
    documents = [_json_document("1-giata.json", {"a": 1}), InputDocument(filename=filename, content=b"{}")]

    with pytest.raises(HotelValidationError, match=message):
        await service.process_files(documents)

    assert list(output_dir.rglob("hotels.json")) == []


@pytest.mark.asyncio
async def test_malformed_document_aborts_batch(service, output_dir):
    documents = [InputDocument(filename="1-giata.json", content=b"{broken")]

    with pytest.raises(DocumentDecodeError, match="Failed to process file: 1-giata.json"):
        await service.process_files(documents)

    assert list(output_dir.rglob("hotels.json")) == []


@pytest.mark.asyncio
async def test_deadline_breach_fails_batch(config, output_dir):
    fast_config = config.model_copy(update={"batch_deadline_seconds": 0.05})
    fetcher = SlowImageFetcher(fast_config)
    service = HotelConverterService(sink=FileSystemOutputSink(output_dir), image_fetcher=fetcher, config=fast_config)
    documents = [
        _json_document(
            "1-giata.json",
            {"image": [{"url": "http://img.example.com/1.jpg"}], "logo": "http://img.example.com/2.png"},
        )
    ]

    with pytest.raises(HotelProcessingError, match="Failed to complete processing"):
        await service.process_files(documents)

    assert fetcher.cancelled == 2
    assert list(output_dir.rglob("hotels.json")) == []


@pytest.mark.asyncio
@respx.mock
async def test_slow_image_host_does_not_fail_batch(config, output_dir, png_bytes, trickling_response):
    tight_config = config.model_copy(update={"image_request_timeout": 0.3, "batch_deadline_seconds": 3})
    service = HotelConverterService(sink=FileSystemOutputSink(output_dir), config=tight_config)
    respx.get("http://slow.example.com/trickle.jpg").mock(return_value=trickling_response(delay=0.2))
    respx.get("http://img.example.com/fast.png").mock(return_value=httpx.Response(200, content=png_bytes))
    documents = [
        _json_document(
            "1-giata.json",
            {"image": [{"url": "http://slow.example.com/trickle.jpg"}, {"url": "http://img.example.com/fast.png"}]},
        )
    ]

    result = await service.process_files(documents)

    assert result.successful_image_count == 1
    assert set(_read_result(result)) == {"1"}
