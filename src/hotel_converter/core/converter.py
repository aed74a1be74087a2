# ABOUTME: Batch orchestration: merge uploaded hotel documents and download their images
# ABOUTME: Whole-batch failure for naming/decoding errors, per-image fail-soft for downloads

import asyncio
from collections.abc import Iterable
from datetime import datetime

from pydantic import TypeAdapter

from hotel_converter.config import Config, get_config
from hotel_converter.core.exceptions import DocumentDecodeError, HotelProcessingError
from hotel_converter.core.identity import resolve_hotel_id, resolve_source_kind
from hotel_converter.core.merger import upsert
from hotel_converter.core.models import BatchResult, HotelRecord, InputDocument
from hotel_converter.extraction import DocumentFormat, decode_document, extract_image_urls
from hotel_converter.persistence import FileSystemOutputSink, OutputSink
from hotel_converter.services import ImageFetcher
from hotel_converter.utils.logging import with_batch_context, with_hotel_context

HOTELS_ADAPTER = TypeAdapter(dict[str, HotelRecord])


class HotelConverterService:
    """Converts a batch of uploaded hotel documents into one merged result.

    Documents are processed sequentially in input order, so for each hotel the
    last document of a given provider wins. Image downloads are the only
    concurrent work: each URL gets its own task, and all of them are joined
    under a single batch deadline.
    """

    def __init__(
        self,
        sink: OutputSink | None = None,
        image_fetcher: ImageFetcher | None = None,
        config: Config | None = None,
    ):
        self.config = config or get_config()
        self.sink = sink or FileSystemOutputSink(self.config.output_dir)
        self.image_fetcher = image_fetcher or ImageFetcher(config=self.config)

    async def process_files(self, documents: Iterable[InputDocument]) -> BatchResult:
        """Merge ``documents`` per hotel, download their images, and write the result.

        Args:
            documents: Uploaded files in the order they were received

        Returns:
            Locations of the written output plus document and image counts

        Raises:
            HotelValidationError: If a filename or format is invalid
            HotelProcessingError: If decoding, serialization, or the download deadline fails
        """
        documents = list(documents)
        timestamp = datetime.now()
        run = self.sink.prepare_run(timestamp)

        hotels: dict[str, HotelRecord] = {}
        downloads: list[asyncio.Task[bool]] = []

        with with_batch_context("hotel_conversion", document_count=len(documents)) as logger:
            logger.info("Starting batch", output_dir=str(run.output_dir))

            async with self.image_fetcher as fetcher:
                try:
                    for document in documents:
                        if not document.filename:
                            logger.warning("Skipping upload without filename")
                            continue

                        hotel_id, urls = self._merge_document(hotels, document)
                        for url in urls:
                            downloads.append(asyncio.create_task(fetcher.fetch(url, hotel_id, run.images_dir)))

                    logger.info("Waiting for image downloads", pending=len(downloads))
                    try:
                        async with asyncio.timeout(self.config.batch_deadline_seconds):
                            outcomes = await asyncio.gather(*downloads)
                    except TimeoutError as e:
                        raise HotelProcessingError("Failed to complete processing") from e
                finally:
                    await self._cancel_pending(downloads)

            successful = sum(1 for outcome in outcomes if outcome)
            logger.info(
                "Image downloads finished",
                total=len(outcomes),
                successful=successful,
                failed=len(outcomes) - successful,
            )

            try:
                data = HOTELS_ADAPTER.dump_json(hotels, indent=2, by_alias=True)
            except ValueError as e:
                raise HotelProcessingError("Failed to serialize merged hotels") from e
            self.sink.write_result(data, run.output_dir)

            logger.info("Batch complete", hotels=len(hotels), downloaded_images=successful)

        return BatchResult(
            output_location=run.output_dir,
            images_location=run.images_dir,
            timestamp=timestamp,
            document_count=len(documents),
            successful_image_count=successful,
        )

    def _merge_document(self, hotels: dict[str, HotelRecord], document: InputDocument) -> tuple[str, set[str]]:
        """Validate, decode, and merge one document; return its hotel id and referenced image URLs."""
        hotel_id = resolve_hotel_id(document.filename)
        kind = resolve_source_kind(document.filename)
        document_format = DocumentFormat.from_filename(document.filename)

        with with_hotel_context(hotel_id, source=kind.value, filename=document.filename) as logger:
            try:
                content = decode_document(document.content, document_format)
            except DocumentDecodeError as e:
                raise DocumentDecodeError(f"Failed to process file: {document.filename}") from e

            existing = hotels.get(hotel_id)
            if existing is not None and existing.slot(kind) is not None:
                logger.warning("Replacing earlier document for the same hotel and source")
            upsert(hotels, hotel_id, kind, content)

            urls = extract_image_urls(content)
            logger.debug("Merged document", image_urls=len(urls))
            return hotel_id, urls

    @staticmethod
    async def _cancel_pending(downloads: list[asyncio.Task[bool]]) -> None:
        """Cancel downloads still running after an abort and wait for them to unwind."""
        pending = [task for task in downloads if not task.done()]
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
