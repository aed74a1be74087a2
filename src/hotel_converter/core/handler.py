# ABOUTME: Transport-neutral entry point turning uploads into status-coded responses
# ABOUTME: Validation errors become 400, conversion failures 500, with no internal detail leaked

from datetime import datetime
from http import HTTPStatus

from pydantic import BaseModel, Field

from hotel_converter.core.converter import HotelConverterService
from hotel_converter.core.exceptions import HotelConverterError, HotelValidationError
from hotel_converter.core.models import BatchResult, InputDocument
from hotel_converter.utils.logging import get_logger

UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred"

logger = get_logger(__name__)


class ErrorResponse(BaseModel):
    """Error body returned when a batch fails."""

    message: str
    status: int
    error: str = Field(description="Reason phrase for the status code")
    timestamp: datetime = Field(default_factory=datetime.now)

    @classmethod
    def for_status(cls, status: HTTPStatus, message: str) -> "ErrorResponse":
        return cls(message=message, status=status.value, error=status.phrase)


class ConversionResponse(BaseModel):
    """Status code plus either the batch result or an error body."""

    status: int
    body: BatchResult | ErrorResponse

    @property
    def ok(self) -> bool:
        return self.status == HTTPStatus.OK


def _error(status: HTTPStatus, message: str) -> ConversionResponse:
    return ConversionResponse(status=status.value, body=ErrorResponse.for_status(status, message))


async def convert_uploads(
    uploads: list[tuple[str, bytes]], service: HotelConverterService | None = None
) -> ConversionResponse:
    """Run one batch conversion over ``(filename, content)`` pairs.

    Args:
        uploads: Uploaded files in the order received
        service: Converter to use (defaults to one built from configuration)

    Returns:
        200 with the BatchResult, 400 for invalid uploads, 500 for failed conversions
    """
    try:
        service = service or HotelConverterService()
        documents = [InputDocument(filename=filename or "", content=content) for filename, content in uploads]
        result = await service.process_files(documents)
    except HotelValidationError as e:
        logger.warning("Validation error", error=str(e))
        return _error(HTTPStatus.BAD_REQUEST, str(e))
    except HotelConverterError as e:
        logger.error("File processing error", error=str(e), error_type=type(e).__name__, exc_info=True)
        return _error(HTTPStatus.INTERNAL_SERVER_ERROR, str(e))
    except Exception as e:
        logger.error("Unexpected error", error=str(e), error_type=type(e).__name__, exc_info=True)
        return _error(HTTPStatus.INTERNAL_SERVER_ERROR, UNEXPECTED_ERROR_MESSAGE)

    return ConversionResponse(status=HTTPStatus.OK.value, body=result)
