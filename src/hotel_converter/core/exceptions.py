# ABOUTME: Exception hierarchy for batch conversion failures
# ABOUTME: Validation errors map to client errors, processing errors to server errors


class HotelConverterError(Exception):
    """Base exception for all conversion failures."""

    pass


class HotelValidationError(HotelConverterError):
    """Raised when an uploaded file is missing a name, is misnamed, or has an unsupported format."""

    pass


class HotelProcessingError(HotelConverterError):
    """Raised when a batch cannot be completed (decoding, serialization, deadline)."""

    pass


class DocumentDecodeError(HotelProcessingError):
    """Raised when a document's content is not valid JSON or XML."""

    pass


class HotelFileSystemError(HotelProcessingError):
    """Raised when the output directory or result file cannot be written."""

    pass
