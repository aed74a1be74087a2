# ABOUTME: Business logic and orchestration layer
# ABOUTME: Pipeline Stage 2: Decoded documents → Merged hotels + downloaded images

"""
Core Layer: Business logic and workflow orchestration

This layer handles:
- Hotel identity and provider resolution from filenames
- Per-hotel merging of provider documents
- Batch orchestration with concurrent image downloads
- Translation of failures into client/server error responses

Data Flow: extraction/ trees → Merge + downloads → persistence/ output
"""

from .exceptions import (
    DocumentDecodeError,
    HotelConverterError,
    HotelFileSystemError,
    HotelProcessingError,
    HotelValidationError,
)
from .models import BatchResult, HotelRecord, InputDocument, SourceKind

# Import services on-demand to avoid circular imports
# Use: from hotel_converter.core.converter import HotelConverterService

__all__ = [
    "BatchResult",
    "DocumentDecodeError",
    "HotelConverterError",
    "HotelFileSystemError",
    "HotelProcessingError",
    "HotelRecord",
    "HotelValidationError",
    "InputDocument",
    "SourceKind",
]
