# ABOUTME: Decoding of uploaded documents and discovery of image URLs inside them
# ABOUTME: Pipeline Stage 1: Raw bytes → untyped tree → candidate image URLs

"""
Extraction Layer: Turn uploaded bytes into data the converter can merge

This layer handles:
- JSON and XML decoding into plain mapping/list/scalar trees
- Format detection from file extensions
- Image URL discovery inside decoded documents

Data Flow: Uploaded files → Untyped trees → core/ merge and services/ downloads
"""

from .decoding import DocumentFormat, decode_document
from .urls import extract_image_urls

__all__ = [
    "DocumentFormat",
    "decode_document",
    "extract_image_urls",
]
