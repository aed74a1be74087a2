# ABOUTME: Integrations with external systems used during conversion
# ABOUTME: Currently the image hosts referenced by hotel documents

from .images import ImageFetcher

__all__ = [
    "ImageFetcher",
]
