# ABOUTME: Cross-cutting utilities and shared infrastructure
# ABOUTME: Supporting services: logging, console tables

"""
Utils Layer: Shared infrastructure and cross-cutting concerns

This layer provides:
- Logging configuration and structured logger helpers
- Rich console tables for CLI output

Data Flow: Supporting services for all other layers
"""

from . import logging

__all__ = [
    "logging",
]
