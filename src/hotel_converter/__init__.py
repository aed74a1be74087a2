"""Merge GIATA and COAH hotel documents and collect their verified images."""

__version__ = "0.1.0"
