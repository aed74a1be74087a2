# ABOUTME: Output storage for batch runs
# ABOUTME: Pipeline Stage 3: Merged hotels → hotels.json on disk

"""
Persistence Layer: Save the outcome of a batch run

This layer handles:
- Reserving a timestamped directory per run
- Writing the merged hotels document

Data Flow: core/ merged hotels → Serialized bytes → Filesystem
"""

from .base import OutputSink, RunLocation
from .filesystem import FileSystemOutputSink

__all__ = [
    "FileSystemOutputSink",
    "OutputSink",
    "RunLocation",
]
