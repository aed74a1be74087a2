# ABOUTME: Protocol interface for where a batch run writes its merged result
# ABOUTME: Lets the converter stay independent of path layout and storage backend

from datetime import datetime
from pathlib import Path
from typing import Protocol

from pydantic import BaseModel, ConfigDict


class RunLocation(BaseModel):
    """Directories reserved for one batch run."""

    model_config = ConfigDict(frozen=True)

    output_dir: Path
    images_dir: Path


class OutputSink(Protocol):
    """Protocol for preparing run storage and persisting the merged result."""

    def prepare_run(self, timestamp: datetime) -> RunLocation:
        """Create backing storage for a run started at ``timestamp``.

        Raises:
            HotelFileSystemError: If the storage cannot be created
        """
        ...

    def write_result(self, data: bytes, output_dir: Path) -> Path:
        """Persist the serialized merged result and return its location.

        Raises:
            HotelFileSystemError: If the result cannot be written
        """
        ...
