# ABOUTME: Local filesystem output sink writing one timestamped directory per run
# ABOUTME: Layout: <base>/<YYYYMMDD_HHMMSS>/hotels.json and .../images/

from datetime import datetime
from pathlib import Path

from hotel_converter.config import get_config
from hotel_converter.core.exceptions import HotelFileSystemError
from hotel_converter.core.models import RESULT_FILENAME
from hotel_converter.persistence.base import RunLocation
from hotel_converter.utils.logging import get_logger

RUN_DIRECTORY_FORMAT = "%Y%m%d_%H%M%S"
IMAGES_DIRECTORY = "images"


class FileSystemOutputSink:
    """Writes run output below a base directory on the local filesystem."""

    def __init__(self, base_dir: Path | None = None):
        self.base_dir = Path(base_dir) if base_dir is not None else get_config().output_dir
        self.logger = get_logger(__name__)

    def prepare_run(self, timestamp: datetime) -> RunLocation:
        """Create ``<base>/<YYYYMMDD_HHMMSS>``; the images directory is created on first download."""
        output_dir = (self.base_dir / timestamp.strftime(RUN_DIRECTORY_FORMAT)).resolve()
        try:
            output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise HotelFileSystemError(f"Failed to create output directory: {output_dir}") from e

        self.logger.debug("Prepared run directory", output_dir=str(output_dir))
        return RunLocation(output_dir=output_dir, images_dir=output_dir / IMAGES_DIRECTORY)

    def write_result(self, data: bytes, output_dir: Path) -> Path:
        file_path = output_dir / RESULT_FILENAME
        try:
            file_path.write_bytes(data)
        except OSError as e:
            raise HotelFileSystemError(f"Failed to save JSON result: {file_path}") from e

        self.logger.info("Saved result", path=str(file_path), size_bytes=len(data))
        return file_path
