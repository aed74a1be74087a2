# ABOUTME: Domain models for the batch converter - uploads, merged hotel records, results
# ABOUTME: Hotel content stays untyped (JsonValue) since no schema is enforced on provider data

from datetime import datetime
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, JsonValue, computed_field

RESULT_FILENAME = "hotels.json"

# Key of the COAH slot in hotels.json, kept compatible with existing consumers
COAH_OUTPUT_KEY = "coa"


class SourceKind(str, Enum):
    """Data provider a document came from, derived from its filename marker."""

    GIATA = "giata"
    COAH = "coah"

    @property
    def marker(self) -> str:
        """Filename substring identifying this provider, e.g. ``-giata.``."""
        return f"-{self.value}."


class InputDocument(BaseModel):
    """One uploaded file: its original name and raw bytes."""

    model_config = ConfigDict(frozen=True)

    filename: str = Field(default="", description="Original filename, e.g. 411144-giata.xml")
    content: bytes = Field(default=b"", description="Raw file content")


class HotelRecord(BaseModel):
    """Merged view of one hotel with one slot per data provider.

    Each slot holds the most recently processed document of that kind, replaced
    wholesale rather than deep-merged.
    """

    hotel_id: str = Field(exclude=True, description="Identifier taken from the filename prefix")
    giata: JsonValue | None = Field(default=None, description="Latest GIATA document for this hotel")
    coah: JsonValue | None = Field(
        default=None,
        serialization_alias=COAH_OUTPUT_KEY,
        description="Latest COAH document for this hotel",
    )

    def slot(self, kind: SourceKind) -> JsonValue | None:
        return getattr(self, kind.value)

    def with_content(self, kind: SourceKind, content: JsonValue) -> "HotelRecord":
        """Return a copy with the slot for ``kind`` replaced and the other slot preserved."""
        return self.model_copy(update={kind.value: content})


class BatchResult(BaseModel):
    """Outcome of one successful batch invocation."""

    model_config = ConfigDict(frozen=True)

    output_location: Path = Field(description="Run directory holding the merged result")
    images_location: Path = Field(description="Directory holding verified image files")
    timestamp: datetime = Field(description="When the batch started")
    document_count: int = Field(ge=0, description="Number of uploaded documents")
    successful_image_count: int = Field(ge=0, description="Number of images downloaded and verified")

    @computed_field  # type: ignore[prop-decorator]
    @property
    def result_file(self) -> Path:
        """Path of the merged hotels document."""
        return self.output_location / RESULT_FILENAME
