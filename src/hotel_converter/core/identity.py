# ABOUTME: Derives the hotel identifier and data provider from an uploaded filename
# ABOUTME: Filenames follow <hotel_id>-<provider>.<ext>, e.g. 411144-giata.xml

from hotel_converter.core.exceptions import HotelValidationError
from hotel_converter.core.models import SourceKind

HOTEL_ID_DELIMITER = "-"


def resolve_hotel_id(filename: str | None) -> str:
    """Return the hotel identifier, the part of the filename before the first delimiter.

    Raises:
        HotelValidationError: If the filename is missing or has no identifier prefix
    """
    if not filename:
        raise HotelValidationError("Filename is missing")

    hotel_id, delimiter, _ = filename.partition(HOTEL_ID_DELIMITER)
    if not delimiter or not hotel_id:
        raise HotelValidationError(f"Filename has no hotel id prefix: {filename}")
    return hotel_id


def resolve_source_kind(filename: str) -> SourceKind:
    """Return the data provider whose marker appears in the filename.

    Markers are matched case-sensitively in declaration order; the first one found wins.

    Raises:
        HotelValidationError: If no provider marker is present
    """
    for kind in SourceKind:
        if kind.marker in filename:
            return kind
    raise HotelValidationError(f"Unknown source kind: {filename}")
