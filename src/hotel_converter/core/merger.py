# ABOUTME: Accumulates decoded documents into one HotelRecord per hotel id
# ABOUTME: Last write wins per provider slot; the other slot is always preserved

from pydantic import JsonValue

from hotel_converter.core.models import HotelRecord, SourceKind


def upsert(
    hotels: dict[str, HotelRecord], hotel_id: str, kind: SourceKind, content: JsonValue
) -> dict[str, HotelRecord]:
    """Store ``content`` in the ``kind`` slot of the record for ``hotel_id``.

    The record is created with both slots empty on first access. The mapping is
    updated in place and returned for convenience.
    """
    record = hotels.get(hotel_id) or HotelRecord(hotel_id=hotel_id)
    hotels[hotel_id] = record.with_content(kind, content)
    return hotels
