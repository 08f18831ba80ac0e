"""Checksum-verified retrieval and typed decoding of GDELT 2.0 event exports."""

from gdelt_events.events import ActorData, Event, GeoData, GeoType, NullableFloat
from gdelt_events.ingestion import EventReader, GDELTEventsCollector, decode_row, read_events

__all__ = [
    "ActorData",
    "Event",
    "EventReader",
    "GDELTEventsCollector",
    "GeoData",
    "GeoType",
    "NullableFloat",
    "decode_row",
    "get_latest_events",
    "read_events",
]


def get_latest_events(last_update_url: str | None = None) -> list[Event]:
    """Fetch and decode the most recent GDELT 2.0 events export."""
    return GDELTEventsCollector(last_update_url=last_update_url).get_latest_events()
