"""Data ingestion module - collectors and the export row decoder."""

from gdelt_events.ingestion.collectors import BaseCollector, GDELTEventsCollector
from gdelt_events.ingestion.event_reader import EventReader, decode_row, read_events

__all__ = [
    "BaseCollector",
    "EventReader",
    "GDELTEventsCollector",
    "decode_row",
    "read_events",
]
