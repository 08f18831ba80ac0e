"""Collectors package."""

from gdelt_events.ingestion.collectors.base_collector import BaseCollector
from gdelt_events.ingestion.collectors.gdelt_events_collector import GDELTEventsCollector

__all__ = ["BaseCollector", "GDELTEventsCollector"]
