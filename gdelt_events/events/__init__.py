"""Typed GDELT 2.0 event records."""

from gdelt_events.events.actor import ActorData
from gdelt_events.events.event import Event
from gdelt_events.events.fips import FIPS_10_4_TO_ISO_3166_1
from gdelt_events.events.geo import GeoData, GeoType
from gdelt_events.events.nullable import NULL_FLOAT, NullableFloat

__all__ = [
    "ActorData",
    "Event",
    "FIPS_10_4_TO_ISO_3166_1",
    "GeoData",
    "GeoType",
    "NULL_FLOAT",
    "NullableFloat",
]
