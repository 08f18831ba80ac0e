"""Decoder for GDELT 2.0 export rows (tab-separated, 61 columns).

Each column has a fixed position and parse rule. Blocks are decoded
positionally:

    0-4     GLOBALEVENTID, SQLDATE, MonthYear, Year, FractionDate
    5-14    Actor1 (10 columns, verbatim)
    15-24   Actor2 (10 columns, verbatim)
    25-34   IsRootEvent .. AvgTone
    35-42   Actor1Geo (8 columns)
    43-50   Actor2Geo (8 columns)
    51-58   ActionGeo (8 columns)
    59-60   DATEADDED, SOURCEURL

Column reference:
    http://data.gdeltproject.org/documentation/GDELT-Event_Codebook-V2.0.pdf

Example:
    >>> with open("20230615120000.export.CSV", encoding="utf-8", newline="") as f:
    ...     for event in EventReader(f):
    ...         print(event.global_event_id, event.all_cameo_event_codes())
"""

import csv
import re
from collections.abc import Iterator, Sequence
from typing import TextIO

from gdelt_events.errors import (
    DecodeError,
    FieldParseError,
    InvalidGeoTypeError,
    InvalidTimestampError,
    RowWidthError,
)
from gdelt_events.events.actor import ActorData
from gdelt_events.events.event import Event
from gdelt_events.events.geo import GeoData, GeoType
from gdelt_events.events.nullable import NullableFloat, parse_float
from gdelt_events.shared.utils import parse_gdelt_timestamp

_ACTOR_SUFFIXES = (
    "Code",
    "Name",
    "CountryCode",
    "KnownGroupCode",
    "EthnicCode",
    "Religion1Code",
    "Religion2Code",
    "Type1Code",
    "Type2Code",
    "Type3Code",
)

_GEO_SUFFIXES = (
    "_Type",
    "_FullName",
    "_CountryCode",
    "_ADM1Code",
    "_ADM2Code",
    "_Lat",
    "_Long",
    "_FeatureID",
)

#: Export column names in file order.
EXPORT_COLUMNS: tuple[str, ...] = (
    ("GLOBALEVENTID", "SQLDATE", "MonthYear", "Year", "FractionDate")
    + tuple(f"Actor1{s}" for s in _ACTOR_SUFFIXES)
    + tuple(f"Actor2{s}" for s in _ACTOR_SUFFIXES)
    + (
        "IsRootEvent",
        "EventCode",
        "EventBaseCode",
        "EventRootCode",
        "QuadClass",
        "GoldsteinScale",
        "NumMentions",
        "NumSources",
        "NumArticles",
        "AvgTone",
    )
    + tuple(f"Actor1Geo{s}" for s in _GEO_SUFFIXES)
    + tuple(f"Actor2Geo{s}" for s in _GEO_SUFFIXES)
    + tuple(f"ActionGeo{s}" for s in _GEO_SUFFIXES)
    + ("DATEADDED", "SOURCEURL")
)

EXPORT_COLUMN_COUNT = 61

# ASCII digits only.
_INT_PATTERN = re.compile(r"[+-]?[0-9]+")
_UINT_PATTERN = re.compile(r"[0-9]+")
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1
_UINT64_MAX = 2**64 - 1


# ---------------------------------------------------------------------------
# Column parsers
# ---------------------------------------------------------------------------


def _parse_int(fields: Sequence[str], index: int) -> int:
    text = fields[index]
    if _INT_PATTERN.fullmatch(text) is None or not _INT64_MIN <= int(text) <= _INT64_MAX:
        raise FieldParseError(EXPORT_COLUMNS[index], text)
    return int(text)


def _parse_uint64(fields: Sequence[str], index: int) -> int:
    text = fields[index]
    if _UINT_PATTERN.fullmatch(text) is None or int(text) > _UINT64_MAX:
        raise FieldParseError(EXPORT_COLUMNS[index], text)
    return int(text)


def _parse_float(fields: Sequence[str], index: int) -> float:
    text = fields[index]
    try:
        return parse_float(text)
    except ValueError:
        raise FieldParseError(EXPORT_COLUMNS[index], text) from None


def _parse_nullable_float(fields: Sequence[str], index: int) -> NullableFloat:
    text = fields[index]
    try:
        return NullableFloat.parse(text)
    except ValueError:
        raise FieldParseError(EXPORT_COLUMNS[index], text) from None


def _read_actor(fields: Sequence[str], start: int) -> ActorData:
    return ActorData(*fields[start : start + len(_ACTOR_SUFFIXES)])


def _read_geo(fields: Sequence[str], start: int) -> GeoData:
    type_value = _parse_int(fields, start)
    try:
        geo_type = GeoType.from_int(type_value)
    except ValueError:
        raise InvalidGeoTypeError(EXPORT_COLUMNS[start], fields[start]) from None

    return GeoData(
        geo_type=geo_type,
        full_name=fields[start + 1],
        country_code=fields[start + 2],
        adm1_code=fields[start + 3],
        adm2_code=fields[start + 4],
        lat=_parse_nullable_float(fields, start + 5),
        long=_parse_nullable_float(fields, start + 6),
        feature_id=fields[start + 7],
    )


def _parse_date_added(fields: Sequence[str], index: int) -> int:
    value = _parse_uint64(fields, index)
    try:
        parse_gdelt_timestamp(value)
    except ValueError:
        raise InvalidTimestampError(fields[index], field=EXPORT_COLUMNS[index]) from None
    return value


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def decode_row(fields: Sequence[str]) -> Event:
    """Decode one tab-split export row into an Event.

    Columns are checked in file order and decoding stops at the first bad one.

    Args:
        fields: Exactly 61 column values.

    Returns:
        The decoded Event.

    Raises:
        RowWidthError: If the row does not have 61 columns.
        FieldParseError: If a numeric column cannot be parsed.
        InvalidGeoTypeError: If a geo type is outside 0..5.
        InvalidTimestampError: If DATEADDED is not a valid YYYYMMDDHHMMSS value.
    """
    if len(fields) != EXPORT_COLUMN_COUNT:
        raise RowWidthError(EXPORT_COLUMN_COUNT, len(fields))

    return Event(
        global_event_id=_parse_uint64(fields, 0),
        day=_parse_int(fields, 1),
        month_year=_parse_int(fields, 2),
        year=_parse_int(fields, 3),
        fraction_date=_parse_float(fields, 4),
        actor1=_read_actor(fields, 5),
        actor2=_read_actor(fields, 15),
        is_root_event=_parse_int(fields, 25),
        event_code=fields[26],
        event_base_code=fields[27],
        event_root_code=fields[28],
        quad_class=_parse_int(fields, 29),
        goldstein_scale=_parse_nullable_float(fields, 30),
        num_mentions=_parse_int(fields, 31),
        num_sources=_parse_int(fields, 32),
        num_articles=_parse_int(fields, 33),
        avg_tone=_parse_float(fields, 34),
        actor1_geo=_read_geo(fields, 35),
        actor2_geo=_read_geo(fields, 43),
        action_geo=_read_geo(fields, 51),
        date_added=_parse_date_added(fields, 59),
        source_url=fields[60],
    )


class EventReader:
    """Iterate over the Events of a tab-separated export stream, in file order.

    Blank lines are skipped. A DecodeError raised for a row carries the
    1-based line number of the record in ``line_number``.
    """

    def __init__(self, stream: TextIO) -> None:
        self._csv_reader = csv.reader(stream, delimiter="\t")

    def __iter__(self) -> Iterator[Event]:
        return self

    def __next__(self) -> Event:
        while True:
            try:
                row = next(self._csv_reader)
            except (csv.Error, UnicodeDecodeError) as exc:
                raise DecodeError(
                    f"malformed CSV record at line {self._csv_reader.line_num}: {exc}"
                ) from exc
            if row:
                break

        try:
            return decode_row(row)
        except DecodeError as exc:
            exc.line_number = self._csv_reader.line_num
            raise


def read_events(stream: TextIO) -> list[Event]:
    """Decode every row of ``stream``; the first bad row aborts the whole read."""
    return list(EventReader(stream))
