"""The GDELT 2.0 event record."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from gdelt_events.errors import InvalidTimestampError
from gdelt_events.events.actor import ActorData
from gdelt_events.events.geo import GeoData
from gdelt_events.events.nullable import NULL_FLOAT, NullableFloat
from gdelt_events.shared.utils import parse_gdelt_timestamp


@dataclass(frozen=True)
class Event:
    """One row of a GDELT 2.0 export file."""

    # Globally unique identifier of the event in the GDELT master dataset.
    global_event_id: int = 0
    # YYYYMMDD, YYYYMM and YYYY as plain integers.
    day: int = 0
    month_year: int = 0
    year: int = 0
    fraction_date: float = 0.0

    actor1: ActorData = field(default_factory=ActorData)
    actor2: ActorData = field(default_factory=ActorData)

    # 0/1 flag kept as the integer found in the file.
    is_root_event: int = 0
    # Raw CAMEO action code describing what Actor1 did to Actor2.
    event_code: str = ""
    # Level two parent of event_code in the CAMEO taxonomy, e.g. "025" for
    # "0251". Equal to event_code for events at levels one and two.
    event_base_code: str = ""
    # Root-level category of event_code, e.g. "02" for "0251".
    event_root_code: str = ""
    quad_class: int = 0
    goldstein_scale: NullableFloat = field(default=NULL_FLOAT)
    num_mentions: int = 0
    num_sources: int = 0
    num_articles: int = 0
    avg_tone: float = 0.0

    actor1_geo: GeoData = field(default_factory=GeoData)
    actor2_geo: GeoData = field(default_factory=GeoData)
    # Location closest to the statement of action; the best location for
    # placing the event on a map.
    action_geo: GeoData = field(default_factory=GeoData)

    # UTC time the event was added to the master database, YYYYMMDDHHMMSS.
    date_added: int = 0
    # URL or citation of the first news report the event was found in.
    source_url: str = ""

    def date_added_time(self) -> datetime:
        """Return ``date_added`` as an aware UTC datetime.

        Raises:
            InvalidTimestampError: If the value is not a valid timestamp.
        """
        try:
            return parse_gdelt_timestamp(self.date_added)
        except ValueError:
            raise InvalidTimestampError(str(self.date_added)) from None

    def all_cameo_event_codes(self) -> list[str]:
        """Return the root, base and leaf CAMEO codes, most general first.

        Blank codes and codes repeating a coarser level are dropped, so the
        result holds between zero and three unique codes.
        """
        codes: list[str] = []
        if not self.event_root_code:
            return codes
        codes.append(self.event_root_code)
        if not self.event_base_code or self.event_base_code == self.event_root_code:
            return codes
        codes.append(self.event_base_code)
        if not self.event_code or self.event_code in (self.event_base_code, self.event_root_code):
            return codes
        codes.append(self.event_code)
        return codes

    def to_dict(self) -> dict[str, Any]:
        """Flatten to export column names; null floats become None."""
        record: dict[str, Any] = {
            "GLOBALEVENTID": self.global_event_id,
            "SQLDATE": self.day,
            "MonthYear": self.month_year,
            "Year": self.year,
            "FractionDate": self.fraction_date,
        }
        record.update(_actor_columns("Actor1", self.actor1))
        record.update(_actor_columns("Actor2", self.actor2))
        record.update(
            {
                "IsRootEvent": self.is_root_event,
                "EventCode": self.event_code,
                "EventBaseCode": self.event_base_code,
                "EventRootCode": self.event_root_code,
                "QuadClass": self.quad_class,
                "GoldsteinScale": self.goldstein_scale.as_optional(),
                "NumMentions": self.num_mentions,
                "NumSources": self.num_sources,
                "NumArticles": self.num_articles,
                "AvgTone": self.avg_tone,
            }
        )
        record.update(_geo_columns("Actor1Geo", self.actor1_geo))
        record.update(_geo_columns("Actor2Geo", self.actor2_geo))
        record.update(_geo_columns("ActionGeo", self.action_geo))
        record["DATEADDED"] = self.date_added
        record["SOURCEURL"] = self.source_url
        return record


def _actor_columns(prefix: str, actor: ActorData) -> dict[str, str]:
    return {
        f"{prefix}Code": actor.code,
        f"{prefix}Name": actor.name,
        f"{prefix}CountryCode": actor.country_code,
        f"{prefix}KnownGroupCode": actor.known_group_code,
        f"{prefix}EthnicCode": actor.ethnic_code,
        f"{prefix}Religion1Code": actor.religion1_code,
        f"{prefix}Religion2Code": actor.religion2_code,
        f"{prefix}Type1Code": actor.type1_code,
        f"{prefix}Type2Code": actor.type2_code,
        f"{prefix}Type3Code": actor.type3_code,
    }


def _geo_columns(prefix: str, geo: GeoData) -> dict[str, Any]:
    return {
        f"{prefix}_Type": int(geo.geo_type),
        f"{prefix}_FullName": geo.full_name,
        f"{prefix}_CountryCode": geo.country_code,
        f"{prefix}_ADM1Code": geo.adm1_code,
        f"{prefix}_ADM2Code": geo.adm2_code,
        f"{prefix}_Lat": geo.lat.as_optional(),
        f"{prefix}_Long": geo.long.as_optional(),
        f"{prefix}_FeatureID": geo.feature_id,
    }
