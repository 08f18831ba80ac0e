"""Geographic descriptors attached to actors and actions."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import IntEnum

from gdelt_events.errors import UnknownCountryCodeError
from gdelt_events.events.fips import FIPS_10_4_TO_ISO_3166_1
from gdelt_events.events.nullable import NULL_FLOAT, NullableFloat


class GeoType(IntEnum):
    """Geographic resolution of a location match."""

    NO_GEO_TYPE = 0
    COUNTRY = 1
    US_STATE = 2
    US_CITY = 3
    WORLD_CITY = 4
    WORLD_STATE = 5

    @classmethod
    def from_int(cls, value: int) -> "GeoType":
        """Return the member for ``value``.

        Raises:
            ValueError: If ``value`` is outside 0..5.
        """
        return cls(value)

    def __str__(self) -> str:
        return _GEO_TYPE_NAMES[self]


_GEO_TYPE_NAMES = {
    GeoType.NO_GEO_TYPE: "",
    GeoType.COUNTRY: "COUNTRY",
    GeoType.US_STATE: "USSTATE",
    GeoType.US_CITY: "USCITY",
    GeoType.WORLD_CITY: "WORLDCITY",
    GeoType.WORLD_STATE: "WORLDSTATE",
}


@dataclass(frozen=True)
class GeoData:
    """Location block decoded from eight consecutive export columns."""

    geo_type: GeoType = GeoType.NO_GEO_TYPE
    # Full human-readable name of the matched location. For countries it is
    # the country name, for US and World states "State, Country Name", and
    # "City/Landmark, State, Country" otherwise.
    full_name: str = ""
    # 2-character FIPS 10-4 country code.
    country_code: str = ""
    adm1_code: str = ""
    adm2_code: str = ""
    # Centroid of the landmark. Either coordinate can be missing on its own.
    lat: NullableFloat = field(default=NULL_FLOAT)
    long: NullableFloat = field(default=NULL_FLOAT)
    feature_id: str = ""

    def country_code_iso3166(
        self, table: Mapping[str, str] = FIPS_10_4_TO_ISO_3166_1
    ) -> str:
        """Translate ``country_code`` to ISO 3166-1 alpha-2.

        Args:
            table: FIPS 10-4 to ISO 3166-1 mapping to look the code up in.

        Returns:
            The ISO code, or "" when the location has no country code.

        Raises:
            UnknownCountryCodeError: If the code is missing from ``table``.
        """
        if not self.country_code:
            return ""
        try:
            return table[self.country_code]
        except KeyError:
            raise UnknownCountryCodeError(self.country_code) from None
