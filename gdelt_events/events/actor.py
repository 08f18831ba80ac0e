"""Actor descriptors."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ActorData:
    """Actor block decoded verbatim from ten consecutive export columns.

    Every attribute is a raw CAMEO code or name; an empty string means the
    column was blank.
    """

    code: str = ""
    name: str = ""
    country_code: str = ""
    known_group_code: str = ""
    ethnic_code: str = ""
    religion1_code: str = ""
    religion2_code: str = ""
    type1_code: str = ""
    type2_code: str = ""
    type3_code: str = ""
