"""Float values that may be missing in the export."""

from dataclasses import dataclass


@dataclass(frozen=True)
class NullableFloat:
    """A float that may be null.

    ``value`` is only meaningful when ``present`` is True.
    """

    value: float = 0.0
    present: bool = False

    @classmethod
    def parse(cls, text: str) -> "NullableFloat":
        """Parse a column value; the empty string is null.

        Raises:
            ValueError: If ``text`` is non-empty and not a decimal float.
        """
        if not text:
            return NULL_FLOAT
        return cls(value=parse_float(text), present=True)

    def as_optional(self) -> float | None:
        return self.value if self.present else None


NULL_FLOAT = NullableFloat()


def parse_float(text: str) -> float:
    """Strict float parsing: ASCII only, no surrounding whitespace, no digit separators."""
    if not text.isascii() or text != text.strip() or "_" in text:
        raise ValueError(f"invalid float literal {text!r}")
    return float(text)
