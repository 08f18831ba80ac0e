"""Exception hierarchy for GDELT event retrieval and decoding.

Every failure carries the raw value that caused it so callers doing bulk
decoding can inspect what went wrong without parsing messages.

Hierarchy:
    GDELTError
    ├── StructuralError (ValueError)
    │   ├── ManifestMatchError
    │   └── AmbiguousArchiveError
    ├── DecodeError (ValueError)
    │   ├── FieldParseError
    │   ├── RowWidthError (+ StructuralError)
    │   ├── InvalidGeoTypeError (+ StructuralError)
    │   └── InvalidTimestampError (+ StructuralError)
    ├── TransportError (RuntimeError)
    ├── IntegrityError (RuntimeError)
    └── UnknownCountryCodeError (KeyError)
"""

from collections.abc import Sequence


class GDELTError(Exception):
    """Base class for all errors raised by gdelt_events."""


class StructuralError(GDELTError, ValueError):
    """Input does not have the shape the GDELT export format guarantees."""


class ManifestMatchError(StructuralError):
    """The last-update manifest did not contain exactly one export reference."""

    def __init__(self, match_count: int, content: str) -> None:
        self.match_count = match_count
        self.content = content
        super().__init__(
            f"unexpected GDELT export CSV zip match count {match_count} in content {content!r}"
        )


class AmbiguousArchiveError(StructuralError):
    """The downloaded archive holds more than one export CSV entry."""

    def __init__(self, entry_names: Sequence[str]) -> None:
        self.entry_names = list(entry_names)
        super().__init__(f"multiple export CSV files found in zip archive: {self.entry_names}")


class DecodeError(GDELTError, ValueError):
    """A single export row could not be decoded into an Event."""

    def __init__(self, message: str, field: str | None = None, raw_value: str | None = None) -> None:
        self.field = field
        self.raw_value = raw_value
        self.line_number: int | None = None
        super().__init__(message)

    def __str__(self) -> str:
        message = super().__str__()
        if self.line_number is not None:
            return f"line {self.line_number}: {message}"
        return message


class FieldParseError(DecodeError):
    """A column's text cannot be converted to its target type."""

    def __init__(self, field: str, raw_value: str) -> None:
        super().__init__(f"parse {field} {raw_value!r}", field=field, raw_value=raw_value)


class RowWidthError(DecodeError, StructuralError):
    """A row does not have the expected number of tab-separated columns."""

    def __init__(self, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"expected {expected} CSV columns, actual {actual}", raw_value=str(actual))


class InvalidGeoTypeError(DecodeError, StructuralError):
    """A geo block's resolution type is outside the closed 0..5 range."""

    def __init__(self, field: str, raw_value: str) -> None:
        super().__init__(
            f"unexpected GeoType value {raw_value!r} for {field}", field=field, raw_value=raw_value
        )


class InvalidTimestampError(DecodeError, StructuralError):
    """A YYYYMMDDHHMMSS value is not a valid calendar timestamp."""

    def __init__(self, raw_value: str, field: str = "DATEADDED") -> None:
        super().__init__(
            f"unexpected {field} value {raw_value!r}", field=field, raw_value=raw_value
        )


class TransportError(GDELTError, RuntimeError):
    """An HTTP request failed or returned a non-success status."""

    def __init__(self, url: str, status_code: int | None = None, reason: str | None = None) -> None:
        self.url = url
        self.status_code = status_code
        self.reason = reason
        if status_code is not None:
            message = f"HTTP GET {url} returned status code {status_code}"
        else:
            message = f"HTTP GET {url}: {reason}"
        super().__init__(message)


class IntegrityError(GDELTError, RuntimeError):
    """Downloaded content does not match the checksum announced by the manifest."""

    def __init__(self, expected: str, actual: str) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"md5 sum: expected {expected}, actual {actual}")


class UnknownCountryCodeError(GDELTError, KeyError):
    """No ISO 3166-1 code is known for a FIPS 10-4 country code."""

    def __init__(self, code: str) -> None:
        self.code = code
        super().__init__(code)

    def __str__(self) -> str:
        return f"unknown FIPS 10-4 country code {self.code!r}"
