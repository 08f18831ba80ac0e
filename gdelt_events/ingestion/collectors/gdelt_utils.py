"""GDELT 2.0 export helpers shared by the events collector.

Provides the last-update manifest format, the export reference it
resolves to, MD5 verification and export entry selection inside the
downloaded zip archive.

Manifest example (``lastupdate.txt``)::

    150383 297a16b493de7cf6ca809a7cc31d0b93 http://data.gdeltproject.org/gdeltv2/20230615120000.export.CSV.zip
    318084 bb27f78ba45f69a17ea6ed7755e9f8ff http://data.gdeltproject.org/gdeltv2/20230615120000.mentions.CSV.zip
    10768507 ea8dde0beb0ba98810a92db068c0ce99 http://data.gdeltproject.org/gdeltv2/20230615120000.gkg.csv.zip
"""

import hashlib
import re
import zipfile
from collections.abc import Iterable
from dataclasses import dataclass

import pandas as pd

from gdelt_events.errors import AmbiguousArchiveError, IntegrityError, ManifestMatchError
from gdelt_events.events.event import Event

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

#: One manifest line: size, lowercase MD5 and the URL of a dated export zip.
EXPORT_ZIP_PATTERN = re.compile(
    r"(?P<size>[0-9]+) (?P<md5sum>[0-9a-f]{32}) (?P<url>https?://\S+/[0-9]{14}\.export\.CSV\.zip)"
)

#: Name suffix of the export CSV entry inside the zip archive.
EXPORT_CSV_SUFFIX = ".export.CSV"


# ---------------------------------------------------------------------------
# Dataclass
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ExportReference:
    """Immutable pointer to a GDELT export CSV zip file."""

    size: int
    md5sum: str
    url: str

    def verify_checksum(self, content: bytes) -> None:
        """Check ``content`` against the announced MD5 sum.

        Raises:
            IntegrityError: If the hex digests differ (case-sensitive).
        """
        actual = md5_hexdigest(content)
        if actual != self.md5sum:
            raise IntegrityError(expected=self.md5sum, actual=actual)


# ---------------------------------------------------------------------------
# Functions
# ---------------------------------------------------------------------------


def parse_last_update(content: str) -> ExportReference:
    """Extract the export reference from last-update manifest text.

    Args:
        content: Manifest body.

    Returns:
        The single export reference found.

    Raises:
        ManifestMatchError: If zero or several export lines match.
    """
    matches = list(EXPORT_ZIP_PATTERN.finditer(content))
    if len(matches) != 1:
        raise ManifestMatchError(len(matches), content)

    match = matches[0]
    return ExportReference(
        size=int(match.group("size")),
        md5sum=match.group("md5sum"),
        url=match.group("url"),
    )


def md5_hexdigest(content: bytes) -> str:
    return hashlib.md5(content).hexdigest()


def select_export_entry(archive: zipfile.ZipFile) -> zipfile.ZipInfo | None:
    """Return the single export CSV entry of ``archive``.

    Returns:
        The matching entry, or None when the archive has no export CSV.

    Raises:
        AmbiguousArchiveError: If more than one entry matches.
    """
    entries = [info for info in archive.infolist() if info.filename.endswith(EXPORT_CSV_SUFFIX)]
    if len(entries) > 1:
        raise AmbiguousArchiveError([info.filename for info in entries])
    return entries[0] if entries else None


def events_to_dataframe(events: Iterable[Event], source: str = "gdelt_events") -> pd.DataFrame:
    """Flatten events into a DataFrame, one row per event in input order.

    Columns follow the export column names plus a trailing ``source`` column.
    """
    df = pd.DataFrame([event.to_dict() for event in events])
    if not df.empty:
        df["source"] = source
    return df
