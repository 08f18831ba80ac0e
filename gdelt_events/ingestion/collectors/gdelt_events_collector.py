"""GDELT 2.0 Events Collector - latest export snapshot.

GDELT publishes a new export every 15 minutes and announces it in a small
last-update manifest. This collector:

1. Fetches the manifest and resolves the export reference (size, MD5, URL)
2. Downloads the export zip into memory
3. Verifies its MD5 sum before anything is decoded
4. Selects the single ``*.export.CSV`` entry of the archive
5. Decodes every row into a typed Event, preserving file order

Every step is single-shot: a failure at any point aborts the run and no
partial result is returned.

Documentation: https://blog.gdeltproject.org/gdelt-2-0-our-global-world-in-realtime/

Example:
    >>> from gdelt_events.ingestion.collectors.gdelt_events_collector import GDELTEventsCollector
    >>>
    >>> collector = GDELTEventsCollector()
    >>> events = collector.get_latest_events()
    >>> data = collector.collect()
    >>> path = collector.export_csv(data["events"], "events")
"""

import io
import zipfile
from pathlib import Path

import pandas as pd
import requests

from gdelt_events.errors import GDELTError, StructuralError, TransportError
from gdelt_events.events.event import Event
from gdelt_events.ingestion.collectors.base_collector import BaseCollector
from gdelt_events.ingestion.collectors.gdelt_utils import (
    ExportReference,
    events_to_dataframe,
    parse_last_update,
    select_export_entry,
)
from gdelt_events.ingestion.event_reader import read_events
from gdelt_events.shared.config import Config


class GDELTEventsCollector(BaseCollector):
    """Collector for the latest GDELT 2.0 events export.

    Args:
        output_dir: Directory for CSV exports (defaults to data/raw/gdelt_events).
        log_file: Optional path for file-based logging.
        last_update_url: Manifest URL (defaults to Config.GDELT_LAST_UPDATE_URL).
        timeout: Per-request timeout in seconds (defaults to Config.REQUEST_TIMEOUT).
        session: HTTP session to use; a new one is created when omitted.
    """

    SOURCE_NAME = "gdelt_events"
    DATASET_NAME = "events"
    HEALTH_CHECK_TIMEOUT = 10

    def __init__(
        self,
        output_dir: Path | None = None,
        log_file: Path | None = None,
        last_update_url: str | None = None,
        timeout: int | None = None,
        session: requests.Session | None = None,
    ) -> None:
        super().__init__(
            output_dir=output_dir or Config.DATA_DIR / "raw" / self.SOURCE_NAME,
            log_file=log_file,
            log_level=Config.LOG_LEVEL,
        )
        self.last_update_url = last_update_url or Config.GDELT_LAST_UPDATE_URL
        self.timeout = timeout or Config.REQUEST_TIMEOUT
        self._session = session or self._create_session()
        self.logger.info("GDELTEventsCollector initialized, last_update_url=%s", self.last_update_url)

    # ------------------------------------------------------------------
    # BaseCollector interface
    # ------------------------------------------------------------------

    def collect(self) -> dict[str, pd.DataFrame]:
        """Collect the latest export as a raw DataFrame.

        Returns:
            {"events": DataFrame} with one row per event, export column names
            and a ``source`` column.
        """
        events = self.get_latest_events()
        return {self.DATASET_NAME: events_to_dataframe(events, source=self.SOURCE_NAME)}

    def health_check(self) -> bool:
        """Check that the last-update manifest is reachable."""
        try:
            response = self._session.get(self.last_update_url, timeout=self.HEALTH_CHECK_TIMEOUT)
            return response.status_code == requests.codes.ok
        except requests.exceptions.RequestException:
            return False

    # ------------------------------------------------------------------
    # Retrieval pipeline
    # ------------------------------------------------------------------

    def get_latest_events(self) -> list[Event]:
        """Resolve the latest export and decode all of its events.

        Raises:
            GDELTError: Any transport, integrity, structural or decode failure.
        """
        try:
            reference = self.fetch_export_reference()
        except GDELTError as exc:
            self.logger.error("Fetching export reference from %s failed: %s", self.last_update_url, exc)
            raise

        try:
            return self.fetch_events(reference)
        except GDELTError as exc:
            self.logger.error("Fetching events from %s failed: %s", reference.url, exc)
            raise

    def fetch_export_reference(self, last_update_url: str | None = None) -> ExportReference:
        """Fetch the manifest and extract the export zip reference.

        Raises:
            TransportError: Network failure or non-200 status.
            ManifestMatchError: The manifest does not hold exactly one export line.
        """
        url = last_update_url or self.last_update_url
        content = self._http_get(url).decode("utf-8", errors="replace")
        reference = parse_last_update(content)
        self.logger.info(
            "Resolved export reference: size=%d md5=%s url=%s",
            reference.size,
            reference.md5sum,
            reference.url,
        )
        return reference

    def fetch_events(self, reference: ExportReference) -> list[Event]:
        """Download, verify and decode the export referenced by ``reference``.

        Returns:
            Events in file order; empty if the archive holds no export CSV.

        Raises:
            TransportError: Network failure or non-200 status.
            IntegrityError: MD5 mismatch; nothing is decoded.
            StructuralError: Content is not a zip, holds several export CSVs,
                or the export entry cannot be read.
            DecodeError: A row could not be decoded.
        """
        content = self._http_get(reference.url)
        self.logger.debug("Downloaded %d bytes (expected %d)", len(content), reference.size)

        reference.verify_checksum(content)
        self.logger.info("MD5 sum verified for %s", reference.url)

        try:
            archive = zipfile.ZipFile(io.BytesIO(content))
        except zipfile.BadZipFile as exc:
            raise StructuralError(f"content of {reference.url} is not a zip archive: {exc}") from exc

        with archive:
            entry = select_export_entry(archive)
            if entry is None:
                self.logger.warning("No export CSV entry found in %s", reference.url)
                return []

            self.logger.info("Decoding archive entry %s", entry.filename)
            try:
                with archive.open(entry) as raw, io.TextIOWrapper(raw, encoding="utf-8", newline="") as text:
                    events = read_events(text)
            except GDELTError:
                raise
            except (zipfile.BadZipFile, NotImplementedError, RuntimeError, EOFError) as exc:
                # Bad CRC, unsupported compression, encrypted entry or truncated data
                raise StructuralError(f"cannot read archive entry {entry.filename}: {exc}") from exc

        self.logger.info("Decoded %d events from %s", len(events), entry.filename)
        return events

    # ------------------------------------------------------------------
    # Private: HTTP layer
    # ------------------------------------------------------------------

    def _create_session(self) -> requests.Session:
        session = requests.Session()
        session.headers.update({"User-Agent": "gdelt-events/0.1"})
        return session

    def _http_get(self, url: str) -> bytes:
        """GET ``url`` and return the whole body.

        Raises:
            TransportError: Request failed or status is not 200.
        """
        self.logger.debug("GET %s", url)
        try:
            response = self._session.get(url, timeout=self.timeout)
        except requests.exceptions.RequestException as exc:
            raise TransportError(url, reason=str(exc)) from exc

        if response.status_code != requests.codes.ok:
            raise TransportError(url, status_code=response.status_code)
        return response.content
