"""Tests for GDELTEventsCollector (latest export retrieval pipeline)."""

import zipfile
from datetime import datetime
from unittest.mock import Mock, patch

import pandas as pd
import pytest
import requests

from gdelt_events.errors import (
    AmbiguousArchiveError,
    FieldParseError,
    GDELTError,
    IntegrityError,
    ManifestMatchError,
    StructuralError,
    TransportError,
)
from gdelt_events.ingestion.collectors.base_collector import BaseCollector
from gdelt_events.ingestion.collectors.gdelt_events_collector import GDELTEventsCollector
from gdelt_events.ingestion.collectors.gdelt_utils import ExportReference, md5_hexdigest

LAST_UPDATE_URL = "http://data.gdeltproject.org/gdeltv2/lastupdate.txt"
EXPORT_URL = "http://data.gdeltproject.org/gdeltv2/20230615120000.export.CSV.zip"
ENTRY_NAME = "20230615120000.export.CSV"

MODULE = "gdelt_events.ingestion.collectors.gdelt_events_collector"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _routing_session(routes: dict) -> Mock:
    """Session whose get() answers from a {url: response} mapping."""
    session = Mock(spec=requests.Session)

    def _get(url, timeout=None):
        response = routes[url]
        if isinstance(response, Exception):
            raise response
        return response

    session.get.side_effect = _get
    return session


@pytest.fixture
def export_zip(sample_fields, make_line, make_zip):
    """Zip holding a three-row export CSV with ids 3, 1, 2."""
    lines = []
    for event_id in ("3", "1", "2"):
        fields = list(sample_fields)
        fields[0] = event_id
        lines.append(make_line(fields))
    return make_zip({ENTRY_NAME: "".join(lines)})


@pytest.fixture
def make_collector(tmp_path, response_factory, make_manifest):
    """Collector wired to a mock session serving ``content`` as the export."""

    def _make(content: bytes, manifest: str | None = None, export_response=None) -> GDELTEventsCollector:
        routes = {
            LAST_UPDATE_URL: response_factory(manifest or make_manifest(content, EXPORT_URL)),
            EXPORT_URL: export_response or response_factory(content),
        }
        return GDELTEventsCollector(
            output_dir=tmp_path,
            last_update_url=LAST_UPDATE_URL,
            session=_routing_session(routes),
        )

    return _make


# ---------------------------------------------------------------------------
# BaseCollector
# ---------------------------------------------------------------------------


class TestBaseCollector:
    """Verify the abstract base class contract."""

    def test_cannot_instantiate_directly(self, tmp_path):
        with pytest.raises(TypeError):
            BaseCollector(output_dir=tmp_path)  # type: ignore[abstract]

    def test_export_csv_naming_convention(self, tmp_path):
        collector = GDELTEventsCollector(output_dir=tmp_path, session=Mock())
        df = pd.DataFrame({"GLOBALEVENTID": [1], "source": ["gdelt_events"]})
        date_str = datetime.now().strftime("%Y%m%d")

        path = collector.export_csv(df, "events")

        assert path.name == f"gdelt_events_events_{date_str}.csv"
        assert len(pd.read_csv(path)) == 1

    def test_export_csv_raises_on_empty(self, tmp_path):
        collector = GDELTEventsCollector(output_dir=tmp_path, session=Mock())
        with pytest.raises(ValueError, match="Cannot export empty DataFrame"):
            collector.export_csv(pd.DataFrame(), "events")


# ---------------------------------------------------------------------------
# Initialization
# ---------------------------------------------------------------------------


class TestInit:
    def test_defaults_from_config(self, tmp_path, monkeypatch):
        monkeypatch.setattr("gdelt_events.shared.config.Config.DATA_DIR", tmp_path)
        monkeypatch.setattr("gdelt_events.shared.config.Config.REQUEST_TIMEOUT", 12)
        monkeypatch.setattr(
            "gdelt_events.shared.config.Config.GDELT_LAST_UPDATE_URL", "http://mirror/lastupdate.txt"
        )

        collector = GDELTEventsCollector()

        assert collector.output_dir == tmp_path / "raw" / "gdelt_events"
        assert collector.timeout == 12
        assert collector.last_update_url == "http://mirror/lastupdate.txt"
        assert isinstance(collector._session, requests.Session)

    def test_overrides(self, tmp_path):
        session = Mock()
        collector = GDELTEventsCollector(
            output_dir=tmp_path, last_update_url=LAST_UPDATE_URL, timeout=5, session=session
        )
        assert collector.output_dir == tmp_path
        assert collector.timeout == 5
        assert collector._session is session


# ---------------------------------------------------------------------------
# Reference resolution
# ---------------------------------------------------------------------------


class TestFetchExportReference:
    def test_resolves_reference(self, make_collector, export_zip):
        collector = make_collector(export_zip)

        reference = collector.fetch_export_reference()

        assert reference.url == EXPORT_URL
        assert reference.size == len(export_zip)
        assert reference.md5sum == md5_hexdigest(export_zip)
        collector._session.get.assert_called_with(LAST_UPDATE_URL, timeout=collector.timeout)

    def test_ambiguous_manifest(self, make_collector, export_zip, make_manifest):
        manifest = make_manifest(export_zip, EXPORT_URL) * 2
        collector = make_collector(export_zip, manifest=manifest)

        with pytest.raises(ManifestMatchError) as exc_info:
            collector.fetch_export_reference()

        assert exc_info.value.match_count == 2

    def test_manifest_http_error(self, tmp_path, response_factory):
        session = _routing_session({LAST_UPDATE_URL: response_factory("", status=404)})
        collector = GDELTEventsCollector(
            output_dir=tmp_path, last_update_url=LAST_UPDATE_URL, session=session
        )

        with pytest.raises(TransportError) as exc_info:
            collector.fetch_export_reference()

        assert exc_info.value.url == LAST_UPDATE_URL
        assert exc_info.value.status_code == 404


# ---------------------------------------------------------------------------
# Full pipeline
# ---------------------------------------------------------------------------


class TestGetLatestEvents:
    def test_returns_events_in_file_order(self, make_collector, export_zip):
        collector = make_collector(export_zip)

        events = collector.get_latest_events()

        assert [e.global_event_id for e in events] == [3, 1, 2]
        assert events[0].source_url == "https://example.com/news/article"

    def test_checksum_mismatch_stops_before_decoding(self, make_collector, export_zip):
        manifest = f"{len(export_zip)} {'0' * 32} {EXPORT_URL}\n"
        collector = make_collector(export_zip, manifest=manifest)

        with patch(f"{MODULE}.read_events") as read_events_spy:
            with pytest.raises(IntegrityError) as exc_info:
                collector.get_latest_events()

        assert read_events_spy.call_count == 0
        assert exc_info.value.expected == "0" * 32
        assert exc_info.value.actual == md5_hexdigest(export_zip)

    def test_checksum_match_decodes_once(self, make_collector, export_zip):
        collector = make_collector(export_zip)

        with patch(f"{MODULE}.read_events", return_value=[]) as read_events_spy:
            assert collector.get_latest_events() == []

        assert read_events_spy.call_count == 1

    def test_archive_without_export_entry(self, make_collector, make_zip):
        content = make_zip({"20230615120000.mentions.CSV": "ignored"})
        collector = make_collector(content)

        assert collector.get_latest_events() == []

    def test_archive_with_two_export_entries(self, make_collector, make_zip):
        content = make_zip({"a.export.CSV": "", "b.export.CSV": ""})
        collector = make_collector(content)

        with pytest.raises(AmbiguousArchiveError):
            collector.get_latest_events()

    def test_not_a_zip(self, make_collector):
        collector = make_collector(b"definitely not a zip archive")

        with pytest.raises(StructuralError, match="not a zip archive"):
            collector.get_latest_events()

    def test_corrupted_entry_with_matching_checksum(
        self, make_collector, make_zip, sample_fields, make_line
    ):
        content = make_zip({ENTRY_NAME: make_line(sample_fields)}, compression=zipfile.ZIP_STORED)
        url = b"https://example.com/news/article"
        assert content.count(url) == 1
        corrupted = content.replace(url, b"https://example.com/news/articlf")
        # the manifest is built from the corrupted bytes, so only the entry CRC disagrees
        collector = make_collector(corrupted)

        with patch.object(collector, "logger") as logger:
            with pytest.raises(StructuralError, match=ENTRY_NAME) as exc_info:
                collector.get_latest_events()

        assert isinstance(exc_info.value.__cause__, zipfile.BadZipFile)
        logger.error.assert_called_once()

    def test_unreadable_entry_is_structural_error(self, make_collector, export_zip):
        collector = make_collector(export_zip)

        with patch(f"{MODULE}.read_events", side_effect=NotImplementedError("compression type 99")):
            with pytest.raises(StructuralError, match="compression type 99"):
                collector.get_latest_events()

    def test_decode_error_aborts_without_partial_result(
        self, make_collector, make_zip, sample_fields, make_line
    ):
        bad = list(sample_fields)
        bad[31] = "many"
        content = make_zip({ENTRY_NAME: make_line(sample_fields) + make_line(bad)})
        collector = make_collector(content)

        with pytest.raises(FieldParseError) as exc_info:
            collector.get_latest_events()

        assert exc_info.value.field == "NumMentions"
        assert exc_info.value.line_number == 2

    def test_download_status_error(self, make_collector, export_zip, response_factory):
        collector = make_collector(export_zip, export_response=response_factory(b"", status=503))

        with pytest.raises(TransportError) as exc_info:
            collector.get_latest_events()

        assert exc_info.value.url == EXPORT_URL
        assert exc_info.value.status_code == 503

    def test_non_200_success_status_is_rejected(self, make_collector, export_zip, response_factory):
        collector = make_collector(export_zip, export_response=response_factory(export_zip, status=204))

        with pytest.raises(TransportError):
            collector.get_latest_events()

    def test_download_connection_error(self, make_collector, export_zip):
        collector = make_collector(
            export_zip, export_response=requests.exceptions.ConnectionError("down")
        )

        with pytest.raises(TransportError) as exc_info:
            collector.get_latest_events()

        assert exc_info.value.status_code is None
        assert "down" in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, requests.exceptions.ConnectionError)

    def test_failures_are_logged_and_reraised(self, make_collector, export_zip):
        manifest = f"{len(export_zip)} {'0' * 32} {EXPORT_URL}\n"
        collector = make_collector(export_zip, manifest=manifest)

        with patch.object(collector, "logger") as logger:
            with pytest.raises(GDELTError):
                collector.get_latest_events()

        logger.error.assert_called_once()

    def test_fetch_events_with_explicit_reference(self, make_collector, export_zip):
        collector = make_collector(export_zip)
        reference = ExportReference(len(export_zip), md5_hexdigest(export_zip), EXPORT_URL)

        events = collector.fetch_events(reference)

        assert len(events) == 3
        assert all(call.args[0] == EXPORT_URL for call in collector._session.get.call_args_list)


# ---------------------------------------------------------------------------
# BaseCollector interface
# ---------------------------------------------------------------------------


class TestCollect:
    def test_collect_returns_events_dataframe(self, make_collector, export_zip):
        collector = make_collector(export_zip)

        data = collector.collect()

        assert list(data) == ["events"]
        df = data["events"]
        assert list(df["GLOBALEVENTID"]) == [3, 1, 2]
        assert (df["source"] == "gdelt_events").all()

    def test_collect_then_export(self, make_collector, export_zip):
        collector = make_collector(export_zip)

        data = collector.collect()
        path = collector.export_csv(data["events"], "events")

        assert path.exists()
        assert len(pd.read_csv(path)) == 3


class TestHealthCheck:
    def test_healthy(self, tmp_path, response_factory):
        session = _routing_session({LAST_UPDATE_URL: response_factory("manifest")})
        collector = GDELTEventsCollector(
            output_dir=tmp_path, last_update_url=LAST_UPDATE_URL, session=session
        )
        assert collector.health_check() is True

    def test_unhealthy_status(self, tmp_path, response_factory):
        session = _routing_session({LAST_UPDATE_URL: response_factory("", status=500)})
        collector = GDELTEventsCollector(
            output_dir=tmp_path, last_update_url=LAST_UPDATE_URL, session=session
        )
        assert collector.health_check() is False

    def test_unreachable(self, tmp_path):
        session = _routing_session({LAST_UPDATE_URL: requests.exceptions.Timeout("slow")})
        collector = GDELTEventsCollector(
            output_dir=tmp_path, last_update_url=LAST_UPDATE_URL, session=session
        )
        assert collector.health_check() is False
