"""
Root pytest configuration.

Provides a well-formed 61-column export row and an in-memory zip builder
so decoder and collector tests never touch the network.
"""

import hashlib
import io
import zipfile
from unittest.mock import Mock

import pytest
import requests

SAMPLE_FIELDS = [
    # GLOBALEVENTID, SQLDATE, MonthYear, Year, FractionDate
    "1104592911", "20230615", "202306", "2023", "2023.4521",
    # Actor1
    "USA", "UNITED STATES", "USA", "", "", "", "", "", "", "",
    # Actor2
    "RUSGOV", "RUSSIA", "RUS", "", "", "", "", "GOV", "", "",
    # IsRootEvent, EventCode, EventBaseCode, EventRootCode, QuadClass
    "1", "0251", "025", "02", "1",
    # GoldsteinScale, NumMentions, NumSources, NumArticles, AvgTone
    "3.0", "10", "2", "10", "-2.5",
    # Actor1Geo
    "1", "United States", "US", "US", "", "39.828175", "-98.5795", "US",
    # Actor2Geo
    "4", "Moscow, Moskva, Russia", "RS", "RS48", "", "55.7522", "37.6156", "-2960561",
    # ActionGeo
    "0", "", "", "", "", "", "", "",
    # DATEADDED, SOURCEURL
    "20230615120000", "https://example.com/news/article",
]


@pytest.fixture
def sample_fields() -> list[str]:
    """A fresh copy of a well-formed export row."""
    return list(SAMPLE_FIELDS)


@pytest.fixture
def make_line():
    """Join fields into one tab-separated export line."""

    def _make(fields: list[str]) -> str:
        return "\t".join(fields) + "\n"

    return _make


@pytest.fixture
def make_zip():
    """Build zip archive bytes from a {entry_name: text} mapping."""

    def _make(entries: dict[str, str], compression: int = zipfile.ZIP_DEFLATED) -> bytes:
        buffer = io.BytesIO()
        with zipfile.ZipFile(buffer, "w", compression=compression) as archive:
            for name, text in entries.items():
                archive.writestr(name, text.encode("utf-8"))
        return buffer.getvalue()

    return _make


@pytest.fixture
def make_manifest():
    """Build last-update manifest text announcing ``content`` as the export."""

    def _make(content: bytes, url: str) -> str:
        md5 = hashlib.md5(content).hexdigest()
        return (
            f"{len(content)} {md5} {url}\n"
            f"318084 bb27f78ba45f69a17ea6ed7755e9f8ff {url.replace('.export.CSV.zip', '.mentions.CSV.zip')}\n"
            f"10768507 ea8dde0beb0ba98810a92db068c0ce99 {url.replace('.export.CSV.zip', '.gkg.csv.zip')}\n"
        )

    return _make


def make_response(content: str | bytes, status: int = 200) -> Mock:
    """Build a mock requests.Response."""
    resp = Mock()
    resp.status_code = status
    resp.content = content.encode() if isinstance(content, str) else content
    resp.ok = 200 <= status < 300
    if status >= 400:
        resp.raise_for_status.side_effect = requests.exceptions.HTTPError(response=resp)
    else:
        resp.raise_for_status = Mock()
    return resp


@pytest.fixture
def response_factory():
    return make_response
