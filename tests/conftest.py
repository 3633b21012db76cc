from pathlib import Path
from typing import Optional
from unittest.mock import MagicMock, Mock

import pytest
import requests
from lxml import etree

from ets_cat30.fixture import CommonFixture

pytest_plugins = ["pytester"]

DATA_DIR = Path(__file__).resolve().parent / "data"


# ============================================================================
#  Test Data
# ============================================================================

def data_path(name: str) -> Path:
    return DATA_DIR / name


def parse_data(name: str) -> etree._ElementTree:
    """Parse an XML document from the test data directory."""
    return etree.parse(str(data_path(name)))


def make_response(body: Optional[bytes] = None, status: int = 200,
                  content_type: Optional[str] = "application/xml",
                  url: str = "http://localhost:8080/csw") -> requests.Response:
    """Build a requests.Response without touching the network."""
    response = requests.Response()
    response.status_code = status
    response._content = body if body is not None else b""
    response.url = url
    if content_type:
        response.headers["Content-Type"] = content_type
    return response


def data_response(name: str, **kwargs) -> requests.Response:
    return make_response(data_path(name).read_bytes(), **kwargs)


# ============================================================================
#  Fixtures
# ============================================================================

@pytest.fixture
def capabilities() -> etree._ElementTree:
    return parse_data("capabilities/basic.xml")


@pytest.fixture
def osd() -> etree._ElementTree:
    return parse_data("opensearch/OpenSearchDescription-valid.xml")


@pytest.fixture
def sample_records() -> etree._ElementTree:
    return parse_data("rsp/GetRecordsResponse-full.xml")


@pytest.fixture
def accepting_schema() -> Mock:
    """Stand-in schema that reports no validation errors."""
    return Mock(error_log=[])


@pytest.fixture
def http_client() -> MagicMock:
    return MagicMock(spec=requests.Session)


@pytest.fixture
def common_fixture(http_client, capabilities, accepting_schema) -> CommonFixture:
    return CommonFixture(http_client, capabilities, accepting_schema, accepting_schema, timeout=5)
