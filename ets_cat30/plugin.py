"""
pytest plugin providing the fixtures used by the conformance tests.

Load it with ``-p ets_cat30.plugin`` (the ``ets-cat30 run`` command does this).
"""

import logging
from typing import Any, Dict

import pytest
import requests

from ets_cat30.config import SuiteConfig
from ets_cat30.errors import ETSError
from ets_cat30.fixture import CommonFixture, SuiteAttribute
from ets_cat30.logger import setup_logger
from ets_cat30.suite_fixture import prepare_suite

LOGGER = logging.getLogger(__name__)

COMMON_FIXTURE = "common_fixture"


# ============================================================================
#  Options and Configuration
# ============================================================================

def pytest_addoption(parser: pytest.Parser) -> None:
    group = parser.getgroup("ets-cat30", "CSW 3.0 executable test suite")
    group.addoption("--iut", default=None,
                    help="Capabilities URL or service endpoint of the implementation under test")
    group.addoption("--bearer", default=None, help="Bearer token sent with every request")
    group.addoption("--http-timeout", dest="http_timeout", type=float, default=None,
                    help="HTTP request timeout in seconds (default 30)")
    group.addoption("--csw-schema", dest="csw_schema", default=None,
                    help="Location of cswAll.xsd (URL or local path)")
    group.addoption("--sample-size", dest="sample_size", type=int, default=None,
                    help="Number of sample records to fetch (default 25)")
    group.addoption("--ets-log-level", dest="ets_log_level", default=None,
                    help="Log level of the test suite (default WARNING)")


def pytest_configure(config: pytest.Config) -> None:  # pragma: no cover - pytest hook
    """Configure pytest markers and logging for the conformance tests."""
    config.addinivalue_line("markers", "capabilities: Tests for the GetCapabilities request")
    config.addinivalue_line("markers", "opensearch: Tests for the OpenSearch binding")
    config.addinivalue_line("markers", "geo: Tests for the OpenSearch Geo extension")
    config.addinivalue_line("markers", "getrecordbyid: Tests for the GetRecordById request")
    config.addinivalue_line("markers", "requires_iut: Needs a running implementation under test")

    suite_config = SuiteConfig.from_pytest_config(config)
    setup_logger(suite_config.ets_log_level)


def pytest_collection_modifyitems(config: pytest.Config, items: list) -> None:
    """Add markers based on the test module name."""
    for item in items:
        if COMMON_FIXTURE in getattr(item, "fixturenames", ()):
            item.add_marker(pytest.mark.requires_iut)

        test_file = str(item.path)
        if "test_capabilities" in test_file:
            item.add_marker(pytest.mark.capabilities)
        elif "test_opensearch_geo" in test_file:
            item.add_marker(pytest.mark.opensearch)
            item.add_marker(pytest.mark.geo)
        elif "test_opensearch" in test_file:
            item.add_marker(pytest.mark.opensearch)
        elif "test_get_record_by_id" in test_file:
            item.add_marker(pytest.mark.getrecordbyid)


# ============================================================================
#  Failure Reporting
# ============================================================================

@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """Attach the last request/response exchange to failed tests."""
    outcome = yield
    report = outcome.get_result()
    if report.when != "call" or not report.failed:
        return
    fixture = getattr(item, "funcargs", {}).get(COMMON_FIXTURE)
    if not isinstance(fixture, CommonFixture):
        return
    for name, info in fixture.failure_attributes().items():
        item.user_properties.append((name, info))
        report.sections.append((name, info))


# ============================================================================
#  Session Fixtures
# ============================================================================

@pytest.fixture(scope="session")
def suite_config(pytestconfig: pytest.Config) -> SuiteConfig:
    return SuiteConfig.from_pytest_config(pytestconfig)


@pytest.fixture(scope="session")
def http_client(suite_config: SuiteConfig) -> requests.Session:
    """Create requests session with optional authentication."""
    session = requests.Session()
    if suite_config.bearer:
        session.headers.update({"Authorization": f"Bearer {suite_config.bearer}"})
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="session")
def suite(suite_config: SuiteConfig, http_client: requests.Session) -> Dict[SuiteAttribute, Any]:
    """Suite attributes; skips every conformance test if the IUT is not usable."""
    try:
        return prepare_suite(suite_config, http_client)
    except ETSError as err:
        pytest.skip(str(err))


@pytest.fixture(scope="session")
def capabilities(suite):
    return suite[SuiteAttribute.TEST_SUBJECT]


@pytest.fixture(scope="session")
def osd(suite):
    """The OpenSearch description document; skips if the IUT offers none."""
    doc = suite.get(SuiteAttribute.OPENSEARCH_DESCR)
    if doc is None:
        pytest.skip("OpenSearch description not available.")
    return doc


@pytest.fixture(scope="session")
def dataset(suite):
    """Sample records from the IUT; skips if none could be obtained."""
    data = suite.get(SuiteAttribute.DATASET)
    if data is None or not len(data):
        pytest.skip("No sample records available.")
    return data


# ============================================================================
#  Test Fixtures
# ============================================================================

@pytest.fixture
def common_fixture(suite, suite_config: SuiteConfig) -> CommonFixture:
    """A fresh common fixture for each test, with empty message summaries."""
    fixture = CommonFixture.from_suite(suite, timeout=suite_config.http_timeout)
    fixture.clear_message_summaries()
    return fixture
