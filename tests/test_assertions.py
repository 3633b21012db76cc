"""
Assertion Helper Tests

Test Coverage:
- Qualified names, status codes and media types
- Envelope intersection
- XPath expressions evaluated as booleans
- OWS exception reports
- Failure message formatting
"""
from unittest.mock import Mock

import pytest

from ets_cat30 import messages
from ets_cat30.assertions import (
    assert_envelope_intersection,
    assert_exception_report,
    assert_media_type,
    assert_qualified_name,
    assert_schema_valid,
    assert_status_code,
    assert_xpath,
)
from ets_cat30.messages import format_message
from ets_cat30.namespaces import CSW, OWS, qname
from ets_cat30.spatial import Envelope

from conftest import parse_data


def test_assert_qualified_name(capabilities):
    assert_qualified_name(capabilities, qname(CSW, "Capabilities"))

    with pytest.raises(AssertionError, match="Qualified name of element does not match"):
        assert_qualified_name(capabilities.getroot(), qname(OWS, "ExceptionReport"))


def test_assert_status_code():
    assert_status_code(200, 200)

    with pytest.raises(AssertionError, match="Expected 400, found 200"):
        assert_status_code(200, 400)


@pytest.mark.parametrize("content_type", [
    "application/xml",
    "application/xml; charset=UTF-8",
    "TEXT/XML",
])
def test_assert_media_type(content_type):
    assert_media_type(content_type, "application/xml", "text/xml")


@pytest.mark.parametrize("content_type", [None, "", "application/json"])
def test_assert_media_type_mismatch(content_type):
    with pytest.raises(AssertionError, match="Unexpected media type"):
        assert_media_type(content_type, "application/xml")


def test_assert_envelope_intersection():
    extent = Envelope(-6.171, 44.792, 0.889, 51.217)
    assert_envelope_intersection(Envelope(-1.6, 49.4, -1.6, 49.4), extent)

    with pytest.raises(AssertionError, match="The envelopes do not intersect"):
        assert_envelope_intersection(Envelope(140.2, -40.5, 148.9, -35.1), extent)


def test_assert_xpath(capabilities):
    assert_xpath("ows:OperationsMetadata/ows:Operation[@name='GetRecords']", capabilities)
    assert_xpath("ows:OperationsMetadata/ows:Operation[@name='Harvest']", capabilities, expected=False)

    with pytest.raises(AssertionError, match="Unexpected result evaluating XPath expression"):
        assert_xpath("@version = '2.0.2'", capabilities)


def test_assert_exception_report():
    report = parse_data("rsp/ExceptionReport-VersionNegotiationFailed.xml")

    assert_exception_report(report, "VersionNegotiationFailed")
    assert_exception_report(report, "VersionNegotiationFailed", locator="AcceptVersions")

    with pytest.raises(AssertionError, match="Unexpected OWS exception code"):
        assert_exception_report(report, "NotFound")
    with pytest.raises(AssertionError, match="Expected exception locator"):
        assert_exception_report(report, "VersionNegotiationFailed", locator="version")


def test_assert_exception_report_wrong_document(capabilities):
    with pytest.raises(AssertionError):
        assert_exception_report(capabilities, "NotFound")


def test_assert_schema_valid_reports_errors():
    entry = Mock(line=3, message="Element updated: invalid dateTime")
    schema = Mock(error_log=[entry, entry])

    with pytest.raises(AssertionError) as excinfo:
        assert_schema_valid(schema, parse_data("rsp/feed-invalid.xml"))

    assert "2 schema validation error(s) detected." in str(excinfo.value)
    assert "[line 3] Element updated: invalid dateTime" in str(excinfo.value)


def test_format_message():
    assert format_message(messages.EMPTY_RESULT_SET, "q=lorem") == "The result set is empty: q=lorem"

    with pytest.raises(KeyError):
        format_message("NO_SUCH_MESSAGE")
