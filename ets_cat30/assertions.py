"""
Custom assertion helpers shared by the conformance tests.

Each helper raises AssertionError with a message from :mod:`ets_cat30.messages`.
"""

from typing import Optional

from lxml import etree

from ets_cat30 import http, messages, namespaces
from ets_cat30.messages import format_message
from ets_cat30.namespaces import NSMAP, qname
from ets_cat30.spatial import Envelope
from ets_cat30.validation import Schema, validate


def _root(node):
    return node.getroot() if isinstance(node, etree._ElementTree) else node


def assert_qualified_name(element, expected: str) -> None:
    """
    Assert that an element has the expected qualified name.

    Args:
        element: Element (or document) to check
        expected: Expected name in Clark notation
    """
    element = _root(element)
    assert element is not None, format_message(messages.MISSING_INFOSET_ITEM, expected)
    assert element.tag == expected, (
        f"{format_message(messages.UNEXPECTED_QNAME)} Expected {expected}, found {element.tag}"
    )


def assert_schema_valid(schema: Schema, document) -> None:
    """Assert that a document is valid against a compiled XML Schema or RELAX NG grammar."""
    err = validate(schema, document)
    assert not err.errors_detected(), format_message(
        messages.NOT_SCHEMA_VALID, err.error_count, err)


def assert_status_code(actual: int, expected: int) -> None:
    assert actual == expected, (
        f"{format_message(messages.UNEXPECTED_STATUS)} Expected {expected}, found {actual}"
    )


def assert_media_type(content_type: Optional[str], *expected: str) -> None:
    """Assert that a Content-Type value matches one of the expected media types (parameters ignored)."""
    assert http.is_media_type(content_type, expected), (
        f"{format_message(messages.UNEXPECTED_MEDIA_TYPE)} "
        f"Expected one of {list(expected)}, found {content_type!r}"
    )


def assert_envelope_intersection(env1: Envelope, env2: Envelope) -> None:
    assert env1.intersects(env2), (
        f"{format_message(messages.ENVELOPES_DISJOINT)}: {env1!r} and {env2!r}"
    )


def assert_xpath(expr: str, context, expected: bool = True) -> None:
    """
    Assert that an XPath expression evaluates to the expected boolean value.

    Node-set results are true if not empty.
    """
    context = _root(context)
    result = context.xpath(f"boolean({expr})", namespaces=NSMAP)
    assert result is expected, format_message(messages.XPATH_RESULT, context.tag, expr)


def assert_exception_report(document, code: str, locator: Optional[str] = None) -> None:
    """
    Assert that an OWS exception report contains an exception with the given
    code and, if given, locator.
    """
    report = _root(document)
    assert_qualified_name(report, qname(namespaces.OWS, "ExceptionReport"))
    codes = report.xpath("ows:Exception/@exceptionCode", namespaces=NSMAP)
    assert code in codes, format_message(messages.UNEXPECTED_EXCEPTION, code, codes)
    if locator is not None:
        locators = report.xpath(
            "ows:Exception[@exceptionCode=$code]/@locator", namespaces=NSMAP, code=code)
        assert any(loc.lower() == locator.lower() for loc in locators), (
            f"Expected exception locator {locator!r}, found {locators}"
        )
