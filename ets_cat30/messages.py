"""Assertion failure messages."""

NOT_SCHEMA_VALID = "NOT_SCHEMA_VALID"
UNEXPECTED_STATUS = "UNEXPECTED_STATUS"
UNEXPECTED_MEDIA_TYPE = "UNEXPECTED_MEDIA_TYPE"
UNEXPECTED_QNAME = "UNEXPECTED_QNAME"
XPATH_RESULT = "XPATH_RESULT"
MISSING_INFOSET_ITEM = "MISSING_INFOSET_ITEM"
INVALID_INFOSET_ITEM = "INVALID_INFOSET_ITEM"
ENVELOPES_DISJOINT = "ENVELOPES_DISJOINT"
EMPTY_RESULT_SET = "EMPTY_RESULT_SET"
FAILED_ENTITY_PARSE = "FAILED_ENTITY_PARSE"
UNEXPECTED_EXCEPTION = "UNEXPECTED_EXCEPTION"
RESULT_COUNT_MISMATCH = "RESULT_COUNT_MISMATCH"
NOT_IMPLEMENTED = "NOT_IMPLEMENTED"

MESSAGES = {
    NOT_SCHEMA_VALID: "{0} schema validation error(s) detected.\n{1}",
    UNEXPECTED_STATUS: "Unexpected HTTP status code.",
    UNEXPECTED_MEDIA_TYPE: "Unexpected media type.",
    UNEXPECTED_QNAME: "Qualified name of element does not match.",
    XPATH_RESULT: "Unexpected result evaluating XPath expression against {0}: {1}",
    MISSING_INFOSET_ITEM: "Missing infoset item: {0}",
    INVALID_INFOSET_ITEM: "Invalid value of infoset item {0}: {1}",
    ENVELOPES_DISJOINT: "The envelopes do not intersect",
    EMPTY_RESULT_SET: "The result set is empty: {0}",
    FAILED_ENTITY_PARSE: "Failed to parse response entity from {0}: {1}",
    UNEXPECTED_EXCEPTION: "Unexpected OWS exception code: expected {0}, found {1}",
    RESULT_COUNT_MISMATCH: "Unexpected number of results: expected {0}, found {1}",
    NOT_IMPLEMENTED: "Conformance class not implemented: {0}",
}


def format_message(key: str, *args) -> str:
    """
    Build a failure message from a message key.

    Args:
        key: One of the message keys defined in this module
        *args: Positional values substituted into the template

    Returns:
        The formatted message

    Raises:
        KeyError: if the key is unknown
    """
    return MESSAGES[key].format(*args)
