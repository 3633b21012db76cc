"""
HTTP message helpers.

Request and response messages are summarized as ordered mappings keyed by
:class:`HttpMessagePart` so that a failed test can report what was sent to the
implementation under test and what came back.
"""

import enum
from typing import Any, Dict, Iterable, Optional

import requests


class HttpMessagePart(enum.Enum):
    """Parts of an HTTP message, in the order they are reported."""

    TARGET = "TARGET"
    STATUS = "STATUS"
    HEADERS = "HEADERS"
    BODY = "BODY"

    def __str__(self) -> str:
        return self.value


MessageInfo = Dict[HttpMessagePart, Any]


def new_message_info() -> MessageInfo:
    return {}


def request_info(request: requests.PreparedRequest) -> MessageInfo:
    """Summarize an outgoing request: target resource, headers and body (if any)."""
    info = new_message_info()
    info[HttpMessagePart.TARGET] = f"{request.method} {request.url}"
    info[HttpMessagePart.HEADERS] = dict(request.headers)
    if request.body:
        info[HttpMessagePart.BODY] = request.body
    return info


def response_info(response: requests.Response) -> MessageInfo:
    """Summarize an incoming response: status code, headers and entity (if any)."""
    info = new_message_info()
    info[HttpMessagePart.STATUS] = response.status_code
    info[HttpMessagePart.HEADERS] = dict(response.headers)
    if response.content:
        info[HttpMessagePart.BODY] = response.content
    return info


def message_summary(msg_info: MessageInfo) -> str:
    """
    Summarize the content of an HTTP message for diagnostic purposes.

    Each part is written as its name, a newline, its value and a newline.
    Binary values are decoded as UTF-8.

    Args:
        msg_info: Mapping of message parts to values

    Returns:
        A string summarizing the message content
    """
    lines = []
    for part in HttpMessagePart:
        if part not in msg_info:
            continue
        value = msg_info[part]
        if isinstance(value, (bytes, bytearray)):
            text = bytes(value).decode("utf-8", errors="replace")
        else:
            text = str(value)
        lines.append(f"{part}:\n{text}\n")
    return "".join(lines)


def accept_header(*media_types: str) -> str:
    """Build an Accept header value from media ranges, most preferred first."""
    return ", ".join(media_types)


def media_type(content_type: Optional[str]) -> str:
    """Return the base media type of a Content-Type value, lower-cased and without parameters."""
    if not content_type:
        return ""
    return content_type.split(";", 1)[0].strip().lower()


def is_media_type(content_type: Optional[str], candidates: Iterable[str]) -> bool:
    """Check whether a Content-Type value matches one of the candidate media types."""
    actual = media_type(content_type)
    return any(actual == media_type(candidate) for candidate in candidates)


def is_xml_media_type(content_type: Optional[str]) -> bool:
    """Check whether a Content-Type value denotes XML: application/xml, text/xml or any +xml type."""
    actual = media_type(content_type)
    return actual.endswith("/xml") or actual.endswith("+xml")
