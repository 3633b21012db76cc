"""
Common test fixture shared by all conformance tests.
"""

import enum
from typing import Any, Dict, Mapping, Optional

import pytest
import requests
from lxml import etree

from ets_cat30 import http, messages
from ets_cat30.http import HttpMessagePart, MessageInfo
from ets_cat30.messages import format_message


class SuiteAttribute(enum.Enum):
    """Attributes shared by all tests in a run."""

    CLIENT = "client"
    TEST_SUBJECT = "testSubject"
    CSW_SCHEMA = "cswSchema"
    ATOM_SCHEMA = "atomSchema"
    OPENSEARCH_DESCR = "openSearchDescr"
    DATASET = "dataset"

    def get_name(self) -> str:
        return self.value


class CommonFixture:
    """
    Holds the HTTP client, the service capabilities, the message schemas and a
    summary of the last request/response exchange with the implementation under test.
    """

    def __init__(self, client: Optional[requests.Session], capabilities, csw_schema, atom_schema,
                 timeout: float = 30.0):
        self.client = client
        self.csw_capabilities = capabilities
        self.csw_schema = csw_schema
        self.atom_schema = atom_schema
        self.timeout = timeout
        self.request_info: MessageInfo = http.new_message_info()
        self.response_info: MessageInfo = http.new_message_info()

    @classmethod
    def from_suite(cls, suite: Mapping[SuiteAttribute, Any], timeout: float = 30.0) -> "CommonFixture":
        """
        Initialize the fixture from the suite attributes.

        The client is optional; a missing capabilities document or schema skips
        the test.
        """
        client = suite.get(SuiteAttribute.CLIENT)
        required = {}
        for attr in (SuiteAttribute.TEST_SUBJECT, SuiteAttribute.CSW_SCHEMA, SuiteAttribute.ATOM_SCHEMA):
            value = suite.get(attr)
            if value is None:
                pytest.skip(f"{attr.get_name()} not found in test suite attributes.")
            required[attr] = value
        return cls(client,
                   required[SuiteAttribute.TEST_SUBJECT],
                   required[SuiteAttribute.CSW_SCHEMA],
                   required[SuiteAttribute.ATOM_SCHEMA],
                   timeout=timeout)

    def clear_message_summaries(self) -> None:
        self.request_info = http.new_message_info()
        self.response_info = http.new_message_info()

    def request(self, method: str, uri: str, params: Optional[Dict[str, str]] = None,
                headers: Optional[Dict[str, str]] = None, data=None) -> requests.Response:
        """Submit a request to the IUT and record both messages."""
        self.clear_message_summaries()
        self.request_info[HttpMessagePart.TARGET] = f"{method.upper()} {uri}"
        response = self.client.request(method, uri, params=params, headers=headers,
                                       data=data, timeout=self.timeout)
        if response.request is not None:
            self.request_info = http.request_info(response.request)
        self.response_info = http.response_info(response)
        return response

    def get(self, uri: str, params: Optional[Dict[str, str]] = None,
            accept: Optional[str] = None) -> requests.Response:
        headers = {"Accept": accept} if accept else None
        return self.request("GET", uri, params=params, headers=headers)

    def get_message_info(self, msg_info: MessageInfo) -> str:
        return http.message_summary(msg_info)

    def failure_attributes(self) -> Dict[str, str]:
        """The request and response summaries attached to a failed test."""
        return {
            "request": self.get_message_info(self.request_info),
            "response": self.get_message_info(self.response_info),
        }

    def get_response_entity_as_document(self, response: requests.Response,
                                        target_uri: Optional[str] = None) -> etree._ElementTree:
        """
        Parse the response entity as an XML document.

        Raises:
            AssertionError: if the entity is missing or not well-formed
        """
        target_uri = target_uri or response.url
        parser = etree.XMLParser(resolve_entities=False, no_network=True)
        try:
            return etree.fromstring(response.content, parser).getroottree()
        except (etree.XMLSyntaxError, ValueError) as err:
            raise AssertionError(format_message(messages.FAILED_ENTITY_PARSE, target_uri, err)) from err
