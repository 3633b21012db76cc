"""
Prepares the suite attributes shared by all tests in a run.

The capabilities document of the implementation under test is fetched first;
the OpenSearch description, a sample of records and the message schemas are
obtained from there.
"""

import logging
from typing import Any, Dict, Optional
from urllib.parse import parse_qs, urlencode, urlsplit, urlunsplit

import requests
from lxml import etree

from ets_cat30 import cat3, dataset, namespaces, service_metadata, validation
from ets_cat30.config import SuiteConfig
from ets_cat30.errors import ETSError
from ets_cat30.fixture import SuiteAttribute
from ets_cat30.http import accept_header
from ets_cat30.namespaces import qname

LOGGER = logging.getLogger(__name__)


def capabilities_url(iut: str) -> str:
    """
    Return the GetCapabilities request URL for an IUT reference.

    A URL that already carries a ``request`` parameter is used as given;
    otherwise the KVP parameters of a CSW 3.0 GetCapabilities request are added.
    """
    parts = urlsplit(iut)
    query = parse_qs(parts.query)
    if any(key.lower() == cat3.REQUEST_PARAM for key in query):
        return iut
    extra = urlencode({
        cat3.SERVICE_PARAM: cat3.SERVICE_TYPE_CODE,
        cat3.REQUEST_PARAM: cat3.GET_CAPABILITIES,
        cat3.ACCEPT_VERSIONS_PARAM: cat3.SPEC_VERSION,
    })
    new_query = f"{parts.query}&{extra}" if parts.query else extra
    return urlunsplit((parts.scheme, parts.netloc, parts.path, new_query, parts.fragment))


def _parse(content: bytes, source: str) -> etree._ElementTree:
    parser = etree.XMLParser(resolve_entities=False, no_network=True)
    try:
        return etree.fromstring(content, parser).getroottree()
    except etree.XMLSyntaxError as err:
        raise ETSError(f"Response from {source} is not well-formed XML: {err}") from err


def fetch_capabilities(session: requests.Session, iut: str, timeout: float = 30) -> etree._ElementTree:
    """
    Fetch and parse the capabilities document of the IUT.

    Raises:
        ETSError: if the document cannot be obtained or is not csw:Capabilities
    """
    url = capabilities_url(iut)
    LOGGER.info(f"Fetching capabilities from {url}")
    try:
        response = session.get(url, headers={"Accept": cat3.APP_XML}, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as err:
        raise ETSError(f"Failed to retrieve capabilities from {url}: {err}") from err
    doc = _parse(response.content, url)
    if doc.getroot().tag != qname(namespaces.CSW, "Capabilities"):
        raise ETSError(f"Expected csw:Capabilities from {url}, found {doc.getroot().tag}")
    return doc


def fetch_opensearch_description(session: requests.Session, capabilities,
                                 timeout: float = 30) -> Optional[etree._ElementTree]:
    """Fetch the OpenSearch description from the base GetCapabilities endpoint, if one is offered."""
    if not service_metadata.implements_conformance_class(capabilities, cat3.CC_OPENSEARCH):
        LOGGER.info("OpenSearch conformance class not implemented")
        return None
    endpoint = service_metadata.get_operation_endpoint(capabilities, cat3.GET_CAPABILITIES, "GET")
    if endpoint is None:
        return None
    try:
        response = session.get(endpoint, headers={
            "Accept": accept_header(cat3.APP_VND_OPENSEARCH_XML, cat3.APP_OPENSEARCH_XML)
        }, timeout=timeout)
        response.raise_for_status()
        doc = _parse(response.content, endpoint)
    except (requests.RequestException, ETSError) as err:
        LOGGER.warning(f"OpenSearch description not available: {err}")
        return None
    if doc.getroot().tag != qname(namespaces.OSD11, "OpenSearchDescription"):
        LOGGER.warning(f"Expected os:OpenSearchDescription, found {doc.getroot().tag}")
        return None
    return doc


def fetch_dataset(session: requests.Session, capabilities, sample_size: int,
                  timeout: float = 30) -> Optional[dataset.DatasetInfo]:
    endpoint = service_metadata.get_operation_endpoint(capabilities, cat3.GET_RECORDS, "GET")
    if endpoint is None:
        LOGGER.warning("No GET endpoint declared for GetRecords")
        return None
    try:
        return dataset.fetch_sample_data(session, endpoint, sample_size, timeout)
    except (requests.RequestException, etree.XMLSyntaxError, ValueError) as err:
        LOGGER.warning(f"Failed to obtain sample data: {err}")
        return None


def prepare_suite(config: SuiteConfig, session: requests.Session) -> Dict[SuiteAttribute, Any]:
    """
    Build the suite attributes for a test run.

    Raises:
        ETSError: if no IUT is configured or its capabilities cannot be obtained
    """
    if not config.iut:
        raise ETSError("No implementation under test given (use --iut or ETS_CAT30_IUT)")
    capabilities = fetch_capabilities(session, config.iut, config.http_timeout)
    suite = {
        SuiteAttribute.CLIENT: session,
        SuiteAttribute.TEST_SUBJECT: capabilities,
        SuiteAttribute.ATOM_SCHEMA: validation.create_atom_schema(),
        SuiteAttribute.OPENSEARCH_DESCR: fetch_opensearch_description(
            session, capabilities, config.http_timeout),
        SuiteAttribute.DATASET: fetch_dataset(
            session, capabilities, config.sample_size, config.http_timeout),
    }
    try:
        suite[SuiteAttribute.CSW_SCHEMA] = validation.create_csw_schema(
            config.csw_schema, session, config.http_timeout)
    except ETSError as err:
        LOGGER.warning(str(err))
        suite[SuiteAttribute.CSW_SCHEMA] = None
    return suite
