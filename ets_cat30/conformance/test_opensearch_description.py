"""
OpenSearch Description Conformance Tests

Verifies the structure and content of the OpenSearch description document
obtained from the implementation under test. The document is obtained in
response to a GET request submitted to the base GetCapabilities endpoint where
the Accept request header expresses a preference for one of these media types:

- application/vnd.a9.opensearchdescription+xml
- application/opensearchdescription+xml

Neither media type appears in the IANA media type registry.

Test Coverage:
- Content negotiation: OSD preferred over generic XML (Test-008)
- Schema validity: OSD 1.1 draft 5 RELAX NG grammar (Test-021)
- URL templates: Atom results template is offered

Specification: OGC 12-176r6 (Catalogue Services 3.0 - HTTP Protocol Binding), OpenSearch 1.1 draft 5
Reference: http://www.opensearch.org/Specifications/OpenSearch/1.1#OpenSearch_description_elements
"""
import pytest

from ets_cat30 import cat3, messages, namespaces, service_metadata
from ets_cat30.assertions import assert_qualified_name
from ets_cat30.http import accept_header
from ets_cat30.messages import format_message
from ets_cat30.namespaces import qname
from ets_cat30.opensearch import filter_templates_by_media_type
from ets_cat30.validation import RelaxNGValidator, create_osd_validator


pytestmark = [
    pytest.mark.opensearch,
]


# ============================================================================
#  Fixtures
# ============================================================================

@pytest.fixture(scope="module")
def osd_validator() -> RelaxNGValidator:
    """RELAX NG validator for OpenSearch description documents."""
    return create_osd_validator()


@pytest.fixture(scope="module")
def base_uri(capabilities) -> str:
    """Base GetCapabilities endpoint (GET method)."""
    uri = service_metadata.get_operation_endpoint(capabilities, cat3.GET_CAPABILITIES, "GET")
    if uri is None:
        pytest.skip("No GET endpoint declared for GetCapabilities")
    if not service_metadata.implements_conformance_class(capabilities, cat3.CC_OPENSEARCH):
        pytest.skip(format_message(messages.NOT_IMPLEMENTED, cat3.CC_OPENSEARCH))
    return uri


# ============================================================================
#  Content Negotiation
# ============================================================================

def test_prefer_opensearch_description(common_fixture, base_uri):
    """
    [Test-008] Request an OpenSearch description document as the most preferred
    media type. The generic XML media type is included in the Accept header with
    a q parameter value < 1 ("application/xml; q=0.5").
    """
    xml_not_preferred = f"{cat3.APP_XML}; q=0.5"
    response = common_fixture.get(
        base_uri, accept=accept_header(xml_not_preferred, cat3.APP_OPENSEARCH_XML))
    entity = common_fixture.get_response_entity_as_document(response, base_uri)

    assert_qualified_name(entity.getroot(), qname(namespaces.OSD11, "OpenSearchDescription"))


# ============================================================================
#  Schema Validation
# ============================================================================

def test_get_opensearch_description(common_fixture, base_uri, osd_validator):
    """
    [Test-021] Retrieve an OpenSearch description document and validate it
    against the OSD 1.1 (draft 5) grammar.
    """
    response = common_fixture.get(
        base_uri, accept=accept_header(cat3.APP_VND_OPENSEARCH_XML, cat3.APP_OPENSEARCH_XML))
    entity = common_fixture.get_response_entity_as_document(response, base_uri)

    osd_validator.validate(entity)
    err = osd_validator.get_error_handler()
    assert not err.errors_detected(), \
        format_message(messages.NOT_SCHEMA_VALID, err.error_count, err)


# ============================================================================
#  URL Templates
# ============================================================================

def test_opensearch_description_offers_atom_template(osd):
    """Verify the description includes a URL template for Atom search results."""
    urls = osd.getroot().findall(qname(namespaces.OSD11, "Url"))
    assert urls, format_message(messages.MISSING_INFOSET_ITEM, "os:Url")

    atom_urls = filter_templates_by_media_type(urls, cat3.APP_ATOM_XML)
    results_urls = [url for url in atom_urls if url.get("rel", "results") == "results"]
    assert results_urls, \
        f"Expected an os:Url with type {cat3.APP_ATOM_XML} and rel 'results'"
