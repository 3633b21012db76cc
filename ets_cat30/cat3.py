"""
Constants for OGC Catalogue Services 3.0 (OGC 12-176r6) and its OpenSearch binding.
"""

from ets_cat30 import namespaces

SERVICE_TYPE_CODE = "CSW"
SPEC_VERSION = "3.0.0"

# Operation names
GET_CAPABILITIES = "GetCapabilities"
GET_RECORDS = "GetRecords"
GET_RECORD_BY_ID = "GetRecordById"

# KVP parameter names
SERVICE_PARAM = "service"
VERSION_PARAM = "version"
REQUEST_PARAM = "request"
ACCEPT_VERSIONS_PARAM = "acceptVersions"
ID_PARAM = "id"
TYPE_NAMES_PARAM = "typeNames"
ELEMENT_SET_PARAM = "elementSetName"
RESULT_TYPE_PARAM = "resultType"
MAX_RECORDS_PARAM = "maxRecords"
OUTPUT_FORMAT_PARAM = "outputFormat"

# Media types
APP_XML = "application/xml"
TEXT_XML = "text/xml"
APP_ATOM_XML = "application/atom+xml"
APP_RSS_XML = "application/rss+xml"
APP_OPENSEARCH_XML = "application/opensearchdescription+xml"
APP_VND_OPENSEARCH_XML = "application/vnd.a9.opensearchdescription+xml"

# Conformance classes advertised as OperationsMetadata constraints
CC_OPENSEARCH = "OpenSearch"

# OWS exception codes
ERR_VER_NEGOTIATION_FAILED = "VersionNegotiationFailed"
ERR_NOT_FOUND = "NotFound"
ERR_INVALID_PARAM_VALUE = "InvalidParameterValue"

# OpenSearch parameters (Clark notation)
OS_SEARCH_TERMS = namespaces.qname(namespaces.OSD11, "searchTerms")
OS_COUNT = namespaces.qname(namespaces.OSD11, "count")
OS_START_INDEX = namespaces.qname(namespaces.OSD11, "startIndex")
OS_START_PAGE = namespaces.qname(namespaces.OSD11, "startPage")
GEO_BOX = namespaces.qname(namespaces.OSD_GEO, "box")
GEO_UID = namespaces.qname(namespaces.OSD_GEO, "uid")

DEFAULT_RECORD_COUNT = 10
