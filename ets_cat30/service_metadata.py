"""
Utility functions for reading service metadata: the CSW capabilities document
and the OpenSearch description document.
"""

import re
from typing import List, Optional, Set

from owslib.ows import OperationsMetadata

from ets_cat30 import namespaces
from ets_cat30.namespaces import NSMAP, qname

TEMPLATE_PARAM = re.compile(r"\{([^{}?]+)(\??)\}")


def _root(document):
    return document.getroot() if hasattr(document, "getroot") else document


def get_operation(capabilities, operation: str) -> Optional[OperationsMetadata]:
    """Return the metadata for an operation declared in the capabilities document."""
    for elem in _root(capabilities).xpath(
            "ows:OperationsMetadata/ows:Operation[@name=$name]", namespaces=NSMAP, name=operation):
        return OperationsMetadata(elem, namespaces.OWS)
    return None


def get_operation_endpoint(capabilities, operation: str, method: str) -> Optional[str]:
    """
    Get the endpoint for an operation and HTTP method.

    Args:
        capabilities: Capabilities document (csw:Capabilities)
        operation: Operation name (e.g. GetCapabilities)
        method: HTTP method name, case-insensitive (GET or POST)

    Returns:
        The endpoint URL, or None if no matching binding is declared
    """
    op = get_operation(capabilities, operation)
    if op is None:
        return None
    for binding in op.methods:
        if binding["type"].upper() == method.upper():
            return binding["url"]
    return None


def get_operation_bindings(capabilities, operation: str) -> Set[str]:
    """Return the HTTP methods (upper case) declared for an operation."""
    op = get_operation(capabilities, operation)
    if op is None:
        return set()
    return {binding["type"].upper() for binding in op.methods}


def get_constraint_value(capabilities, name: str) -> Optional[str]:
    """Return the default value of a service-level constraint (ows:OperationsMetadata/ows:Constraint)."""
    values = _root(capabilities).xpath(
        "ows:OperationsMetadata/ows:Constraint[@name=$name]/ows:DefaultValue/text()",
        namespaces=NSMAP, name=name)
    return values[0].strip() if values else None


def implements_conformance_class(capabilities, name: str) -> bool:
    value = get_constraint_value(capabilities, name)
    return value is not None and value.upper() == "TRUE"


def get_template_qnames(url_element) -> List[str]:
    """List the parameters of an OSD Url template as Clark names."""
    names = []
    for match in TEMPLATE_PARAM.finditer(url_element.get("template", "")):
        prefix, _, local_name = match.group(1).rpartition(":")
        if prefix:
            ns = url_element.nsmap.get(prefix)
            if ns is None:
                # unbound prefix: keep the raw token so it never matches
                names.append(match.group(1))
                continue
        else:
            ns = namespaces.OSD11
        names.append(qname(ns, local_name))
    return names


def get_opensearch_query_templates(osd, param_qname: str) -> List:
    """
    Find the URL templates in an OpenSearch description that use a given parameter.

    Args:
        osd: OpenSearch description document
        param_qname: Parameter name in Clark notation (e.g. ``{http://a9.com/-/opensearch/extensions/geo/1.0/}box``)

    Returns:
        The matching os:Url elements, in document order
    """
    templates = []
    for url in _root(osd).iterfind(qname(namespaces.OSD11, "Url")):
        if param_qname in get_template_qnames(url):
            templates.append(url)
    return templates
