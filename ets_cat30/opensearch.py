"""
OpenSearch URL template processing (OpenSearch 1.1, "OpenSearch URL template syntax").
"""

from typing import Dict, List, NamedTuple
from urllib.parse import quote

from ets_cat30 import cat3, http
from ets_cat30.service_metadata import TEMPLATE_PARAM, get_template_qnames


class TemplateParameter(NamedTuple):
    qname: str
    optional: bool
    token: str


def get_template_parameters(url_element) -> List[TemplateParameter]:
    """Return the parameters of an os:Url template in order of appearance."""
    template = url_element.get("template", "")
    matches = list(TEMPLATE_PARAM.finditer(template))
    return [
        TemplateParameter(name, bool(match.group(2)), match.group(0))
        for name, match in zip(get_template_qnames(url_element), matches)
    ]


def _default_value(url_element, param: str) -> str:
    if param == cat3.OS_COUNT:
        return str(cat3.DEFAULT_RECORD_COUNT)
    if param == cat3.OS_START_INDEX:
        return url_element.get("indexOffset", "1")
    if param == cat3.OS_START_PAGE:
        return url_element.get("pageOffset", "1")
    return ""


def build_request_uri(url_element, values: Dict[str, str]) -> str:
    """
    Create a request URI by substituting values into an os:Url template.

    Optional parameters without a value are replaced by an empty string.
    Required paging parameters (count, startIndex, startPage) fall back to
    their defaults; any other required parameter without a value is also left
    empty.

    Args:
        url_element: os:Url element carrying the template
        values: Parameter values keyed by Clark name

    Returns:
        The request URI

    Raises:
        ValueError: if the Url element has no template
    """
    template = url_element.get("template")
    if not template:
        raise ValueError("os:Url element has no template attribute")
    uri = template
    for param in get_template_parameters(url_element):
        if param.qname in values:
            value = quote(str(values[param.qname]), safe=",:")
        elif param.optional:
            value = ""
        else:
            value = _default_value(url_element, param.qname)
        uri = uri.replace(param.token, value, 1)
    return uri


def filter_templates_by_media_type(templates, media_type: str) -> list:
    """Keep the os:Url templates whose type matches a media type."""
    return [url for url in templates if http.is_media_type(url.get("type"), [media_type])]
