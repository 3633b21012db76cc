"""
Helpers for OpenSearch result feeds (Atom and RSS 2.0).
"""

from typing import List, Optional

from ets_cat30 import cat3, http, namespaces
from ets_cat30.namespaces import qname

ATOM_FEED = qname(namespaces.ATOM, "feed")
ATOM_ENTRY = qname(namespaces.ATOM, "entry")
ATOM_ID = qname(namespaces.ATOM, "id")
RSS_ROOT = "rss"


def _root(document):
    return document.getroot() if hasattr(document, "getroot") else document


def is_atom(media_type: Optional[str]) -> bool:
    return http.is_media_type(media_type, [cat3.APP_ATOM_XML])


def get_items(document) -> List:
    """
    Return the result items of a feed: atom:entry elements of an Atom feed or
    the item elements of an RSS channel.
    """
    root = _root(document)
    if root.tag == ATOM_FEED:
        return root.findall(ATOM_ENTRY)
    if root.tag == ATOM_ENTRY:
        return [root]
    if root.tag == RSS_ROOT:
        return root.findall("channel/item")
    return []


def _opensearch_int(document, local_name: str) -> Optional[int]:
    root = _root(document)
    value = root.findtext(qname(namespaces.OSD11, local_name))
    if value is None:
        value = root.findtext(f"channel/{qname(namespaces.OSD11, local_name)}")
    if value is None:
        return None
    return int(value.strip())


def total_results(document) -> Optional[int]:
    """The os:totalResults value of a feed, or None if absent."""
    return _opensearch_int(document, "totalResults")


def items_per_page(document) -> Optional[int]:
    """The os:itemsPerPage value of a feed, or None if absent."""
    return _opensearch_int(document, "itemsPerPage")


def item_identifiers(item) -> List[str]:
    """Identifiers carried by a result item (dc:identifier and atom:id)."""
    values = []
    for tag in (qname(namespaces.DC, "identifier"), ATOM_ID, "guid"):
        for elem in item.findall(tag):
            if elem.text and elem.text.strip():
                values.append(elem.text.strip())
    return values
