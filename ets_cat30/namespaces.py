"""XML namespace URIs used by the test suite."""

CSW = "http://www.opengis.net/cat/csw/3.0"
OWS = "http://www.opengis.net/ows/2.0"
OSD11 = "http://a9.com/-/spec/opensearch/1.1/"
OSD_GEO = "http://a9.com/-/opensearch/extensions/geo/1.0/"
OSD_TIME = "http://a9.com/-/opensearch/extensions/time/1.0/"
ATOM = "http://www.w3.org/2005/Atom"
GEORSS = "http://www.georss.org/georss"
GML = "http://www.opengis.net/gml/3.2"
DC = "http://purl.org/dc/elements/1.1/"
DCT = "http://purl.org/dc/terms/"
XLINK = "http://www.w3.org/1999/xlink"
XSI = "http://www.w3.org/2001/XMLSchema-instance"
FES = "http://www.opengis.net/fes/2.0"
XML = "http://www.w3.org/XML/1998/namespace"

NSMAP = {
    "csw": CSW,
    "ows": OWS,
    "os": OSD11,
    "geo": OSD_GEO,
    "time": OSD_TIME,
    "atom": ATOM,
    "georss": GEORSS,
    "gml": GML,
    "dc": DC,
    "dct": DCT,
    "xlink": XLINK,
    "xsi": XSI,
    "fes": FES,
}


def qname(namespace: str, local_name: str) -> str:
    """Return the Clark notation ``{namespace}local`` used by lxml."""
    if not namespace:
        return local_name
    return f"{{{namespace}}}{local_name}"
