"""
Spatial utilities.

All envelopes are held in CRS84 order (longitude, latitude). GeoRSS simple
geometries and EPSG:4326 coordinates use latitude/longitude order and are
swapped on input.
"""

from typing import Iterable, List, Optional, Sequence, Tuple

from ets_cat30 import namespaces
from ets_cat30.namespaces import qname

CRS84 = "http://www.opengis.net/def/crs/OGC/1.3/CRS84"

_GEORSS_SIMPLE = ("box", "point", "polygon", "line")


class Envelope:
    """A lon/lat bounding rectangle."""

    def __init__(self, min_x: float, min_y: float, max_x: float, max_y: float):
        if min_x > max_x or min_y > max_y:
            raise ValueError(
                f"Invalid envelope: lower corner ({min_x}, {min_y}) "
                f"exceeds upper corner ({max_x}, {max_y})"
            )
        self.min_x = float(min_x)
        self.min_y = float(min_y)
        self.max_x = float(max_x)
        self.max_y = float(max_y)

    @classmethod
    def from_points(cls, points: Iterable[Tuple[float, float]]) -> "Envelope":
        points = list(points)
        if not points:
            raise ValueError("Cannot create an envelope without coordinates")
        xs = [p[0] for p in points]
        ys = [p[1] for p in points]
        return cls(min(xs), min(ys), max(xs), max(ys))

    def intersects(self, other: "Envelope") -> bool:
        return not (
            self.max_x < other.min_x
            or other.max_x < self.min_x
            or self.max_y < other.min_y
            or other.max_y < self.min_y
        )

    def union(self, other: "Envelope") -> "Envelope":
        return Envelope(
            min(self.min_x, other.min_x),
            min(self.min_y, other.min_y),
            max(self.max_x, other.max_x),
            max(self.max_y, other.max_y),
        )

    def to_box_param(self) -> str:
        """Format as a geo:box value: west,south,east,north."""
        return ",".join(_format_coord(c) for c in (self.min_x, self.min_y, self.max_x, self.max_y))

    def __eq__(self, other) -> bool:
        if not isinstance(other, Envelope):
            return NotImplemented
        return (self.min_x, self.min_y, self.max_x, self.max_y) == (
            other.min_x, other.min_y, other.max_x, other.max_y)

    def __repr__(self) -> str:
        return f"Envelope({self.min_x}, {self.min_y}, {self.max_x}, {self.max_y})"


def _format_coord(value: float) -> str:
    return f"{value:.6f}".rstrip("0").rstrip(".")


def _parse_numbers(text: Optional[str]) -> List[float]:
    if not text or not text.strip():
        raise ValueError("Missing coordinate values")
    return [float(token) for token in text.replace(",", " ").split()]


def _pairs(values: Sequence[float]) -> List[Tuple[float, float]]:
    if len(values) % 2:
        raise ValueError(f"Odd number of coordinate values: {len(values)}")
    return [(values[i], values[i + 1]) for i in range(0, len(values), 2)]


def _lat_lon_to_points(values: Sequence[float]) -> List[Tuple[float, float]]:
    return [(lon, lat) for lat, lon in _pairs(values)]


def is_lat_lon_crs(crs: Optional[str]) -> bool:
    """
    Check whether a CRS reference uses latitude/longitude axis order.

    Only the WGS 84 identifiers are recognized: EPSG:4326 (in its URN and
    http URI forms) is lat/lon, CRS84 or a missing reference is lon/lat.
    """
    if not crs:
        return False
    crs = crs.strip()
    if crs.upper().endswith("CRS84"):
        return False
    return crs.endswith(("EPSG::4326", "EPSG/0/4326", "EPSG:4326"))


def envelope_from_bounding_box(element) -> Envelope:
    """
    Create an envelope from an ows:BoundingBox or ows:WGS84BoundingBox element.

    Raises:
        ValueError: if a corner is missing or malformed
    """
    lower = element.findtext(qname(namespaces.OWS, "LowerCorner"))
    upper = element.findtext(qname(namespaces.OWS, "UpperCorner"))
    lower_values = _parse_numbers(lower)
    upper_values = _parse_numbers(upper)
    if len(lower_values) < 2 or len(upper_values) < 2:
        raise ValueError("Bounding box corners must have two coordinates")
    crs = element.get("crs")
    if element.tag == qname(namespaces.OWS, "WGS84BoundingBox"):
        crs = CRS84
    if is_lat_lon_crs(crs):
        return Envelope(lower_values[1], lower_values[0], upper_values[1], upper_values[0])
    return Envelope(lower_values[0], lower_values[1], upper_values[0], upper_values[1])


def _envelope_from_gml(geometry) -> Envelope:
    lat_lon = not (geometry.get("srsName") or "").upper().endswith("CRS84")
    tag = geometry.tag
    if tag == qname(namespaces.GML, "Envelope"):
        values = _parse_numbers(geometry.findtext(qname(namespaces.GML, "lowerCorner")))
        values += _parse_numbers(geometry.findtext(qname(namespaces.GML, "upperCorner")))
    else:
        values = []
        for pos in geometry.iter(qname(namespaces.GML, "pos"), qname(namespaces.GML, "posList")):
            values.extend(_parse_numbers(pos.text))
    if lat_lon:
        return Envelope.from_points(_lat_lon_to_points(values))
    return Envelope.from_points(_pairs(values))


def envelope_from_georss(item) -> Optional[Envelope]:
    """
    Create an envelope from the GeoRSS geometry of an Atom entry or RSS item.

    Returns:
        The envelope, or None if the item carries no GeoRSS geometry

    Raises:
        ValueError: if the geometry is malformed
    """
    for local_name in _GEORSS_SIMPLE:
        geom = item.find(qname(namespaces.GEORSS, local_name))
        if geom is not None:
            return Envelope.from_points(_lat_lon_to_points(_parse_numbers(geom.text)))
    where = item.find(qname(namespaces.GEORSS, "where"))
    if where is not None:
        for geometry in where:
            if isinstance(geometry.tag, str) and geometry.tag.startswith(f"{{{namespaces.GML}}}"):
                return _envelope_from_gml(geometry)
    return None
