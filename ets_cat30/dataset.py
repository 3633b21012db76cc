"""
Sample data obtained from the implementation under test.

A full ``csw:GetRecordsResponse`` supplies record identifiers, titles and the
overall geographic extent used to build meaningful queries.
"""

import logging
from pathlib import Path
from typing import List, Optional, Union

from lxml import etree

from ets_cat30 import cat3, namespaces
from ets_cat30.namespaces import NSMAP, qname
from ets_cat30.spatial import Envelope, envelope_from_bounding_box

LOGGER = logging.getLogger(__name__)


class DatasetInfo:
    """Summary of a sample of catalogue records."""

    def __init__(self, source: Union[str, Path, etree._ElementTree, etree._Element]):
        if isinstance(source, (str, Path)):
            source = etree.parse(str(source), etree.XMLParser(resolve_entities=False))
        if isinstance(source, etree._ElementTree):
            source = source.getroot()
        if source.tag != qname(namespaces.CSW, "GetRecordsResponse"):
            raise ValueError(f"Expected csw:GetRecordsResponse, found {source.tag}")
        self.document = source
        self.records = source.xpath("csw:SearchResults/csw:Record", namespaces=NSMAP)
        self.record_identifiers: List[str] = self._texts("dc:identifier")
        self.record_titles: List[str] = self._texts("dc:title")
        self.geographic_extent: Optional[Envelope] = self._extent()

    def _texts(self, path: str) -> List[str]:
        values = []
        for record in self.records:
            value = record.findtext(path, namespaces=NSMAP)
            if value and value.strip():
                values.append(value.strip())
        return values

    def _extent(self) -> Optional[Envelope]:
        extent = None
        for bbox in self.document.xpath(
                "csw:SearchResults/csw:Record/ows:BoundingBox"
                " | csw:SearchResults/csw:Record/ows:WGS84BoundingBox", namespaces=NSMAP):
            try:
                envelope = envelope_from_bounding_box(bbox)
            except ValueError as err:
                LOGGER.warning(f"Ignoring invalid bounding box at line {bbox.sourceline}: {err}")
                continue
            extent = envelope if extent is None else extent.union(envelope)
        return extent

    def __len__(self) -> int:
        return len(self.records)


def get_records_params(max_records: int) -> dict:
    """KVP parameters of the GetRecords request used to collect sample data."""
    return {
        cat3.SERVICE_PARAM: cat3.SERVICE_TYPE_CODE,
        cat3.VERSION_PARAM: cat3.SPEC_VERSION,
        cat3.REQUEST_PARAM: cat3.GET_RECORDS,
        cat3.TYPE_NAMES_PARAM: "csw:Record",
        cat3.ELEMENT_SET_PARAM: "full",
        cat3.RESULT_TYPE_PARAM: "results",
        cat3.MAX_RECORDS_PARAM: str(max_records),
    }


def fetch_sample_data(session, endpoint: str, max_records: int = 25,
                      timeout: float = 30) -> DatasetInfo:
    """
    Retrieve a sample of full csw:Record representations with a GetRecords request.

    Raises:
        requests.HTTPError: if the request does not succeed
        ValueError: if the response is not a GetRecords response
    """
    response = session.get(endpoint, params=get_records_params(max_records),
                           headers={"Accept": cat3.APP_XML}, timeout=timeout)
    response.raise_for_status()
    doc = etree.fromstring(response.content, etree.XMLParser(resolve_entities=False, no_network=True))
    dataset = DatasetInfo(doc)
    LOGGER.info(f"Obtained {len(dataset)} sample records from {response.url}")
    return dataset
