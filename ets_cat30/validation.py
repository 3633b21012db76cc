"""
Schema validation utilities.

CSW messages are validated against the W3C XML Schema for CSW 3.0
(``cswAll.xsd``). Atom feeds and OpenSearch description documents are validated
against RELAX NG grammars shipped with this package.
"""

import logging
from pathlib import Path
from typing import List, Optional, Union

import requests
from lxml import etree

from ets_cat30.errors import ETSError

LOGGER = logging.getLogger(__name__)

SCHEMA_DIR = Path(__file__).resolve().parent / "schemas"
ATOM_GRAMMAR = SCHEMA_DIR / "rng" / "atom.rng"
OSD_GRAMMAR = SCHEMA_DIR / "rng" / "osd-1.1-draft5.rng"
CSW_SCHEMA_URL = "http://schemas.opengis.net/cat/csw/3.0/cswAll.xsd"

Schema = Union[etree.XMLSchema, etree.RelaxNG]


class SchemaResolver(etree.Resolver):
    """Resolve schema imports and includes over HTTP(S) using requests."""

    def __init__(self, session: Optional[requests.Session] = None, timeout: float = 30):
        super().__init__()
        self.session = session or requests.Session()
        self.timeout = timeout

    def resolve(self, system_url, public_id, context):
        if not system_url or not system_url.startswith(("http://", "https://")):
            return None
        LOGGER.debug(f"Fetching schema component {system_url}")
        response = self.session.get(system_url, timeout=self.timeout)
        response.raise_for_status()
        return self.resolve_string(response.content, context, base_url=response.url)


class ValidationErrorHandler:
    """Collects the errors reported by a schema validator."""

    def __init__(self, error_log=None):
        self.errors: List[str] = []
        if error_log is not None:
            for entry in error_log:
                self.add_error(entry.line, entry.message)

    def add_error(self, line: Optional[int], message: str) -> None:
        self.errors.append(f"[line {line}] {message}")

    @property
    def error_count(self) -> int:
        return len(self.errors)

    def errors_detected(self) -> bool:
        return bool(self.errors)

    def __str__(self) -> str:
        return "\n".join(self.errors)


def _parser(resolver: Optional[etree.Resolver] = None) -> etree.XMLParser:
    parser = etree.XMLParser(resolve_entities=False, no_network=resolver is None)
    if resolver is not None:
        parser.resolvers.add(resolver)
    return parser


def create_csw_schema(location: str = CSW_SCHEMA_URL,
                      session: Optional[requests.Session] = None,
                      timeout: float = 30) -> etree.XMLSchema:
    """
    Compile the complete CSW 3.0 message schema.

    Args:
        location: URL or local path of ``cswAll.xsd``
        session: Optional requests session used to fetch remote schema components
        timeout: Timeout in seconds for each schema request

    Returns:
        An immutable XMLSchema object

    Raises:
        ETSError: if the schema cannot be obtained or compiled
    """
    resolver = SchemaResolver(session, timeout)
    parser = _parser(resolver)
    try:
        if location.startswith(("http://", "https://")):
            response = resolver.session.get(location, timeout=timeout)
            response.raise_for_status()
            doc = etree.fromstring(response.content, parser, base_url=response.url).getroottree()
        else:
            doc = etree.parse(str(location), parser)
        schema = etree.XMLSchema(doc)
    except (requests.RequestException, OSError, etree.LxmlError) as err:
        raise ETSError(f"Failed to create CSW schema from {location}: {err}") from err
    LOGGER.info(f"Compiled CSW schema from {location}")
    return schema


def create_relaxng_schema(location: Union[str, Path]) -> etree.RelaxNG:
    """Compile a RELAX NG grammar (XML syntax) from a local path."""
    try:
        return etree.RelaxNG(etree.parse(str(location), _parser()))
    except (OSError, etree.LxmlError) as err:
        raise ETSError(f"Failed to create RELAX NG schema from {location}: {err}") from err


def create_atom_schema() -> etree.RelaxNG:
    """Compile the RELAX NG grammar for Atom feeds and entries (RFC 4287, Appendix B)."""
    return create_relaxng_schema(ATOM_GRAMMAR)


def validate(schema: Schema, document) -> ValidationErrorHandler:
    """
    Validate a document or element against a compiled schema.

    Returns:
        A handler holding the errors found (possibly none)
    """
    schema.validate(document)
    return ValidationErrorHandler(schema.error_log)


class RelaxNGValidator:
    """Validates documents against a RELAX NG grammar."""

    def __init__(self, schema_location: Union[str, Path]):
        self.schema = create_relaxng_schema(schema_location)
        self.error_handler = ValidationErrorHandler()

    def validate(self, document) -> ValidationErrorHandler:
        self.error_handler = validate(self.schema, document)
        return self.error_handler

    def get_error_handler(self) -> ValidationErrorHandler:
        return self.error_handler


def create_osd_validator() -> RelaxNGValidator:
    """Build a validator for OpenSearch 1.1 description documents (draft 5)."""
    return RelaxNGValidator(OSD_GRAMMAR)


def load_schema(kind: str, csw_schema_location: str = CSW_SCHEMA_URL) -> Schema:
    """Compile one of the supported schemas by name: ``atom``, ``osd`` or ``csw``."""
    if kind == "atom":
        return create_atom_schema()
    if kind == "osd":
        return create_osd_validator().schema
    if kind == "csw":
        return create_csw_schema(csw_schema_location)
    raise ValueError(f"Unknown schema: {kind}")
