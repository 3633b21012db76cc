"""Exceptions raised by the test suite support code."""


class ETSError(Exception):
    """The test suite cannot be prepared or configured as requested."""
