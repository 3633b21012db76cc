"""
Executable test suite for OGC Catalogue Service 3.0 (CSW) and its OpenSearch binding.

The conformance tests live in :mod:`ets_cat30.conformance` and are run by pytest
with the :mod:`ets_cat30.plugin` plugin loaded, either directly or through the
``ets-cat30`` command.
"""

__version__ = "0.5.0"
