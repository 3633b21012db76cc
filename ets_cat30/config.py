"""
Test run configuration.

Every setting can be given as a pytest command line option or as an
environment variable; the option wins.
"""

import os
from typing import Any, Mapping, Optional

from ets_cat30.validation import CSW_SCHEMA_URL

# option name -> (environment variable, default)
SETTINGS = {
    "iut": ("ETS_CAT30_IUT", None),
    "bearer": ("ETS_CAT30_BEARER", None),
    "http_timeout": ("ETS_CAT30_TIMEOUT", 30.0),
    "csw_schema": ("ETS_CAT30_CSW_SCHEMA", CSW_SCHEMA_URL),
    "sample_size": ("ETS_CAT30_SAMPLE_SIZE", 25),
    "ets_log_level": ("ETS_CAT30_LOG_LEVEL", "WARNING"),
}


class SuiteConfig:
    """Resolved settings for a test run."""

    def __init__(self, iut: Optional[str] = None, bearer: Optional[str] = None,
                 http_timeout: float = 30.0, csw_schema: str = CSW_SCHEMA_URL,
                 sample_size: int = 25, ets_log_level: str = "WARNING"):
        self.iut = iut
        self.bearer = bearer
        self.http_timeout = float(http_timeout)
        self.csw_schema = csw_schema
        self.sample_size = int(sample_size)
        self.ets_log_level = ets_log_level
        if self.sample_size < 1:
            raise ValueError(f"Sample size must be positive, got {self.sample_size}")

    @classmethod
    def resolve(cls, options: Mapping[str, Any],
                environ: Optional[Mapping[str, str]] = None) -> "SuiteConfig":
        """
        Resolve settings from command line options, then environment, then defaults.

        Args:
            options: Option values keyed by option name; None means "not given"
            environ: Environment mapping (defaults to os.environ)
        """
        environ = os.environ if environ is None else environ
        values = {}
        for name, (env_var, default) in SETTINGS.items():
            value = options.get(name)
            if value is None:
                value = environ.get(env_var) or default
            values[name] = value
        return cls(**values)

    @classmethod
    def from_pytest_config(cls, config) -> "SuiteConfig":
        return cls.resolve({name: config.getoption(name) for name in SETTINGS})
