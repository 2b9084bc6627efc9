"""Suite document parsing and serialization.

The primary public entry point is `SuiteParser`, which loads YAML
suite documents into validated `SuiteConfig` models and serializes
them back to YAML.
"""

from .parser import SuiteParser

__all__ = (
    'SuiteParser',
)
