"""Model of resmoke test suite configuration documents.

The `resmoke_suites` package reads resmoke suite YAML files into
immutable, validated models and writes them back without inventing
or losing keys.

Key features:
- round-trippable models for the suite, its selector and its executor;
- derivation of suites that run a subset of tests or exclude some;
- structured parse errors with source locations and snippets;
- a JSON Schema for editor validation of suite files.
"""

from resmoke_suites.core import SuiteParser
from resmoke_suites.errors import ParseError, SerializationError, SuiteConfigError, SuiteConfigWarning
from resmoke_suites.models import ParserSettings
from resmoke_suites.schema import Executor, RootFile, RootList, Selector, SuiteConfig, TestRoot

__all__ = (
    'Executor',
    'ParseError',
    'ParserSettings',
    'RootFile',
    'RootList',
    'Selector',
    'SerializationError',
    'SuiteConfig',
    'SuiteConfigError',
    'SuiteConfigWarning',
    'SuiteParser',
    'TestRoot',
)
