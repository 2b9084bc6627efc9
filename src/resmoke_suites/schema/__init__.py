"""Declarative schema of resmoke suite documents.

Defines immutable Pydantic models describing a suite configuration:
the suite itself, its test selector with the root test list, and its
executor section carried as opaque values.
"""

from .executors import Executor
from .selectors import RootFile, RootList, Selector, TestRoot
from .suites import SuiteConfig

__all__ = (
    'Executor',
    'RootFile',
    'RootList',
    'Selector',
    'SuiteConfig',
    'TestRoot',
)
