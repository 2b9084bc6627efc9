"""Tests configurations and fixtures."""

from textwrap import dedent

import pytest
import yaml

from resmoke_suites.core import SuiteParser
from resmoke_suites.models import ParserSettings

SUITE_YAML = dedent('''\
    test_kind: js_test

    selector:
      roots:
        - jstests/auth/*.js
      exclude_files:
        - jstests/auth/repl.js
        - jstests/core/add1.js

    executor:
      config:
        value
      fixture:
        class: MyFixture
        num_nodes: 3
''')


@pytest.fixture
def loader() -> type[yaml.SafeLoader]:
    """Provide an isolated YAML SafeLoader class for tests.

    Creates a dedicated subclass of `yaml.SafeLoader` to ensure that
    YAML constructors registered during a test do not leak into other
    tests or affect global loader state.
    """
    class Loader(yaml.SafeLoader):
        pass

    return Loader


@pytest.fixture
def settings(monkeypatch: pytest.MonkeyPatch) -> ParserSettings:
    """Provide default parser settings independent of the environment."""
    for name in ('STRICT', 'SORT_KEYS', 'INDENT', 'WIDTH'):
        monkeypatch.delenv(f'RESMOKE_SUITES_{name}', raising=False)

    return ParserSettings()


@pytest.fixture
def parser(loader: type[yaml.SafeLoader], settings: ParserSettings) -> SuiteParser:
    """Provide a non-strict suite parser."""
    return SuiteParser(loader, settings=settings)


@pytest.fixture
def strict_parser(loader: type[yaml.SafeLoader], settings: ParserSettings) -> SuiteParser:
    """Provide a strict suite parser."""
    return SuiteParser(loader, settings=settings.model_copy(update={'strict': True}))


@pytest.fixture
def suite_yaml() -> str:
    """Provide a suite document with inline roots and excluded files."""
    return SUITE_YAML
