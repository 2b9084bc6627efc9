"""Tests for error reporting."""

from os import linesep

import pytest
import yaml

from resmoke_suites.core import SuiteParser
from resmoke_suites.errors import (
    ParseError,
    SourceLocation,
    SuiteConfigError,
    find_node,
    select_element,
)

DOCUMENT = (
    'test_kind: js_test\n'
    'selector:\n'
    '  roots:\n'
    '    - a.js\n'
    '    - b.js\n'
    'executor: {}\n'
)


class Secret:
    """Object a custom loader builds and YAML can not dump."""

    def __init__(self, name: str) -> None:
        self.name = name

    def __repr__(self) -> str:
        return f'Secret({self.name!r})'


def test_format_without_location() -> None:
    """Keep a message without location as is."""
    assert str(SuiteConfigError('Broken suite')) == 'Broken suite'


def test_format_with_location_and_snippet() -> None:
    """Render the location and an indented snippet below the message."""
    error = SuiteConfigError(
        'Broken suite',
        location=SourceLocation('suites/core.yml', 2, 14),
        snippet='group_size: many\n',
    )

    assert str(error).split(linesep) == [
        'Broken suite',
        '    in "suites/core.yml", line 3, column 15',
        '        group_size: many',
    ]


@pytest.mark.parametrize('location, expected', (
    pytest.param(
        SourceLocation(),
        'in "<unicode string>"',
        id='no location',
    ),
    pytest.param(
        SourceLocation('suites/core.yml'),
        'in "suites/core.yml"',
        id='filename',
    ),
    pytest.param(
        SourceLocation('suites/core.yml', 0, 4),
        'in "suites/core.yml", line 1, column 5',
        id='line and column',
    ),
    pytest.param(
        SourceLocation(line=9),
        'in "<unicode string>", line 10',
        id='line only',
    ),
))
def test_location(location: SourceLocation, expected: str) -> None:
    """Render one-based source locations."""
    assert str(location) == expected


@pytest.mark.parametrize('path, expected', (
    pytest.param(('selector', 'roots', 1), (4, 6), id='sequence item'),
    pytest.param(('selector', 'roots'), (3, 4), id='mapping value'),
    pytest.param(('selector', 'group_size'), (2, 2), id='missing key'),
    pytest.param(('executor', 'function-after', 'fixture'), (5, 10), id='union member names'),
    pytest.param((), (0, 0), id='document'),
))
def test_find_node(path: tuple, expected: tuple[int, int]) -> None:
    """Find the deepest node present on a validation path."""
    node = find_node(yaml.compose(DOCUMENT), path)

    assert node is not None
    assert (node.start_mark.line, node.start_mark.column) == expected


@pytest.mark.parametrize('path, expected', (
    pytest.param(('selector', 'roots', 1), ['b.js'], id='sequence item'),
    pytest.param(('selector', 'roots'), {'roots': ['a.js', 'b.js']}, id='mapping value'),
    pytest.param(
        ('selector', 'group_size'),
        {'selector': {'roots': ['a.js', 'b.js']}},
        id='missing key',
    ),
    pytest.param(('test_kind', 'str'), {'test_kind': 'js_test'}, id='union member name'),
))
def test_select_element(path: tuple, expected: object) -> None:
    """Select the smallest fragment holding an element."""
    assert select_element(yaml.safe_load(DOCUMENT), path) == expected


def test_select_element_not_found() -> None:
    """Fall back to the whole document when no step is present."""
    document = yaml.safe_load(DOCUMENT)

    assert select_element(document, ('description',)) is document


def test_yaml_error() -> None:
    """Point at the problem in malformed YAML."""
    content = 'test_kind: js_test\nselector: [a, b\n'

    with pytest.raises(yaml.MarkedYAMLError) as base:
        yaml.safe_load(content)

    error = ParseError.from_yaml_error(base.value, filename='suites/core.yml', text=content)

    assert error.text == content
    assert error.message.startswith('Invalid YAML: ')
    assert error.location is not None
    assert error.location.filename == 'suites/core.yml'
    assert error.location.line is not None
    assert '^' in str(error)


def test_unrepresentable_element(loader: type[yaml.SafeLoader]) -> None:
    """Render elements built by custom loaders that YAML can not dump."""
    loader.add_constructor(
        '!secret',
        lambda constructor, node: Secret(constructor.construct_scalar(node)),
    )
    content = 'test_kind: js_test\nselector: {}\nexecutor:\n  fixture: !secret token\n'

    with pytest.raises(ParseError, match=r'at executor\.fixture') as error:
        SuiteParser(loader).parse(content)

    rendered = str(error.value)

    assert "Secret('token')" in rendered
    assert 'line 4, column 12' in rendered
