"""Error and warning types.

Parse failures point at the failing part of a suite document: they carry
the source location taken from the YAML node tree and a YAML snippet of
the smallest fragment holding the problem, along with the whole text
that failed to parse.
"""

from os import linesep
from typing import TYPE_CHECKING, Any, NamedTuple

from yaml import MappingNode, SequenceNode, YAMLError, safe_dump

if TYPE_CHECKING:
    from typing import Self

    from pydantic import ValidationError
    from yaml import Node
    from yaml.error import Mark, MarkedYAMLError

#: Name YAML gives to documents loaded from a string.
DEFAULT_FILENAME = '<unicode string>'

LOCATION_INDENT = ' ' * 4
SNIPPET_INDENT = ' ' * 8

#: Location of an element in a document, as reported by validation.
type ElementPath = tuple[int | str, ...]


class SourceLocation(NamedTuple):
    """Position of an element in a suite document.

    Line and column are zero-based as in YAML marks, and rendered
    one-based.
    """

    filename: str | None = None
    line: int | None = None
    column: int | None = None

    @classmethod
    def from_mark(cls, mark: 'Mark | None',
                  filename: str | None = None) -> 'SourceLocation':
        """Build a location from a YAML mark.

        Args:
            mark: Mark of a YAML node or problem, if any.
            filename: Source name taking precedence over the mark name.

        Returns:
            Location of the mark.
        """
        if mark is None:
            return cls(filename)

        return cls(filename or mark.name, mark.line, mark.column)

    def __str__(self) -> str:
        location = f'in "{self.filename or DEFAULT_FILENAME}"'
        if self.line is not None:
            location += f', line {self.line + 1}'
            if self.column is not None:
                location += f', column {self.column + 1}'

        return location


def find_node(node: 'Node | None', path: ElementPath) -> 'Node | None':
    """Find the node of the deepest element of a path in a YAML node tree.

    Steps matching no element, such as the union member names pydantic
    adds to error locations, are skipped.

    Args:
        node: Root node of a document.
        path: Path to the element.

    Returns:
        Node of the element, or of its closest present ancestor.
    """
    for step in path:
        if isinstance(node, MappingNode):
            node = next(
                (
                    value
                    for key, value in node.value
                    if isinstance(key.value, str) and key.value == str(step)
                ),
                node,
            )
        elif isinstance(node, SequenceNode) and isinstance(step, int) and 0 <= step < len(node.value):
            node = node.value[step]

    return node


def select_element(document: Any, path: ElementPath) -> Any:  # noqa: ANN401
    """Select the smallest fragment of a document showing an element.

    Args:
        document: Loaded document data.
        path: Path to the element.

    Returns:
        A one-item mapping or list wrapping the element, or the whole
        document when no step of the path is present.
    """
    container = element = document
    found: int | str | None = None

    for step in path:
        if isinstance(element, dict) and step in element:
            container, element, found = element, element[step], step
        elif isinstance(element, list) and isinstance(step, int) and 0 <= step < len(element):
            container, element, found = element, element[step], step

    if found is None:
        return document

    if isinstance(container, list):
        return [element]

    return {found: element}


def render_snippet(element: Any) -> str:  # noqa: ANN401
    """Render a document fragment as YAML.

    Fragments produced by custom loaders may hold objects YAML can not
    represent; those are rendered with `repr`.
    """
    try:
        return safe_dump(
            element,
            sort_keys=False,
            default_flow_style=False,
            allow_unicode=True,
        )
    except YAMLError:
        return repr(element)


class SuiteConfigWarning(UserWarning):
    """Warning emitted for non-fatal suite document issues.

    Used when a document contains keys the model does not know or
    declares conflicting test roots, and the parser is not strict.
    """


class SuiteConfigError(Exception):
    """Base exception for all resmoke-suites errors.

    Attributes:
        message: Human-readable error description.
        location: Where in the source the error occurred, if known.
        snippet: YAML fragment showing the failing element, if any.
    """

    def __init__(self, message: str, *,
                 location: SourceLocation | None = None,
                 snippet: str | None = None) -> None:
        self.message = message
        self.location = location
        self.snippet = snippet

        super().__init__(message)

    def __str__(self) -> str:
        lines = [self.message]
        if self.location is not None:
            lines.append(f'{LOCATION_INDENT}{self.location}')
        if self.snippet:
            lines.extend(
                f'{SNIPPET_INDENT}{line}'
                for line in self.snippet.splitlines()
                if line.strip()
            )

        return linesep.join(lines)


class ParseError(SuiteConfigError):
    """Error raised when a text can not be parsed into a suite config.

    Covers malformed YAML as well as documents that do not map onto
    the suite config model. The offending text is kept on the error.
    """

    def __init__(self, message: str, *,
                 location: SourceLocation | None = None,
                 snippet: str | None = None,
                 text: str | None = None) -> None:
        self.text = text

        super().__init__(message, location=location, snippet=snippet)

    @classmethod
    def from_element(cls, message: str, element: Any, *,  # noqa: ANN401
                     node: 'Node | None' = None,
                     filename: str | None = None,
                     text: str | None = None) -> 'Self':
        """Create a parse error pointing at a document element.

        Args:
            message: Human-readable error description.
            element: Document fragment shown in the snippet.
            node: YAML node of the element, used for its location.
            filename: Source name of the document.
            text: The text that failed to parse.

        Returns:
            ParseError located at the element.
        """
        return cls(
            message,
            location=SourceLocation.from_mark(node.start_mark if node else None, filename),
            snippet=render_snippet(element),
            text=text,
        )

    @classmethod
    def from_yaml_error(cls, error: 'MarkedYAMLError', *,
                        filename: str | None = None,
                        text: str | None = None) -> 'Self':
        """Create a parse error from a YAML parsing failure.

        Args:
            error: Exception raised by the YAML parser.
            filename: Source name of the document.
            text: The text that failed to parse.

        Returns:
            ParseError pointing at the YAML problem.
        """
        message = 'Invalid YAML'
        if error.problem:
            message += f': {error.problem}'

        mark = error.problem_mark

        return cls(
            message,
            location=SourceLocation.from_mark(mark, filename),
            snippet=mark.get_snippet(indent=0) if mark is not None else None,
            text=text,
        )

    @classmethod
    def from_pydantic_error(cls, error: 'ValidationError', *,
                            document: dict[str, Any],
                            node: 'Node | None' = None,
                            filename: str | None = None,
                            text: str | None = None) -> 'Self':
        """Create a parse error from a Pydantic validation failure.

        The first validation issue is reported, located at the deepest
        element of its path that exists in the document. A missing key
        resolves to the mapping it is missing from.

        Args:
            error: ValidationError raised by Pydantic.
            document: Loaded document data.
            node: Root YAML node of the document.
            filename: Source name of the document.
            text: The text that failed to parse.

        Returns:
            ParseError representing the validation failure.
        """
        issues = error.errors(include_url=False, include_input=False)
        if not issues:
            return cls('Validation error', location=SourceLocation(filename), text=text)

        path = issues[0]['loc']
        message = next(
            (line.strip() for line in issues[0]['msg'].splitlines() if line.strip()),
            'Validation error',
        )

        return cls.from_element(
            f'{message} at {'.'.join(map(str, path)) or 'document'}',
            select_element(document, path),
            node=find_node(node, path),
            filename=filename,
            text=text,
        )


class SerializationError(SuiteConfigError):
    """Error raised when a suite config can not be serialized.

    Models only hold values validated on parse, so this indicates
    a programming error rather than a user-facing condition.
    """
