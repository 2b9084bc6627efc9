"""YAML suite document parser.

This module defines the parser responsible for turning suite document
text into validated `SuiteConfig` models and back.

The parser coordinates:
- YAML loading with a configurable loader class;
- detection of keys the model does not know, reported as warnings
  or, in strict mode, as errors;
- validation against the suite schema;
- conversion of YAML and validation failures into `ParseError`.
"""

from logging import getLogger
from os import linesep
from os.path import dirname
from pathlib import Path
from typing import TYPE_CHECKING, Any
from warnings import warn

from pydantic import ValidationError
from yaml import SafeLoader, YAMLError, safe_dump
from yaml.error import MarkedYAMLError

from resmoke_suites.errors import (
    ParseError,
    SerializationError,
    SourceLocation,
    SuiteConfigWarning,
    find_node,
)
from resmoke_suites.models import ParserSettings
from resmoke_suites.schema import Executor, Selector, SuiteConfig
from resmoke_suites.schema.selectors import TEST_ROOT_KEYS

if TYPE_CHECKING:
    from io import TextIOBase
    from os import PathLike

    from yaml import BaseLoader, Node

logger = getLogger(__name__)

#: Directory of this package; warnings are attributed to code outside of it.
PACKAGE_PATH = dirname(dirname(__file__))

#: Sections of a suite document checked for unknown keys.
SECTIONS: tuple[tuple[str, type[Selector] | type[Executor]], ...] = (
    ('selector', Selector),
    ('executor', Executor),
)


class SuiteParser:
    """Suite document parser and serializer.

    The parser holds only its loader class and resolved settings,
    so a single instance may be shared freely.

    Attributes:
        loader: YAML loader class used to read documents.
        settings: Parsing and serialization settings.
    """

    def __init__(self, loader: type['BaseLoader'] = SafeLoader,
                 settings: ParserSettings | None = None) -> None:
        """Initialize the suite parser.

        Args:
            loader: YAML loader class. Defaults to `yaml.SafeLoader`.
            settings: Parser settings. Resolved from the environment
                when not provided.
        """
        self.loader = loader
        self.settings = settings or ParserSettings()

    @property
    def strict_mode(self) -> bool:
        """Whether document issues raise instead of warning."""
        return self.settings.strict

    def parse(self, content: 'TextIOBase | str', *,
              filename: str | None = None) -> SuiteConfig:
        """Parse a YAML suite document.

        Args:
            content: YAML content as a string or file-like object.
            filename: Optional source name used in error messages.

        Returns:
            Validated suite configuration.

        Raises:
            ParseError: If the YAML is malformed, the document is empty
                or not a mapping, or it does not match the suite schema.
        """
        text = content if isinstance(content, str) else content.read()

        loader = self.loader(text)
        try:
            node = loader.get_single_node()
            document = None if node is None else loader.construct_document(node)

        except MarkedYAMLError as base:
            raise self.report(ParseError.from_yaml_error(
                base,
                filename=filename,
                text=text,
            )) from base

        except YAMLError as base:
            raise self.report(ParseError(
                f'Invalid YAML: {base}',
                location=SourceLocation(filename),
                text=text,
            )) from base

        finally:
            loader.dispose()

        if document is None:
            raise self.report(ParseError(
                'Suite document is empty',
                location=SourceLocation(filename),
                text=text,
            ))

        if not isinstance(document, dict):
            raise self.report(ParseError.from_element(
                'Suite document must be a mapping',
                document,
                node=node,
                filename=filename,
                text=text,
            ))

        if error := self.check_document(document, node=node, filename=filename, text=text):
            raise self.report(error)

        try:
            return SuiteConfig.model_validate(document)

        except ValidationError as base:
            raise self.report(ParseError.from_pydantic_error(
                base,
                document=document,
                node=node,
                filename=filename,
                text=text,
            )) from base

    def parse_file(self, path: 'str | PathLike[str]') -> SuiteConfig:
        """Read and parse a suite document file.

        Args:
            path: Path to a UTF-8 encoded YAML file.

        Returns:
            Validated suite configuration.

        Raises:
            ParseError: If the file content is not a valid suite document.
            OSError: If the file can not be read.
        """
        path = Path(path)
        with path.open('rt', encoding='utf-8') as content:
            return self.parse(content, filename=path.as_posix())

    def dump(self, config: SuiteConfig) -> str:
        """Serialize a suite configuration to YAML.

        Only fields that are set are written.

        Args:
            config: Suite configuration to serialize.

        Returns:
            YAML document text.

        Raises:
            SerializationError: If the configuration can not be serialized.
        """
        try:
            return safe_dump(
                config.model_dump(mode='python'),
                sort_keys=self.settings.sort_keys,
                indent=self.settings.indent,
                width=self.settings.width,
                default_flow_style=False,
                allow_unicode=True,
            )

        except Exception as base:
            raise SerializationError('Failed to serialize suite configuration') from base

    def dump_file(self, config: SuiteConfig, path: 'str | PathLike[str]') -> None:
        """Serialize a suite configuration into a file.

        Args:
            config: Suite configuration to serialize.
            path: Output file path; parent directories are created.

        Raises:
            SerializationError: If the configuration can not be serialized.
            OSError: If the file can not be written.
        """
        content = self.dump(config)

        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open('wt', encoding='utf-8') as output:
            output.write(content)

    def check_document(self, document: dict[str, Any], *,
                       node: 'Node | None' = None,
                       filename: str | None = None,
                       text: str | None = None) -> ParseError | None:
        """Check a raw document for keys the schema does not model.

        Unknown keys are removed from the document in place, so that
        a serialized configuration never carries them. Conflicting
        `root` and `roots` keys resolve to `root`.

        Args:
            document: Raw suite document mapping.
            node: Root YAML node of the document.
            filename: Optional source name used in error messages.
            text: The text the document was loaded from.

        Returns:
            ParseError on strict mode if any issue is found,
                otherwise `None` with producing warnings.
        """
        sections: list[tuple[tuple[str, ...], dict[str, Any], frozenset[str]]] = [
            ((), document, SuiteConfig.known_keys()),
        ]
        sections.extend(
            ((name,), document[name], model.known_keys())
            for name, model in SECTIONS
            if isinstance(document.get(name), dict)
        )

        for path, section, known in sections:
            for key in sorted(set(section) - known, key=str):
                qualname = '.'.join(map(str, (*path, key)))
                if error := self.emit_issue(ParseError.from_element(
                    f'Unknown key {qualname!r} is ignored',
                    {key: section[key]},
                    node=find_node(node, (*path, key)),
                    filename=filename,
                    text=text,
                )):
                    return error
                logger.debug('Dropping unknown key %r of suite document', qualname)
                del section[key]

            if path == ('selector',) and TEST_ROOT_KEYS <= section.keys():
                if error := self.emit_issue(ParseError.from_element(
                    "Selector declares both 'root' and 'roots', 'roots' is ignored",
                    {key: section[key] for key in sorted(TEST_ROOT_KEYS)},
                    node=find_node(node, (*path, 'roots')),
                    filename=filename,
                    text=text,
                )):
                    return error
                del section['roots']

        return None

    def emit_issue(self, issue: ParseError) -> ParseError | None:
        """Emit a document warning or return the exception.

        Warnings are attributed to the first caller outside of this
        package.

        Args:
            issue: Issue description, located in the document.

        Returns:
            The issue on strict mode, otherwise `None`
                with producing a SuiteConfigWarning.
        """
        if self.strict_mode:
            return issue

        warn(
            f'{issue.message} {issue.location}',
            category=SuiteConfigWarning,
            skip_file_prefixes=(PACKAGE_PATH,),
        )

        return None

    @staticmethod
    def report(error: ParseError) -> ParseError:
        """Log a parse failure together with the offending text.

        Args:
            error: Parse error to report.

        Returns:
            The same error, to be raised by the caller.
        """
        logger.error(
            'Failed to parse YAML for suite configuration: %s%s%s',
            error.message, linesep, error.text,
        )

        return error
