"""CLI utilities for resmoke suite documents.

Wraps the library for use from shell scripts and CI tasks: validating
suite files, deriving suites that run a different set of tests, and
printing the JSON Schema of suite documents.
"""

from logging import DEBUG, WARNING, basicConfig
from pathlib import Path
from typing import TYPE_CHECKING

from click import ClickException, Context, argument, echo, group, option, pass_context
from click import Path as PathParam

from resmoke_suites.core import SuiteParser
from resmoke_suites.errors import SuiteConfigError
from resmoke_suites.jsonschema import SchemaGenerator
from resmoke_suites.models import ParserSettings

if TYPE_CHECKING:
    from resmoke_suites.schema import SuiteConfig

LOG_FORMAT = '[%(asctime)s] %(levelname)s %(name)s: %(message)s'

InputFilepath = PathParam(
    dir_okay=False,
    exists=True,
    readable=True,
    path_type=Path,
)

OutputFilepath = PathParam(
    dir_okay=False,
    writable=True,
    path_type=Path,
)


@group(help='Command-line utilities for resmoke suite documents.')
@option(
    '--strict',
    is_flag=True,
    default=False,
    help='Fail on unknown keys and conflicting root tests instead of warning.',
)
@option(
    '-v', '--verbose',
    is_flag=True,
    default=False,
    help='Enable debug logging.',
)
@pass_context
def cli(ctx: Context, strict: bool, verbose: bool) -> None:
    """Root CLI group for resmoke-suites tools."""
    basicConfig(level=DEBUG if verbose else WARNING, format=LOG_FORMAT)

    settings = ParserSettings()
    if strict:
        settings = settings.model_copy(update={'strict': strict})

    ctx.obj = SuiteParser(settings=settings)


def _load(parser: SuiteParser, suite: Path) -> 'SuiteConfig':
    """Parse a suite file, converting failures into CLI errors.

    Args:
        parser: Suite document parser.
        suite: Path to the suite file.

    Returns:
        Parsed suite configuration.

    Raises:
        ClickException: If the suite file is not a valid suite document.
    """
    try:
        return parser.parse_file(suite)
    except SuiteConfigError as error:
        raise ClickException(str(error)) from error


@cli.command(
    name='schema',
    help='Print the JSON Schema of suite documents to standard output.',
)
def print_schema() -> None:
    """Generate and print the JSON Schema."""
    echo(SchemaGenerator.make_schema())


@cli.command(
    name='check',
    help='Validate a suite file.',
)
@argument('suite', type=InputFilepath)
@pass_context
def check_suite(ctx: Context, suite: Path) -> None:
    """Validate a suite file and report its test kind.

    Args:
        ctx: Click context holding the suite parser.
        suite: Path to the suite file.
    """
    config = _load(ctx.obj, suite)
    echo(f'{suite}: valid {config.test_kind} suite')


@cli.command(
    name='derive',
    help=(
        'Derive a suite running other tests. '
        'Excluded tests take precedence over tests to run.'
    ),
)
@option(
    '-r', '--run', 'run_tests',
    multiple=True,
    help='Test to run instead of the root tests. May be repeated.',
)
@option(
    '-x', '--exclude', 'exclude_tests',
    multiple=True,
    help='Test to exclude in addition to excluded files. May be repeated.',
)
@option(
    '-o', '--output',
    type=OutputFilepath,
    default=None,
    help='Output path for the derived suite. Defaults to standard output.',
)
@argument('suite', type=InputFilepath)
@pass_context
def derive_suite(ctx: Context, suite: Path, run_tests: tuple[str, ...],
                 exclude_tests: tuple[str, ...], output: Path | None) -> None:
    """Derive a suite running other tests.

    Args:
        ctx: Click context holding the suite parser.
        suite: Path to the source suite file.
        run_tests: Tests to run; empty when not given.
        exclude_tests: Tests to exclude; empty when not given.
        output: Optional output path.
    """
    parser: SuiteParser = ctx.obj

    config = _load(parser, suite).with_new_tests(
        run_tests=run_tests or None,
        exclude_tests=exclude_tests or None,
    )

    if output is None:
        echo(parser.dump(config), nl=False)
        return

    parser.dump_file(config, output)


if __name__ == '__main__':
    cli()
