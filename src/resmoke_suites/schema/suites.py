"""Suite configuration model.

A suite configuration is the top-level suite document: the kind of
tests it runs, the selector choosing them and the executor running
them. Suites are immutable; a suite targeting other tests is derived
as a new copy with `SuiteConfig.with_new_tests`.
"""

from typing import TYPE_CHECKING, Self

from pydantic import Field, StrictBool, StrictStr

from resmoke_suites.models import SchemaModel
from resmoke_suites.names import TestKind  # noqa: TC001

from .executors import Executor
from .selectors import RootList, Selector

if TYPE_CHECKING:
    from collections.abc import Sequence
    from io import TextIOBase


class SuiteConfig(SchemaModel):
    """Configuration of a resmoke test suite."""

    matrix_suite: StrictBool | None = Field(
        default=None,
        title='Matrix suite flag',
        description='Marks a suite generated from a suite matrix.',
    )

    description: StrictStr | None = Field(
        default=None,
        title='Description',
        description='Human-readable description of the suite.',
    )

    test_kind: TestKind

    selector: Selector = Field(
        title='Selector',
        description='Selection of the tests the suite runs.',
    )

    executor: Executor = Field(
        title='Executor',
        description='Settings of how the selected tests are run.',
    )

    def with_new_tests(self, run_tests: 'Sequence[str] | None' = None,
                       exclude_tests: 'Sequence[str] | None' = None) -> Self:
        """Create a new suite configuration running other tests.

        Exclusion takes precedence: when `exclude_tests` is given, it is
        appended to the excluded files and `run_tests` is ignored. An
        empty list counts as given.

        Args:
            run_tests: When provided, the new configuration only runs
                these tests. Excluded files are dropped.
            exclude_tests: When provided, the new configuration also
                excludes these tests.

        Returns:
            New suite configuration, independent of this one.
        """
        config = self.model_copy(deep=True)
        selector = config.selector

        if exclude_tests is not None:
            selector = selector.model_copy(update={
                'exclude_files': [
                    *(selector.exclude_files or ()),
                    *exclude_tests,
                ],
            })
        elif run_tests is not None:
            selector = selector.model_copy(update={
                'exclude_files': None,
                'test_root': RootList(roots=list(run_tests)),
            })

        return config.model_copy(update={'selector': selector})

    @classmethod
    def from_yaml(cls, content: 'TextIOBase | str') -> 'SuiteConfig':
        """Parse a suite configuration with the default parser.

        Args:
            content: YAML content as a string or file-like object.

        Returns:
            Parsed suite configuration.

        Raises:
            ParseError: If the content is not a valid suite document.
        """
        from resmoke_suites.core import SuiteParser  # noqa: PLC0415

        return SuiteParser().parse(content)

    def to_yaml(self) -> str:
        """Serialize the suite configuration with the default parser."""
        from resmoke_suites.core import SuiteParser  # noqa: PLC0415

        return SuiteParser().dump(self)
