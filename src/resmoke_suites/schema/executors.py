"""Test execution models.

The executor section of a suite document describes how selected tests
are run: the fixture to set up, hooks to run between tests, archival
of data files and per-test configuration. Its contents are consumed by
the test runner and carried through here verbatim.
"""

from pydantic import Field

from resmoke_suites.models import SchemaModel
from resmoke_suites.values import Value  # noqa: TC001


class Executor(SchemaModel):
    """Execution settings of a suite, kept as opaque values."""

    archive: Value = Field(
        default=None,
        title='Archival settings',
        description='Settings for archiving data files of failed tests.',
    )

    hooks: list[Value] | None = Field(
        default=None,
        title='Hooks',
        description='Hooks run before, after, or between tests.',
    )

    config: Value = Field(
        default=None,
        title='Test configuration',
        description='Configuration passed to every test case.',
    )

    fixture: Value = Field(
        default=None,
        title='Fixture',
        description='Fixture the tests run against.',
    )
