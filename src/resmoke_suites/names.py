"""Suite document primitive types.

This module defines strongly-typed aliases for identifiers that appear
in suite documents: test paths, tags and test kinds. All of them are
strict strings: YAML numbers, booleans or binary values are rejected
rather than converted.
"""

from typing import Annotated

from pydantic import Field, Strict

TestPath = Annotated[
    str, Strict(), Field(
        title='Test path',
        description=(
            'Path to a test file or a glob pattern matching test files, '
            'relative to the repository root.'
        ),
        examples=[
            'jstests/core/add1.js',
            'jstests/auth/*.js',
        ],
    ),
]

Tag = Annotated[
    str, Strict(), Field(
        title='Test tag',
        description='Label attached to a test and used for selection.',
        examples=[
            'requires_fcv_70',
            'assumes_standalone_mongod',
        ],
    ),
]

TestKind = Annotated[
    str, Strict(), Field(
        title='Test kind',
        description=(
            'Kind of tests the suite runs. '
            'Selects the test case class used by the runner.'
        ),
        examples=[
            'js_test',
            'cpp_unit_test',
        ],
    ),
]
