"""Test selection models.

This module defines the selector section of a suite document, which
describes the tests a suite is made of, and the two forms a root test
list can take.

The root test list is stored untagged and flattened into the selector:
a document carries either a `root` key (a file listing the tests) or
a `roots` key (the tests themselves), side by side with the other
selector keys.
"""

from types import NoneType
from typing import TYPE_CHECKING, Any

from pydantic import (
    Field,
    StrictFloat,
    StrictInt,
    StrictStr,
    ValidationError,
    field_serializer,
    model_validator,
)

from resmoke_suites.models import SchemaModel
from resmoke_suites.names import Tag, TestPath  # noqa: TC001
from resmoke_suites.values import Value  # noqa: TC001

if TYPE_CHECKING:
    from pydantic import GetJsonSchemaHandler, SerializationInfo
    from pydantic.json_schema import JsonSchemaValue
    from pydantic_core.core_schema import CoreSchema

#: Tag matching expression: a single tag or a nested expression
#: such as `{$allOf: [tag1, {$not: tag2}]}`.
type TagExpression = StrictStr | dict[str, Value]


class RootFile(SchemaModel):
    """Root test list stored in an external file."""

    root: TestPath = Field(
        title='Root file',
        description='Path to a file containing the list of root tests.',
    )


class RootList(SchemaModel):
    """Root test list given inline."""

    roots: list[TestPath] = Field(
        title='Root tests',
        description='List of root test paths or glob patterns.',
    )


#: Root test list of a selector.
type TestRoot = RootFile | RootList

#: Variants of a root test list in decoding order.
TEST_ROOT_VARIANTS: tuple[type[RootFile], type[RootList]] = (RootFile, RootList)

#: Document keys owned by the root test list.
TEST_ROOT_KEYS = frozenset(
    key
    for variant in TEST_ROOT_VARIANTS
    for key in variant.model_fields
)


def decode_test_root(data: dict[str, Any]) -> TestRoot | None:
    """Decode an untagged root test list from selector keys.

    Variants are tried in order; the first one that validates wins.
    Keys of other variants are left to the caller.

    Args:
        data: Selector mapping holding root test list keys.

    Returns:
        Decoded root test list, or `None` if no root test list
        key is present.

    Raises:
        ValueError: If a root test list key is present but no
            variant matches it.
    """
    fragment = {
        key: value
        for key, value in data.items()
        if key in TEST_ROOT_KEYS
    }
    if not fragment:
        return None

    problems = []
    for variant in TEST_ROOT_VARIANTS:
        try:
            return variant.model_validate(fragment)
        except ValidationError as error:
            problems.extend(
                f'{'.'.join(map(str, item['loc']))}: {item['msg']}'
                for item in error.errors(include_url=False)
            )

    raise ValueError(
        f'Root tests match neither `root` nor `roots` ({'; '.join(problems)})',
    )


class Selector(SchemaModel):
    """Selection of the tests a suite runs.

    All fields are optional. Combinations that are inconsistent by
    convention (for example, both `include_tags` and `exclude_tags`)
    are represented as they are and not rejected.
    """

    exclude_tags: TagExpression | None = Field(
        default=None,
        title='Excluded tag expression',
        description=(
            'Tag matching expression the tags of selected tests must not match. '
            'Incompatible with `include_tags`.'
        ),
    )

    exclude_files: list[TestPath] | None = Field(
        default=None,
        title='Excluded files',
        description='Paths or glob patterns of tests that must not be selected.',
    )

    exclude_with_any_tags: frozenset[Tag] | None = Field(
        default=None,
        title='Excluded tags',
        description='Tags no selected test can have.',
    )

    group_size: StrictInt | None = Field(
        default=None,
        ge=0,
        title='Group size',
        description='Number of tests per group.',
    )

    group_count_multiplier: StrictFloat | None = Field(
        default=None,
        title='Group count multiplier',
        description='Multiplier applied to the number of test groups.',
    )

    include_with_any_tags: list[Tag] | None = Field(
        default=None,
        title='Included tags',
        description='Tags every selected test must have at least one of.',
    )

    include_files: list[TestPath] | None = Field(
        default=None,
        title='Included files',
        description='Paths or glob patterns selected tests must match.',
    )

    include_tags: TagExpression | None = Field(
        default=None,
        title='Included tag expression',
        description=(
            'Tag matching expression the tags of selected tests must match. '
            'Incompatible with `exclude_tags`.'
        ),
    )

    test_root: TestRoot | None = Field(
        default=None,
        exclude=True,
        title='Root tests',
        description=(
            'Base set of tests before filters are applied. '
            'Stored as a `root` or `roots` key of the selector.'
        ),
    )

    tag_file: StrictStr | None = Field(
        default=None,
        title='Tag file',
        description='Path to a file associating tests to tags.',
    )

    test: TestPath | None = Field(
        default=None,
        title='Single test',
        description='Identifier of a single test to run.',
    )

    @model_validator(mode='before')
    @classmethod
    def unflatten_test_root(cls, data: Any) -> Any:  # noqa: ANN401
        """Move root test list keys into the `test_root` field.

        `test_root` is not a document key: it only accepts decoded
        root test lists, as passed by code building a selector.

        Args:
            data: Raw selector input.

        Returns:
            Selector input with `root`/`roots` replaced by `test_root`.

        Raises:
            ValueError: If root test list keys match no variant, or
                `test_root` holds a raw document value.
        """
        if not isinstance(data, dict):
            return data

        if not isinstance(data.get('test_root'), (*TEST_ROOT_VARIANTS, NoneType)):
            raise ValueError('Root tests are given by `root` or `roots`, not `test_root`')

        if not TEST_ROOT_KEYS & data.keys():
            return data

        return {
            **{
                key: value
                for key, value in data.items()
                if key not in TEST_ROOT_KEYS
            },
            'test_root': decode_test_root(data),
        }

    @field_serializer('exclude_with_any_tags', when_used='unless-none')
    def serialize_tags(self, value: frozenset[str]) -> list[str]:
        """Serialize a tag set as a sorted list."""
        return sorted(value)

    def serialize_extra(self, data: dict[str, Any],
                        info: 'SerializationInfo') -> dict[str, Any]:
        """Flatten the root test list into the selector mapping."""
        if self.test_root is None:
            return data

        return {
            **self.test_root.model_dump(mode=info.mode),
            **data,
        }

    @classmethod
    def known_keys(cls) -> frozenset[str]:
        """Return selector keys, with `root`/`roots` in place of `test_root`."""
        return (super().known_keys() - {'test_root'}) | TEST_ROOT_KEYS

    @classmethod
    def __get_pydantic_json_schema__(cls, core_schema: 'CoreSchema',
                                     handler: 'GetJsonSchemaHandler') -> 'JsonSchemaValue':
        """Describe the root test list as flattened `root`/`roots` keys.

        Args:
            core_schema: A `pydantic-core` CoreSchema.
            handler: Call into Pydantic's internal JSON schema generation.

        Returns:
            A JSON schema, as a Python object.
        """
        json_schema = super().__get_pydantic_json_schema__(core_schema, handler)

        schema = handler.resolve_ref_schema(json_schema)
        properties = schema.setdefault('properties', {})
        properties.pop('test_root', None)

        for variant in TEST_ROOT_VARIANTS:
            properties.update(variant.model_json_schema().get('properties', {}))

        schema['not'] = {'required': sorted(TEST_ROOT_KEYS)}

        return json_schema
