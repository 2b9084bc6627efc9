"""JSON Schema management."""

from functools import cache
from json import dumps
from typing import TYPE_CHECKING

from pydantic.json_schema import GenerateJsonSchema

from resmoke_suites.schema import SuiteConfig

if TYPE_CHECKING:
    from pydantic.json_schema import JsonSchemaMode, JsonSchemaValue
    from pydantic_core.core_schema import CoreSchema


class SchemaGenerator(GenerateJsonSchema):
    """JSON Schema generator for suite documents.

    Marks the generated schema as a standalone document: it declares
    its dialect and describes suite files rather than the model class.
    """

    def generate(self, schema: 'CoreSchema',
                 mode: 'JsonSchemaMode' = 'validation') -> 'JsonSchemaValue':
        """Generate a JSON Schema describing suite documents."""
        json_schema = super().generate(schema, mode=mode)

        json_schema.update({
            'title': 'resmoke-suites',
            'description': 'JSON Schema for resmoke suite documents',
            '$schema': self.schema_dialect,
        })

        return json_schema

    @classmethod
    @cache
    def make_schema(cls, indent: int | str | None = 4) -> str:
        """Generate the JSON Schema for suite documents.

        Args:
            indent: Indentation level used for JSON formatting.

        Returns:
            Serialized JSON Schema string.
        """
        return dumps(
            SuiteConfig.model_json_schema(schema_generator=cls),
            ensure_ascii=False,
            sort_keys=True,
            indent=indent,
        )
