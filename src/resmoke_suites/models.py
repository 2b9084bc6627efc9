"""Base Pydantic models for suite document elements.

This module defines the foundational model classes used by all suite
document structures. It enforces immutability and omission of unset
fields, so that a parsed document serializes back to the same set of
keys it was read from.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_serializer
from pydantic import SerializationInfo, SerializerFunctionWrapHandler  # noqa: TC002
from pydantic_settings import BaseSettings, SettingsConfigDict


class SchemaModel(BaseModel):
    """Base immutable model for all suite document elements.

    Design principles enforced by this model:
        - Immutability: elements cannot be modified after creation.
          Derived documents are produced as new copies.
        - Tolerant schema: unknown keys are ignored by the model itself.
          Reporting of unknown keys is left to the parser, which knows
          whether it runs in strict mode.
        - Omission: a field holding `None` is never serialized, so a
          field absent on load stays absent on dump.

    All suite document models must inherit from this class.
    """

    model_config = ConfigDict(
        frozen=True,
        extra='ignore',
    )

    @model_serializer(mode='wrap')
    def serialize_model(self, handler: SerializerFunctionWrapHandler,
                        info: SerializationInfo) -> dict[str, Any]:
        """Serialize the model omitting fields that are not set.

        Only top-level fields of this model holding `None` are dropped.
        `None` values nested inside field values are data and are kept.

        Args:
            handler: Pydantic serialization handler for the model.
            info: Serialization info (mode, include and exclude options).

        Returns:
            A mapping of field names to serialized values.
        """
        data = handler(self)
        fields = type(self).model_fields

        data = {
            key: value
            for key, value in data.items()
            if key not in fields or getattr(self, key) is not None
        }

        return self.serialize_extra(data, info)

    def serialize_extra(self, data: dict[str, Any],
                        info: SerializationInfo) -> dict[str, Any]:  # noqa: ARG002
        """Hook for models contributing keys beyond their own fields.

        Args:
            data: Serialized fields of the model.
            info: Serialization info.

        Returns:
            Serialized mapping, unchanged by default.
        """
        return data

    @classmethod
    def known_keys(cls) -> frozenset[str]:
        """Return document keys recognized by the model.

        Returns:
            Set of field names accepted at the model level.
        """
        return frozenset(cls.model_fields)


class SettingsModel(BaseSettings):
    """Base immutable model for runtime settings.

    Design principles enforced by this model:
        - Immutability: resolved settings cannot be modified after creation.
        - Tolerant schema handling: unknown or extra fields are ignored.
          This allows the surrounding environment to contain unrelated
          variables without breaking configuration resolution.
    """

    model_config = SettingsConfigDict(
        frozen=True,
        extra='ignore',
    )


class ParserSettings(SettingsModel):
    """Settings of suite document parsing and serialization.

    Values are resolved from `RESMOKE_SUITES_*` environment variables
    unless passed explicitly.
    """

    model_config = SettingsConfigDict(
        env_prefix='RESMOKE_SUITES_',
    )

    strict: bool = Field(
        default=False,
        title='Strict mode',
        description=(
            'Raise on unknown keys and on conflicting test roots '
            'instead of emitting warnings.'
        ),
    )

    sort_keys: bool = Field(
        default=False,
        title='Sort keys',
        description='Sort mapping keys when serializing documents.',
    )

    indent: int = Field(
        default=2,
        ge=2,
        title='Indentation',
        description='Number of spaces used for nested YAML blocks.',
    )

    width: int = Field(
        default=120,
        gt=0,
        title='Line width',
        description='Preferred maximum line width of serialized YAML.',
    )
