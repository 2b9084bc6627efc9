"""Core value types for suite documents.

This module defines the recursive value type used to carry opaque,
schema-less parts of a suite document (executor archive, hooks, config
and fixture sections) through parsing and serialization unchanged.
"""

from datetime import date, datetime

#: Scalars are atomic YAML values as produced by a safe YAML loader.
type Scalar = datetime | date | str | bytes | bool | int | float

#: A value is any structured YAML value: a scalar, a list of values,
#: a mapping of values or `None`. Mapping keys are scalars or `None`,
#: as YAML allows.
type Value = Scalar | list['Value'] | dict[Scalar | None, 'Value'] | None
