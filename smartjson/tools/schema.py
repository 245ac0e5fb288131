"""
Shallow type-name schema validation.

A schema maps each expected key to a JSON type name::

    {"name": "string", "age": "number", "tags": "array"}
"""

from dataclasses import dataclass, field
from typing import Any

from .inspection import json_type_name


@dataclass
class SchemaResult:
    """Outcome of validating a document against a schema."""

    valid: bool
    errors: list[str] = field(default_factory=list)


def validate_schema(schema: dict[str, str], data: Any) -> SchemaResult:
    """
    Check that ``data`` has exactly the schema's keys with the named types.

    Reports missing keys, type mismatches and keys the schema does not
    declare. Nested objects are only checked for being objects.
    """
    if not isinstance(data, dict):
        return SchemaResult(
            valid=False,
            errors=[f"data should be object, got {json_type_name(data)}"],
        )

    errors = []
    for key, expected in schema.items():
        if key not in data:
            errors.append(f"'{key}' is missing")
            continue

        actual = json_type_name(data[key])
        if actual != expected:
            errors.append(f"'{key}' should be {expected}, got {actual}")

    for key in data:
        if key not in schema:
            errors.append(f"'{key}' is not defined in schema")

    return SchemaResult(valid=not errors, errors=errors)
