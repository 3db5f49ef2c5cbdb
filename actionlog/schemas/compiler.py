"""Schema compilation capability.

The record manager does not know how schemas are expressed. It receives
a SchemaCompiler and keeps whatever validator the compiler returns.
"""

from collections.abc import Callable
from typing import Any, Protocol, runtime_checkable

from pydantic import BaseModel, ValidationError

Validator = Callable[[dict[str, Any]], "bool | list[str]"]


@runtime_checkable
class SchemaCompiler(Protocol):
    """Turns a schema definition into a validator callable.

    The validator returns True for valid values or a list of
    human-readable error strings.
    """

    def compile(self, schema: Any) -> Validator:
        ...


class PydanticSchemaCompiler:
    """Compiles pydantic model classes into record validators."""

    def compile(self, schema: Any) -> Validator:
        if not (isinstance(schema, type) and issubclass(schema, BaseModel)):
            raise TypeError(
                f"Expected a pydantic model class, got {type(schema).__name__}"
            )

        def validate(values: dict[str, Any]) -> bool | list[str]:
            try:
                schema.model_validate(values)
            except ValidationError as exc:
                return [
                    f"{'.'.join(str(part) for part in error['loc']) or '<root>'}: {error['msg']}"
                    for error in exc.errors()
                ]
            return True

        return validate
