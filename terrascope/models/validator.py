"""
terrascope/models/validator.py

Defines a utility function for validating Python objects against
a pydantic-based type using TypeAdapter.
"""

from typing import Any, Type, TypeVar
from pydantic import ValidationError, TypeAdapter

T = TypeVar("T")


def validate_type(obj: Any, expected_type: Type[T]) -> T:
    """
    Validates a decoded JSON object against the expected pydantic-based type.

    Args:
        obj (Any): The object to validate, typically the output of `json.loads`.
        expected_type (Type[T]): The type (pydantic model or typing construct).

    Returns:
        T: The validated object, as an instance of the expected type.

    Raises:
        ValueError: If validation fails. The pydantic error is chained and the
            message names the first failing location.
    """
    try:
        return TypeAdapter(expected_type).validate_python(obj)
    except ValidationError as e:
        first = e.errors()[0]
        loc = ".".join(str(part) for part in first["loc"]) or "<root>"
        name = getattr(expected_type, "__name__", str(expected_type))
        raise ValueError(
            f"does not match {name}: {e.error_count()} validation error(s), "
            f"first at {loc}: {first['msg']}"
        ) from e
