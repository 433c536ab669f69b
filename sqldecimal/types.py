"""Pydantic field type for decimal column values.

Column text arrives in wire format and leaves as MySQL-style text, so the
field validates through new_from_mysql and serializes with string_mysql:

    from pydantic import BaseModel
    from sqldecimal.types import SqlDecimal

    class Row(BaseModel):
        amount: SqlDecimal

    Row.model_validate({"amount": "12.50"}).amount   # Decimal(1250, -2)
"""

from typing import Annotated, Any

from pydantic import PlainSerializer, PlainValidator, WithJsonSchema

from sqldecimal.parsing import new_from_mysql
from sqldecimal.value import Decimal

__all__ = ["SqlDecimal", "validate_decimal", "serialize_decimal"]


def validate_decimal(value: Any) -> Decimal:
    """Validate a column value as a Decimal.

    Args:
        value: Decimal, int, or wire text (str or bytes)

    Returns:
        The Decimal

    Raises:
        ValueError: If value is of an unsupported type or is malformed text
    """
    if isinstance(value, Decimal):
        return value

    # bool is an int subclass but never a decimal column value
    if isinstance(value, bool):
        raise ValueError("Decimal cannot be a boolean")
    if isinstance(value, int):
        return Decimal.from_int(value)

    if isinstance(value, (str, bytes)):
        return new_from_mysql(value)

    raise ValueError(f"Decimal must be string, bytes or int, got {type(value).__name__}")


def serialize_decimal(value: Decimal) -> str:
    """Render a Decimal as MySQL-style text."""
    return value.string_mysql()


# Fixed-point decimal, validated from wire text and serialized as MySQL text
SqlDecimal = Annotated[
    Decimal,
    PlainValidator(validate_decimal),
    PlainSerializer(serialize_decimal, return_type=str),
    WithJsonSchema({"type": "string", "description": "Fixed-point decimal as text"}),
]
