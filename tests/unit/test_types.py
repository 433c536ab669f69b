"""Tests for the pydantic SqlDecimal field type."""

import pytest
from pydantic import BaseModel, ValidationError

from sqldecimal import Decimal, DecimalParseError
from sqldecimal.types import SqlDecimal, serialize_decimal, validate_decimal
from tests.helpers import D, assert_decimal


class Row(BaseModel):
    """Minimal row with decimal columns."""

    amount: SqlDecimal
    fee: SqlDecimal | None = None


class TestValidateDecimal:
    """Tests for the validator function."""

    def test_text(self):
        assert_decimal(validate_decimal("12.50"), 1250, -2)
        assert_decimal(validate_decimal(b"-1.5"), -15, -1)

    def test_int(self):
        assert_decimal(validate_decimal(42), 42, 0)

    def test_decimal_passthrough(self):
        d = D("1.5")
        assert validate_decimal(d) is d

    def test_rejects_bool(self):
        with pytest.raises(ValueError, match="boolean"):
            validate_decimal(True)

    def test_rejects_float(self):
        with pytest.raises(ValueError, match="float"):
            validate_decimal(1.5)

    def test_rejects_scientific_text(self):
        """Column text uses the wire grammar, which has no exponent."""
        with pytest.raises(DecimalParseError):
            validate_decimal("1e5")

    def test_serialize(self):
        assert serialize_decimal(Decimal(1250, -2)) == "12.5"


class TestSqlDecimalModel:
    """Tests for SqlDecimal inside a pydantic model."""

    def test_parse_text(self):
        row = Row.model_validate({"amount": "12.50"})
        assert isinstance(row.amount, Decimal)
        assert_decimal(row.amount, 1250, -2)
        assert row.fee is None

    def test_parse_optional(self):
        row = Row.model_validate({"amount": 3, "fee": "0.25"})
        assert row.amount == D("3")
        assert row.fee == D("0.25")

    def test_invalid_text(self):
        with pytest.raises(ValidationError) as exc_info:
            Row.model_validate({"amount": "1.2.3"})
        assert "too many .s" in str(exc_info.value)

    def test_invalid_type(self):
        with pytest.raises(ValidationError):
            Row.model_validate({"amount": 1.5})

    def test_dump(self):
        row = Row.model_validate({"amount": "12.50", "fee": "-0.100"})
        assert row.model_dump() == {"amount": "12.5", "fee": "-0.1"}

    def test_dump_json(self):
        row = Row.model_validate({"amount": "12.50"})
        assert row.model_dump_json() == '{"amount":"12.5","fee":null}'

    def test_json_schema(self):
        schema = Row.model_json_schema()
        assert schema["properties"]["amount"]["type"] == "string"
