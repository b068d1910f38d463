# backend/app/schemas/base.py
"""
Shared base for API schemas.

The web client speaks camelCase JSON. Schemas are declared with snake_case
fields and serialized by alias; request bodies accept either spelling.
"""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model with camelCase aliases."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


def format_amount(amount: Decimal) -> str:
    """
    Render a monetary Decimal as a plain decimal string.

    Trailing zeros are dropped and exponent notation is never used:
    Decimal("1200.00") -> "1200", Decimal("1200.50") -> "1200.5".
    """
    normalized = amount.normalize()
    if normalized == 0:
        return "0"
    return format(normalized, "f")
