"""
Shared pydantic building blocks.

All API schemas speak camelCase on the wire (``companyName``) while keeping
snake_case attributes in Python. Input accepts either spelling.
"""

from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Annotated, Any, ClassVar, Tuple

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    Field,
    PlainSerializer,
    StringConstraints,
    model_validator,
)
from pydantic.alias_generators import to_camel

CENTS = Decimal("0.01")


class APIModel(BaseModel):
    """Base schema with camelCase aliases"""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
        from_attributes=True,
    )


class PatchModel(APIModel):
    """
    Partial update. Omitted fields stay as they are; fields named in
    NOT_NULL may be omitted but not cleared.
    """
    NOT_NULL: ClassVar[Tuple[str, ...]] = ()

    @model_validator(mode="after")
    def reject_cleared_fields(self):
        for name in self.NOT_NULL:
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self


# Amount accepted on input: at most 10 digits, 2 of them decimals
AmountIn = Annotated[Decimal, Field(ge=0, max_digits=10, decimal_places=2)]

# Aggregated money value: exact inside, a JSON number outside
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


def format_amount(value: Any) -> Any:
    """
    Render a numeric amount as its stored decimal string ("1250.00").

    Strings are passed through untouched, so a corrupt stored value reaches
    the aggregation code as-is instead of failing the whole read.
    """
    if isinstance(value, str) or value is None:
        return value
    try:
        return str(Decimal(str(value)).quantize(CENTS))
    except InvalidOperation:
        return str(value)


def ensure_utc(value: datetime) -> datetime:
    """Naive datetimes are taken to be UTC; aware ones are converted to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


UTCDateTime = Annotated[datetime, AfterValidator(ensure_utc)]

# ISO 4217 code, stored upper-case
Currency = Annotated[str, StringConstraints(min_length=3, max_length=3, to_upper=True)]
