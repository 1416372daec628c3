import re
from typing import Annotated, Any, Dict, Optional, Sequence, Union

import pydantic
from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt, StrictStr, field_validator

from .errors import ValidationError

# Request schema, payload checks and query-string helpers shared by the
# route logic.

# Rules in the order they are reported; only the first failure is returned
FIELD_MESSAGES: Dict[str, str] = {
    "name": "Product name is required and must be a non-empty string.",
    "price": "Product price is required and must be a positive number.",
    "category": "Product category is required and must be a non-empty string.",
}

Price = Union[
    Annotated[StrictInt, Field(gt=0)],
    Annotated[StrictFloat, Field(gt=0, allow_inf_nan=False)],
]


class ProductIn(BaseModel):
    """Create/update body. Fields other than the three checked ones pass through."""

    model_config = ConfigDict(extra="allow")

    name: StrictStr
    price: Price
    category: StrictStr

    @field_validator("name", "category")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v


def product_error_message(errors: Sequence[Dict[str, Any]]) -> Optional[str]:
    """Map pydantic errors on a ProductIn body to the first failing rule's message.

    Errors located on the body as a whole (not an object, empty, wrong
    content type) count as a missing name.
    """
    failed = set()
    for err in errors:
        loc = list(err.get("loc", ()))
        if loc and loc[0] == "body":
            loc = loc[1:]
        if not loc:
            failed.add("name")
        elif loc[0] in FIELD_MESSAGES:
            failed.add(loc[0])
    for field in FIELD_MESSAGES:
        if field in failed:
            return FIELD_MESSAGES[field]
    return None


def validate_product(payload: Any) -> ProductIn:
    try:
        return ProductIn.model_validate(payload)
    except pydantic.ValidationError as exc:
        raise ValidationError(product_error_message(exc.errors()))


_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_int_param(value: Optional[str], default: int) -> int:
    """Parse a leading integer from a query value ("2", "2abc", "-1").

    Missing, unparsable and zero values give ``default``.
    """
    if value is None:
        return default
    m = _LEADING_INT.match(value)
    if not m:
        return default
    n = int(m.group(1))
    return n or default
