"""
Base class for every domain record.

Python code uses snake_case attribute names; the wire format and
the persisted snapshot use camelCase (costPrice, partyId, subTotal).
Unknown keys are dropped on validation so an old or hand-edited
snapshot cannot smuggle fields into the model.

Money is held as Decimal but written to JSON as a plain number,
so a saved snapshot reads 45000, not "45000".
"""

from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, ConfigDict, PlainSerializer
from pydantic.alias_generators import to_camel


def _json_number(value: Decimal) -> int | float:
    if value == value.to_integral_value():
        return int(value)
    return float(value)


Money = Annotated[Decimal, PlainSerializer(_json_number, when_used="json")]


class DomainModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )
