from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


def _to_camel(value: str) -> str:
    parts = value.split("_")
    return parts[0] + "".join(part.capitalize() for part in parts[1:])


class CamelBaseModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=_to_camel,
        populate_by_name=True,
    )


class PlaceOrderItemRequest(CamelBaseModel):
    menu_item_id: str
    name: str | None = None
    quantity: int = 1
    price: Decimal | None = None


class PlaceOrderRequest(CamelBaseModel):
    # Presence is checked by the order validator so that missing fields
    # surface as MISSING_FIELDS rather than a schema error.
    items: list[PlaceOrderItemRequest] | None = None
    total_amount: Decimal | None = None
    vendor_id: str | None = None
    payment_method: str | None = None


class CreateReviewRequest(CamelBaseModel):
    rating: int | None = None
    comment: str | None = Field(default=None, max_length=2000)
