from __future__ import annotations

from datetime import datetime
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


class LineItem(BaseModel):
    """One purchased unit within an order.

    Descriptive fields the resolver does not interpret (name, edition_total,
    nfc_claimed_at, ...) are kept as extras and passed through unchanged.
    The owner fields are declared because ownership lookups filter on them;
    after a transfer the owner is no longer the customer who placed the order.
    """
    model_config = ConfigDict(extra="allow")

    line_item_id: str = Field(description="Primary identity of the purchased unit")
    product_id: Optional[str] = Field(default=None, description="Artwork/product identifier")
    edition_number: Optional[int] = Field(default=None, description="Edition number within the product run")
    status: str = Field(description="Line item status, 'active' when eligible")
    restocked: bool = Field(default=False, description="Unit was returned to inventory")
    refund_status: Optional[str] = Field(default=None, description="'none' or absent unless refunded")
    fulfillment_status: Optional[str] = Field(default=None, description="Delivery state of this unit")
    owner_email: Optional[str] = Field(default=None, description="Email of the current owner")
    owner_id: Optional[str] = Field(default=None, description="Customer id of the current owner")
    owner_name: Optional[str] = Field(default=None, description="Name of the current owner")

    @field_validator("line_item_id", "product_id", "owner_id", mode="before")
    @classmethod
    def _coerce_identifier(cls, v):
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("restocked", mode="before")
    @classmethod
    def _null_is_not_restocked(cls, v):
        return False if v is None else v

    @property
    def edition_key(self) -> Optional[Tuple[str, int]]:
        """(product_id, edition_number) when both are present, else None."""
        if self.product_id is None or self.edition_number is None:
            return None
        return (self.product_id, self.edition_number)


class CollectorEdition(LineItem):
    """A line item denormalized with the context of the order it belongs to."""
    order_id: Optional[str] = Field(default=None, description="id of the owning order")
    processed_at: datetime = Field(description="processed_at of the owning order")
    order_fulfillment_status: Optional[str] = Field(default=None, description="Fulfillment status of the owning order")
    order_financial_status: Optional[str] = Field(default=None, description="Financial status of the owning order")
