from __future__ import annotations

from datetime import datetime, timezone
from typing import List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from .line_items import LineItem


class Order(BaseModel):
    """One purchase transaction as recorded by a system of record."""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(description="Order identifier, unique within its source system")
    order_name: Optional[str] = Field(default=None, description="Human-facing order label, may start with '#'")
    processed_at: datetime = Field(description="Timestamp the order was processed")
    fulfillment_status: Optional[str] = Field(default=None, description="Delivery state of the order")
    financial_status: Optional[str] = Field(default=None, description="Payment state of the order")
    customer_id: Optional[str] = Field(default=None, description="Commerce platform customer identifier")
    customer_email: Optional[str] = Field(default=None, description="Email the order was placed with")
    line_items: List[LineItem] = Field(
        default_factory=list,
        validation_alias=AliasChoices("line_items", "order_line_items_v2"),
        description="Line items owned by this order",
    )

    @field_validator("id", "customer_id", mode="before")
    @classmethod
    def _coerce_identifier(cls, v):
        # Platform ids arrive as integers from the sync and as strings from the warehouse
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("processed_at")
    @classmethod
    def _assume_utc(cls, v: datetime) -> datetime:
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v
