from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class OrderFilters(BaseModel):
    """Filters for the order snapshot."""
    customer_id: Optional[str | list[str]] = Field(default=None, description="Customer ID filter (single customer or list of customers)")
    customer_email: Optional[str] = Field(default=None, description="Customer email filter, matched case-insensitively")
    start_ts: Optional[datetime] = Field(default=None, description="Start timestamp for processed_at range")
    end_ts: Optional[datetime] = Field(default=None, description="End timestamp for processed_at range")
    product_id: Optional[str | list[str]] = Field(default=None, description="Keep orders holding at least one line item for these products")
    line_item_id: Optional[str] = Field(default=None, description="Keep orders holding this line item")

    @classmethod
    def for_collector(cls, collector_id: str) -> "OrderFilters":
        """Email-looking identifiers match customer_email, anything else customer_id."""
        if "@" in collector_id:
            return cls(customer_email=collector_id)
        return cls(customer_id=collector_id)
