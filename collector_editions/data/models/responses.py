from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


class EditionSummary(BaseModel):
    """Response model for one resolved edition owned by a collector."""
    line_item_id: str = Field(description="Line item holding the edition")
    product_id: Optional[str] = Field(default=None, description="Artwork/product identifier")
    name: Optional[str] = Field(default=None, description="Artwork name")
    edition_number: Optional[int] = Field(default=None, description="Edition number")
    edition_total: Optional[int] = Field(default=None, description="Size of the edition run")
    status: str = Field(description="Line item status")
    owner_email: Optional[str] = Field(default=None, description="Registered owner email")
    owner_name: Optional[str] = Field(default=None, description="Registered owner name")


class CollectorEditionsResponse(BaseModel):
    """Response model for a collector's canonical editions."""
    collector_id: str = Field(description="Email or customer id the lookup was made with")
    total_orders: int = Field(description="Raw orders in the fetched snapshot")
    total_editions: int = Field(description="Editions surviving deduplication and filtering")
    editions: List[EditionSummary] = Field(default_factory=list, description="Resolved editions")
