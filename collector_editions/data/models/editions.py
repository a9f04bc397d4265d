from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class EditionOwner(BaseModel):
    """Current owner of an edition."""
    name: Optional[str] = Field(default=None, description="Owner name")
    email: Optional[str] = Field(default=None, description="Owner email")
    id: Optional[str] = Field(default=None, description="Owner customer id")


class ProductEdition(BaseModel):
    """Response model for one numbered edition of a product."""
    line_item_id: str = Field(description="Line item holding the edition")
    order_id: Optional[str] = Field(default=None, description="Order the line item belongs to")
    edition_number: Optional[int] = Field(default=None, description="Edition number")
    edition_total: Optional[int] = Field(default=None, description="Size of the edition run")
    owner: EditionOwner = Field(default_factory=EditionOwner, description="Current owner")
    status: str = Field(description="Line item status")
    fulfillment_status: Optional[str] = Field(default=None, description="Delivery state of the unit")
    nfc_authenticated: bool = Field(default=False, description="An NFC tag has been claimed for the edition")
    created_at: Optional[datetime] = Field(default=None, description="When the line item was recorded")


class ProductEditionsResponse(BaseModel):
    """Response model for the active, numbered editions of a product."""
    product_id: str = Field(description="Product identifier")
    total_editions: int = Field(description="Number of editions returned")
    editions: List[ProductEdition] = Field(default_factory=list, description="Editions sorted by edition_number")


class EditionVerification(ProductEdition):
    """Response model for the current state of a single edition."""
    verified: bool = Field(default=True, description="The edition exists")
    product_id: Optional[str] = Field(default=None, description="Product identifier")
    nfc_claimed_at: Optional[datetime] = Field(default=None, description="When the NFC tag was claimed")
    processed_at: Optional[datetime] = Field(default=None, description="processed_at of the owning order")


class DuplicateItem(BaseModel):
    """One line item sharing its edition number with another."""
    edition_number: int = Field(description="Duplicated edition number")
    line_item_id: str = Field(description="Line item holding the number")
    order_id: Optional[str] = Field(default=None, description="Order the line item belongs to")


class DuplicateCheckResponse(BaseModel):
    """Response model for a duplicate edition number check on one product."""
    product_id: str = Field(description="Product identifier")
    total_editions: int = Field(description="Active, numbered line items of the product")
    unique_editions: int = Field(description="Distinct edition numbers among them")
    has_duplicates: bool = Field(description="Any edition number is held more than once")
    duplicate_edition_numbers: List[int] = Field(default_factory=list, description="Edition numbers held more than once")
    duplicate_items: List[DuplicateItem] = Field(default_factory=list, description="Line items holding those numbers")
