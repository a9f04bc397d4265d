from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, Field


IssueType = Literal["refunded_but_active", "status_mismatch", "duplicate_edition"]
Severity = Literal["critical", "warning"]


class IntegrityIssue(BaseModel):
    """One inconsistency found among stored line items."""
    type: IssueType = Field(description="Issue category")
    line_item_id: Optional[str] = Field(default=None, description="Offending line item, when the issue concerns one")
    product_id: Optional[str] = Field(default=None, description="Product the issue concerns")
    edition_number: Optional[int] = Field(default=None, description="Edition number for duplicate_edition issues")
    description: str = Field(description="Human readable explanation")
    severity: Severity = Field(default="critical", description="Issue severity")


class IntegrityScope(BaseModel):
    """What a validation run covered."""
    product_id: str = Field(default="all", description="Product filter or 'all'")
    collector_id: str = Field(default="all", description="Collector filter or 'all'")


class IntegrityReport(BaseModel):
    """Response model for a data integrity validation run."""
    issues_found: int = Field(description="Number of issues")
    issues: List[IntegrityIssue] = Field(default_factory=list, description="Issues in discovery order")
    scope: IntegrityScope = Field(default_factory=IntegrityScope, description="Validation scope")
