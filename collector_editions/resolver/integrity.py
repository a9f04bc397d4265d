from __future__ import annotations

from typing import Dict, Iterable, List, Tuple

from collector_editions.data.models import CollectorEdition, IntegrityIssue
from collector_editions.logging import get_logger

from .orders import INVALIDATING_FINANCIAL_STATUSES

logger = get_logger(__name__)


def _item_issues(item: CollectorEdition) -> List[IntegrityIssue]:
    if item.status != "active":
        return []

    issues: List[IntegrityIssue] = []
    if item.refund_status == "refunded":
        issues.append(IntegrityIssue(
            type="refunded_but_active",
            line_item_id=item.line_item_id,
            product_id=item.product_id,
            description=f"Line item {item.line_item_id} is marked active but has refund_status='refunded'",
        ))
    if item.restocked:
        issues.append(IntegrityIssue(
            type="status_mismatch",
            line_item_id=item.line_item_id,
            product_id=item.product_id,
            description=f"Line item {item.line_item_id} is marked active but restocked=true",
        ))
    if item.order_financial_status in INVALIDATING_FINANCIAL_STATUSES:
        issues.append(IntegrityIssue(
            type="status_mismatch",
            line_item_id=item.line_item_id,
            product_id=item.product_id,
            description=f"Line item {item.line_item_id} is active but order is {item.order_financial_status}",
        ))
    return issues


def edition_holders(items: Iterable[CollectorEdition]) -> Dict[Tuple[str, int], List[CollectorEdition]]:
    """Active, numbered line items grouped by (product_id, edition_number), in first-seen order."""
    holders: Dict[Tuple[str, int], List[CollectorEdition]] = {}
    for item in items:
        key = item.edition_key
        if item.status != "active" or key is None:
            continue
        holders.setdefault(key, []).append(item)
    return holders


def _duplicate_edition_issues(items: List[CollectorEdition]) -> List[IntegrityIssue]:
    issues: List[IntegrityIssue] = []
    for (product_id, edition_number), held_by in edition_holders(items).items():
        line_item_ids = [item.line_item_id for item in held_by]
        if len(line_item_ids) > 1:
            issues.append(IntegrityIssue(
                type="duplicate_edition",
                product_id=product_id,
                edition_number=edition_number,
                description=(
                    f"Edition #{edition_number} assigned to {len(line_item_ids)} line items: "
                    f"{', '.join(line_item_ids)}"
                ),
            ))
    return issues


def find_integrity_issues(
    items: Iterable[CollectorEdition],
    *,
    check_duplicates: bool = True,
) -> List[IntegrityIssue]:
    """Report stored line items whose state contradicts itself or its order.

    Works on raw, order-annotated line items: an active item that is refunded,
    restocked or belongs to a refunded/voided order, and any edition held by
    more than one active item.
    """
    items = list(items)
    issues: List[IntegrityIssue] = []
    for item in items:
        issues.extend(_item_issues(item))
    if check_duplicates:
        issues.extend(_duplicate_edition_issues(items))

    if issues:
        logger.warning(f"find_integrity_issues: {len(issues)} issue(s) across {len(items)} line items")
    else:
        logger.debug(f"find_integrity_issues: clean across {len(items)} line items")
    return issues
