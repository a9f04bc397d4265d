from __future__ import annotations

from typing import Any, Dict, List, Optional

from collector_editions.config import get_config
from collector_editions.data.interface import OrderSnapshotSource
from collector_editions.data.models import (
    CollectorEdition,
    CollectorEditionsResponse,
    DuplicateCheckResponse,
    DuplicateItem,
    EditionSummary,
    EditionVerification,
    IntegrityReport,
    IntegrityScope,
    OrderFilters,
    ProductEdition,
    ProductEditionsResponse,
)
from collector_editions.logging import get_logger
from collector_editions.resolver import (
    annotate_line_items,
    edition_holders,
    find_integrity_issues,
    get_filtered_collector_editions,
    is_invalidated,
)

logger = get_logger(__name__)


def _summarize(edition: CollectorEdition) -> EditionSummary:
    return EditionSummary.model_validate(edition.model_dump())


def _edition_fields(item: CollectorEdition) -> Dict[str, Any]:
    fields = item.model_dump()
    fields["owner"] = {"name": item.owner_name, "email": item.owner_email, "id": item.owner_id}
    fields["nfc_authenticated"] = fields.get("nfc_claimed_at") is not None
    return fields


def _product_items(source: OrderSnapshotSource, product_id: str) -> List[CollectorEdition]:
    items = annotate_line_items(source.get_orders(OrderFilters(product_id=product_id)))
    return [item for item in items if item.product_id == product_id]


def _owned_by(item: CollectorEdition, collector_id: str) -> bool:
    if "@" in collector_id:
        return (item.owner_email or "").strip().lower() == collector_id.strip().lower()
    return item.owner_id == collector_id


def get_collector_editions(source: OrderSnapshotSource, collector_id: str) -> CollectorEditionsResponse:
    """Fetch a collector's orders and resolve them into their canonical editions.

    Invalidated orders are dropped before resolving, so a later refunded or
    voided copy of a purchase cannot displace the edition the collector still
    holds. The remaining orders are resolved newest first.

    Args:
        source: Snapshot source to read orders from.
        collector_id: Customer email (contains '@') or customer id.
    Returns:
        CollectorEditionsResponse: Valid order count plus the resolved editions.
    """
    orders = [o for o in source.get_orders(OrderFilters.for_collector(collector_id)) if not is_invalidated(o)]
    orders.sort(key=lambda o: o.processed_at, reverse=True)

    editions = get_filtered_collector_editions(orders, manual_prefix=get_config().manual_order_prefix)
    logger.info(f"Resolved {len(editions)} editions from {len(orders)} orders for collector {collector_id}")
    return CollectorEditionsResponse(
        collector_id=collector_id,
        total_orders=len(orders),
        total_editions=len(editions),
        editions=[_summarize(e) for e in editions],
    )


def get_product_editions(source: OrderSnapshotSource, product_id: str) -> ProductEditionsResponse:
    """Active, numbered editions of a product sorted by edition_number."""
    items = [
        item for item in _product_items(source, product_id)
        if item.status == "active" and item.edition_number is not None
    ]
    items.sort(key=lambda item: item.edition_number)
    editions = [ProductEdition.model_validate(_edition_fields(item)) for item in items]
    return ProductEditionsResponse(product_id=product_id, total_editions=len(editions), editions=editions)


def verify_edition_number(
    source: OrderSnapshotSource,
    line_item_id: str,
    order_id: Optional[str] = None,
) -> Optional[EditionVerification]:
    """Current state of one edition, or None when no such line item is stored.

    When the line item is stored under more than one order, the record from
    the most recently processed order is reported.
    """
    items = [
        item for item in annotate_line_items(source.get_orders(OrderFilters(line_item_id=line_item_id)))
        if item.line_item_id == line_item_id and (order_id is None or item.order_id == order_id)
    ]
    if not items:
        logger.info(f"Edition not found for line item {line_item_id}")
        return None
    latest = max(items, key=lambda item: item.processed_at)
    return EditionVerification.model_validate(_edition_fields(latest))


def check_duplicates(source: OrderSnapshotSource, product_id: str) -> DuplicateCheckResponse:
    """Report edition numbers of a product held by more than one active line item."""
    holders = edition_holders(_product_items(source, product_id))

    duplicate_numbers: List[int] = []
    duplicate_items: List[DuplicateItem] = []
    for (_, edition_number), held_by in holders.items():
        if len(held_by) > 1:
            duplicate_numbers.append(edition_number)
            duplicate_items.extend(
                DuplicateItem(edition_number=edition_number, line_item_id=item.line_item_id, order_id=item.order_id)
                for item in held_by
            )

    if duplicate_numbers:
        logger.warning(f"Product {product_id} has duplicate edition numbers: {duplicate_numbers}")
    return DuplicateCheckResponse(
        product_id=product_id,
        total_editions=sum(len(held_by) for held_by in holders.values()),
        unique_editions=len(holders),
        has_duplicates=bool(duplicate_numbers),
        duplicate_edition_numbers=duplicate_numbers,
        duplicate_items=duplicate_items,
    )


def validate_data_integrity(
    source: OrderSnapshotSource,
    *,
    product_id: Optional[str] = None,
    collector_id: Optional[str] = None,
) -> IntegrityReport:
    """Check stored line items for states that contradict each other.

    Nothing is deduplicated first: the point is to find the raw records the
    resolver would otherwise have to paper over. A collector scope matches the
    current owner of each line item, not the customer who placed the order.
    """
    items = annotate_line_items(source.get_orders(OrderFilters(product_id=product_id)))
    if product_id:
        items = [item for item in items if item.product_id == product_id]
    if collector_id:
        items = [item for item in items if _owned_by(item, collector_id)]

    issues = find_integrity_issues(items)
    logger.info(f"Integrity check found {len(issues)} issue(s) in {len(items)} line items")
    return IntegrityReport(
        issues_found=len(issues),
        issues=issues,
        scope=IntegrityScope(product_id=product_id or "all", collector_id=collector_id or "all"),
    )
