from __future__ import annotations

from typing import Dict, Iterable, Iterator, List, Tuple

from collector_editions.data.models import CollectorEdition, LineItem, Order
from collector_editions.logging import get_logger

logger = get_logger(__name__)


def annotate(item: LineItem, order: Order) -> CollectorEdition:
    """Copy a line item and attach the context of the order it belongs to."""
    return CollectorEdition.model_validate({
        **item.model_dump(),
        "order_id": order.id,
        "processed_at": order.processed_at,
        "order_fulfillment_status": order.fulfillment_status,
        "order_financial_status": order.financial_status,
    })


def iter_annotated(orders: Iterable[Order]) -> Iterator[CollectorEdition]:
    for order in orders:
        for item in order.line_items:
            yield annotate(item, order)


def annotate_line_items(orders: Iterable[Order]) -> List[CollectorEdition]:
    """Flatten orders into order-annotated line items, without deduplication."""
    return list(iter_annotated(orders))


def deduplicate_line_items(orders: Iterable[Order]) -> List[CollectorEdition]:
    """Collapse line items representing the same purchased unit.

    Two identities are reconciled. A re-sync of the same unit shares its
    line_item_id; a copy from the other source system has a different
    line_item_id but claims the same (product_id, edition_number). In both
    cases the entry from the most recently processed order wins and ties
    keep the first one seen.

    Args:
        orders: Order-deduplicated snapshot.
    Returns:
        list[CollectorEdition]: Surviving line items in insertion order.
    """
    by_line_item_id: Dict[str, CollectorEdition] = {}
    by_product_edition: Dict[Tuple[str, int], CollectorEdition] = {}
    seen = 0

    for entry in iter_annotated(orders):
        seen += 1
        line_item_id = entry.line_item_id

        existing = by_line_item_id.get(line_item_id)
        if existing is None or entry.processed_at > existing.processed_at:
            by_line_item_id[line_item_id] = entry

        key = entry.edition_key
        if key is None:
            continue

        stored = by_product_edition.get(key)
        if stored is None:
            by_product_edition[key] = entry
        elif entry.processed_at > stored.processed_at:
            # stored entry is a superseded claim on the same edition
            by_line_item_id.pop(stored.line_item_id, None)
            by_line_item_id[line_item_id] = entry
            by_product_edition[key] = entry
        elif stored.line_item_id != line_item_id:
            by_line_item_id.pop(line_item_id, None)

    logger.debug(f"deduplicate_line_items: kept={len(by_line_item_id)} from={seen}")
    return list(by_line_item_id.values())
