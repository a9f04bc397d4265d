from __future__ import annotations

from typing import Iterable, List

from collector_editions.data.models import CollectorEdition
from collector_editions.logging import get_logger

from .orders import INVALIDATING_FINANCIAL_STATUSES, INVALIDATING_FULFILLMENT_STATUSES

logger = get_logger(__name__)

VALID_FULFILLMENT_STATUSES = frozenset({"fulfilled", "partial"})


def is_valid_order(item: CollectorEdition) -> bool:
    return (
        item.order_fulfillment_status not in INVALIDATING_FULFILLMENT_STATUSES
        and item.order_financial_status not in INVALIDATING_FINANCIAL_STATUSES
    )


def is_actually_active(item: CollectorEdition) -> bool:
    return (
        item.status == "active"
        and item.restocked is not True
        and (item.refund_status is None or item.refund_status == "none")
    )


def is_fulfillment_valid(item: CollectorEdition) -> bool:
    # Accessories and digital units are never fulfilled individually
    return item.fulfillment_status is None or item.fulfillment_status in VALID_FULFILLMENT_STATUSES


def is_active_edition(item: CollectorEdition) -> bool:
    """True when the item is a valid, owned, active edition."""
    return is_valid_order(item) and is_actually_active(item) and is_fulfillment_valid(item)


def filter_active_editions(items: Iterable[CollectorEdition]) -> List[CollectorEdition]:
    """Keep only line items that currently represent an owned, active edition."""
    items = list(items)
    active = [item for item in items if is_active_edition(item)]
    logger.debug(f"filter_active_editions: kept={len(active)} from={len(items)}")
    return active
