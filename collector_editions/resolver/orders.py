from __future__ import annotations

import re
from typing import Dict, Iterable, List

from collector_editions.data.models import Order
from collector_editions.logging import get_logger

logger = get_logger(__name__)

MANUAL_ORDER_PREFIX = "WH-"

INVALIDATING_FULFILLMENT_STATUSES = frozenset({"restocked", "canceled"})
INVALIDATING_FINANCIAL_STATUSES = frozenset({"refunded", "voided"})

_LEADING_DIGITS = re.compile(r"\d+")


def is_invalidated(order: Order) -> bool:
    """True when the order no longer counts as a purchase."""
    return (
        order.fulfillment_status in INVALIDATING_FULFILLMENT_STATUSES
        or order.financial_status in INVALIDATING_FINANCIAL_STATUSES
    )


def is_manual(order: Order, manual_prefix: str = MANUAL_ORDER_PREFIX) -> bool:
    return order.id.startswith(manual_prefix)


def order_group_key(order: Order) -> str:
    """Key shared by every record of the same real-world purchase.

    "#1188", "1188" and "1188A" all map to "1188". Names without a leading
    number group case-insensitively; orders without a name group by id.
    """
    name = order.order_name
    if name is None or not name.strip():
        return order.id
    name = name.strip()
    if name.startswith("#"):
        name = name[1:].strip()
    match = _LEADING_DIGITS.match(name)
    if match:
        return match.group(0)
    return name.lower()


def _prefer(kept: Order, candidate: Order, manual_prefix: str) -> Order:
    kept_invalid = is_invalidated(kept)
    candidate_invalid = is_invalidated(candidate)
    if kept_invalid and not candidate_invalid:
        return candidate
    if kept_invalid == candidate_invalid:
        if is_manual(kept, manual_prefix) and not is_manual(candidate, manual_prefix):
            return candidate
    return kept


def deduplicate_orders(orders: Iterable[Order], *, manual_prefix: str = MANUAL_ORDER_PREFIX) -> List[Order]:
    """Collapse orders representing the same purchase into one canonical order.

    A valid order outranks an invalidated one; with validity tied, the
    auto-synced order outranks the manually entered (prefixed) one. Groups are
    returned in order of first appearance.

    Args:
        orders: Order snapshot, possibly holding duplicates.
        manual_prefix: Id prefix marking manually entered orders.
    Returns:
        list[Order]: One order per distinct purchase.
    """
    kept: Dict[str, Order] = {}
    seen = 0
    for order in orders:
        seen += 1
        key = order_group_key(order)
        current = kept.get(key)
        if current is None:
            kept[key] = order
        else:
            kept[key] = _prefer(current, order, manual_prefix)

    logger.debug(f"deduplicate_orders: kept={len(kept)} from={seen}")
    return list(kept.values())
