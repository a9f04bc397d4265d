from __future__ import annotations

from typing import Any, Iterable, List, Mapping, Union

from collector_editions.data.models import CollectorEdition, Order

from .active import filter_active_editions
from .line_items import deduplicate_line_items
from .orders import MANUAL_ORDER_PREFIX, deduplicate_orders

OrderLike = Union[Order, Mapping[str, Any]]


def to_orders(orders: Iterable[OrderLike]) -> List[Order]:
    """Validate raw order mappings into Order models; models pass through."""
    return [o if isinstance(o, Order) else Order.model_validate(o) for o in orders]


def get_filtered_collector_editions(
    orders: Iterable[OrderLike],
    *,
    manual_prefix: str = MANUAL_ORDER_PREFIX,
) -> List[CollectorEdition]:
    """Resolve an order snapshot into the collector's canonical, active editions.

    Runs order deduplication, line item deduplication and the active edition
    filter, in that order. The result holds no two items with the same
    line_item_id or the same (product_id, edition_number).

    Args:
        orders: Order snapshot as Order models or raw mappings.
        manual_prefix: Id prefix marking manually entered orders.
    Returns:
        list[CollectorEdition]: Canonical editions with their order context.
    """
    canonical_orders = deduplicate_orders(to_orders(orders), manual_prefix=manual_prefix)
    return filter_active_editions(deduplicate_line_items(canonical_orders))
