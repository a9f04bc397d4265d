"""Canonical edition resolver.

Pure functions turning an order snapshot drawn from the commerce sync and the
warehouse into the set of editions a collector currently owns.
"""

from .orders import (
    MANUAL_ORDER_PREFIX,
    deduplicate_orders,
    is_invalidated,
    is_manual,
    order_group_key,
)
from .line_items import annotate_line_items, deduplicate_line_items
from .active import filter_active_editions, is_active_edition
from .integrity import edition_holders, find_integrity_issues
from .pipeline import get_filtered_collector_editions, to_orders

__all__ = [
    "MANUAL_ORDER_PREFIX",
    "deduplicate_orders",
    "is_invalidated",
    "is_manual",
    "order_group_key",
    "annotate_line_items",
    "deduplicate_line_items",
    "filter_active_editions",
    "is_active_edition",
    "edition_holders",
    "find_integrity_issues",
    "get_filtered_collector_editions",
    "to_orders",
]
