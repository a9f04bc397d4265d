from __future__ import annotations

from typing import List, Protocol

from .models import Order, OrderFilters


# ---- Snapshot source protocol ----

class OrderSnapshotSource(Protocol):
    """
    Repository contract the resolver's callers fetch snapshots through.

    Implementations return fully materialized orders with their line items
    nested, so the resolver never has to query anything itself. Each call
    returns fresh Order objects; callers may hold them for the duration of
    one resolution.
    """

    def get_orders(self, filters: OrderFilters) -> List[Order]:
        """Get the orders, with nested line items, matching the filters."""
        ...
