from .data_filters import OrderFilters

from .line_items import LineItem, CollectorEdition
from .orders import Order
from .responses import EditionSummary, CollectorEditionsResponse
from .editions import (
    EditionOwner,
    ProductEdition,
    ProductEditionsResponse,
    EditionVerification,
    DuplicateItem,
    DuplicateCheckResponse,
)
from .integrity import (
    IntegrityIssue,
    IntegrityScope,
    IntegrityReport,
)

__all__ = [
    # Filter classes
    "OrderFilters",
    # Snapshot models
    "LineItem",
    "CollectorEdition",
    "Order",
    # Response models
    "EditionSummary",
    "CollectorEditionsResponse",
    "EditionOwner",
    "ProductEdition",
    "ProductEditionsResponse",
    "EditionVerification",
    "DuplicateItem",
    "DuplicateCheckResponse",
    "IntegrityIssue",
    "IntegrityScope",
    "IntegrityReport",
]
