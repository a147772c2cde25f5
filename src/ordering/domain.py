"""Ordering bounded context: per-user shopping carts.

Keeps each user's cart consistent with live catalogue price and stock:
line items snapshot the price they were added at, quantities never exceed
the stock on hand at decision time, and the total is always re-derived from
the lines.
"""

import structlog
from protean.domain import Domain

logger = structlog.get_logger(__name__)

# Domain Composition Root
ordering = Domain(name="ordering")
