"""Catalogue bounded context: products with their live price and stock.

The catalogue owns product records. The Ordering context reads price and
stock snapshots from it but never writes to it.
"""

import structlog
from protean.domain import Domain

logger = structlog.get_logger(__name__)

# Domain Composition Root
catalogue = Domain(name="catalogue")
