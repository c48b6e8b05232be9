"""
Domain exceptions for the Vitrine backend

Raised by services and repositories when business rules are violated.
The API layer catches these and translates them into HTTP responses.

Author: TM3
Date: 2026-10-17
"""
from typing import List, Optional


class MarketplaceError(Exception):
    """Base class for every error raised by the marketplace core"""


class NotFoundError(MarketplaceError):
    """A product, customer or order id does not exist"""

    def __init__(self, entity: str, entity_id: str):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} not found: {entity_id}")


class OrderPreconditionError(MarketplaceError):
    """
    An order cannot be built because required inputs are missing

    Attributes:
        missing: Names of the missing inputs ('customer', 'items', 'shipping_choice')
        seller_id: Seller group the order was built for, when known
    """

    def __init__(self, missing: List[str], seller_id: Optional[str] = None):
        self.missing = list(missing)
        self.seller_id = seller_id
        target = f" for seller {seller_id}" if seller_id else ""
        super().__init__(f"Cannot build order{target}, missing: {', '.join(self.missing)}")


class PipelineAbandonedError(MarketplaceError):
    """The caller stopped waiting for an order pipeline; its result was not stored"""


class FixtureError(MarketplaceError):
    """A JSON fixture file is missing or malformed"""
