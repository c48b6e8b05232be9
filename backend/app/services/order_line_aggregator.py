"""
Order Line Aggregator
Turns (product id, quantity) selections into priced order line items

Rules:
- unknown products (or products of another seller) are dropped
- products without stock are dropped
- quantities are clamped to [1, stock]
- repeated products are merged into one line, re-clamped to stock

Two different totals come out of the same lines:
- subtotal: quantity * price, used for the order total
- shipping_value: quantity * discounted price, used for the shipping value tier

Author: TM3
Date: 2026-10-17
"""
import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Tuple

from pydantic import BaseModel, Field

from app.domain.order import OrderLineItem
from app.domain.product import Product
from app.repositories.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class LineRequest(BaseModel):
    """One product selection as sent by the caller"""
    product_id: str = Field(..., description="Product ID")
    quantity: int = Field(1, description="Requested units (clamped to stock)")


@dataclass(frozen=True)
class LineAggregation:
    """Validated line items plus the totals derived from them"""

    items: Tuple[OrderLineItem, ...]

    @property
    def subtotal(self) -> Decimal:
        return sum((item.subtotal for item in self.items), Decimal('0'))

    @property
    def shipping_value(self) -> Decimal:
        return sum((item.shipping_value for item in self.items), Decimal('0'))

    @property
    def total_weight(self) -> Decimal:
        return sum((item.weight for item in self.items), Decimal('0'))

    @property
    def is_empty(self) -> bool:
        return not self.items


def clamp_quantity(quantity: int, stock: int) -> int:
    """Clamp a quantity to [1, stock]"""
    return max(1, min(quantity, stock))


class OrderLineAggregator:
    """Service that validates and merges product selections against the catalog"""

    def __init__(self, catalog: ProductRepository):
        self.catalog = catalog

    def aggregate(self, requests: Iterable[LineRequest], seller_id: Optional[str] = None) -> LineAggregation:
        """
        Build line items from product selections

        Args:
            requests: Selections in the order they were made
            seller_id: When given, only this seller's products are accepted

        Returns:
            LineAggregation with one line per product, in first-selection order
        """
        lines: Dict[str, Tuple[Product, int]] = {}

        for request in requests:
            if request.product_id in lines:
                product, quantity = lines[request.product_id]
                merged = quantity + clamp_quantity(request.quantity, product.stock)
                lines[request.product_id] = (product, min(merged, product.stock))
                continue

            product = self._resolve(request.product_id, seller_id)
            if product is None:
                continue

            lines[request.product_id] = (product, clamp_quantity(request.quantity, product.stock))

        items: List[OrderLineItem] = [
            OrderLineItem(product=product, quantity=quantity)
            for product, quantity in lines.values()
        ]
        return LineAggregation(items=tuple(items))

    def _resolve(self, product_id: str, seller_id: Optional[str]) -> Optional[Product]:
        product = self.catalog.find_by_id(product_id)

        if product is None:
            logger.warning(f"Dropping line for unknown product {product_id}")
            return None

        if seller_id and product.seller_id != seller_id:
            logger.warning(f"Dropping line for product {product_id}: not sold by {seller_id}")
            return None

        if product.stock <= 0:
            logger.warning(f"Dropping line for product {product_id}: out of stock")
            return None

        return product
