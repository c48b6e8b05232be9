"""
Order Domain Models

Represents order-related entities in the Vitrine marketplace.
These are the single source of truth for order data structure.

Author: TM3
Date: 2026-10-17
"""
from enum import Enum
from pydantic import BaseModel, Field, ConfigDict, computed_field, model_validator
from typing import Optional, List
from datetime import datetime
from decimal import Decimal

from app.domain.product import Product
from app.domain.shipping import ShippingOption


class OrderStatus(str, Enum):
    """Order status. Any status may be set from any other status."""
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELED = "canceled"


class OrderLineItem(BaseModel):
    """
    Order line item - one product with its quantity

    Fields:
        product: Product snapshot taken when the line was built
        quantity: Units ordered (>= 1)

    Computed:
        unit_price: Product price at selection time
        subtotal: quantity * unit_price (product discount NOT applied)
        weight: quantity * unit weight
        shipping_value: quantity * discounted unit price (feeds the shipping value tier)
    """

    product: Product
    quantity: int = Field(..., description="Quantity ordered", ge=1)

    model_config = ConfigDict(from_attributes=True, frozen=True)

    @computed_field
    @property
    def unit_price(self) -> Decimal:
        return self.product.price

    @computed_field
    @property
    def subtotal(self) -> Decimal:
        return self.product.price * self.quantity

    @property
    def weight(self) -> Decimal:
        return self.product.weight * self.quantity

    @property
    def shipping_value(self) -> Decimal:
        return self.product.discounted_price * self.quantity

    def to_dict(self) -> dict:
        """Convert to dictionary with Decimal to float conversion"""
        return {
            'product_id': self.product.id,
            'product_name': self.product.name,
            'sku': self.product.sku,
            'quantity': self.quantity,
            'unit_price': float(self.unit_price),
            'subtotal': float(self.subtotal),
        }


class ShippingDestination(BaseModel):
    """Delivery address copied from the customer when the order is created"""

    full_name: str
    email: str = ""
    phone: str = ""
    address: str = Field(..., description="street, number[, complement]")
    district: str = ""
    city: str
    state: str
    postal_code: str
    country: str

    model_config = ConfigDict(frozen=True)


class Order(BaseModel):
    """
    Order domain model - represents a seller-registered customer order

    Fields:
        id: Order ID (e.g. "ORD5F3A9C21")
        customer_id: Reference to customer
        seller_id: Reference to seller

        # Financial information
        subtotal: Sum of line subtotals (pre-discount prices)
        shipping_cost: Chosen shipping price (0 for pickup)
        total: subtotal + shipping_cost, always computed

        # Shipping
        shipping_method: Human label of the chosen delivery method
        shipping_option: Snapshot of the chosen option (None for pickup)
        shipping_destination: Address snapshot

        # Status tracking
        status: pending, processing, shipped, delivered, canceled
        created_at / updated_at: Timestamps

        items: Line items (immutable once the order exists)
    """

    # Primary identification
    id: str = Field(..., description="Order ID")
    customer_id: str = Field(..., description="Customer ID")
    seller_id: str = Field(..., description="Seller ID")

    # Order items
    items: List[OrderLineItem] = Field(..., description="Order items", min_length=1)

    # Financial information
    subtotal: Decimal = Field(..., description="Subtotal before shipping", ge=0)
    shipping_cost: Decimal = Field(Decimal('0'), description="Shipping cost", ge=0)

    # Shipping
    shipping_method: str = Field(..., description="Delivery method label")
    shipping_option: Optional[ShippingOption] = Field(None, description="Chosen shipping option")
    shipping_destination: ShippingDestination

    # Status tracking
    status: OrderStatus = Field(OrderStatus.PENDING, description="Order status")
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime = Field(..., description="Last update timestamp")

    # Only status/updated_at ever change, through model_copy
    model_config = ConfigDict(from_attributes=True, frozen=True)

    @model_validator(mode="after")
    def _subtotal_matches_items(self) -> "Order":
        expected = sum((item.subtotal for item in self.items), Decimal('0'))
        if self.subtotal != expected:
            raise ValueError(f"subtotal {self.subtotal} does not match line items ({expected})")
        return self

    @computed_field
    @property
    def total(self) -> Decimal:
        return self.subtotal + self.shipping_cost

    # Computed properties
    @property
    def item_count(self) -> int:
        """Total number of items in order"""
        return len(self.items)

    @property
    def total_quantity(self) -> int:
        """Total quantity of all items"""
        return sum(item.quantity for item in self.items)

    @property
    def is_pickup(self) -> bool:
        return self.shipping_option is None

    def with_status(self, status: OrderStatus, updated_at: datetime) -> "Order":
        """Copy of this order with a new status"""
        return self.model_copy(update={'status': status, 'updated_at': updated_at})

    def to_dict(self) -> dict:
        """
        Convert to dictionary with computed fields

        Returns dict with all fields plus computed properties
        """
        data = self.model_dump(mode="json", exclude={'items', 'shipping_option'})

        # Add computed properties
        data['item_count'] = self.item_count
        data['total_quantity'] = self.total_quantity
        data['is_pickup'] = self.is_pickup

        # Convert Decimal to float for JSON compatibility
        for field in ['subtotal', 'shipping_cost', 'total']:
            data[field] = float(getattr(self, field))

        data['shipping_option'] = self.shipping_option.to_dict() if self.shipping_option else None
        data['items'] = [item.to_dict() for item in self.items]

        return data


class OrderStatusUpdate(BaseModel):
    """Schema for changing an order status"""
    status: OrderStatus
