"""
Domain Layer - Business Entities

This layer contains Pydantic models representing business entities.
These models enforce type safety and validation across the application.

Author: TM3
Date: 2026-10-17
"""
from app.domain.product import Product, Seller, ProductFilters
from app.domain.customer import Customer, CustomerAddress
from app.domain.shipping import (
    ShippingOption, ShippingRateTable, ShippingChoice,
    PickupChoice, OptionChoice, UnselectedChoice,
)
from app.domain.order import Order, OrderLineItem, OrderStatus, ShippingDestination

__all__ = [
    'Product', 'Seller', 'ProductFilters',
    'Customer', 'CustomerAddress',
    'ShippingOption', 'ShippingRateTable', 'ShippingChoice',
    'PickupChoice', 'OptionChoice', 'UnselectedChoice',
    'Order', 'OrderLineItem', 'OrderStatus', 'ShippingDestination',
]
