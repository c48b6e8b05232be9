"""
Repository Layer - Data Access

This layer holds the catalog, customers, shipping rates and orders and
returns domain models. Repositories are built once per process and
injected into services.

Author: TM3
Date: 2026-10-17
"""
from app.repositories.product_repository import ProductRepository
from app.repositories.customer_repository import CustomerRepository
from app.repositories.order_repository import OrderRepository
from app.repositories.shipping_rate_repository import load_shipping_rate_table

__all__ = [
    'ProductRepository',
    'CustomerRepository',
    'OrderRepository',
    'load_shipping_rate_table'
]
