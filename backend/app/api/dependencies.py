"""
FastAPI dependency providers

Repositories and services are built once per process from the fixtures
in settings.DATA_DIR and shared by every request.

Usage:
    @router.get("/items")
    def read_items(service: SellerOrderService = Depends(get_seller_order_service)):
        ...

Tests replace them with app.dependency_overrides.
"""
from functools import lru_cache

from fastapi import Depends

from app.repositories.customer_repository import CustomerRepository
from app.repositories.order_repository import OrderRepository
from app.repositories.product_repository import ProductRepository
from app.repositories.shipping_rate_repository import load_shipping_rate_table
from app.services.seller_order_service import SellerOrderService
from app.services.shipping_calculator import ShippingCalculator


@lru_cache(maxsize=None)
def get_product_repository() -> ProductRepository:
    return ProductRepository.from_fixtures()


@lru_cache(maxsize=None)
def get_customer_repository() -> CustomerRepository:
    return CustomerRepository.from_fixtures()


@lru_cache(maxsize=None)
def get_order_repository() -> OrderRepository:
    return OrderRepository.from_fixtures()


@lru_cache(maxsize=None)
def get_shipping_calculator() -> ShippingCalculator:
    return ShippingCalculator(load_shipping_rate_table())


def get_seller_order_service(
    catalog: ProductRepository = Depends(get_product_repository),
    customers: CustomerRepository = Depends(get_customer_repository),
    orders: OrderRepository = Depends(get_order_repository),
    calculator: ShippingCalculator = Depends(get_shipping_calculator),
) -> SellerOrderService:
    return SellerOrderService(catalog, customers, orders, calculator)
