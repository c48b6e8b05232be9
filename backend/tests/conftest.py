"""
Pytest fixtures and configuration for Vitrine Backend tests

This file provides shared fixtures that can be used across all test modules.

Author: TM3
Date: 2026-10-17
"""
import pytest
from datetime import datetime
from decimal import Decimal
from fastapi.testclient import TestClient

from app.core.config import DEFAULT_DATA_DIR
from app.domain.customer import Customer, CustomerAddress
from app.domain.product import Product, Seller, SellerLocation
from app.domain.shipping import (
    PostalCodeRange, ShippingOption, ShippingRateTable, ValueDiscount, WeightMultiplier,
)
from app.repositories.customer_repository import CustomerRepository
from app.repositories.order_repository import OrderRepository
from app.repositories.product_repository import ProductRepository
from app.repositories.shipping_rate_repository import load_shipping_rate_table
from app.services.order_assembler import OrderAssembler
from app.services.seller_order_service import SellerOrderService
from app.services.shipping_calculator import ShippingCalculator


FIXED_NOW = datetime(2025, 5, 6, 10, 30, 0)


@pytest.fixture
def make_product():
    """
    Factory for Product models

    Usage:
        product = make_product("p1", price="150.00", weight="2.0", stock=5)
    """
    def _make(product_id="p1", price="100.00", weight="1.0", stock=10, discount="0",
              seller_id="seller1", category="Eletrônicos", **extra):
        return Product(
            id=product_id,
            name=extra.pop("name", f"Produto {product_id}"),
            price=Decimal(price),
            weight=Decimal(weight),
            stock=stock,
            discount=Decimal(discount),
            seller_id=seller_id,
            category=category,
            created_at=extra.pop("created_at", datetime(2025, 1, 1, 12, 0, 0)),
            **extra
        )
    return _make


@pytest.fixture
def sample_address():
    """São Paulo address (served by every option, including same-day)"""
    return CustomerAddress(
        street="Avenida Paulista",
        number="1000",
        complement="Apto 12",
        district="Bela Vista",
        city="São Paulo",
        state="SP",
        postal_code="01310-100",
    )


@pytest.fixture
def sample_customer(sample_address):
    return Customer(
        id="cust1",
        name="Ana Souza",
        email="ana@email.com",
        phone="11987654321",
        tax_id="123.456.789-09",
        address=sample_address,
        created_at=FIXED_NOW,
        updated_at=FIXED_NOW,
    )


@pytest.fixture
def rate_table():
    """
    Small rate table: one São Paulo CEP range with three options,
    the standard weight brackets and the standard value brackets
    """
    return ShippingRateTable(
        postal_code_ranges=[
            PostalCodeRange(
                range=("01000000", "19999999"),
                region="São Paulo",
                options=[
                    ShippingOption(name="Entrega Padrão", company="Correios PAC",
                                   price=Decimal("20.00"), estimated_days=7),
                    ShippingOption(name="Entrega Expressa", company="Correios SEDEX",
                                   price=Decimal("35.00"), estimated_days=3),
                    ShippingOption(name="Entrega no Mesmo Dia", company="Loggi",
                                   price=Decimal("29.90"), estimated_days=0,
                                   available_cities=["São Paulo"]),
                ],
            ),
        ],
        weight_multipliers=[
            WeightMultiplier(min_weight=Decimal("0.01"), max_weight=Decimal("2"), multiplier=Decimal("1.0")),
            WeightMultiplier(min_weight=Decimal("2"), max_weight=Decimal("5"), multiplier=Decimal("1.2")),
            WeightMultiplier(min_weight=Decimal("5"), max_weight=Decimal("10"), multiplier=Decimal("1.5")),
        ],
        value_discounts=[
            ValueDiscount(min_value=Decimal("0"), max_value=Decimal("99.99"), discount=Decimal("0")),
            ValueDiscount(min_value=Decimal("100"), max_value=Decimal("199.99"), discount=Decimal("10")),
            ValueDiscount(min_value=Decimal("200"), max_value=Decimal("499.99"), discount=Decimal("25")),
            ValueDiscount(min_value=Decimal("500"), max_value=Decimal("999999"), discount=Decimal("100")),
        ],
    )


@pytest.fixture
def calculator(rate_table):
    return ShippingCalculator(rate_table)


@pytest.fixture
def catalog(make_product):
    """Catalog with two sellers"""
    products = [
        make_product("p1", price="150.00", weight="2.0", stock=4),
        make_product("p2", price="50.00", weight="0.5", stock=3),
        make_product("p3", price="80.00", weight="1.0", stock=0),
        make_product("p4", price="300.00", weight="1.5", stock=6, seller_id="seller2", category="Fotografia"),
    ]
    sellers = [
        Seller(id="seller1", name="Tech Store", location=SellerLocation(country="Brasil", state="SP")),
        Seller(id="seller2", name="PhotoPro", location=SellerLocation(country="Brasil", state="RJ")),
    ]
    return ProductRepository(products, sellers)


@pytest.fixture
def customers(sample_customer):
    return CustomerRepository([sample_customer])


@pytest.fixture
def orders():
    return OrderRepository(clock=lambda: FIXED_NOW)


@pytest.fixture
def assembler():
    """Assembler with deterministic ids and timestamps"""
    counter = iter(range(1, 1000))
    return OrderAssembler(
        id_factory=lambda: f"ORDTEST{next(counter):03d}",
        clock=lambda: FIXED_NOW,
    )


@pytest.fixture
def seller_order_service(catalog, customers, orders, calculator, assembler):
    return SellerOrderService(catalog, customers, orders, calculator, assembler)


@pytest.fixture
def fixture_data_dir():
    """Directory with the bundled JSON fixtures"""
    return DEFAULT_DATA_DIR


@pytest.fixture
def client(fixture_data_dir):
    """
    TestClient over the bundled fixtures

    Every test gets fresh repositories, so mutations never leak between tests.
    """
    from app.main import app
    from app.api import dependencies

    catalog = ProductRepository.from_fixtures(fixture_data_dir)
    customer_repo = CustomerRepository.from_fixtures(fixture_data_dir)
    order_repo = OrderRepository.from_fixtures(fixture_data_dir)
    shipping_calculator = ShippingCalculator(load_shipping_rate_table(fixture_data_dir))

    app.dependency_overrides[dependencies.get_product_repository] = lambda: catalog
    app.dependency_overrides[dependencies.get_customer_repository] = lambda: customer_repo
    app.dependency_overrides[dependencies.get_order_repository] = lambda: order_repo
    app.dependency_overrides[dependencies.get_shipping_calculator] = lambda: shipping_calculator

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
