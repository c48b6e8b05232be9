"""
Tests for the bundled JSON fixtures and the fixture loader

Author: TM3
Date: 2026-10-17
"""
import json
import pytest
from decimal import Decimal

from app.core.exceptions import FixtureError
from app.core.fixtures import load_fixture, load_records, PRODUCTS_FIXTURE, SHIPPING_FIXTURE
from app.repositories.customer_repository import CustomerRepository
from app.repositories.order_repository import OrderRepository
from app.repositories.product_repository import ProductRepository
from app.repositories.shipping_rate_repository import load_shipping_rate_table


class TestBundledFixtures:
    """Test the shipped data loads into the repositories"""

    def test_catalog_loads(self, fixture_data_dir):
        catalog = ProductRepository.from_fixtures(fixture_data_dir)

        assert catalog.get_stats()['total_products'] == 8
        assert catalog.get_seller("seller1").name == "Tech Store"

    def test_customers_load(self, fixture_data_dir):
        customers = CustomerRepository.from_fixtures(fixture_data_dir)

        assert len(customers.find_all()) == 4
        assert customers.find_by_id("cust2").address.postal_code == "22270010"

    def test_orders_load_with_consistent_totals(self, fixture_data_dir):
        orders = OrderRepository.from_fixtures(fixture_data_dir)

        order = orders.find_by_id("ORD5E6F7A8B")
        assert order.subtotal == Decimal("259.90")
        assert order.total == Decimal("291.40")

    def test_rate_table_loads(self, fixture_data_dir):
        table = load_shipping_rate_table(fixture_data_dir)

        assert "São Paulo" in table.regions
        assert table.find_range("99999999") is None
        assert table.find_range("01310100").region == "São Paulo"

    def test_rate_table_brackets(self, fixture_data_dir):
        table = load_shipping_rate_table(fixture_data_dir)

        assert table.find_weight_multiplier(Decimal("2")).multiplier == Decimal("1.2")
        assert table.find_value_discount(Decimal("500")).discount == Decimal("100")


class TestFixtureLoader:
    """Test loader error handling"""

    def test_missing_file(self, tmp_path):
        with pytest.raises(FixtureError):
            load_fixture(PRODUCTS_FIXTURE, tmp_path)

    def test_invalid_json(self, tmp_path):
        (tmp_path / PRODUCTS_FIXTURE).write_text("{not json", encoding="utf-8")

        with pytest.raises(FixtureError):
            load_fixture(PRODUCTS_FIXTURE, tmp_path)

    def test_records_must_be_a_list(self, tmp_path):
        (tmp_path / PRODUCTS_FIXTURE).write_text(json.dumps({"id": "p1"}), encoding="utf-8")

        with pytest.raises(FixtureError):
            load_records(PRODUCTS_FIXTURE, tmp_path)

    def test_invalid_rate_table(self, tmp_path):
        (tmp_path / SHIPPING_FIXTURE).write_text(
            json.dumps({"postal_code_ranges": [{"region": "Sem faixa"}]}), encoding="utf-8"
        )

        with pytest.raises(FixtureError):
            load_shipping_rate_table(tmp_path)

    def test_rate_table_must_be_an_object(self, tmp_path):
        (tmp_path / SHIPPING_FIXTURE).write_text("[]", encoding="utf-8")

        with pytest.raises(FixtureError):
            load_shipping_rate_table(tmp_path)
