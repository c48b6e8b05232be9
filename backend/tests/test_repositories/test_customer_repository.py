"""
Unit tests for CustomerRepository

Author: TM3
Date: 2026-10-17
"""
import pytest
from pydantic import ValidationError

from app.domain.customer import CustomerAddress, CustomerCreate, CustomerUpdate
from app.repositories.customer_repository import CustomerRepository


@pytest.fixture
def new_customer(sample_address):
    return CustomerCreate(
        name="Bruno Lima",
        email="bruno@email.com",
        phone="21998765432",
        tax_id="987.654.321-00",
        address=sample_address,
    )


class TestCustomerRepository:
    """Test customer lookups"""

    def test_find_by_id(self, customers):
        customer = customers.find_by_id("cust1")

        assert customer.name == "Ana Souza"
        assert customer.address.postal_code == "01310100"

    def test_find_by_id_missing(self, customers):
        assert customers.find_by_id("cust99") is None

    @pytest.mark.parametrize("term", ["ana", "ANA@EMAIL", "119876", "123.456"])
    def test_search_by_name_email_phone_tax_id(self, customers, term):
        assert [c.id for c in customers.search(term)] == ["cust1"]

    def test_search_without_match(self, customers):
        assert customers.search("zzz") == []

    def test_empty_search_returns_all(self, customers):
        assert len(customers.search(None)) == 1


class TestCreateCustomer:

    def test_create_assigns_next_id(self, customers, new_customer):
        customer = customers.create(new_customer)

        assert customer.id == "cust2"
        assert customers.find_by_id("cust2") is customer
        assert customer.created_at == customer.updated_at

    def test_create_skips_taken_ids(self, sample_customer, new_customer):
        """Test ids stay unique when the sequence has gaps"""
        repo = CustomerRepository([sample_customer.model_copy(update={'id': 'cust2'})])

        customer = repo.create(new_customer)

        assert customer.id == "cust3"

    def test_create_in_empty_repository(self, new_customer):
        assert CustomerRepository().create(new_customer).id == "cust1"


class TestUpdateCustomer:

    def test_update_fields(self, customers):
        updated = customers.update("cust1", CustomerUpdate(phone="11900000000"))

        assert updated.phone == "11900000000"
        assert updated.name == "Ana Souza"

    def test_update_missing_returns_none(self, customers):
        assert customers.update("cust99", CustomerUpdate(name="X")) is None

    def test_update_blank_tax_id_rejected(self, customers):
        with pytest.raises(ValidationError):
            customers.update("cust1", CustomerUpdate(tax_id="   "))

        assert customers.find_by_id("cust1").tax_id == "123.456.789-09"

    def test_update_replaces_instance(self, customers):
        before = customers.find_by_id("cust1")
        address = CustomerAddress(
            street="Rua Augusta", number="10", city="São Paulo", state="SP", postal_code="01305-000",
        )

        customers.update("cust1", CustomerUpdate(address=address))

        assert before.address.street == "Avenida Paulista"
        assert customers.find_by_id("cust1").address.postal_code == "01305000"
