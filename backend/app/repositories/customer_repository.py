"""
Customer Repository - Data Access Layer for Customers

In-memory customer directory seeded from the customers fixture.

Author: TM3
Date: 2026-10-17
"""
import logging
from datetime import datetime
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

from app.core.fixtures import load_records, CUSTOMERS_FIXTURE
from app.core.locks import KeyedLock
from app.domain.customer import Customer, CustomerCreate, CustomerUpdate

logger = logging.getLogger(__name__)


class CustomerRepository:
    """
    Repository for Customer data access

    Customers are frozen models; updates replace the stored instance,
    so orders that copied an earlier address keep their copy.
    """

    _COLLECTION_KEY = "__customers__"

    def __init__(self, customers: Iterable[Customer] = ()):
        self._customers: Dict[str, Customer] = {c.id: c for c in customers}
        self._locks = KeyedLock()

    @classmethod
    def from_fixtures(cls, data_dir: Optional[Union[str, Path]] = None) -> "CustomerRepository":
        customers = [Customer(**row) for row in load_records(CUSTOMERS_FIXTURE, data_dir)]
        logger.info(f"Customer directory loaded: {len(customers)} customers")
        return cls(customers)

    def find_by_id(self, customer_id: str) -> Optional[Customer]:
        return self._customers.get(customer_id)

    def find_all(self) -> List[Customer]:
        return list(self._customers.values())

    def search(self, term: Optional[str]) -> List[Customer]:
        """
        Search customers by name, email, phone or tax id

        An empty term returns every customer. Name and email match
        case-insensitively; phone and tax id match as typed.
        """
        if not term:
            return self.find_all()

        needle = term.lower()
        return [
            c for c in self._customers.values()
            if needle in c.name.lower()
            or (c.email and needle in c.email.lower())
            or (c.phone and term in c.phone)
            or term in c.tax_id
        ]

    def create(self, data: CustomerCreate) -> Customer:
        """
        Register a new customer

        IDs follow the fixture convention: "cust<N>".
        """
        now = datetime.now()

        with self._locks.hold(self._COLLECTION_KEY):
            sequence = len(self._customers) + 1
            while f"cust{sequence}" in self._customers:
                sequence += 1

            customer = Customer(
                id=f"cust{sequence}",
                created_at=now,
                updated_at=now,
                **data.model_dump(),
            )
            self._customers[customer.id] = customer

        logger.info(f"Customer created: {customer.id} ({customer.name})")
        return customer

    def update(self, customer_id: str, data: CustomerUpdate) -> Optional[Customer]:
        """
        Update an existing customer

        Returns:
            Updated customer or None if not found
        """
        changes = data.model_dump(exclude_unset=True, exclude_none=True)

        with self._locks.hold(customer_id):
            current = self._customers.get(customer_id)
            if current is None:
                return None

            # Re-validate so the postal code / tax id rules still hold
            updated = Customer(**{
                **current.model_dump(),
                **changes,
                'updated_at': datetime.now(),
            })
            self._customers[customer_id] = updated

        logger.info(f"Customer updated: {customer_id}")
        return updated
