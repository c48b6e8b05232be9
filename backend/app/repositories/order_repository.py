"""
Order Repository - Data Access Layer for Orders

In-memory order ledger. Orders are appended once and never deleted;
only their status (and updated_at) change afterwards.

Author: TM3
Date: 2026-10-17
"""
import logging
from datetime import datetime
from decimal import Decimal
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional, Tuple, Union

from app.core.fixtures import load_records, ORDERS_FIXTURE
from app.core.locks import KeyedLock
from app.domain.order import Order, OrderStatus

logger = logging.getLogger(__name__)


# Statuses counted as realized sales in the seller summary
SALES_STATUSES = (OrderStatus.SHIPPED, OrderStatus.DELIVERED)


class OrderRepository:
    """
    Repository for Order data access

    Appends are serialized on a collection lock, status updates on a
    per-order lock.
    """

    _COLLECTION_KEY = "__orders__"

    def __init__(self, orders: Iterable[Order] = (), clock: Callable[[], datetime] = datetime.now):
        self._orders: Dict[str, Order] = {o.id: o for o in orders}
        self._locks = KeyedLock()
        self._clock = clock

    @classmethod
    def from_fixtures(cls, data_dir: Optional[Union[str, Path]] = None) -> "OrderRepository":
        orders = [Order(**row) for row in load_records(ORDERS_FIXTURE, data_dir)]
        logger.info(f"Order ledger loaded: {len(orders)} orders")
        return cls(orders)

    def append(self, order: Order) -> Order:
        """
        Persist a new order

        Raises:
            ValueError if an order with the same id already exists
        """
        self.append_many([order])
        return order

    def append_many(self, orders: List[Order]) -> List[Order]:
        """
        Persist several new orders at once

        Either every order is stored or none is.

        Raises:
            ValueError if an id is repeated or already stored
        """
        with self._locks.hold(self._COLLECTION_KEY):
            ids = [o.id for o in orders]
            duplicates = {i for i in ids if i in self._orders or ids.count(i) > 1}
            if duplicates:
                raise ValueError(f"Order already exists: {', '.join(sorted(duplicates))}")
            for order in orders:
                self._orders[order.id] = order

        for order in orders:
            logger.info(
                f"Order {order.id} stored: seller={order.seller_id} customer={order.customer_id} "
                f"total={order.total}"
            )
        return orders

    def find_by_id(self, order_id: str) -> Optional[Order]:
        return self._orders.get(order_id)

    def update_status(self, order_id: str, status: OrderStatus) -> Optional[Order]:
        """
        Change the status of an order

        Any status can be set from any status. Setting the current status
        again leaves the order (and its updated_at) untouched.

        Returns:
            Updated order or None if not found
        """
        with self._locks.hold(order_id):
            order = self._orders.get(order_id)
            if order is None:
                return None
            if order.status == status:
                return order

            updated = order.with_status(status, self._clock())
            self._orders[order_id] = updated

        logger.info(f"Order {order_id} status: {order.status.value} -> {status.value}")
        return updated

    def find_by_customer(self, customer_id: str) -> List[Order]:
        return [o for o in self._orders.values() if o.customer_id == customer_id]

    def find_by_seller(self, seller_id: str) -> List[Order]:
        return [o for o in self._orders.values() if o.seller_id == seller_id]

    def find_all(
        self,
        status: Optional[OrderStatus] = None,
        seller_id: Optional[str] = None,
        customer_id: Optional[str] = None,
        limit: int = 50,
        offset: int = 0
    ) -> Tuple[List[Order], int]:
        """
        Find orders with filters, newest first

        Returns:
            Tuple of (list of orders, total count)
        """
        orders = list(self._orders.values())

        if status:
            orders = [o for o in orders if o.status == status]
        if seller_id:
            orders = [o for o in orders if o.seller_id == seller_id]
        if customer_id:
            orders = [o for o in orders if o.customer_id == customer_id]

        orders.sort(key=lambda o: o.created_at, reverse=True)
        total = len(orders)
        return orders[offset:offset + limit], total

    def count_by_status(self, seller_id: str) -> Dict[str, int]:
        """Order count per status for one seller (every status present)"""
        counts = {s.value: 0 for s in OrderStatus}
        for order in self.find_by_seller(seller_id):
            counts[order.status.value] += 1
        return counts

    def get_total_sales(self, seller_id: str) -> Decimal:
        """Sum of totals of the seller's shipped and delivered orders"""
        return sum(
            (o.total for o in self.find_by_seller(seller_id) if o.status in SALES_STATUSES),
            Decimal('0'),
        )
