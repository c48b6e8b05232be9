"""
Order Assembler
Combines a customer, line items and a shipping choice into an Order

Author: TM3
Date: 2026-10-17
"""
import uuid
from datetime import datetime
from decimal import Decimal
from typing import Callable, Iterable, List, Optional

from app.core.config import settings
from app.core.exceptions import OrderPreconditionError
from app.domain.customer import Customer
from app.domain.order import Order, OrderLineItem, OrderStatus, ShippingDestination
from app.domain.shipping import OptionChoice, PickupChoice, ShippingChoice, UnselectedChoice


def generate_order_id(prefix: Optional[str] = None) -> str:
    """Order id such as "ORD5F3A9C21" """
    return f"{prefix or settings.ORDER_ID_PREFIX}{uuid.uuid4().hex[:8].upper()}"


class OrderAssembler:
    """
    Service that builds (but does not store) orders

    Does not persist the order and does not touch product stock; both
    are separate steps owned by the caller.
    """

    def __init__(
        self,
        id_factory: Callable[[], str] = generate_order_id,
        clock: Callable[[], datetime] = datetime.now,
        default_country: Optional[str] = None
    ):
        self.id_factory = id_factory
        self.clock = clock
        self.default_country = default_country or settings.DEFAULT_COUNTRY

    def build_order(
        self,
        customer: Optional[Customer],
        items: Iterable[OrderLineItem],
        shipping_choice: Optional[ShippingChoice],
        seller_id: str
    ) -> Order:
        """
        Assemble a pending order

        Args:
            customer: Buyer; the address is copied into the order
            items: Line items from the OrderLineAggregator
            shipping_choice: PickupChoice or OptionChoice
            seller_id: Seller registering the order

        Returns:
            New Order with status pending and total = subtotal + shipping_cost

        Raises:
            OrderPreconditionError listing every missing input
        """
        items = list(items)

        missing: List[str] = []
        if customer is None:
            missing.append("customer")
        if not items:
            missing.append("items")
        if shipping_choice is None or isinstance(shipping_choice, UnselectedChoice):
            missing.append("shipping_choice")
        if missing:
            raise OrderPreconditionError(missing)

        if isinstance(shipping_choice, PickupChoice):
            shipping_cost = Decimal('0.00')
            shipping_option = None
        elif isinstance(shipping_choice, OptionChoice):
            shipping_cost = shipping_choice.option.price
            shipping_option = shipping_choice.option
        else:
            raise TypeError(f"Unknown shipping choice: {shipping_choice!r}")

        subtotal = sum((item.subtotal for item in items), Decimal('0'))
        now = self.clock()

        return Order(
            id=self.id_factory(),
            customer_id=customer.id,
            seller_id=seller_id,
            items=items,
            subtotal=subtotal,
            shipping_cost=shipping_cost,
            shipping_method=shipping_choice.method_label,
            shipping_option=shipping_option,
            shipping_destination=self.snapshot_destination(customer),
            status=OrderStatus.PENDING,
            created_at=now,
            updated_at=now,
        )

    def snapshot_destination(self, customer: Customer) -> ShippingDestination:
        """Copy the customer's contact data and address into a destination"""
        address = customer.address
        return ShippingDestination(
            full_name=customer.name,
            email=customer.email or "",
            phone=customer.phone or "",
            address=address.address_line,
            district=address.district,
            city=address.city,
            state=address.state,
            postal_code=address.postal_code,
            country=address.country or self.default_country,
        )
