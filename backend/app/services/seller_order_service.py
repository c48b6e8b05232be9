"""
Seller Order Service
Seller-assisted order creation: customer -> products -> shipping -> order

Steps:
1. Resolve the customer
2. Aggregate product selections into line items (seller's own catalog)
3. Price shipping for the customer's CEP and city
4. Assemble the order from the chosen delivery method
5. Optionally (explicit flag) take the units out of stock
6. Store it in the order ledger

Steps 5 and 6 run as one commit: nothing is stored when the stock
cannot be reserved, and nothing is reserved or stored once the caller
has stopped waiting.

Buyer checkout runs the same pipeline once per seller in the cart.

Author: TM3
Date: 2026-10-17
"""
import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, Iterable, List, Literal, Optional

from pydantic import BaseModel, Field

from app.core.exceptions import NotFoundError, OrderPreconditionError
from app.core.locks import CommitWindow
from app.domain.customer import Customer, normalize_postal_code
from app.domain.order import Order, OrderLineItem, OrderStatus
from app.domain.shipping import (
    OptionChoice, PickupChoice, ShippingChoice, ShippingOption, UnselectedChoice,
)
from app.repositories.customer_repository import CustomerRepository
from app.repositories.order_repository import OrderRepository
from app.repositories.product_repository import ProductRepository
from app.services.order_assembler import OrderAssembler
from app.services.order_line_aggregator import LineAggregation, LineRequest, OrderLineAggregator
from app.services.shipping_calculator import ShippingCalculator

logger = logging.getLogger(__name__)


class ShippingSelection(BaseModel):
    """
    Delivery method picked by the seller

    Options are referenced by name and re-priced on the server; a client
    never supplies a shipping price.
    """
    kind: Literal["pickup", "option"] = Field(..., description="pickup or option")
    option_name: Optional[str] = Field(None, description="Name of the quoted option")


@dataclass
class ShippingQuote:
    """Shipping options for one destination and one set of line items"""

    postal_code: str
    city: Optional[str]
    aggregation: LineAggregation
    options: List[ShippingOption] = field(default_factory=list)

    @property
    def serviceable(self) -> bool:
        return bool(self.options)

    @property
    def default_option(self) -> Optional[ShippingOption]:
        # First option is the standard one
        return self.options[0] if self.options else None


class SellerOrderService:
    """Service wiring the order pipeline to the repositories"""

    def __init__(
        self,
        catalog: ProductRepository,
        customers: CustomerRepository,
        orders: OrderRepository,
        calculator: ShippingCalculator,
        assembler: Optional[OrderAssembler] = None
    ):
        self.catalog = catalog
        self.customers = customers
        self.orders = orders
        self.calculator = calculator
        self.aggregator = OrderLineAggregator(catalog)
        self.assembler = assembler or OrderAssembler()

    # =========================================================================
    # Shipping
    # =========================================================================

    def quote_shipping(
        self,
        requests: Iterable[LineRequest],
        postal_code: Optional[str] = None,
        city: Optional[str] = None,
        customer_id: Optional[str] = None,
        seller_id: Optional[str] = None
    ) -> ShippingQuote:
        """
        Price shipping for a set of product selections

        The destination is either an explicit CEP (+ optional city) or the
        address of a registered customer; explicit values win.

        Raises:
            NotFoundError if customer_id is given and unknown
            ValueError if no destination CEP can be determined
        """
        if customer_id:
            customer = self._get_customer(customer_id)
            postal_code = postal_code or customer.address.postal_code
            city = city or customer.address.city

        if not postal_code:
            raise ValueError("A postal code or a customer is required to quote shipping")

        aggregation = self.aggregator.aggregate(requests, seller_id=seller_id)
        options = self.calculator.calculate_shipping_options(postal_code, aggregation.items, city)

        if not options:
            logger.info(f"No shipping available for CEP {postal_code}")

        return ShippingQuote(
            postal_code=normalize_postal_code(postal_code),
            city=city,
            aggregation=aggregation,
            options=options,
        )

    def resolve_shipping_choice(
        self,
        selection: Optional[ShippingSelection],
        customer: Optional[Customer],
        items: List[OrderLineItem]
    ) -> ShippingChoice:
        """
        Turn a ShippingSelection into a priced ShippingChoice

        An option that cannot be priced for this customer (no customer,
        no items, unserved CEP, unknown name) resolves to UnselectedChoice.
        """
        if selection is None:
            return UnselectedChoice()

        if selection.kind == "pickup":
            return PickupChoice()

        if customer is None or not items or not selection.option_name:
            return UnselectedChoice()

        options = self.calculator.calculate_shipping_options(
            customer.address.postal_code, items, customer.address.city
        )
        option = next((o for o in options if o.name == selection.option_name), None)
        if option is None:
            logger.warning(
                f"Shipping option '{selection.option_name}' not available for CEP {customer.address.postal_code}"
            )
            return UnselectedChoice()

        return OptionChoice(option=option)

    # =========================================================================
    # Orders
    # =========================================================================

    def create_order(
        self,
        seller_id: str,
        customer_id: Optional[str],
        requests: Iterable[LineRequest],
        shipping: Optional[ShippingSelection],
        decrement_stock: bool = False,
        window: Optional[CommitWindow] = None
    ) -> Order:
        """
        Run the full seller order pipeline and store the order

        Args:
            seller_id: Seller registering the order
            customer_id: Registered customer
            requests: Product selections
            shipping: Pickup or a quoted option name
            decrement_stock: Take the ordered units out of stock with the order
            window: Commit gate shared with a caller that may stop waiting

        Returns:
            Stored Order

        Raises:
            OrderPreconditionError if customer, items or shipping are missing
            ValueError if the stock no longer covers the order
            PipelineAbandonedError if the window was closed before storing
        """
        customer = self.customers.find_by_id(customer_id) if customer_id else None
        order = self._build_seller_order(seller_id, customer, requests, shipping)
        self._commit([order], decrement_stock, window)
        return order

    def checkout(
        self,
        customer_id: Optional[str],
        requests: Iterable[LineRequest],
        shipping: Dict[str, ShippingSelection],
        decrement_stock: bool = False,
        window: Optional[CommitWindow] = None
    ) -> List[Order]:
        """
        Buyer checkout of a cart that may hold several sellers' products

        The cart is split by seller and one order is built per seller, each
        with its own delivery method from ``shipping`` (keyed by seller id).
        Nothing is stored unless every seller's order can be built and,
        when requested, its stock reserved.

        Returns:
            Stored orders, one per seller, in first-selection order

        Raises:
            OrderPreconditionError for the first seller whose order lacks an input
            ValueError if the stock no longer covers an order
            PipelineAbandonedError if the window was closed before storing
        """
        customer = self.customers.find_by_id(customer_id) if customer_id else None
        groups = self.group_by_seller(requests)

        if not groups:
            missing = (["customer"] if customer is None else []) + ["items"]
            if not shipping:
                missing.append("shipping_choice")
            raise OrderPreconditionError(missing)

        orders = [
            self._build_seller_order(seller_id, customer, seller_requests, shipping.get(seller_id))
            for seller_id, seller_requests in groups.items()
        ]
        self._commit(orders, decrement_stock, window)

        logger.info(f"Checkout for customer {customer_id}: {len(orders)} orders")
        return orders

    def group_by_seller(self, requests: Iterable[LineRequest]) -> Dict[str, List[LineRequest]]:
        """Split product selections by the seller of each product, dropping unknown and sold-out ones"""
        groups: Dict[str, List[LineRequest]] = {}
        for request in requests:
            product = self.catalog.find_by_id(request.product_id)
            if product is None or product.is_out_of_stock:
                logger.warning(f"Dropping cart line for product {request.product_id}: unavailable")
                continue
            groups.setdefault(product.seller_id, []).append(request)
        return groups

    def reserve_stock(self, order: Order) -> None:
        """
        Take an order's units out of stock

        All-or-nothing: when one product no longer has enough stock, the
        products already decremented are restored and the error re-raised.
        """
        done: List[OrderLineItem] = []
        try:
            for item in order.items:
                self.catalog.decrement_stock(item.product.id, item.quantity)
                done.append(item)
        except (ValueError, NotFoundError):
            for item in done:
                self.catalog.restock(item.product.id, item.quantity)
            logger.error(f"Stock reservation failed for order {order.id}, changes reverted")
            raise

    def release_stock(self, order: Order) -> None:
        """Put back the units taken by reserve_stock"""
        for item in order.items:
            self.catalog.restock(item.product.id, item.quantity)

    def get_order(self, order_id: str) -> Order:
        order = self.orders.find_by_id(order_id)
        if order is None:
            raise NotFoundError("Order", order_id)
        return order

    def update_order_status(self, order_id: str, status: OrderStatus) -> Order:
        """
        Set any status on an order

        Raises:
            NotFoundError if the order does not exist
        """
        order = self.orders.update_status(order_id, status)
        if order is None:
            raise NotFoundError("Order", order_id)
        return order

    def get_seller_summary(self, seller_id: str) -> Dict:
        """
        Seller dashboard numbers

        Returns:
            Dictionary with order count, counts by status and total sales
            (shipped + delivered orders)
        """
        counts = self.orders.count_by_status(seller_id)
        total_sales: Decimal = self.orders.get_total_sales(seller_id)

        return {
            'seller_id': seller_id,
            'total_orders': sum(counts.values()),
            'orders_by_status': counts,
            'total_sales': float(total_sales),
            'products': len(self.catalog.find_by_seller(seller_id)),
        }

    def _get_customer(self, customer_id: str) -> Customer:
        customer = self.customers.find_by_id(customer_id)
        if customer is None:
            raise NotFoundError("Customer", customer_id)
        return customer

    def _build_seller_order(
        self,
        seller_id: str,
        customer: Optional[Customer],
        requests: Iterable[LineRequest],
        shipping: Optional[ShippingSelection]
    ) -> Order:
        aggregation = self.aggregator.aggregate(requests, seller_id=seller_id)
        choice = self.resolve_shipping_choice(shipping, customer, list(aggregation.items))

        try:
            return self.assembler.build_order(customer, aggregation.items, choice, seller_id)
        except OrderPreconditionError as e:
            logger.info(f"Order not created for seller {seller_id}: missing {e.missing}")
            raise OrderPreconditionError(e.missing, seller_id=seller_id) from e

    def _commit(self, orders: List[Order], decrement_stock: bool, window: Optional[CommitWindow]) -> None:
        """
        Reserve stock (optional) and store the orders as one step

        Stock is reserved before anything is stored; a failed reservation or
        a rejected store puts back every unit already taken.
        """
        window = window or CommitWindow()
        with window.commit():
            reserved: List[Order] = []
            try:
                if decrement_stock:
                    for order in orders:
                        self.reserve_stock(order)
                        reserved.append(order)
                self.orders.append_many(orders)
            except (ValueError, NotFoundError):
                for order in reserved:
                    self.release_stock(order)
                raise
