"""
Shipping Calculator - Core business logic for shipping prices

Computes the delivery options for a destination CEP and a set of line
items from the static shipping rate table:

1. CEP range -> region -> base options
2. total weight -> weight multiplier  (bracket [min, max), default x1)
3. total discounted value -> shipping discount  (bracket [min, max], default 0%)
4. city whitelist -> availability

Example:
    CEP 01310-100, 2.0 kg, R$150 of goods, base R$20.00,
    x1.2 for 2-5 kg, 10% off for R$100-199.99  ->  20 * 1.2 * 0.9 = R$21.60

Author: TM3
Date: 2026-10-17
"""
import logging
from datetime import date, timedelta
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, List, Optional

from app.domain.customer import normalize_postal_code, POSTAL_CODE_LENGTH
from app.domain.order import OrderLineItem
from app.domain.shipping import ShippingOption, ShippingRateTable

logger = logging.getLogger(__name__)


CENTS = Decimal('0.01')
DEFAULT_WEIGHT_MULTIPLIER = Decimal('1')
DEFAULT_VALUE_DISCOUNT = Decimal('0')
FREE_SHIPPING_DISCOUNT = Decimal('100')


class ShippingCalculator:
    """
    Service for pricing shipping options

    Pure and synchronous: the result depends only on the rate table and
    the arguments.
    """

    def __init__(self, rate_table: ShippingRateTable):
        self.rate_table = rate_table

    def calculate_shipping_options(
        self,
        postal_code: str,
        items: Iterable[OrderLineItem],
        destination_city: Optional[str] = None
    ) -> List[ShippingOption]:
        """
        Price every available delivery option for a destination

        Args:
            postal_code: Destination CEP, separators allowed ("01310-100")
            items: Line items (product snapshot + quantity)
            destination_city: When given, options restricted to other cities are dropped

        Returns:
            Options in rate table order with final prices, or [] when the
            CEP is malformed or outside every served range
        """
        cep = normalize_postal_code(postal_code)
        if len(cep) != POSTAL_CODE_LENGTH:
            return []

        cep_range = self.rate_table.find_range(cep)
        if cep_range is None:
            logger.debug(f"CEP {cep} outside every served range")
            return []

        items = list(items)
        total_weight = sum((item.weight for item in items), Decimal('0'))
        total_value = sum((item.shipping_value for item in items), Decimal('0'))

        multiplier = self.weight_multiplier_for(total_weight)
        discount = self.value_discount_for(total_value)

        logger.debug(
            f"CEP {cep} -> {cep_range.region}: weight={total_weight} x{multiplier}, "
            f"value={total_value} -{discount}%"
        )

        options = list(cep_range.options)
        if destination_city:
            options = [
                option if option.serves_city(destination_city)
                else option.model_copy(update={'is_unavailable': True})
                for option in options
            ]

        return [
            option.model_copy(update={'price': self._final_price(option.price, multiplier, discount)})
            for option in options
            if not option.is_unavailable
        ]

    def weight_multiplier_for(self, total_weight: Decimal) -> Decimal:
        """Multiplier of the bracket containing total_weight, x1 when none does"""
        bracket = self.rate_table.find_weight_multiplier(total_weight)
        return bracket.multiplier if bracket else DEFAULT_WEIGHT_MULTIPLIER

    def value_discount_for(self, total_value: Decimal) -> Decimal:
        """Discount percentage of the bracket containing total_value, 0 when none does"""
        bracket = self.rate_table.find_value_discount(total_value)
        return bracket.discount if bracket else DEFAULT_VALUE_DISCOUNT

    @staticmethod
    def _final_price(base_price: Decimal, multiplier: Decimal, discount: Decimal) -> Decimal:
        if discount == FREE_SHIPPING_DISCOUNT:
            return Decimal('0.00')

        price = base_price * multiplier
        if discount > 0:
            price = price * (1 - discount / Decimal(100))

        return price.quantize(CENTS, rounding=ROUND_HALF_UP)

    def is_serviceable(self, postal_code: str) -> bool:
        """Check if a CEP is well formed and inside a served range"""
        cep = normalize_postal_code(postal_code)
        if len(cep) != POSTAL_CODE_LENGTH:
            return False
        return self.rate_table.find_range(cep) is not None

    def available_regions(self) -> List[str]:
        """Served regions, in rate table order"""
        return self.rate_table.regions

    @staticmethod
    def estimate_delivery_date(estimated_days: int, start: Optional[date] = None) -> date:
        """
        Expected delivery date

        start + estimated_days, moved forward to Monday when it falls on a
        weekend.
        """
        delivery = (start or date.today()) + timedelta(days=estimated_days)

        weekday = delivery.weekday()
        if weekday == 5:  # Saturday
            delivery += timedelta(days=2)
        elif weekday == 6:  # Sunday
            delivery += timedelta(days=1)

        return delivery
