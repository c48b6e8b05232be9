"""
Shipping Domain Models

Rate table (CEP ranges, weight brackets, order value brackets), the
shipping options computed from it, and the shipping choice made at
checkout.

Author: TM3
Date: 2026-10-17
"""
from pydantic import BaseModel, Field, ConfigDict
from typing import Optional, List, Tuple, Union, Literal, Annotated
from decimal import Decimal


class ShippingOption(BaseModel):
    """
    One delivery option

    In the rate table `price` is the base price; options returned by the
    shipping calculator carry the final price (2 decimals).
    """

    name: str = Field(..., description="Option name (e.g. 'Entrega Padrão')")
    company: str = Field(..., description="Carrier")
    price: Decimal = Field(..., description="Price in BRL", ge=0)
    estimated_days: int = Field(..., description="Business days to deliver", ge=0)
    available_cities: Optional[List[str]] = Field(None, description="City whitelist (None = everywhere)")
    is_unavailable: bool = Field(False, description="Not deliverable to the requested city")

    model_config = ConfigDict(frozen=True)

    def serves_city(self, city: str) -> bool:
        """An empty or missing whitelist serves every city"""
        if not self.available_cities:
            return True
        return city in self.available_cities

    def to_dict(self) -> dict:
        data = self.model_dump(mode="json")
        data['price'] = float(self.price)
        return data


class PostalCodeRange(BaseModel):
    """CEP range [min, max] served by one region"""

    range: Tuple[str, str] = Field(..., description="Inclusive [min, max], 8-digit strings")
    region: str = Field(..., description="Region name")
    options: List[ShippingOption] = Field(default_factory=list, description="Base options, in display order")

    model_config = ConfigDict(frozen=True)

    def contains(self, postal_code: str) -> bool:
        # Equal-length digit strings compare like numbers
        low, high = self.range
        return low <= postal_code <= high


class WeightMultiplier(BaseModel):
    """Weight bracket [min_weight, max_weight) -> price multiplier"""

    min_weight: Decimal = Field(..., ge=0)
    max_weight: Decimal = Field(..., ge=0)
    multiplier: Decimal = Field(..., ge=0)

    model_config = ConfigDict(frozen=True)

    def contains(self, weight: Decimal) -> bool:
        return self.min_weight <= weight < self.max_weight


class ValueDiscount(BaseModel):
    """Order value bracket [min_value, max_value] -> shipping discount percentage"""

    min_value: Decimal = Field(..., ge=0)
    max_value: Decimal = Field(..., ge=0)
    discount: Decimal = Field(..., ge=0, le=100)

    model_config = ConfigDict(frozen=True)

    def contains(self, value: Decimal) -> bool:
        return self.min_value <= value <= self.max_value


class ShippingRateTable(BaseModel):
    """
    Static shipping rate configuration

    Loaded once at startup from the shipping fixture and read-only after.
    Lookups return the first matching entry in table order.
    """

    postal_code_ranges: List[PostalCodeRange] = Field(default_factory=list)
    weight_multipliers: List[WeightMultiplier] = Field(default_factory=list)
    value_discounts: List[ValueDiscount] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    def find_range(self, postal_code: str) -> Optional[PostalCodeRange]:
        return next((r for r in self.postal_code_ranges if r.contains(postal_code)), None)

    def find_weight_multiplier(self, weight: Decimal) -> Optional[WeightMultiplier]:
        return next((w for w in self.weight_multipliers if w.contains(weight)), None)

    def find_value_discount(self, value: Decimal) -> Optional[ValueDiscount]:
        return next((v for v in self.value_discounts if v.contains(value)), None)

    @property
    def regions(self) -> List[str]:
        return [r.region for r in self.postal_code_ranges]


# ============================================================================
# Shipping choice (tagged variant)
# ============================================================================

class PickupChoice(BaseModel):
    """Customer collects the order at the store, no shipping cost"""
    kind: Literal["pickup"] = "pickup"

    model_config = ConfigDict(frozen=True)

    @property
    def cost(self) -> Decimal:
        return Decimal('0.00')

    @property
    def method_label(self) -> str:
        return "Retirada na loja"


class OptionChoice(BaseModel):
    """A concrete shipping option computed by the shipping calculator"""
    kind: Literal["option"] = "option"
    option: ShippingOption

    model_config = ConfigDict(frozen=True)

    @property
    def cost(self) -> Decimal:
        return self.option.price

    @property
    def method_label(self) -> str:
        return f"{self.option.name} ({self.option.company})"


class UnselectedChoice(BaseModel):
    """No delivery method picked yet"""
    kind: Literal["unselected"] = "unselected"

    model_config = ConfigDict(frozen=True)


ShippingChoice = Annotated[
    Union[PickupChoice, OptionChoice, UnselectedChoice],
    Field(discriminator="kind"),
]
