"""
Shipping Rate Repository

Loads the static shipping rate table (CEP ranges, weight multipliers,
order value discounts) from the shipping fixture.

Author: TM3
Date: 2026-10-17
"""
import logging
from pathlib import Path
from typing import Optional, Union

from pydantic import ValidationError

from app.core.exceptions import FixtureError
from app.core.fixtures import load_fixture, SHIPPING_FIXTURE
from app.domain.shipping import ShippingRateTable

logger = logging.getLogger(__name__)


def load_shipping_rate_table(data_dir: Optional[Union[str, Path]] = None) -> ShippingRateTable:
    """
    Load and validate the shipping rate table

    Raises:
        FixtureError if the fixture is missing or does not match the schema
    """
    data = load_fixture(SHIPPING_FIXTURE, data_dir)

    try:
        table = ShippingRateTable(**data)
    except (TypeError, ValidationError) as e:
        raise FixtureError(f"Invalid shipping rate table: {e}") from e

    logger.info(
        f"Shipping rate table loaded: {len(table.postal_code_ranges)} CEP ranges, "
        f"{len(table.weight_multipliers)} weight brackets, {len(table.value_discounts)} value brackets"
    )
    return table
