"""
Fixture loading - static JSON data contract

Este módulo centraliza el acceso a los archivos JSON que alimentan los
repositorios en memoria (catálogo, clientes, vendedores, pedidos y tabla
de fretes). Los repositorios reciben los registros ya cargados; nada más
en la aplicación abre estos archivos.

Author: TM3
Date: 2026-10-17
"""
import json
import logging
from pathlib import Path
from typing import Any, List, Optional, Union

from .config import settings
from .exceptions import FixtureError

logger = logging.getLogger(__name__)


PRODUCTS_FIXTURE = "products.json"
SELLERS_FIXTURE = "sellers.json"
CUSTOMERS_FIXTURE = "customers.json"
ORDERS_FIXTURE = "orders.json"
SHIPPING_FIXTURE = "shipping.json"


def get_data_dir(data_dir: Optional[Union[str, Path]] = None) -> Path:
    """Resolve the fixture directory (explicit argument wins over settings)"""
    return Path(data_dir) if data_dir is not None else Path(settings.DATA_DIR)


def load_fixture(name: str, data_dir: Optional[Union[str, Path]] = None) -> Any:
    """
    Load one JSON fixture file

    Args:
        name: File name inside the data directory (e.g. "products.json")
        data_dir: Override for settings.DATA_DIR

    Returns:
        Parsed JSON content

    Raises:
        FixtureError if the file does not exist or is not valid JSON
    """
    path = get_data_dir(data_dir) / name

    if not path.exists():
        raise FixtureError(f"Fixture not found: {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise FixtureError(f"Invalid JSON in fixture {path}: {e}") from e

    logger.debug(f"Loaded fixture {path}")
    return data


def load_records(name: str, data_dir: Optional[Union[str, Path]] = None) -> List[dict]:
    """Load a fixture that must contain a JSON array of objects"""
    data = load_fixture(name, data_dir)
    if not isinstance(data, list):
        raise FixtureError(f"Fixture {name} must contain a JSON array")
    return data
