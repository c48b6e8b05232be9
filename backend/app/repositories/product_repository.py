"""
Product Repository - Data Access Layer for Products

Holds the catalog in memory (seeded from the products/sellers fixtures)
and returns Product domain models.

Author: TM3
Date: 2026-10-17
"""
import logging
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Tuple, Union
from pathlib import Path

from app.core.exceptions import NotFoundError
from app.core.fixtures import load_records, PRODUCTS_FIXTURE, SELLERS_FIXTURE
from app.core.locks import KeyedLock
from app.domain.product import Product, ProductFilters, Seller

logger = logging.getLogger(__name__)


class ProductRepository:
    """
    Repository for Product data access

    Products are frozen models; a stock change replaces the stored
    instance under the product's lock.
    """

    def __init__(self, products: Iterable[Product], sellers: Iterable[Seller] = ()):
        self._products: Dict[str, Product] = {p.id: p for p in products}
        self._sellers: Dict[str, Seller] = {s.id: s for s in sellers}
        self._locks = KeyedLock()

    @classmethod
    def from_fixtures(cls, data_dir: Optional[Union[str, Path]] = None) -> "ProductRepository":
        """Build the catalog from products.json and sellers.json"""
        products = [Product(**row) for row in load_records(PRODUCTS_FIXTURE, data_dir)]
        sellers = [Seller(**row) for row in load_records(SELLERS_FIXTURE, data_dir)]
        logger.info(f"Catalog loaded: {len(products)} products, {len(sellers)} sellers")
        return cls(products, sellers)

    def find_by_id(self, product_id: str) -> Optional[Product]:
        """
        Find product by ID

        Args:
            product_id: Product ID

        Returns:
            Product or None if not found
        """
        return self._products.get(product_id)

    def find_by_seller(self, seller_id: str, in_stock_only: bool = False) -> List[Product]:
        """All products of one seller, optionally only those with stock"""
        return [
            p for p in self._products.values()
            if p.seller_id == seller_id and (not in_stock_only or p.stock > 0)
        ]

    def search(self, term: Optional[str], seller_id: Optional[str] = None) -> List[Product]:
        """
        Search products by name, description, SKU or brand

        Args:
            term: Case-insensitive search term (empty returns everything)
            seller_id: Restrict to one seller

        Returns:
            Matching products in catalog order
        """
        products = list(self._products.values())
        if seller_id:
            products = [p for p in products if p.seller_id == seller_id]

        if not term:
            return products

        needle = term.lower()
        return [
            p for p in products
            if needle in p.name.lower()
            or needle in p.description.lower()
            or (p.sku and needle in p.sku.lower())
            or (p.brand and needle in p.brand.lower())
        ]

    def find_all(
        self,
        filters: Optional[ProductFilters] = None,
        limit: int = 100,
        offset: int = 0
    ) -> Tuple[List[Product], int]:
        """
        Find products with storefront filters

        Args:
            filters: Search, category, price range, seller location and sort order
            limit: Maximum results to return
            offset: Number of results to skip

        Returns:
            Tuple of (list of products, total count)
        """
        filters = filters or ProductFilters()
        products = self.search(filters.search, filters.seller_id)

        if filters.in_stock_only:
            products = [p for p in products if not p.is_out_of_stock]

        if filters.category:
            products = [p for p in products if p.category == filters.category]

        if filters.min_price is not None:
            products = [p for p in products if p.price >= filters.min_price]

        if filters.max_price is not None:
            products = [p for p in products if p.price <= filters.max_price]

        if filters.country or filters.state:
            products = [p for p in products if self._seller_matches(p.seller_id, filters)]

        if filters.sort_by == 'newest':
            products.sort(key=lambda p: p.created_at, reverse=True)
        elif filters.sort_by == 'best_selling':
            products.sort(key=lambda p: p.sales, reverse=True)
        elif filters.sort_by == 'price_asc':
            products.sort(key=lambda p: p.price)
        elif filters.sort_by == 'price_desc':
            products.sort(key=lambda p: p.price, reverse=True)

        total = len(products)
        return products[offset:offset + limit], total

    def _seller_matches(self, seller_id: str, filters: ProductFilters) -> bool:
        seller = self._sellers.get(seller_id)
        if seller is None:
            return False
        if filters.country and seller.location.country != filters.country:
            return False
        if filters.state and seller.location.state != filters.state:
            return False
        return True

    def get_categories(self) -> List[str]:
        """Distinct categories, sorted"""
        return sorted({p.category for p in self._products.values()})

    def get_seller(self, seller_id: str) -> Optional[Seller]:
        return self._sellers.get(seller_id)

    def update_stock(self, product_id: str, new_stock: int) -> Product:
        """
        Set the stock of one product

        Raises:
            NotFoundError if the product does not exist
            ValueError if new_stock is negative
        """
        if new_stock < 0:
            raise ValueError(f"Stock cannot be negative: {new_stock}")

        with self._locks.hold(product_id):
            product = self._products.get(product_id)
            if product is None:
                raise NotFoundError("Product", product_id)

            updated = product.model_copy(update={'stock': new_stock, 'updated_at': datetime.now()})
            self._products[product_id] = updated

        logger.info(f"Stock updated for {product_id}: {product.stock} -> {new_stock}")
        return updated

    def decrement_stock(self, product_id: str, quantity: int) -> Product:
        """
        Remove sold units from stock

        Raises:
            NotFoundError if the product does not exist
            ValueError if quantity is not positive or exceeds the stock
        """
        if quantity <= 0:
            raise ValueError(f"Quantity must be positive: {quantity}")

        with self._locks.hold(product_id):
            product = self._products.get(product_id)
            if product is None:
                raise NotFoundError("Product", product_id)
            if quantity > product.stock:
                raise ValueError(
                    f"Insufficient stock for {product_id}: requested {quantity}, available {product.stock}"
                )

            updated = product.model_copy(update={
                'stock': product.stock - quantity,
                'sales': product.sales + quantity,
                'updated_at': datetime.now(),
            })
            self._products[product_id] = updated

        logger.info(f"Stock decremented for {product_id}: {product.stock} -> {updated.stock}")
        return updated

    def restock(self, product_id: str, quantity: int) -> Product:
        """
        Put units back into stock (undo of decrement_stock)

        Raises:
            NotFoundError if the product does not exist
            ValueError if quantity is not positive
        """
        if quantity <= 0:
            raise ValueError(f"Quantity must be positive: {quantity}")

        with self._locks.hold(product_id):
            product = self._products.get(product_id)
            if product is None:
                raise NotFoundError("Product", product_id)

            updated = product.model_copy(update={
                'stock': product.stock + quantity,
                'sales': max(0, product.sales - quantity),
                'updated_at': datetime.now(),
            })
            self._products[product_id] = updated

        logger.info(f"Stock restored for {product_id}: {product.stock} -> {updated.stock}")
        return updated

    def get_stats(self) -> Dict:
        """
        Get product statistics

        Returns:
            Dictionary with totals by category and stock levels
        """
        products = list(self._products.values())
        by_category: Dict[str, int] = {}
        for p in products:
            by_category[p.category] = by_category.get(p.category, 0) + 1

        return {
            'total_products': len(products),
            'out_of_stock': sum(1 for p in products if p.is_out_of_stock),
            'total_stock': sum(p.stock for p in products),
            'by_category': by_category,
        }
