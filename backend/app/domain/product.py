"""
Product Domain Model

Represents a catalog product in the Vitrine marketplace.
This is the single source of truth for product data structure.

Author: TM3
Date: 2026-10-17
"""
from pydantic import BaseModel, Field, ConfigDict
from typing import Optional, List, Literal
from datetime import datetime
from decimal import Decimal


class SellerLocation(BaseModel):
    """Where a seller ships from"""

    country: str = Field(..., description="Country name")
    state: str = Field(..., description="State code (SP, RJ, ...)")


class Seller(BaseModel):
    """
    Seller domain model (lightweight, for catalog filtering)
    """

    id: str = Field(..., description="Seller ID")
    name: str = Field(..., description="Store name")
    reputation: Decimal = Field(Decimal('0'), description="Average rating (0-5)", ge=0, le=5)
    location: SellerLocation

    model_config = ConfigDict(from_attributes=True)


class Dimensions(BaseModel):
    """Package dimensions in centimeters"""

    height: Decimal = Field(..., ge=0)
    width: Decimal = Field(..., ge=0)
    depth: Decimal = Field(..., ge=0)


class Product(BaseModel):
    """
    Product domain model - represents a product in the catalog

    Fields:
        id: Product ID (e.g. "prod1")
        name: Product name
        description: Product description
        price: Unit price (BRL)
        stock: Units available (never negative)
        weight: Unit weight in kg
        discount: Discount percentage (0-100)
        category: Product category
        seller_id: Reference to the seller

        # Optional catalog data
        brand, sku, images, dimensions, sales

        # Metadata
        created_at: When product was created
        updated_at: When product was last updated
    """

    # Primary identification
    id: str = Field(..., description="Product ID")
    name: str = Field(..., description="Product name")
    description: str = Field("", description="Product description")

    # Pricing and inventory
    price: Decimal = Field(..., description="Unit price", ge=0)
    stock: int = Field(0, description="Units in stock", ge=0)
    weight: Decimal = Field(Decimal('0'), description="Unit weight (kg)", ge=0)
    discount: Decimal = Field(Decimal('0'), description="Discount percentage", ge=0, le=100)

    # Classification
    category: str = Field(..., description="Product category")
    seller_id: str = Field(..., description="Seller ID")
    brand: Optional[str] = Field(None, description="Product brand")
    sku: Optional[str] = Field(None, description="Stock Keeping Unit")

    # Presentation
    images: List[str] = Field(default_factory=list, description="Image URLs")
    dimensions: Optional[Dimensions] = Field(None, description="Package dimensions")
    sales: int = Field(0, description="Units sold", ge=0)

    # Metadata
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: Optional[datetime] = Field(None, description="Last update timestamp")

    # Line items keep a snapshot of the product, so snapshots must not change
    model_config = ConfigDict(from_attributes=True, frozen=True)

    # Computed properties
    @property
    def discounted_price(self) -> Decimal:
        """Unit price after the product discount (not rounded)"""
        return self.price * (1 - self.discount / Decimal(100))

    @property
    def is_out_of_stock(self) -> bool:
        """Check if product is out of stock"""
        return self.stock <= 0

    def to_dict(self) -> dict:
        """
        Convert to dictionary with computed fields

        Returns dict with all fields plus computed properties
        """
        data = self.model_dump(mode="json")

        data['is_out_of_stock'] = self.is_out_of_stock
        data['discounted_price'] = float(round(self.discounted_price, 2))

        # Convert Decimal to float for JSON compatibility
        for field in ['price', 'weight', 'discount']:
            data[field] = float(getattr(self, field))

        return data


class ProductFilters(BaseModel):
    """Catalog filters used by the storefront listing"""

    search: Optional[str] = None
    category: Optional[str] = None
    min_price: Optional[Decimal] = None
    max_price: Optional[Decimal] = None
    country: Optional[str] = None
    state: Optional[str] = None
    seller_id: Optional[str] = None
    in_stock_only: bool = False
    sort_by: Optional[Literal['newest', 'best_selling', 'price_asc', 'price_desc']] = None


class StockUpdate(BaseModel):
    """Schema for an explicit stock update"""
    stock: int = Field(..., ge=0)
