"""
Products API Endpoints
Handles catalog browsing, filtering and stock updates

Author: TM3
Date: 2026-10-17
"""
import logging
from decimal import Decimal
from fastapi import APIRouter, Depends, HTTPException, Query
from typing import Optional

from app.api.dependencies import get_product_repository
from app.core.exceptions import NotFoundError
from app.domain.product import ProductFilters, StockUpdate
from app.repositories.product_repository import ProductRepository

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/")
async def get_products(
    search: Optional[str] = Query(None, description="Search by name, description, SKU or brand"),
    category: Optional[str] = Query(None, description="Filter by category"),
    min_price: Optional[Decimal] = Query(None, ge=0, description="Minimum price"),
    max_price: Optional[Decimal] = Query(None, ge=0, description="Maximum price"),
    country: Optional[str] = Query(None, description="Seller country"),
    state: Optional[str] = Query(None, description="Seller state (SP, RJ, ...)"),
    seller_id: Optional[str] = Query(None, description="Only products of this seller"),
    in_stock: bool = Query(False, description="Hide products without stock"),
    sort_by: Optional[str] = Query(None, description="newest, best_selling, price_asc or price_desc"),
    limit: int = Query(100, ge=1, le=1000),
    offset: int = Query(0, ge=0),
    repo: ProductRepository = Depends(get_product_repository)
):
    """
    Get catalog products with optional filters

    Returns products with discounted price and stock flags
    """
    if sort_by and sort_by not in ('newest', 'best_selling', 'price_asc', 'price_desc'):
        raise HTTPException(
            status_code=400,
            detail="sort_by must be 'newest', 'best_selling', 'price_asc' or 'price_desc'"
        )

    filters = ProductFilters(
        search=search,
        category=category,
        min_price=min_price,
        max_price=max_price,
        country=country,
        state=state,
        seller_id=seller_id,
        in_stock_only=in_stock,
        sort_by=sort_by,
    )

    try:
        products, total = repo.find_all(filters=filters, limit=limit, offset=offset)

        return {
            "status": "success",
            "total": total,
            "limit": limit,
            "offset": offset,
            "count": len(products),
            "data": [product.to_dict() for product in products]
        }

    except Exception as e:
        logger.exception("Error fetching products")
        raise HTTPException(status_code=500, detail=f"Error fetching products: {str(e)}")


@router.get("/categories")
async def get_categories(repo: ProductRepository = Depends(get_product_repository)):
    """List distinct product categories"""
    categories = repo.get_categories()
    return {
        "status": "success",
        "count": len(categories),
        "data": categories
    }


@router.get("/stats")
async def get_product_stats(repo: ProductRepository = Depends(get_product_repository)):
    """
    Get product statistics

    Returns:
    - Total products
    - Products by category
    - Stock levels
    """
    return {
        "status": "success",
        "data": repo.get_stats()
    }


@router.get("/{product_id}")
async def get_product(product_id: str, repo: ProductRepository = Depends(get_product_repository)):
    """Get a single product"""
    product = repo.find_by_id(product_id)
    if product is None:
        raise HTTPException(status_code=404, detail=f"Product '{product_id}' not found")

    return {
        "status": "success",
        "data": product.to_dict()
    }


@router.patch("/{product_id}/stock")
async def update_product_stock(
    product_id: str,
    update: StockUpdate,
    repo: ProductRepository = Depends(get_product_repository)
):
    """
    Set the stock of a product

    Order creation never changes stock on its own; this is the explicit
    inventory update.
    """
    try:
        product = repo.update_stock(product_id, update.stock)
    except NotFoundError:
        raise HTTPException(status_code=404, detail=f"Product '{product_id}' not found")
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return {
        "status": "success",
        "message": f"Stock updated for {product_id}",
        "data": product.to_dict()
    }
