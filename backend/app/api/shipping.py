"""
Shipping API Endpoints
Shipping quotes, served regions and CEP checks

Author: TM3
Date: 2026-10-17
"""
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from typing import List, Optional

from app.api.dependencies import get_seller_order_service, get_shipping_calculator
from app.core.exceptions import NotFoundError
from app.services.order_line_aggregator import LineRequest
from app.services.seller_order_service import SellerOrderService
from app.services.shipping_calculator import ShippingCalculator

router = APIRouter()


# Request models
class ShippingQuoteRequest(BaseModel):
    items: List[LineRequest] = Field(default_factory=list, description="Product selections")
    postal_code: Optional[str] = Field(None, description="Destination CEP")
    city: Optional[str] = Field(None, description="Destination city")
    customer_id: Optional[str] = Field(None, description="Use this customer's address")
    seller_id: Optional[str] = Field(None, description="Restrict products to this seller")


@router.post("/quote")
async def quote_shipping(
    request: ShippingQuoteRequest,
    service: SellerOrderService = Depends(get_seller_order_service)
):
    """
    Price shipping options for a destination and a set of products

    An unserved or malformed CEP is not an error: the response has
    serviceable=false and no options.
    """
    try:
        quote = service.quote_shipping(
            request.items,
            postal_code=request.postal_code,
            city=request.city,
            customer_id=request.customer_id,
            seller_id=request.seller_id,
        )
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    calculator = service.calculator
    options = []
    for option in quote.options:
        data = option.to_dict()
        data['estimated_delivery_date'] = calculator.estimate_delivery_date(option.estimated_days).isoformat()
        options.append(data)

    return {
        "status": "success",
        "data": {
            "postal_code": quote.postal_code,
            "city": quote.city,
            "serviceable": quote.serviceable,
            "subtotal": float(quote.aggregation.subtotal),
            "shipping_value": float(round(quote.aggregation.shipping_value, 2)),
            "total_weight": float(quote.aggregation.total_weight),
            "items": [item.to_dict() for item in quote.aggregation.items],
            "options": options
        }
    }


@router.get("/regions")
async def get_regions(calculator: ShippingCalculator = Depends(get_shipping_calculator)):
    """Regions served by at least one CEP range"""
    regions = calculator.available_regions()
    return {
        "status": "success",
        "count": len(regions),
        "data": regions
    }


@router.get("/serviceable/{postal_code}")
async def check_postal_code(postal_code: str, calculator: ShippingCalculator = Depends(get_shipping_calculator)):
    """Check if a CEP is inside a served range"""
    return {
        "status": "success",
        "data": {
            "postal_code": postal_code,
            "serviceable": calculator.is_serviceable(postal_code)
        }
    }
