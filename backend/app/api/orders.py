"""
Orders API Endpoints
Seller-assisted order creation, buyer checkout, order queries and status changes

Author: TM3
Date: 2026-10-17
"""
import asyncio
import logging
from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.concurrency import run_in_threadpool
from pydantic import BaseModel, Field
from typing import Callable, Dict, List, Optional

from app.api.dependencies import get_order_repository, get_seller_order_service
from app.core.config import settings
from app.core.exceptions import NotFoundError, OrderPreconditionError
from app.core.locks import CommitWindow
from app.domain.order import OrderStatus, OrderStatusUpdate
from app.repositories.order_repository import OrderRepository
from app.services.order_line_aggregator import LineRequest
from app.services.seller_order_service import SellerOrderService, ShippingSelection

logger = logging.getLogger(__name__)

router = APIRouter()


# Request models
class OrderCreateRequest(BaseModel):
    seller_id: str = Field(..., description="Seller registering the order")
    customer_id: Optional[str] = Field(None, description="Registered customer")
    items: List[LineRequest] = Field(default_factory=list, description="Product selections")
    shipping: Optional[ShippingSelection] = Field(None, description="Pickup or a quoted option")
    decrement_stock: bool = Field(False, description="Take the units out of stock with the order")


class CheckoutRequest(BaseModel):
    customer_id: Optional[str] = Field(None, description="Buyer")
    items: List[LineRequest] = Field(default_factory=list, description="Cart lines from any seller")
    shipping: Dict[str, ShippingSelection] = Field(
        default_factory=dict, description="Delivery method per seller id"
    )
    decrement_stock: bool = Field(False, description="Take the units out of stock with the orders")


def _log_abandoned(task: "asyncio.Future") -> None:
    if not task.cancelled() and task.exception() is not None:
        logger.info(f"Abandoned order pipeline finished without storing: {task.exception()}")


async def run_order_pipeline(func: Callable, *args):
    """
    Run a blocking order pipeline under ORDER_PIPELINE_TIMEOUT_SECONDS

    The pipeline gets a CommitWindow. On timeout the window is closed, so
    the worker can no longer store anything and the caller gets a 503 it
    can retry. If the worker committed just before, its result is returned.
    """
    window = CommitWindow()
    task = asyncio.ensure_future(run_in_threadpool(func, *args, window=window))
    try:
        return await asyncio.wait_for(
            asyncio.shield(task),
            timeout=settings.ORDER_PIPELINE_TIMEOUT_SECONDS,
        )
    except asyncio.TimeoutError:
        if not window.close():
            return await task

        task.add_done_callback(_log_abandoned)
        logger.error("Order pipeline timed out, nothing stored")
        raise HTTPException(
            status_code=503,
            detail="Order creation timed out, please retry",
            headers={"Retry-After": "1"},
        )


def _order_error(e: Exception) -> HTTPException:
    """HTTP error for a failed order pipeline"""
    if isinstance(e, OrderPreconditionError):
        return HTTPException(
            status_code=422,
            detail={"message": str(e), "missing": e.missing, "seller_id": e.seller_id},
        )
    # Stock taken or product removed since the selection was made
    return HTTPException(status_code=409, detail=str(e))


@router.get("/")
async def get_orders(
    status: Optional[OrderStatus] = Query(None, description="Filter by order status"),
    seller_id: Optional[str] = Query(None, description="Filter by seller"),
    customer_id: Optional[str] = Query(None, description="Filter by customer"),
    limit: int = Query(50, ge=1, le=1000),
    offset: int = Query(0, ge=0),
    repo: OrderRepository = Depends(get_order_repository)
):
    """
    Get orders with optional filters, newest first
    """
    orders, total = repo.find_all(
        status=status,
        seller_id=seller_id,
        customer_id=customer_id,
        limit=limit,
        offset=offset
    )

    return {
        "status": "success",
        "total": total,
        "limit": limit,
        "offset": offset,
        "count": len(orders),
        "data": [order.to_dict() for order in orders]
    }


@router.post("/", status_code=201)
async def create_order(
    request: OrderCreateRequest,
    service: SellerOrderService = Depends(get_seller_order_service)
):
    """
    Register an order on behalf of a customer

    Steps: resolve customer -> aggregate products -> price shipping ->
    assemble -> reserve stock (optional) -> store. A timeout answers 503
    with nothing stored and can be retried.
    """
    try:
        order = await run_order_pipeline(
            service.create_order,
            request.seller_id,
            request.customer_id,
            request.items,
            request.shipping,
            request.decrement_stock,
        )
    except (OrderPreconditionError, ValueError, NotFoundError) as e:
        raise _order_error(e)

    return {
        "status": "success",
        "message": f"Order {order.id} created",
        "data": order.to_dict()
    }


@router.post("/checkout", status_code=201)
async def checkout(
    request: CheckoutRequest,
    service: SellerOrderService = Depends(get_seller_order_service)
):
    """
    Buyer checkout: one order per seller in the cart

    Every seller in the cart needs a delivery method in `shipping`.
    Either all orders are created or none is.
    """
    try:
        orders = await run_order_pipeline(
            service.checkout,
            request.customer_id,
            request.items,
            request.shipping,
            request.decrement_stock,
        )
    except (OrderPreconditionError, ValueError, NotFoundError) as e:
        raise _order_error(e)

    return {
        "status": "success",
        "message": f"{len(orders)} orders created",
        "count": len(orders),
        "total": float(sum(order.total for order in orders)),
        "data": [order.to_dict() for order in orders]
    }


@router.get("/sellers/{seller_id}/summary")
async def get_seller_summary(
    seller_id: str,
    service: SellerOrderService = Depends(get_seller_order_service)
):
    """
    Seller dashboard summary

    Returns:
    - Orders by status
    - Total sales (shipped + delivered)
    - Number of products
    """
    return {
        "status": "success",
        "data": service.get_seller_summary(seller_id)
    }


@router.get("/{order_id}")
async def get_order(
    order_id: str,
    service: SellerOrderService = Depends(get_seller_order_service)
):
    """Get a single order with its items and shipping destination"""
    try:
        order = service.get_order(order_id)
    except NotFoundError:
        raise HTTPException(status_code=404, detail=f"Order '{order_id}' not found")

    return {
        "status": "success",
        "data": order.to_dict()
    }


@router.patch("/{order_id}/status")
async def update_order_status(
    order_id: str,
    update: OrderStatusUpdate,
    service: SellerOrderService = Depends(get_seller_order_service)
):
    """
    Change an order status

    Any status can be set from any status.
    """
    try:
        order = service.update_order_status(order_id, update.status)
    except NotFoundError:
        raise HTTPException(status_code=404, detail=f"Order '{order_id}' not found")

    return {
        "status": "success",
        "message": f"Order {order_id} is now {order.status.value}",
        "data": order.to_dict()
    }
