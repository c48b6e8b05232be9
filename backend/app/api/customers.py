"""
Customers API Endpoints
Customer search and registration for seller-assisted orders

Author: TM3
Date: 2026-10-17
"""
from fastapi import APIRouter, Depends, HTTPException, Query
from typing import Optional

from app.api.dependencies import get_customer_repository, get_order_repository
from app.domain.customer import CustomerCreate, CustomerUpdate
from app.repositories.customer_repository import CustomerRepository
from app.repositories.order_repository import OrderRepository

router = APIRouter()


@router.get("/")
async def search_customers(
    search: Optional[str] = Query(None, description="Search by name, email, phone or CPF"),
    repo: CustomerRepository = Depends(get_customer_repository)
):
    """Search customers (empty search returns all)"""
    customers = repo.search(search)
    return {
        "status": "success",
        "count": len(customers),
        "data": [customer.to_dict() for customer in customers]
    }


@router.get("/{customer_id}")
async def get_customer(customer_id: str, repo: CustomerRepository = Depends(get_customer_repository)):
    """Get a single customer"""
    customer = repo.find_by_id(customer_id)
    if customer is None:
        raise HTTPException(status_code=404, detail=f"Customer '{customer_id}' not found")

    return {
        "status": "success",
        "data": customer.to_dict()
    }


@router.post("/", status_code=201)
async def create_customer(data: CustomerCreate, repo: CustomerRepository = Depends(get_customer_repository)):
    """
    Register a customer

    The postal code is validated and stored as 8 digits.
    """
    customer = repo.create(data)
    return {
        "status": "success",
        "message": f"Customer {customer.id} created",
        "data": customer.to_dict()
    }


@router.patch("/{customer_id}")
async def update_customer(
    customer_id: str,
    data: CustomerUpdate,
    repo: CustomerRepository = Depends(get_customer_repository)
):
    """
    Update a customer

    Existing orders keep the address they were created with.
    """
    try:
        customer = repo.update(customer_id, data)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    if customer is None:
        raise HTTPException(status_code=404, detail=f"Customer '{customer_id}' not found")

    return {
        "status": "success",
        "data": customer.to_dict()
    }


@router.get("/{customer_id}/orders")
async def get_customer_orders(
    customer_id: str,
    customers: CustomerRepository = Depends(get_customer_repository),
    orders: OrderRepository = Depends(get_order_repository)
):
    """Orders placed for a customer"""
    if customers.find_by_id(customer_id) is None:
        raise HTTPException(status_code=404, detail=f"Customer '{customer_id}' not found")

    customer_orders = orders.find_by_customer(customer_id)
    return {
        "status": "success",
        "count": len(customer_orders),
        "data": [order.to_dict() for order in customer_orders]
    }
