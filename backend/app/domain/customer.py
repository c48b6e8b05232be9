"""
Customer Domain Models

Customers registered by sellers for assisted orders.
The postal address is copied into each order at creation time.

Author: TM3
Date: 2026-10-17
"""
import re
from pydantic import BaseModel, Field, ConfigDict, field_validator
from typing import Optional
from datetime import datetime


POSTAL_CODE_LENGTH = 8


def normalize_postal_code(postal_code: str) -> str:
    """Strip every non-digit character from a CEP ("01310-100" -> "01310100")"""
    return re.sub(r"\D", "", postal_code or "")


class CustomerAddress(BaseModel):
    """
    Postal address

    postal_code is stored normalized: exactly 8 digits, no separators.
    """

    street: str = Field(..., description="Street name")
    number: str = Field(..., description="Street number")
    complement: str = Field("", description="Apartment, block, etc.")
    district: str = Field("", description="District (bairro)")
    city: str = Field(..., description="City")
    state: str = Field(..., description="State code")
    postal_code: str = Field(..., description="CEP, 8 digits")
    country: str = Field("Brasil", description="Country")

    model_config = ConfigDict(frozen=True)

    @field_validator("postal_code", mode="before")
    @classmethod
    def _normalize_postal_code(cls, value: str) -> str:
        digits = normalize_postal_code(str(value))
        if len(digits) != POSTAL_CODE_LENGTH:
            raise ValueError(f"postal code must have {POSTAL_CODE_LENGTH} digits, got {value!r}")
        return digits

    @property
    def address_line(self) -> str:
        """Single-line address: "street, number[, complement]" """
        line = f"{self.street}, {self.number}"
        if self.complement:
            line += f", {self.complement}"
        return line


class Customer(BaseModel):
    """
    Customer domain model

    Fields:
        id: Customer ID (e.g. "cust1")
        name: Full name
        email: Contact email (optional)
        phone: Contact phone (optional)
        tax_id: National tax id (CPF), required
        address: Postal address
        created_at / updated_at: Timestamps
    """

    id: str = Field(..., description="Customer ID")
    name: str = Field(..., description="Customer name", min_length=1)
    email: Optional[str] = Field(None, description="Customer email")
    phone: Optional[str] = Field(None, description="Customer phone")
    tax_id: str = Field(..., description="CPF", min_length=1)
    address: CustomerAddress
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime = Field(..., description="Last update timestamp")

    model_config = ConfigDict(from_attributes=True, frozen=True)

    @field_validator("tax_id")
    @classmethod
    def _tax_id_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("tax id is required")
        return value.strip()

    def to_dict(self) -> dict:
        """Convert to a JSON-ready dictionary"""
        return self.model_dump(mode="json")


class CustomerCreate(BaseModel):
    """Schema for creating a new customer"""
    name: str = Field(..., min_length=1)
    email: Optional[str] = None
    phone: Optional[str] = None
    tax_id: str = Field(..., min_length=1)
    address: CustomerAddress


class CustomerUpdate(BaseModel):
    """Schema for updating an existing customer"""
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    tax_id: Optional[str] = None
    address: Optional[CustomerAddress] = None
