# order_management/schemas/customers.py
from datetime import datetime
from decimal import Decimal
from typing import NewType, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, constr, field_validator

NameStr = NewType("NameStr", constr(strip_whitespace=True, min_length=1, max_length=100))

_OPTIONAL_TEXT = (
    "name_arabic", "customer_number", "country_id", "city_id", "contact_person",
    "address1", "phone1", "phone2", "fax", "email", "website", "zip_code",
    "po_box", "release_number",
)


class CustomerCreate(BaseModel):
    name_english: NameStr
    name_arabic: Optional[constr(max_length=100)] = None
    customer_number: Optional[constr(max_length=50)] = None
    country_id: Optional[str] = None
    city_id: Optional[str] = None
    discount_percent: Optional[Decimal] = Field(default=None, ge=0, le=100)
    contact_person: Optional[str] = None
    address1: Optional[str] = None
    phone1: Optional[constr(max_length=20)] = None
    phone2: Optional[constr(max_length=20)] = None
    fax: Optional[str] = None
    email: Optional[EmailStr] = None
    website: Optional[str] = None
    zip_code: Optional[str] = None
    po_box: Optional[str] = None
    is_release_tax: bool = False
    release_number: Optional[str] = None
    release_expiry_date: Optional[datetime] = None
    is_project_account: bool = False
    salesman_id: Optional[int] = None

    # blank form fields are "not supplied" and must reach the database as NULL
    @field_validator(*_OPTIONAL_TEXT, mode="before")
    @classmethod
    def _blank_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v


class CustomerOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    cust_sup_id: int
    name_english: str
    name_arabic: Optional[str] = None
    customer_number: Optional[str] = None
    country_id: Optional[str] = None
    city_id: Optional[str] = None
    discount_percent: Optional[Decimal] = None
    contact_person: Optional[str] = None
    address1: Optional[str] = None
    phone1: Optional[str] = None
    phone2: Optional[str] = None
    fax: Optional[str] = None
    email: Optional[str] = None
    website: Optional[str] = None
    zip_code: Optional[str] = None
    po_box: Optional[str] = None
    is_release_tax: bool = False
    release_number: Optional[str] = None
    release_expiry_date: Optional[datetime] = None
    is_project_account: bool = False
    salesman_id: Optional[int] = None


class CustomerCreationResult(BaseModel):
    success: bool
    error_message: Optional[str] = None
    customer_id: Optional[int] = None


class CustomerNumberCheck(BaseModel):
    success: bool
    exists: bool = False
    error_message: Optional[str] = None
