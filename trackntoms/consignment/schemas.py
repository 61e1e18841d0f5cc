from pydantic import AliasChoices, BaseModel, Field, field_validator
import datetime as dt
from decimal import Decimal
from typing import List, Optional


class ConsignmentItemIn(BaseModel):
    item_id: Optional[int] = None
    quantity: Optional[Decimal] = None
    supplier_price: Optional[Decimal] = Field(
        default=None,
        validation_alias=AliasChoices("supplier_price", "unit_price", "unitPrice"),
    )
    production_date: Optional[dt.date] = None

    @field_validator("*", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v


class ConsignmentIn(BaseModel):
    supplier_id: int
    manager_id: int
    date: dt.date = Field(validation_alias=AliasChoices("date", "received_date", "receivedDate"))
    invoice_number: Optional[str] = None
    reference_number: Optional[str] = None
    notes: Optional[str] = None
    # informational only, the stored total is recomputed from the items
    total: Optional[Decimal] = None
    items: List[ConsignmentItemIn] = Field(
        validation_alias=AliasChoices("items", "consignment_details"),
    )


class ConsignmentItemOut(BaseModel):
    id: int
    item_id: int
    item_name: Optional[str] = None
    quantity: Decimal
    supplier_price: Decimal
    subtotal: Decimal
    production_date: Optional[dt.date] = None

    class Config:
        from_attributes = True


class ConsignmentOut(BaseModel):
    id: int
    supplier_id: int
    supplier_name: Optional[str] = None
    manager_id: int
    date: dt.date
    invoice_number: Optional[str] = None
    reference_number: Optional[str] = None
    notes: Optional[str] = None
    total: Decimal
    items: List[ConsignmentItemOut] = []

    class Config:
        from_attributes = True
