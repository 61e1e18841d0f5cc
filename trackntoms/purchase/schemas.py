from pydantic import AliasChoices, BaseModel, Field, field_validator
from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional


class PurchaseItemIn(BaseModel):
    # Everything optional so that half-filled form rows reach the service
    # and are reported as "incomplete" instead of a generic type error
    ingredient_id: Optional[int] = None
    quantity: Optional[Decimal] = None
    unit_price: Optional[Decimal] = None
    product_expiration_date: Optional[date] = None

    @field_validator("*", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v


class PurchaseBase(BaseModel):
    supplier_id: int
    purchase_date: datetime
    notes: Optional[str] = None
    items: List[PurchaseItemIn] = Field(
        validation_alias=AliasChoices("items", "purchase_details"),
    )


class PurchaseCreate(PurchaseBase):
    staff_id: int = Field(validation_alias=AliasChoices("staff_id", "created_by"))


class PurchaseUpdate(PurchaseBase):
    pass


class PurchaseApprove(BaseModel):
    approver_id: int = Field(validation_alias=AliasChoices("approver_id", "manager_id"))


class PurchaseItemOut(BaseModel):
    id: int
    ingredient_id: int
    ingredient_name: Optional[str] = None
    quantity: Decimal
    unit_price: Decimal
    subtotal: Decimal
    product_expiration_date: Optional[date] = None

    class Config:
        from_attributes = True


class PurchaseOut(BaseModel):
    id: int
    supplier_id: int
    supplier_name: Optional[str] = None
    created_by: int
    approved_by: Optional[int] = None
    purchase_date: datetime
    status: str
    total_amount: Decimal
    notes: Optional[str] = None
    stock_applied: bool
    approved_at: Optional[datetime] = None
    items: List[PurchaseItemOut] = []

    class Config:
        from_attributes = True
