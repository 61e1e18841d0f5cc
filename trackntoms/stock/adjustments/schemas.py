from pydantic import BaseModel, field_validator
from typing import Optional
from datetime import datetime
from decimal import Decimal


class StockAdjustmentCreate(BaseModel):
    ingredient_id: int
    quantity: Decimal
    reason: str
    adjusted_by: int

    @field_validator("quantity")
    @classmethod
    def non_zero(cls, v):
        if v == 0:
            raise ValueError("Adjustment quantity cannot be zero")
        return v

    @field_validator("reason")
    @classmethod
    def reason_required(cls, v):
        if not v or not v.strip():
            raise ValueError("Reason is required")
        return v.strip()


class StockAdjustmentOut(BaseModel):
    id: int
    ingredient_id: int
    ingredient_name: Optional[str] = None
    quantity: Decimal
    reason: str
    adjusted_by: Optional[int]
    adjusted_by_name: Optional[str] = None
    adjusted_at: datetime

    class Config:
        from_attributes = True
