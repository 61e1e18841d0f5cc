from pydantic import BaseModel, Field
from datetime import date
from decimal import Decimal
from typing import Optional


class IngredientBase(BaseModel):
    name: str
    unit: str
    minimum_quantity: Decimal = Field(default=Decimal("0"), ge=0)
    unit_cost: Optional[Decimal] = Field(default=None, ge=0)


class IngredientCreate(IngredientBase):
    # opening balance; afterwards only purchases, pullouts and adjustments move it
    quantity: Decimal = Field(default=Decimal("0"), ge=0)


class IngredientUpdate(BaseModel):
    name: Optional[str] = None
    unit: Optional[str] = None
    minimum_quantity: Optional[Decimal] = Field(default=None, ge=0)
    unit_cost: Optional[Decimal] = Field(default=None, ge=0)


class IngredientOut(IngredientBase):
    id: int
    quantity: Decimal
    last_restock_date: Optional[date] = None
    is_low_stock: bool

    class Config:
        from_attributes = True
