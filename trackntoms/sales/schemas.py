from pydantic import BaseModel, Field
from decimal import Decimal
from typing import List


class SaleLineIn(BaseModel):
    item_id: int
    quantity: int = Field(gt=0)


class SaleIn(BaseModel):
    items: List[SaleLineIn] = Field(min_length=1)


class DeductionOut(BaseModel):
    ingredient_id: int
    name: str
    quantity: Decimal
    remaining: Decimal
    low_stock: bool


class SaleDeductionOut(BaseModel):
    success: bool = True
    deductions: List[DeductionOut] = []
