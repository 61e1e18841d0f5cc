from pydantic import BaseModel, Field
from decimal import Decimal
from typing import List, Optional


class ItemCreate(BaseModel):
    item_name: str
    category: str
    base_price: Decimal = Field(ge=0)
    description: Optional[str] = None
    is_externally_sourced: bool = False


class ItemOut(ItemCreate):
    id: int

    class Config:
        from_attributes = True


class RecipeLineIn(BaseModel):
    ingredient_id: int
    quantity: Decimal


class RecipeIn(BaseModel):
    # an empty list clears the recipe
    ingredients: List[RecipeLineIn] = []


class RecipeLineOut(BaseModel):
    ingredient_id: int
    ingredient_name: Optional[str] = None
    unit: Optional[str] = None
    quantity: Decimal
    available_quantity: Optional[Decimal] = None

    class Config:
        from_attributes = True


class AvailabilityOut(BaseModel):
    item_id: int
    quantity: int
    available: bool
    message: Optional[str] = None
    ingredient_id: Optional[int] = None
