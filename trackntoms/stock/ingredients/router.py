from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List, Optional

from trackntoms.database import get_db
from trackntoms.exceptions import NotFoundError
from trackntoms.stock.ingredients import schemas, service

router = APIRouter()


@router.post("/", response_model=schemas.IngredientOut, status_code=status.HTTP_201_CREATED)
def create_ingredient(ingredient: schemas.IngredientCreate, db: Session = Depends(get_db)):
    return service.create_ingredient(db, ingredient)


@router.get("/", response_model=List[schemas.IngredientOut])
def list_ingredients(
    skip: int = 0,
    limit: int = 100,
    name: Optional[str] = None,
    db: Session = Depends(get_db),
):
    return service.list_ingredients(db, skip=skip, limit=limit, name=name)


@router.get("/low-stock", response_model=List[schemas.IngredientOut])
def list_low_stock(limit: Optional[int] = None, db: Session = Depends(get_db)):
    """Reorder list: everything at or under its minimum quantity."""
    return service.list_low_stock(db, limit=limit)


@router.get("/{ingredient_id}", response_model=schemas.IngredientOut)
def read_ingredient(ingredient_id: int, db: Session = Depends(get_db)):
    ingredient = service.get_ingredient(db, ingredient_id)
    if not ingredient:
        raise NotFoundError("Ingredient", ingredient_id)
    return ingredient


@router.put("/{ingredient_id}", response_model=schemas.IngredientOut)
def update_ingredient(
    ingredient_id: int,
    update_data: schemas.IngredientUpdate,
    db: Session = Depends(get_db),
):
    return service.update_ingredient(db, ingredient_id, update_data)


@router.delete("/{ingredient_id}")
def delete_ingredient(ingredient_id: int, db: Session = Depends(get_db)):
    service.delete_ingredient(db, ingredient_id)
    return {"success": True, "message": "Ingredient deleted successfully"}
