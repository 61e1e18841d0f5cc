from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List, Optional

from trackntoms.database import get_db
from trackntoms.stock.items import schemas, service

router = APIRouter()


@router.post("/", response_model=schemas.ItemOut, status_code=status.HTTP_201_CREATED)
def create_item(item: schemas.ItemCreate, db: Session = Depends(get_db)):
    return service.create_item(db, item)


@router.get("/", response_model=List[schemas.ItemOut])
def list_items(
    skip: int = 0,
    limit: int = 100,
    category: Optional[str] = None,
    db: Session = Depends(get_db),
):
    return service.list_items(db, skip=skip, limit=limit, category=category)


@router.get("/{item_id}", response_model=schemas.ItemOut)
def read_item(item_id: int, db: Session = Depends(get_db)):
    return service.require_item(db, item_id)


@router.get("/{item_id}/recipe", response_model=List[schemas.RecipeLineOut])
def read_recipe(item_id: int, db: Session = Depends(get_db)):
    return service.get_recipe(db, item_id)


@router.put("/{item_id}/recipe", response_model=List[schemas.RecipeLineOut])
def replace_recipe(item_id: int, recipe: schemas.RecipeIn, db: Session = Depends(get_db)):
    """Full replace: the submitted ingredients become the whole recipe."""
    return service.replace_recipe(db, item_id, recipe)


@router.get("/{item_id}/availability", response_model=schemas.AvailabilityOut)
def check_availability(item_id: int, quantity: int = 1, db: Session = Depends(get_db)):
    return service.check_availability(db, item_id, quantity)
