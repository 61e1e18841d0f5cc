from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from trackntoms.database import get_db
from . import schemas, service

from typing import List, Optional
from datetime import date

router = APIRouter()


@router.post("/", response_model=schemas.StockAdjustmentOut, status_code=status.HTTP_201_CREATED)
def create_adjustment(
    adjustment: schemas.StockAdjustmentCreate,
    db: Session = Depends(get_db),
):
    """
    Manual stock correction.
    Positive quantity = increase stock
    Negative quantity = decrease stock (never below zero)
    """
    return service.create_adjustment(db, adjustment)


@router.get("/", response_model=List[schemas.StockAdjustmentOut])
def list_adjustments(
    skip: int = 0,
    limit: int = 100,
    ingredient_id: Optional[int] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    db: Session = Depends(get_db),
):
    return service.list_adjustments(
        db=db,
        skip=skip,
        limit=limit,
        ingredient_id=ingredient_id,
        start_date=start_date,
        end_date=end_date,
    )


@router.delete("/{adjustment_id}", status_code=200)
def delete_adjustment(adjustment_id: int, db: Session = Depends(get_db)):
    """
    Delete a stock adjustment.
    This will revert its effect on inventory.
    """
    service.delete_adjustment(db, adjustment_id)
    return {"success": True, "message": "Adjustment deleted successfully"}
