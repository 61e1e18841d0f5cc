from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from trackntoms.database import get_db
from . import schemas, service

router = APIRouter()


@router.post("/deductions", response_model=schemas.SaleDeductionOut)
def deduct_ingredients_for_sale(sale: schemas.SaleIn, db: Session = Depends(get_db)):
    """Take the recipe ingredients of the sold items out of stock, all or nothing."""
    return service.deduct_ingredients_for_sale(db, sale)
