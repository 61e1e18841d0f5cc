from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from datetime import date
from typing import List, Optional

from trackntoms.database import get_db
from trackntoms.exceptions import NotFoundError
from . import schemas, service

router = APIRouter()


@router.post("/", response_model=schemas.PurchaseOut, status_code=status.HTTP_201_CREATED)
def create_purchase(purchase: schemas.PurchaseCreate, db: Session = Depends(get_db)):
    return service.create_purchase(db, purchase)


@router.get("/", response_model=List[schemas.PurchaseOut])
def list_purchases(
    skip: int = 0,
    limit: int = 100,
    supplier_id: Optional[int] = Query(None),
    status: Optional[str] = Query(None, description="pending / approved"),
    start_date: Optional[date] = Query(None, description="YYYY-MM-DD"),
    end_date: Optional[date] = Query(None, description="YYYY-MM-DD"),
    db: Session = Depends(get_db),
):
    return service.list_purchases(
        db=db,
        skip=skip,
        limit=limit,
        supplier_id=supplier_id,
        status=status,
        start_date=start_date,
        end_date=end_date,
    )


@router.get("/{purchase_id}", response_model=schemas.PurchaseOut)
def get_purchase(purchase_id: int, db: Session = Depends(get_db)):
    purchase = service.get_purchase(db, purchase_id)
    if not purchase:
        raise NotFoundError("Purchase", purchase_id)
    return purchase


@router.put("/{purchase_id}", response_model=schemas.PurchaseOut)
def update_purchase(
    purchase_id: int,
    update_data: schemas.PurchaseUpdate,
    db: Session = Depends(get_db),
):
    return service.update_purchase(db, purchase_id, update_data)


@router.post("/{purchase_id}/approve", response_model=schemas.PurchaseOut)
def approve_purchase(
    purchase_id: int,
    approval: schemas.PurchaseApprove,
    db: Session = Depends(get_db),
):
    return service.approve_purchase(db, purchase_id, approval.approver_id)


@router.delete("/{purchase_id}")
def delete_purchase(purchase_id: int, db: Session = Depends(get_db)):
    service.delete_purchase(db, purchase_id)
    return {"success": True, "message": "Purchase deleted successfully"}
