from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from datetime import date
from typing import List, Optional

from trackntoms.database import get_db
from trackntoms.exceptions import NotFoundError
from . import schemas, service

router = APIRouter()


@router.post("/", response_model=schemas.ConsignmentOut, status_code=status.HTTP_201_CREATED)
def create_consignment(data: schemas.ConsignmentIn, db: Session = Depends(get_db)):
    return service.create_consignment(db, data)


@router.get("/", response_model=List[schemas.ConsignmentOut])
def list_consignments(
    skip: int = 0,
    limit: int = 100,
    supplier_id: Optional[int] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    db: Session = Depends(get_db),
):
    return service.list_consignments(
        db,
        skip=skip,
        limit=limit,
        supplier_id=supplier_id,
        start_date=start_date,
        end_date=end_date,
    )


@router.get("/{consignment_id}", response_model=schemas.ConsignmentOut)
def get_consignment(consignment_id: int, db: Session = Depends(get_db)):
    consignment = service.get_consignment(db, consignment_id)
    if not consignment:
        raise NotFoundError("Consignment", consignment_id)
    return consignment


@router.put("/{consignment_id}", response_model=schemas.ConsignmentOut)
def update_consignment(consignment_id: int, data: schemas.ConsignmentIn, db: Session = Depends(get_db)):
    return service.update_consignment(db, consignment_id, data)


@router.delete("/{consignment_id}")
def delete_consignment(consignment_id: int, db: Session = Depends(get_db)):
    """Removes the record only; inventory levels are not adjusted."""
    service.delete_consignment(db, consignment_id)
    return {"success": True, "message": "Consignment deleted successfully"}
