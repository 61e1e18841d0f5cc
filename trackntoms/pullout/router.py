from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional

from trackntoms.database import get_db
from trackntoms.exceptions import NotFoundError
from . import schemas, service

router = APIRouter()


@router.post("/", response_model=schemas.PulloutOut, status_code=status.HTTP_201_CREATED)
def create_pullout(pullout: schemas.PulloutCreate, db: Session = Depends(get_db)):
    return service.create_pullout(db, pullout)


@router.get("/", response_model=List[schemas.PulloutOut])
def list_pullouts(
    skip: int = 0,
    limit: int = 100,
    status: Optional[str] = Query(None, description="pending / approved / rejected"),
    ingredient_id: Optional[int] = None,
    db: Session = Depends(get_db),
):
    return service.list_pullouts(db, skip=skip, limit=limit, status=status, ingredient_id=ingredient_id)


@router.get("/{pullout_id}", response_model=schemas.PulloutOut)
def get_pullout(pullout_id: int, db: Session = Depends(get_db)):
    pullout = service.get_pullout(db, pullout_id)
    if not pullout:
        raise NotFoundError("Pullout", pullout_id)
    return pullout


@router.put("/{pullout_id}", response_model=schemas.PulloutOut)
def update_pullout(
    pullout_id: int,
    update_data: schemas.PulloutUpdate,
    db: Session = Depends(get_db),
):
    return service.update_pullout(db, pullout_id, update_data)


@router.post("/{pullout_id}/approve", response_model=schemas.PulloutOut)
def approve_pullout(
    pullout_id: int,
    approval: schemas.PulloutApprove,
    db: Session = Depends(get_db),
):
    return service.approve_pullout(db, pullout_id, approval.approver_id)


@router.post("/{pullout_id}/reject", response_model=schemas.PulloutOut)
def reject_pullout(
    pullout_id: int,
    rejection: schemas.PulloutReject,
    db: Session = Depends(get_db),
):
    return service.reject_pullout(db, pullout_id, rejection.approver_id, rejection.rejection_reason)


@router.delete("/{pullout_id}")
def delete_pullout(pullout_id: int, db: Session = Depends(get_db)):
    """Deleting an approved pullout puts its quantity back into stock."""
    service.delete_pullout(db, pullout_id)
    return {"success": True, "message": "Pullout deleted successfully"}
