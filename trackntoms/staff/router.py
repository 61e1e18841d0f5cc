from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from trackntoms.database import get_db
from trackntoms.staff import schemas, service

router = APIRouter()


@router.post("/", response_model=schemas.StaffOut, status_code=status.HTTP_201_CREATED)
def create_staff(staff: schemas.StaffCreate, db: Session = Depends(get_db)):
    return service.create_staff(db, staff)


@router.get("/", response_model=list[schemas.StaffOut])
def list_staff(skip: int = 0, limit: int = 100, db: Session = Depends(get_db)):
    return service.list_staff(db, skip, limit)


@router.get("/{staff_id}", response_model=schemas.StaffOut)
def read_staff(staff_id: int, db: Session = Depends(get_db)):
    staff = service.get_staff(db, staff_id)
    if not staff:
        raise HTTPException(status_code=404, detail="Staff not found")
    return staff
