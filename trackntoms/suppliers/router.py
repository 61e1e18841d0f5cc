from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from trackntoms.database import get_db
from trackntoms.suppliers import schemas, service

router = APIRouter()


@router.post("/", response_model=schemas.SupplierOut, status_code=status.HTTP_201_CREATED)
def create_supplier(supplier: schemas.SupplierCreate, db: Session = Depends(get_db)):
    return service.create_supplier(db, supplier)


@router.get("/", response_model=list[schemas.SupplierOut])
def list_suppliers(
    skip: int = 0,
    limit: int = 100,
    search: str | None = None,
    active_only: bool = False,
    db: Session = Depends(get_db),
):
    return service.get_suppliers(db, skip, limit, search=search, active_only=active_only)


@router.get("/{supplier_id}", response_model=schemas.SupplierOut)
def read_supplier(supplier_id: int, db: Session = Depends(get_db)):
    supplier = service.get_supplier(db, supplier_id)
    if not supplier:
        raise HTTPException(status_code=404, detail="Supplier not found")
    return supplier


@router.put("/{supplier_id}", response_model=schemas.SupplierOut)
def update_supplier(supplier_id: int, supplier_update: schemas.SupplierUpdate, db: Session = Depends(get_db)):
    supplier = service.update_supplier(db, supplier_id, supplier_update)
    if not supplier:
        raise HTTPException(status_code=404, detail="Supplier not found")
    return supplier


@router.delete("/{supplier_id}")
def delete_supplier(supplier_id: int, db: Session = Depends(get_db)):
    result = service.delete_supplier(db, supplier_id)
    if not result:
        raise HTTPException(status_code=404, detail="Supplier not found")
    return result
