from sqlalchemy.orm import Session
from trackntoms.exceptions import NotFoundError
from trackntoms.suppliers import models, schemas


def create_supplier(db: Session, supplier: schemas.SupplierCreate):
    new_supplier = models.Supplier(**supplier.model_dump())
    db.add(new_supplier)
    db.commit()
    db.refresh(new_supplier)
    return new_supplier


def get_supplier(db: Session, supplier_id: int):
    return db.query(models.Supplier).filter(models.Supplier.id == supplier_id).first()


def require_supplier(db: Session, supplier_id: int):
    supplier = get_supplier(db, supplier_id)
    if not supplier:
        raise NotFoundError("Supplier", supplier_id)
    return supplier


def get_suppliers(
    db: Session,
    skip: int = 0,
    limit: int = 100,
    search: str | None = None,
    active_only: bool = False,
):
    query = db.query(models.Supplier)
    if search:
        query = query.filter(models.Supplier.company_name.ilike(f"%{search}%"))
    if active_only:
        query = query.filter(models.Supplier.is_active.is_(True))
    return query.order_by(models.Supplier.company_name).offset(skip).limit(limit).all()


def update_supplier(db: Session, supplier_id: int, supplier_update: schemas.SupplierUpdate):
    supplier = get_supplier(db, supplier_id)
    if not supplier:
        return None
    for key, value in supplier_update.model_dump(exclude_unset=True).items():
        setattr(supplier, key, value)
    db.commit()
    db.refresh(supplier)
    return supplier


def delete_supplier(db: Session, supplier_id: int):
    supplier = get_supplier(db, supplier_id)
    if not supplier:
        return None
    db.delete(supplier)
    db.commit()
    return {"success": True, "message": "Supplier deleted successfully"}
