from sqlalchemy.orm import Session
from trackntoms.exceptions import NotFoundError
from trackntoms.staff import models, schemas


def create_staff(db: Session, staff: schemas.StaffCreate):
    new_staff = models.Staff(**staff.model_dump())
    db.add(new_staff)
    db.commit()
    db.refresh(new_staff)
    return new_staff


def get_staff(db: Session, staff_id: int):
    return db.query(models.Staff).filter(models.Staff.id == staff_id).first()


def list_staff(db: Session, skip: int = 0, limit: int = 100):
    return db.query(models.Staff).order_by(models.Staff.id).offset(skip).limit(limit).all()


def require_staff(db: Session, staff_id: int):
    """Lookup used by the ledgers for creator/requester/approver references."""
    staff = get_staff(db, staff_id)
    if not staff:
        raise NotFoundError("Staff", staff_id)
    return staff
