from sqlalchemy.orm import Session
from decimal import Decimal
from typing import Optional

from loguru import logger

from trackntoms.database import atomic
from trackntoms.exceptions import InvalidStatusError, NotFoundError, ValidationError
from trackntoms.pullout import models, schemas
from trackntoms.staff.service import require_staff
from trackntoms.stock import ledger
from trackntoms.stock.ingredients.service import get_ingredient
from trackntoms.utils import local_now, local_today, to_quantity


PENDING = "pending"
APPROVED = "approved"
REJECTED = "rejected"


def _clean_quantity(quantity) -> Decimal:
    if quantity is None or to_quantity(quantity) <= 0:
        raise ValidationError("Quantity must be greater than zero")
    return to_quantity(quantity)


def _clean_reason(reason: Optional[str]) -> str:
    if not reason or not reason.strip():
        raise ValidationError("Reason is required")
    return reason.strip()


def _load_pullout(db: Session, pullout_id: int) -> models.Pullout:
    pullout = get_pullout(db, pullout_id)
    if not pullout:
        raise NotFoundError("Pullout", pullout_id)
    return pullout


def create_pullout(db: Session, pullout: schemas.PulloutCreate):
    """
    Record a pullout request. Stock is untouched until a manager approves it,
    so a request larger than what is on hand is still accepted here.
    """
    quantity = _clean_quantity(pullout.quantity)
    reason = _clean_reason(pullout.reason)

    if not get_ingredient(db, pullout.ingredient_id):
        raise NotFoundError("Ingredient", pullout.ingredient_id)
    require_staff(db, pullout.staff_id)
    require_staff(db, pullout.manager_id)

    with atomic(db):
        db_pullout = models.Pullout(
            ingredient_id=pullout.ingredient_id,
            requested_by=pullout.staff_id,
            manager_id=pullout.manager_id,
            quantity=quantity,
            reason=reason,
            date_of_pullout=pullout.date_of_pullout or local_today(),
            status=PENDING,
        )
        db.add(db_pullout)

    db.refresh(db_pullout)
    logger.info(
        f"Pullout {db_pullout.id} requested: ingredient {db_pullout.ingredient_id} x {db_pullout.quantity}"
    )
    return db_pullout


def get_pullout(db: Session, pullout_id: int):
    return db.query(models.Pullout).filter(models.Pullout.id == pullout_id).first()


def list_pullouts(
    db: Session,
    skip: int = 0,
    limit: int = 100,
    status: str | None = None,
    ingredient_id: int | None = None,
):
    query = db.query(models.Pullout)
    if status:
        query = query.filter(models.Pullout.status == status)
    if ingredient_id:
        query = query.filter(models.Pullout.ingredient_id == ingredient_id)
    return (
        query
        .order_by(models.Pullout.created_at.desc(), models.Pullout.id.desc())
        .offset(skip)
        .limit(limit)
        .all()
    )


def approve_pullout(db: Session, pullout_id: int, approver_id: int):
    """
    The point where stock actually leaves. Not enough stock aborts the
    approval and the pullout stays pending for a retry after restocking.
    """
    pullout = _load_pullout(db, pullout_id)
    if pullout.status != PENDING:
        raise InvalidStatusError("Pullout", pullout_id, pullout.status, "approve")
    require_staff(db, approver_id)

    with atomic(db):
        ledger.adjust_and_validate(db, pullout.ingredient_id, -Decimal(str(pullout.quantity)))

        pullout.status = APPROVED
        pullout.approved_by = approver_id
        pullout.approved_at = local_now().replace(tzinfo=None)

    db.refresh(pullout)
    logger.info(
        f"Pullout {pullout.id} approved by staff {approver_id}: "
        f"ingredient {pullout.ingredient_id} -{pullout.quantity}"
    )
    return pullout


def reject_pullout(
    db: Session,
    pullout_id: int,
    approver_id: int,
    rejection_reason: Optional[str] = None,
):
    pullout = _load_pullout(db, pullout_id)
    if pullout.status != PENDING:
        raise InvalidStatusError("Pullout", pullout_id, pullout.status, "reject")
    require_staff(db, approver_id)

    with atomic(db):
        pullout.status = REJECTED
        pullout.approved_by = approver_id
        pullout.rejection_reason = (rejection_reason or "").strip() or "Not approved"

    db.refresh(pullout)
    logger.info(f"Pullout {pullout.id} rejected by staff {approver_id}")
    return pullout


def update_pullout(db: Session, pullout_id: int, update_data: schemas.PulloutUpdate):
    pullout = _load_pullout(db, pullout_id)
    if pullout.status != PENDING:
        raise InvalidStatusError("Pullout", pullout_id, pullout.status, "update")

    fields = update_data.model_dump(exclude_unset=True)

    ingredient_id = fields.get("ingredient_id")
    if ingredient_id is None:
        ingredient_id = pullout.ingredient_id
    quantity = fields.get("quantity")
    if quantity is None:
        quantity = Decimal(str(pullout.quantity))
    quantity = _clean_quantity(quantity)

    if "reason" in fields:
        fields["reason"] = _clean_reason(fields["reason"])
    if fields.get("manager_id") is not None:
        require_staff(db, fields["manager_id"])

    changed_target = (
        ingredient_id != pullout.ingredient_id
        or quantity != Decimal(str(pullout.quantity))
    )

    with atomic(db):
        # Creation never touched stock, so there is nothing to reverse:
        # only check the (possibly new) ingredient can cover the request
        if changed_target:
            ledger.ensure_available(db, ingredient_id, quantity)

        pullout.ingredient_id = ingredient_id
        pullout.quantity = quantity
        for key in ("reason", "manager_id", "date_of_pullout"):
            if fields.get(key) is not None:
                setattr(pullout, key, fields[key])

    db.refresh(pullout)
    logger.info(f"Pullout {pullout.id} updated: ingredient {pullout.ingredient_id} x {pullout.quantity}")
    return pullout


def delete_pullout(db: Session, pullout_id: int):
    pullout = _load_pullout(db, pullout_id)
    status = pullout.status

    with atomic(db):
        # Only an approved pullout has taken stock out
        if status == APPROVED:
            ledger.adjust(db, pullout.ingredient_id, Decimal(str(pullout.quantity)))
        db.delete(pullout)

    logger.info(f"Pullout {pullout_id} ({status}) deleted")
    return True
