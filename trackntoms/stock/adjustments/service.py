from sqlalchemy.orm import Session
from datetime import datetime
from loguru import logger

from trackntoms.database import atomic
from trackntoms.exceptions import NotFoundError, ValidationError
from trackntoms.staff.service import require_staff
from trackntoms.stock import ledger
from trackntoms.stock.adjustments import models, schemas
from trackntoms.utils import to_quantity


def create_adjustment(db: Session, adjustment: schemas.StockAdjustmentCreate):
    quantity = to_quantity(adjustment.quantity)
    if quantity == 0:
        raise ValidationError("Adjustment quantity cannot be zero")
    require_staff(db, adjustment.adjusted_by)

    with atomic(db):
        # Refuses to push the ingredient below zero
        ledger.adjust_and_validate(db, adjustment.ingredient_id, quantity)

        adj = models.StockAdjustment(
            ingredient_id=adjustment.ingredient_id,
            quantity=quantity,
            reason=adjustment.reason,
            adjusted_by=adjustment.adjusted_by,
        )
        db.add(adj)

    db.refresh(adj)
    logger.info(
        f"Stock adjustment {adj.id}: ingredient {adj.ingredient_id} {adj.quantity} ({adj.reason})"
    )
    return adj


def list_adjustments(
    db: Session,
    skip: int = 0,
    limit: int = 100,
    ingredient_id=None,
    start_date=None,
    end_date=None,
):
    query = db.query(models.StockAdjustment)

    if ingredient_id:
        query = query.filter(models.StockAdjustment.ingredient_id == ingredient_id)

    if start_date:
        query = query.filter(
            models.StockAdjustment.adjusted_at
            >= datetime.combine(start_date, datetime.min.time())
        )

    if end_date:
        query = query.filter(
            models.StockAdjustment.adjusted_at
            <= datetime.combine(end_date, datetime.max.time())
        )

    return (
        query
        .order_by(models.StockAdjustment.adjusted_at.desc())
        .offset(skip)
        .limit(limit)
        .all()
    )


def delete_adjustment(db: Session, adjustment_id: int):
    adjustment = (
        db.query(models.StockAdjustment)
        .filter(models.StockAdjustment.id == adjustment_id)
        .first()
    )
    if not adjustment:
        raise NotFoundError("Stock adjustment", adjustment_id)

    with atomic(db):
        # Revert inventory
        ledger.adjust_and_validate(db, adjustment.ingredient_id, -adjustment.quantity)
        db.delete(adjustment)

    logger.info(f"Stock adjustment {adjustment_id} deleted and reverted")
    return True
