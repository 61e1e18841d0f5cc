"""
Stock ledger: the only code allowed to move Ingredient.quantity.

Nothing here commits or rolls back. Callers wrap these single-row operations
in ``trackntoms.database.atomic`` so a purchase, pullout or adjustment either
lands completely or not at all.
"""
from datetime import date
from decimal import Decimal
from typing import Dict, Optional

from loguru import logger
from sqlalchemy.orm import Session

from trackntoms.exceptions import InsufficientStockError, NotFoundError
from trackntoms.stock.ingredients.models import Ingredient


def _as_decimal(value) -> Decimal:
    return value if isinstance(value, Decimal) else Decimal(str(value))


def get_ingredient_for_update(db: Session, ingredient_id: int) -> Ingredient:
    ingredient = (
        db.query(Ingredient)
        .filter(Ingredient.id == ingredient_id)
        .with_for_update()
        .first()
    )
    if not ingredient:
        raise NotFoundError("Ingredient", ingredient_id)
    return ingredient


def adjust(
    db: Session,
    ingredient_id: int,
    delta,
    restocked_on: Optional[date] = None,
) -> Ingredient:
    """quantity += delta on one locked ingredient row."""
    delta = _as_decimal(delta)
    ingredient = get_ingredient_for_update(db, ingredient_id)

    ingredient.quantity = _as_decimal(ingredient.quantity or 0) + delta
    if restocked_on is not None:
        ingredient.last_restock_date = restocked_on

    db.flush()
    logger.debug(f"Ingredient {ingredient_id} adjusted by {delta} -> {ingredient.quantity}")
    return ingredient


def adjust_and_validate(db: Session, ingredient_id: int, delta) -> Ingredient:
    """
    Like adjust, but a decrement that would leave the ingredient below zero
    raises InsufficientStockError and touches nothing.
    """
    delta = _as_decimal(delta)
    if delta < 0:
        ensure_available(db, ingredient_id, -delta)
    return adjust(db, ingredient_id, delta)


def ensure_available(db: Session, ingredient_id: int, quantity) -> Ingredient:
    quantity = _as_decimal(quantity)
    ingredient = get_ingredient_for_update(db, ingredient_id)
    available = _as_decimal(ingredient.quantity or 0)
    if available < quantity:
        logger.warning(
            f"Insufficient stock for ingredient {ingredient_id}: "
            f"available {available}, requested {quantity}"
        )
        raise InsufficientStockError(ingredient_id, available=available, requested=quantity)
    return ingredient


def ensure_non_negative(db: Session, deltas: Dict[int, Decimal]):
    """
    Check every ingredient touched by a reverse/apply sequence.

    ``deltas`` maps ingredient id to the net change already applied in the
    current unit. A negative result raises InsufficientStockError reporting
    what was on hand before the unit started.
    """
    for ingredient_id, delta in sorted(deltas.items()):
        ingredient = get_ingredient_for_update(db, ingredient_id)
        current = _as_decimal(ingredient.quantity or 0)
        if current < 0:
            available = current - delta
            logger.warning(
                f"Stock for ingredient {ingredient_id} would drop to {current}; rolling back"
            )
            raise InsufficientStockError(ingredient_id, available=available, requested=-delta)


def net_deltas(*changes) -> Dict[int, Decimal]:
    """Sum (ingredient_id, delta) pairs per ingredient."""
    totals: Dict[int, Decimal] = {}
    for ingredient_id, delta in changes:
        totals[ingredient_id] = totals.get(ingredient_id, Decimal("0")) + _as_decimal(delta)
    return totals
