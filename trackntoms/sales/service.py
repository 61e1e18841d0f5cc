"""
Ingredient usage of a sale.

Every sold item's recipe is expanded, usage is summed per ingredient, and
all ingredients are taken out in one atomic unit. If any single ingredient
is short the whole sale is refused and no stock moves.
"""
from sqlalchemy.orm import Session
from decimal import Decimal

from loguru import logger

from trackntoms.database import atomic
from trackntoms.sales import schemas
from trackntoms.stock import ledger
from trackntoms.stock.items.service import get_recipe
from trackntoms.utils import to_quantity


def ingredient_usage(db: Session, sale: schemas.SaleIn):
    """(ingredient_id, -quantity) pairs for every recipe row of every sold item."""
    changes = []
    for line in sale.items:
        for part in get_recipe(db, line.item_id):
            changes.append((part.ingredient_id, -Decimal(str(part.quantity)) * line.quantity))
    return ledger.net_deltas(*changes)


def deduct_ingredients_for_sale(db: Session, sale: schemas.SaleIn) -> schemas.SaleDeductionOut:
    deltas = ingredient_usage(db, sale)

    deductions = []
    with atomic(db):
        for ingredient_id, delta in sorted(deltas.items()):
            ingredient = ledger.adjust_and_validate(db, ingredient_id, to_quantity(delta))
            remaining = Decimal(str(ingredient.quantity))
            deductions.append(
                schemas.DeductionOut(
                    ingredient_id=ingredient_id,
                    name=ingredient.name,
                    quantity=-to_quantity(delta),
                    remaining=remaining,
                    low_stock=remaining <= Decimal(str(ingredient.minimum_quantity or 0)),
                )
            )

    for deduction in deductions:
        if deduction.low_stock:
            logger.warning(f"Low stock alert: {deduction.name} at {deduction.remaining}")

    logger.info(f"Sale of {len(sale.items)} line(s) used {len(deductions)} ingredient(s)")
    return schemas.SaleDeductionOut(deductions=deductions)
