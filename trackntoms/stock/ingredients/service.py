from sqlalchemy.orm import Session
from loguru import logger

from trackntoms.config import settings
from trackntoms.exceptions import NotFoundError
from trackntoms.stock.ingredients import models, schemas
from trackntoms.utils import to_quantity


def create_ingredient(db: Session, ingredient: schemas.IngredientCreate):
    db_ingredient = models.Ingredient(
        name=ingredient.name.strip(),
        unit=ingredient.unit.strip(),
        quantity=to_quantity(ingredient.quantity),
        minimum_quantity=ingredient.minimum_quantity,
        unit_cost=ingredient.unit_cost,
    )
    db.add(db_ingredient)
    db.commit()
    db.refresh(db_ingredient)
    logger.info(f"Ingredient {db_ingredient.id} '{db_ingredient.name}' created with {db_ingredient.quantity}")
    return db_ingredient


def get_ingredient(db: Session, ingredient_id: int):
    return db.query(models.Ingredient).filter(models.Ingredient.id == ingredient_id).first()


def list_ingredients(db: Session, skip: int = 0, limit: int = 100, name: str | None = None):
    query = db.query(models.Ingredient)
    if name:
        query = query.filter(models.Ingredient.name.ilike(f"%{name}%"))
    return query.order_by(models.Ingredient.name.asc()).offset(skip).limit(limit).all()


def list_low_stock(db: Session, limit: int | None = None):
    """Ingredients at or below their minimum quantity, emptiest first."""
    return (
        db.query(models.Ingredient)
        .filter(models.Ingredient.quantity <= models.Ingredient.minimum_quantity)
        .order_by(models.Ingredient.quantity.asc(), models.Ingredient.name.asc())
        .limit(limit or settings.LOW_STOCK_DEFAULT_LIMIT)
        .all()
    )


def update_ingredient(db: Session, ingredient_id: int, update_data: schemas.IngredientUpdate):
    ingredient = get_ingredient(db, ingredient_id)
    if not ingredient:
        raise NotFoundError("Ingredient", ingredient_id)

    # quantity is owned by the stock ledger, IngredientUpdate never carries it
    for key, value in update_data.model_dump(exclude_unset=True).items():
        setattr(ingredient, key, value)

    db.commit()
    db.refresh(ingredient)
    return ingredient


def delete_ingredient(db: Session, ingredient_id: int):
    ingredient = get_ingredient(db, ingredient_id)
    if not ingredient:
        raise NotFoundError("Ingredient", ingredient_id)
    db.delete(ingredient)
    db.commit()
    return True
