from sqlalchemy.orm import Session, joinedload
from decimal import Decimal

from loguru import logger

from trackntoms.database import atomic
from trackntoms.exceptions import NotFoundError, ValidationError
from trackntoms.stock.ingredients.models import Ingredient
from trackntoms.stock.items import models, schemas
from trackntoms.utils import check_quantity, to_money, to_quantity


def create_item(db: Session, item: schemas.ItemCreate):
    db_item = models.Item(
        item_name=item.item_name.strip(),
        category=item.category.strip(),
        base_price=to_money(item.base_price),
        description=item.description,
        is_externally_sourced=item.is_externally_sourced,
    )
    db.add(db_item)
    db.commit()
    db.refresh(db_item)
    return db_item


def get_item(db: Session, item_id: int):
    return db.query(models.Item).filter(models.Item.id == item_id).first()


def require_item(db: Session, item_id: int):
    item = get_item(db, item_id)
    if not item:
        raise NotFoundError("Item", item_id)
    return item


def list_items(db: Session, skip: int = 0, limit: int = 100, category: str | None = None):
    query = db.query(models.Item)
    if category:
        query = query.filter(models.Item.category == category)
    return query.order_by(models.Item.item_name).offset(skip).limit(limit).all()


# ===============================
# RECIPES
# ===============================
def get_recipe(db: Session, item_id: int):
    """Ingredients one unit of the item uses, with what is on hand."""
    require_item(db, item_id)
    return (
        db.query(models.ItemIngredient)
        .options(joinedload(models.ItemIngredient.ingredient))
        .filter(models.ItemIngredient.item_id == item_id)
        .order_by(models.ItemIngredient.id)
        .all()
    )


def replace_recipe(db: Session, item_id: int, recipe: schemas.RecipeIn):
    item = require_item(db, item_id)

    lines = []
    seen = set()
    for position, line in enumerate(recipe.ingredients, start=1):
        quantity = to_quantity(line.quantity)
        check_quantity(position, quantity)
        if line.ingredient_id in seen:
            raise ValidationError(f"Item #{position}: ingredient {line.ingredient_id} is listed twice")
        seen.add(line.ingredient_id)
        if not db.query(Ingredient.id).filter(Ingredient.id == line.ingredient_id).first():
            raise NotFoundError("Ingredient", line.ingredient_id)
        lines.append(models.ItemIngredient(ingredient_id=line.ingredient_id, quantity=quantity))

    with atomic(db):
        for line in list(item.ingredients):
            item.ingredients.remove(line)
        db.flush()

        for line in lines:
            item.ingredients.append(line)

    logger.info(f"Recipe for item {item_id} replaced: {len(lines)} ingredient(s)")
    return get_recipe(db, item_id)


def check_availability(db: Session, item_id: int, quantity: int = 1) -> schemas.AvailabilityOut:
    """Read-only: can ``quantity`` units be made from current stock?"""
    if quantity <= 0:
        raise ValidationError("Quantity must be greater than zero")

    for line in get_recipe(db, item_id):
        needed = to_quantity(Decimal(str(line.quantity)) * quantity)
        if Decimal(str(line.ingredient.quantity or 0)) < needed:
            return schemas.AvailabilityOut(
                item_id=item_id,
                quantity=quantity,
                available=False,
                message=f"Not enough {line.ingredient.name} in stock",
                ingredient_id=line.ingredient_id,
            )

    # no recipe means nothing to run out of
    return schemas.AvailabilityOut(item_id=item_id, quantity=quantity, available=True)
