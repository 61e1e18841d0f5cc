from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship
from datetime import datetime
from trackntoms.database import Base


class Item(Base):
    __tablename__ = "items"

    id = Column(Integer, primary_key=True, index=True)
    item_name = Column(String(100), nullable=False, index=True)
    category = Column(String(50), nullable=False, index=True)
    base_price = Column(Numeric(7, 2), nullable=False)
    description = Column(Text, nullable=True)

    # consigned goods are tracked per consignment, never in the ingredient ledger
    is_externally_sourced = Column(Boolean, default=False, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow)

    ingredients = relationship(
        "ItemIngredient",
        back_populates="item",
        cascade="all, delete-orphan",
        order_by="ItemIngredient.id",
    )


class ItemIngredient(Base):
    """One recipe row: how much of an ingredient a single item uses."""

    __tablename__ = "item_ingredients"

    id = Column(Integer, primary_key=True, index=True)
    item_id = Column(Integer, ForeignKey("items.id", ondelete="CASCADE"), nullable=False, index=True)
    ingredient_id = Column(
        Integer,
        ForeignKey("ingredients.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    quantity = Column(Numeric(10, 2), nullable=False)

    item = relationship("Item", back_populates="ingredients")
    ingredient = relationship("Ingredient")

    @property
    def ingredient_name(self):
        return self.ingredient.name if self.ingredient else None

    @property
    def unit(self):
        return self.ingredient.unit if self.ingredient else None

    @property
    def available_quantity(self):
        return self.ingredient.quantity if self.ingredient else None
