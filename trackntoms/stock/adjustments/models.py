from sqlalchemy import Column, Integer, Numeric, ForeignKey, String, DateTime
from sqlalchemy.orm import relationship
from datetime import datetime
from trackntoms.database import Base


class StockAdjustment(Base):
    __tablename__ = "stock_adjustments"

    id = Column(Integer, primary_key=True, index=True)

    ingredient_id = Column(
        Integer,
        ForeignKey("ingredients.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # positive = found stock, negative = write-off
    quantity = Column(Numeric(10, 2), nullable=False)

    reason = Column(String, nullable=False)

    adjusted_by = Column(
        Integer,
        ForeignKey("staff.id", ondelete="SET NULL"),
        nullable=True
    )

    adjusted_at = Column(DateTime, default=datetime.utcnow)

    ingredient = relationship("Ingredient")
    staff = relationship("Staff")

    @property
    def ingredient_name(self):
        return self.ingredient.name if self.ingredient else None

    @property
    def adjusted_by_name(self):
        return self.staff.full_name if self.staff else None
