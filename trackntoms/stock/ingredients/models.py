from sqlalchemy import Column, Date, DateTime, Integer, Numeric, String
from datetime import datetime
from trackntoms.database import Base


class Ingredient(Base):
    __tablename__ = "ingredients"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False, index=True)
    unit = Column(String(20), nullable=False)

    # Written only through trackntoms.stock.ledger
    quantity = Column(Numeric(10, 2), nullable=False, default=0)
    minimum_quantity = Column(Numeric(10, 2), nullable=False, default=0)

    unit_cost = Column(Numeric(7, 2), nullable=True)
    last_restock_date = Column(Date, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    @property
    def is_low_stock(self):
        return (self.quantity or 0) <= (self.minimum_quantity or 0)
