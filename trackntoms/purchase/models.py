from sqlalchemy import Boolean, Column, Date, DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship
from datetime import datetime
from trackntoms.database import Base


class Purchase(Base):
    __tablename__ = "purchases"

    id = Column(Integer, primary_key=True, index=True)

    supplier_id = Column(
        Integer,
        ForeignKey("suppliers.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    created_by = Column(Integer, ForeignKey("staff.id"), nullable=False)
    approved_by = Column(Integer, ForeignKey("staff.id"), nullable=True)

    purchase_date = Column(DateTime, nullable=False, index=True)
    status = Column(String(20), nullable=False, default="pending", index=True)

    # Always sum(items.subtotal), rounded to 2 places
    total_amount = Column(Numeric(12, 2), nullable=False, default=0)
    notes = Column(Text, nullable=True)

    # True once the line quantities have been added to ingredient stock
    stock_applied = Column(Boolean, nullable=False, default=False)

    approved_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    items = relationship(
        "PurchaseItem",
        back_populates="purchase",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="PurchaseItem.id",
    )
    supplier = relationship("Supplier")
    creator = relationship("Staff", foreign_keys=[created_by])
    approver = relationship("Staff", foreign_keys=[approved_by])

    @property
    def supplier_name(self):
        return self.supplier.company_name if self.supplier else None


class PurchaseItem(Base):
    __tablename__ = "purchase_items"

    id = Column(Integer, primary_key=True, index=True)
    purchase_id = Column(
        Integer,
        ForeignKey("purchases.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    ingredient_id = Column(Integer, ForeignKey("ingredients.id"), nullable=False)

    quantity = Column(Numeric(10, 2), nullable=False)
    unit_price = Column(Numeric(7, 2), nullable=False)
    subtotal = Column(Numeric(12, 2), nullable=False)
    product_expiration_date = Column(Date, nullable=True)

    purchase = relationship("Purchase", back_populates="items")
    ingredient = relationship("Ingredient")

    @property
    def ingredient_name(self):
        return self.ingredient.name if self.ingredient else None
