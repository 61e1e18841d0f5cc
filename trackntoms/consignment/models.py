from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship
from datetime import datetime
from trackntoms.database import Base


class Consignment(Base):
    """Goods received on consignment: tracked here, never owned in stock."""

    __tablename__ = "consignments"

    id = Column(Integer, primary_key=True, index=True)

    supplier_id = Column(Integer, ForeignKey("suppliers.id"), nullable=False, index=True)
    manager_id = Column(Integer, ForeignKey("staff.id"), nullable=False)

    date = Column(Date, nullable=False, index=True)
    invoice_number = Column(String(50), nullable=True)
    reference_number = Column(String(50), nullable=True)
    notes = Column(Text, nullable=True)

    total = Column(Numeric(12, 2), nullable=False, default=0)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    items = relationship(
        "ConsignmentItem",
        back_populates="consignment",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="ConsignmentItem.id",
    )
    supplier = relationship("Supplier")
    manager = relationship("Staff")

    @property
    def supplier_name(self):
        return self.supplier.company_name if self.supplier else None


class ConsignmentItem(Base):
    __tablename__ = "consignment_items"

    id = Column(Integer, primary_key=True, index=True)
    consignment_id = Column(
        Integer,
        ForeignKey("consignments.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    item_id = Column(Integer, ForeignKey("items.id"), nullable=False)

    quantity = Column(Numeric(10, 2), nullable=False)
    supplier_price = Column(Numeric(7, 2), nullable=False)
    subtotal = Column(Numeric(12, 2), nullable=False)
    production_date = Column(Date, nullable=True)

    consignment = relationship("Consignment", back_populates="items")
    item = relationship("Item")

    @property
    def item_name(self):
        return self.item.item_name if self.item else None
