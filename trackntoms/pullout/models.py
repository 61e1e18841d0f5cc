from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship
from datetime import datetime
from trackntoms.database import Base


class Pullout(Base):
    __tablename__ = "pullouts"

    id = Column(Integer, primary_key=True, index=True)

    ingredient_id = Column(Integer, ForeignKey("ingredients.id"), nullable=False, index=True)

    requested_by = Column(Integer, ForeignKey("staff.id"), nullable=False)
    # manager the request is addressed to; approval may come from someone else
    manager_id = Column(Integer, ForeignKey("staff.id"), nullable=False)
    approved_by = Column(Integer, ForeignKey("staff.id"), nullable=True)

    quantity = Column(Numeric(10, 2), nullable=False)
    reason = Column(Text, nullable=False)
    date_of_pullout = Column(Date, nullable=False, index=True)

    # pending -> approved | rejected; stock moves only on approval
    status = Column(String(20), nullable=False, default="pending", index=True)
    rejection_reason = Column(Text, nullable=True)
    approved_at = Column(DateTime, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    ingredient = relationship("Ingredient")
    requester = relationship("Staff", foreign_keys=[requested_by])
    approver = relationship("Staff", foreign_keys=[approved_by])

    @property
    def ingredient_name(self):
        return self.ingredient.name if self.ingredient else None

    @property
    def requested_by_name(self):
        return self.requester.full_name if self.requester else None
