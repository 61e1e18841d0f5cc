from pydantic import AliasChoices, BaseModel, Field
from datetime import date, datetime
from decimal import Decimal
from typing import Optional


class PulloutCreate(BaseModel):
    ingredient_id: int
    staff_id: int = Field(validation_alias=AliasChoices("staff_id", "requested_by"))
    manager_id: int
    quantity: Decimal
    reason: str
    date_of_pullout: Optional[date] = None


class PulloutUpdate(BaseModel):
    ingredient_id: Optional[int] = None
    quantity: Optional[Decimal] = None
    reason: Optional[str] = None
    manager_id: Optional[int] = None
    date_of_pullout: Optional[date] = None


class PulloutApprove(BaseModel):
    approver_id: int = Field(validation_alias=AliasChoices("approver_id", "manager_id"))


class PulloutReject(PulloutApprove):
    rejection_reason: Optional[str] = None


class PulloutOut(BaseModel):
    id: int
    ingredient_id: int
    ingredient_name: Optional[str] = None
    requested_by: int
    requested_by_name: Optional[str] = None
    manager_id: Optional[int] = None
    approved_by: Optional[int] = None
    quantity: Decimal
    reason: str
    date_of_pullout: date
    status: str
    rejection_reason: Optional[str] = None
    approved_at: Optional[datetime] = None

    class Config:
        from_attributes = True
