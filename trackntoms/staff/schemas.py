from pydantic import BaseModel
from typing import Literal, Optional


class StaffCreate(BaseModel):
    first_name: str
    last_name: str
    email: Optional[str] = None
    role: Literal["Admin", "Manager", "Cashier", "Inventory"] = "Cashier"


class StaffOut(StaffCreate):
    id: int
    full_name: str
    is_active: bool

    class Config:
        from_attributes = True
