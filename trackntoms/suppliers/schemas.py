from pydantic import AliasChoices, BaseModel, Field


class SupplierBase(BaseModel):
    # older clients send the company as supplier_name
    company_name: str = Field(validation_alias=AliasChoices("company_name", "supplier_name"))
    contact_person: str | None = None
    contact_email: str | None = None
    contact_phone: str | None = None
    address: str | None = None
    notes: str | None = None


class SupplierCreate(SupplierBase):
    pass


class SupplierUpdate(BaseModel):
    company_name: str | None = Field(
        default=None, validation_alias=AliasChoices("company_name", "supplier_name")
    )
    contact_person: str | None = None
    contact_email: str | None = None
    contact_phone: str | None = None
    address: str | None = None
    notes: str | None = None
    is_active: bool | None = None


class SupplierOut(BaseModel):
    id: int
    company_name: str
    contact_person: str | None = None
    contact_email: str | None = None
    contact_phone: str | None = None
    address: str | None = None
    notes: str | None = None
    is_active: bool

    class Config:
        from_attributes = True
