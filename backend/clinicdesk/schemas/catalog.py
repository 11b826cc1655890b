from datetime import date
from decimal import Decimal

from pydantic import BaseModel, Field, field_validator


class Medicine(BaseModel):
    """Catalog record. Stock is a plain int here: permissive sales may leave it negative."""
    id: str
    name: str
    category: str = ""
    manufacturer: str = ""
    batch_number: str = ""
    expiry_date: date
    purchase_price: Decimal = Decimal("0")
    mrp: Decimal = Decimal("0")
    stock: int = 0
    threshold: int = 0


class MedicineIn(BaseModel):
    """Create/replace payload from the inventory form."""
    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    category: str = ""
    manufacturer: str = ""
    batch_number: str = ""
    expiry_date: date
    purchase_price: Decimal = Field(default=Decimal("0"), ge=0)
    mrp: Decimal = Field(default=Decimal("0"), ge=0)
    stock: int = Field(default=0, ge=0)
    threshold: int = Field(default=0, ge=0)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Medicine name cannot be empty")
        return v

    def to_record(self) -> Medicine:
        return Medicine(**self.model_dump())


class CatalogEntry(BaseModel):
    """Projection of a medicine sent to the insight provider."""
    name: str
    stock: int
    expiry: date


class ExpiringMedicine(BaseModel):
    id: str
    name: str
    expiry_date: date
    days_until_expiry: int
    stock: int
