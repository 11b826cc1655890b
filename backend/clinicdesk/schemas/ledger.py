from datetime import date as date_type, datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class Sale(BaseModel):
    """
    One recorded sale line.

    medicine_id is a weak reference: the medicine may have been deleted since,
    readers resolve it by lookup and fall back to "Unknown".
    total_amount is always quantity * unit_price.
    """
    id: str
    medicine_id: str
    quantity: int = Field(gt=0)
    unit_price: Decimal
    total_amount: Decimal
    timestamp: datetime
    prescription_id: Optional[str] = None


class SaleItem(BaseModel):
    """One basket line. unit_price defaults to the medicine's MRP when omitted."""
    medicine_id: str
    quantity: int = Field(gt=0)
    unit_price: Optional[Decimal] = Field(default=None, ge=0)


class SaleUpdate(BaseModel):
    """Only the quantity of a sale is editable."""
    id: str
    quantity: int = Field(gt=0)


class PurchaseOrderStatus(str, Enum):
    PENDING = "PENDING"
    ORDERED = "ORDERED"
    RECEIVED = "RECEIVED"


class PurchaseOrder(BaseModel):
    """Order to a wholesaler. medicine_name is free text, not a catalog id."""
    id: str
    medicine_name: str
    quantity: int = Field(gt=0)
    supplier: str
    status: PurchaseOrderStatus = PurchaseOrderStatus.PENDING
    order_date: date_type


class PurchaseOrderIn(BaseModel):
    medicine_name: str = Field(min_length=1)
    quantity: int = Field(default=100, gt=0)
    supplier: str = "Generic Wholesaler"


class PurchaseOrderStatusUpdate(BaseModel):
    status: PurchaseOrderStatus
