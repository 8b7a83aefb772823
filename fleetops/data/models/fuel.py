"""
Fuel purchase data model.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field, model_validator

from fleetops.data.models.load import new_id


class FuelPurchase(BaseModel):
    """Record of a fuel purchase, optionally attached to a load."""

    id: str = Field(default_factory=new_id)
    truck_id: str
    load_id: Optional[str] = None
    fuel_type: str = "diesel"
    gallons: Decimal = Field(..., gt=0)
    price_per_gallon: Decimal = Field(..., ge=0)
    total_cost: Optional[Decimal] = Field(None, ge=0)
    station_name: Optional[str] = None
    station_address: Optional[str] = None
    purchase_date: datetime = Field(default_factory=datetime.now)
    receipt_number: Optional[str] = None
    payment_method: Optional[str] = None
    notes: Optional[str] = None

    @model_validator(mode="after")
    def _fill_total_cost(self) -> "FuelPurchase":
        if self.total_cost is None:
            self.total_cost = (self.gallons * self.price_per_gallon).quantize(Decimal("0.01"))
        return self
