"""
Load plan data models - multi-leg trip plans.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from fleetops.data.models.load import new_id


class LoadPlanLeg(BaseModel):
    """One leg of a load plan."""

    id: str = Field(default_factory=new_id)
    plan_id: str
    sequence: int = Field(..., ge=1)
    load_id: Optional[str] = None
    origin_city: str
    origin_state: str
    destination_city: str
    destination_state: str
    miles: int = Field(..., ge=0)
    rate: Decimal = Field(..., ge=0)
    scheduled_date: Optional[date] = None
    status: str = "planned"
    notes: Optional[str] = None


class LoadPlan(BaseModel):
    """A named multi-leg plan for a truck."""

    id: str = Field(default_factory=new_id)
    name: str
    truck_id: Optional[str] = None
    description: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    status: str = "draft"

    legs: list[LoadPlanLeg] = Field(default_factory=list)

    # Refreshed from legs by the repository
    total_miles: int = 0
    total_revenue: Decimal = Decimal("0")
    estimated_profit: Decimal = Decimal("0")

    created_at: datetime = Field(default_factory=datetime.now)
