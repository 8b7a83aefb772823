"""
Fleet data models - trucks, drivers, HOS logs and weekly cost breakdowns.
"""

from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, computed_field

from fleetops.data.models.load import new_id


class DutyStatus(str, Enum):
    """ELD duty status."""

    OFF_DUTY = "OFF_DUTY"
    SLEEPER_BERTH = "SLEEPER_BERTH"
    DRIVING = "DRIVING"
    ON_DUTY = "ON_DUTY"


class Truck(BaseModel):
    """A power unit operated by the fleet."""

    id: str = Field(default_factory=new_id)
    name: str
    equipment_type: str = Field("Dry Van", description="Trailer equipment type")

    # Weekly operating costs
    fixed_costs: Decimal = Field(Decimal("0"), ge=0, description="Weekly fixed costs (USD)")
    variable_costs: Decimal = Field(Decimal("0"), ge=0, description="Weekly variable costs (USD)")
    total_miles: int = Field(0, ge=0)
    cost_per_mile: Optional[float] = Field(None, description="CPM from the latest cost breakdown")

    is_active: bool = True
    vin: Optional[str] = None
    license_plate: Optional[str] = None
    eld_device_id: Optional[str] = None
    current_driver_id: Optional[str] = None
    preferred_load_board: Optional[str] = None

    created_at: datetime = Field(default_factory=datetime.now)

    @property
    def weekly_costs(self) -> Decimal:
        """Fixed plus variable weekly costs."""
        return self.fixed_costs + self.variable_costs


class Driver(BaseModel):
    """A CDL driver."""

    id: str = Field(default_factory=new_id)
    first_name: str
    last_name: str
    cdl_number: str = Field(..., min_length=1)
    license_state: Optional[str] = None
    license_expiry: Optional[date] = None
    phone_number: Optional[str] = None
    email: Optional[str] = None
    is_active: bool = True
    current_truck_id: Optional[str] = None
    preferred_load_types: list[str] = Field(default_factory=list)
    notes: Optional[str] = None

    created_at: datetime = Field(default_factory=datetime.now)

    @computed_field
    @property
    def name(self) -> str:
        """Full driver name."""
        return f"{self.first_name} {self.last_name}".strip()


class HosLog(BaseModel):
    """A duty status entry recorded manually or from an ELD."""

    id: str = Field(default_factory=new_id)
    driver_id: str
    truck_id: Optional[str] = None
    duty_status: DutyStatus
    timestamp: datetime = Field(default_factory=datetime.now)
    location: Optional[str] = None
    drive_time_remaining: Optional[float] = Field(None, ge=0)
    on_duty_remaining: Optional[float] = Field(None, ge=0)
    cycle_hours_remaining: Optional[float] = Field(None, ge=0)
    violations: list[str] = Field(default_factory=list)
    notes: Optional[str] = None


class TruckCostBreakdown(BaseModel):
    """
    Weekly cost breakdown for a truck.

    Totals and cost per mile are derived from the individual line items.
    """

    id: str = Field(default_factory=new_id)
    truck_id: str
    week_starting: date
    week_ending: Optional[date] = None

    # Fixed costs
    truck_payment: Decimal = Decimal("0")
    trailer_payment: Decimal = Decimal("0")
    elog_subscription: Decimal = Decimal("0")
    liability_insurance: Decimal = Decimal("0")
    physical_insurance: Decimal = Decimal("0")
    cargo_insurance: Decimal = Decimal("0")
    trailer_interchange: Decimal = Decimal("0")
    bobtail_insurance: Decimal = Decimal("0")
    non_trucking_liability: Decimal = Decimal("0")
    base_plate_deduction: Decimal = Decimal("0")
    company_phone: Decimal = Decimal("0")

    # Variable costs
    driver_pay: Decimal = Decimal("0")
    fuel: Decimal = Decimal("0")
    def_fluid: Decimal = Decimal("0")
    maintenance: Decimal = Decimal("0")
    ifta_taxes: Decimal = Decimal("0")
    tolls: Decimal = Decimal("0")
    dwell_time: Decimal = Decimal("0")
    reefer_fuel: Decimal = Decimal("0")
    truck_parking: Decimal = Decimal("0")

    # Fuel detail
    gallons_used: float = Field(0, ge=0)
    avg_fuel_price: float = Field(0, ge=0)
    miles_per_gallon: float = Field(0, ge=0)

    # Miles
    miles_this_week: int = Field(0, ge=0)
    total_miles_with_deadhead: Optional[int] = Field(None, ge=0)

    created_at: datetime = Field(default_factory=datetime.now)

    @computed_field
    @property
    def total_fixed_costs(self) -> Decimal:
        """Sum of fixed weekly costs."""
        return (
            self.truck_payment
            + self.trailer_payment
            + self.elog_subscription
            + self.liability_insurance
            + self.physical_insurance
            + self.cargo_insurance
            + self.trailer_interchange
            + self.bobtail_insurance
            + self.non_trucking_liability
            + self.base_plate_deduction
            + self.company_phone
        )

    @computed_field
    @property
    def total_variable_costs(self) -> Decimal:
        """Sum of variable weekly costs."""
        return (
            self.driver_pay
            + self.fuel
            + self.def_fluid
            + self.maintenance
            + self.ifta_taxes
            + self.tolls
            + self.dwell_time
            + self.reefer_fuel
            + self.truck_parking
        )

    @computed_field
    @property
    def total_weekly_costs(self) -> Decimal:
        """Fixed plus variable weekly costs."""
        return self.total_fixed_costs + self.total_variable_costs

    @computed_field
    @property
    def cost_per_mile(self) -> float:
        """Weekly cost per mile, using deadhead-inclusive miles when recorded."""
        miles = (
            self.total_miles_with_deadhead
            if self.total_miles_with_deadhead is not None
            else self.miles_this_week
        )
        if miles <= 0:
            return 0.0
        return round(float(self.total_weekly_costs) / miles, 3)
