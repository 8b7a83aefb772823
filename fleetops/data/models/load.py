"""
Load data models - freight postings from load boards and booked loads.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional
from uuid import uuid4

from pydantic import BaseModel, Field, computed_field


def new_id() -> str:
    """Generate a new record identifier."""
    return str(uuid4())


class LoadStatus(str, Enum):
    """Booked load status enumeration."""

    PENDING = "pending"
    ASSIGNED = "assigned"
    IN_TRANSIT = "in_transit"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class LoadBoardStatus(str, Enum):
    """Status of a load board posting."""

    AVAILABLE = "available"
    ASSIGNED = "assigned"
    BOOKED = "booked"
    EXPIRED = "expired"


class StopType(str, Enum):
    """Kind of stop on a multi-stop load."""

    PICKUP = "pickup"
    DELIVERY = "delivery"


class Location(BaseModel):
    """Geographic location."""

    city: str
    state: str
    zip_code: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    def __str__(self) -> str:
        """String representation."""
        return f"{self.city}, {self.state}"


class LoadBoardItem(BaseModel):
    """
    A freight posting pulled from a load board.

    These are the opportunities the recommendation engine scores.
    """

    # Identification
    id: str = Field(default_factory=new_id, description="Posting identifier")
    load_board_source: str = Field("Manual", description="Board the posting came from (DAT, Truckstop, ...)")
    external_id: Optional[str] = Field(None, description="Identifier on the source board")
    status: LoadBoardStatus = Field(LoadBoardStatus.AVAILABLE, description="Posting status")

    # Lane
    origin_city: str
    origin_state: str
    destination_city: str
    destination_state: str

    # Freight
    equipment_type: str = Field("Dry Van", description="Equipment type required")
    miles: int = Field(..., ge=0, description="Loaded miles")
    rate: Decimal = Field(..., ge=0, description="Total rate offered (USD)")
    weight: Optional[int] = Field(None, ge=0, description="Weight in pounds")
    length: Optional[int] = Field(None, ge=0, description="Length in feet")
    commodity: Optional[str] = None

    # Timing
    pickup_date: Optional[datetime] = None
    delivery_date: Optional[datetime] = None

    # Broker
    broker_name: Optional[str] = None
    broker_mc: Optional[str] = None

    created_at: datetime = Field(default_factory=datetime.now)

    @computed_field
    @property
    def rate_per_mile(self) -> float:
        """Rate per loaded mile (0 when the posting has no miles)."""
        if self.miles <= 0:
            return 0.0
        return float(self.rate) / self.miles

    @property
    def origin(self) -> Location:
        """Pickup location."""
        return Location(city=self.origin_city, state=self.origin_state)

    @property
    def destination(self) -> Location:
        """Delivery location."""
        return Location(city=self.destination_city, state=self.destination_state)

    @property
    def lane(self) -> str:
        """Lane description, e.g. 'Memphis, TN → Atlanta, GA'."""
        return f"{self.origin} → {self.destination}"


class LoadStop(BaseModel):
    """A pickup or delivery stop on a multi-stop load."""

    id: str = Field(default_factory=new_id)
    load_id: str
    sequence: int = Field(..., ge=1, description="Stop order, starting at 1")
    stop_type: StopType
    city: str
    state: str
    scheduled_time: Optional[datetime] = None
    actual_time: Optional[datetime] = None
    notes: Optional[str] = None


class Load(BaseModel):
    """
    A load booked by the fleet and (optionally) assigned to a truck.
    """

    id: str = Field(default_factory=new_id)
    truck_id: Optional[str] = None
    type: str = Field("Dry Van", description="Equipment type hauling the load")
    status: LoadStatus = LoadStatus.PENDING

    # Financial
    pay: Decimal = Field(..., ge=0, description="Total pay for the load (USD)")

    # Distance
    miles: int = Field(..., ge=0, description="Loaded miles")
    deadhead_miles: int = Field(0, ge=0, description="Empty miles to pickup")
    deadhead_from_city: Optional[str] = None
    deadhead_from_state: Optional[str] = None

    # Lane
    origin_city: Optional[str] = None
    origin_state: Optional[str] = None
    destination_city: Optional[str] = None
    destination_state: Optional[str] = None

    pickup_date: Optional[datetime] = None
    delivery_date: Optional[datetime] = None
    commodity: Optional[str] = None
    notes: Optional[str] = None

    stops: list[LoadStop] = Field(default_factory=list)

    created_at: datetime = Field(default_factory=datetime.now)

    @computed_field
    @property
    def total_miles_with_deadhead(self) -> int:
        """Total miles including deadhead."""
        return self.miles + self.deadhead_miles

    @computed_field
    @property
    def rate_per_mile(self) -> float:
        """Pay per loaded mile."""
        if self.miles == 0:
            return 0.0
        return float(self.pay) / self.miles

    def is_profitable(self, cost_per_mile: float) -> bool:
        """
        Check if the load pays more per mile than it costs to run.

        Args:
            cost_per_mile: Truck operating cost per mile

        Returns:
            True if rate per mile exceeds cost per mile
        """
        return self.rate_per_mile > cost_per_mile
