"""
Pydantic data models for fleet operations.

Core models:
- LoadBoardItem: Freight posting from a load board
- Load / LoadStop: Booked loads and their stops
- Truck / Driver: Fleet equipment and drivers
- HosLog: Hours of Service entries
- TruckCostBreakdown: Weekly operating costs
- FuelPurchase: Fuel receipts
- LoadPlan / LoadPlanLeg: Multi-leg plans
"""

from .fleet import Driver, DutyStatus, HosLog, Truck, TruckCostBreakdown
from .fuel import FuelPurchase
from .load import (
    Load,
    LoadBoardItem,
    LoadBoardStatus,
    LoadStatus,
    LoadStop,
    Location,
    StopType,
)
from .plan import LoadPlan, LoadPlanLeg

__all__ = [
    "Driver",
    "DutyStatus",
    "FuelPurchase",
    "HosLog",
    "Load",
    "LoadBoardItem",
    "LoadBoardStatus",
    "LoadPlan",
    "LoadPlanLeg",
    "LoadStatus",
    "LoadStop",
    "Location",
    "StopType",
    "Truck",
    "TruckCostBreakdown",
]
