"""
In-memory fleet repository.

Holds trucks, drivers, loads, load board postings, fuel purchases, HOS logs,
cost breakdowns and load plans keyed by id. Lookups of unknown ids raise
KeyError; constraint violations raise ValueError.
"""

from decimal import Decimal
from typing import Any, Optional

import structlog

from fleetops.core.config import ConfigManager, get_config
from fleetops.data.models import (
    Driver,
    FuelPurchase,
    HosLog,
    Load,
    LoadBoardItem,
    LoadBoardStatus,
    LoadPlan,
    LoadPlanLeg,
    LoadStop,
    Truck,
    TruckCostBreakdown,
)


class FleetRepository:
    """
    Dictionary-backed store for fleet records.

    Records are pydantic models; updates produce validated copies.
    """

    def __init__(
        self,
        config_manager: Optional[ConfigManager] = None,
        logger: Optional[structlog.BoundLogger] = None,
    ) -> None:
        self.config_manager = config_manager or get_config()
        operations = self.config_manager.get_operating_config()
        self.plan_cost_per_mile = Decimal(str(operations.get("plan_cost_per_mile", 1.50)))
        self.logger = logger or structlog.get_logger(component="repository")

        self._trucks: dict[str, Truck] = {}
        self._drivers: dict[str, Driver] = {}
        self._loads: dict[str, Load] = {}
        self._load_stops: dict[str, LoadStop] = {}
        self._load_board: dict[str, LoadBoardItem] = {}
        self._fuel_purchases: dict[str, FuelPurchase] = {}
        self._hos_logs: dict[str, HosLog] = {}
        self._cost_breakdowns: dict[str, TruckCostBreakdown] = {}
        self._load_plans: dict[str, LoadPlan] = {}

    # ------------------------------------------------------------------
    # helpers

    @staticmethod
    def _get(table: dict[str, Any], record_id: str, kind: str) -> Any:
        if record_id not in table:
            raise KeyError(f"{kind} not found: {record_id}")
        return table[record_id]

    @staticmethod
    def _update(record: Any, changes: dict[str, Any]) -> Any:
        data = record.model_dump()
        data.update(changes)
        return type(record).model_validate(data)

    # ------------------------------------------------------------------
    # trucks

    def add_truck(self, truck: Truck) -> Truck:
        self._trucks[truck.id] = truck
        self.logger.info("truck_added", truck_id=truck.id, name=truck.name)
        return truck

    def get_truck(self, truck_id: str) -> Truck:
        return self._get(self._trucks, truck_id, "Truck")

    def list_trucks(self, active_only: bool = False) -> list[Truck]:
        trucks = list(self._trucks.values())
        if active_only:
            trucks = [t for t in trucks if t.is_active]
        return trucks

    def update_truck(self, truck_id: str, **changes: Any) -> Truck:
        truck = self._update(self.get_truck(truck_id), changes)
        self._trucks[truck_id] = truck
        return truck

    def delete_truck(self, truck_id: str) -> None:
        self.get_truck(truck_id)
        del self._trucks[truck_id]
        self.logger.info("truck_deleted", truck_id=truck_id)

    # ------------------------------------------------------------------
    # drivers

    def add_driver(self, driver: Driver) -> Driver:
        """
        Add a driver.

        Raises:
            ValueError: If another driver already holds the CDL number
        """
        for existing in self._drivers.values():
            if existing.cdl_number == driver.cdl_number and existing.id != driver.id:
                raise ValueError(f"CDL number already registered: {driver.cdl_number}")
        self._drivers[driver.id] = driver
        self.logger.info("driver_added", driver_id=driver.id, name=driver.name)
        return driver

    def get_driver(self, driver_id: str) -> Driver:
        return self._get(self._drivers, driver_id, "Driver")

    def list_drivers(self, active_only: bool = False) -> list[Driver]:
        drivers = list(self._drivers.values())
        if active_only:
            drivers = [d for d in drivers if d.is_active]
        return drivers

    def update_driver(self, driver_id: str, **changes: Any) -> Driver:
        driver = self._update(self.get_driver(driver_id), changes)
        for existing in self._drivers.values():
            if existing.id != driver_id and existing.cdl_number == driver.cdl_number:
                raise ValueError(f"CDL number already registered: {driver.cdl_number}")
        self._drivers[driver_id] = driver
        return driver

    def delete_driver(self, driver_id: str) -> None:
        self.get_driver(driver_id)
        del self._drivers[driver_id]

    def assign_driver(self, driver_id: str, truck_id: str) -> tuple[Driver, Truck]:
        """Link a driver and a truck to each other."""
        driver = self.update_driver(driver_id, current_truck_id=truck_id)
        truck = self.update_truck(truck_id, current_driver_id=driver_id)
        self.logger.info("driver_assigned", driver_id=driver_id, truck_id=truck_id)
        return driver, truck

    # ------------------------------------------------------------------
    # loads and stops

    def add_load(self, load: Load) -> Load:
        self._check_stops(load.id, load.stops)
        self._loads[load.id] = load
        for stop in load.stops:
            self._load_stops[stop.id] = stop
        self.logger.info("load_added", load_id=load.id, miles=load.miles)
        return load

    def get_load(self, load_id: str) -> Load:
        load = self._get(self._loads, load_id, "Load")
        return load.model_copy(update={"stops": self.list_load_stops(load_id)})

    def list_loads(self, truck_id: Optional[str] = None) -> list[Load]:
        loads = list(self._loads.values())
        if truck_id is not None:
            loads = [load for load in loads if load.truck_id == truck_id]
        return loads

    def update_load(self, load_id: str, **changes: Any) -> Load:
        """Apply field changes to a load. Passing `stops` replaces all of its stops."""
        load = self._update(self._get(self._loads, load_id, "Load"), changes)
        if "stops" in changes:
            self._check_stops(load_id, load.stops)
            for stop_id in [s.id for s in self._load_stops.values() if s.load_id == load_id]:
                del self._load_stops[stop_id]
            for stop in load.stops:
                self._load_stops[stop.id] = stop
        self._loads[load_id] = load
        return self.get_load(load_id)

    @staticmethod
    def _check_stops(load_id: str, stops: list[LoadStop]) -> None:
        for stop in stops:
            if stop.load_id != load_id:
                raise ValueError(f"Stop {stop.id} belongs to load {stop.load_id}, not {load_id}")

    def delete_load(self, load_id: str) -> None:
        self._get(self._loads, load_id, "Load")
        del self._loads[load_id]
        for stop_id in [s.id for s in self._load_stops.values() if s.load_id == load_id]:
            del self._load_stops[stop_id]

    def add_load_stop(self, stop: LoadStop) -> LoadStop:
        self._get(self._loads, stop.load_id, "Load")
        self._load_stops[stop.id] = stop
        return stop

    def list_load_stops(self, load_id: str) -> list[LoadStop]:
        stops = [s for s in self._load_stops.values() if s.load_id == load_id]
        return sorted(stops, key=lambda s: s.sequence)

    def delete_load_stop(self, stop_id: str) -> None:
        self._get(self._load_stops, stop_id, "Load stop")
        del self._load_stops[stop_id]

    # ------------------------------------------------------------------
    # load board

    def add_load_board_item(self, item: LoadBoardItem) -> LoadBoardItem:
        self._load_board[item.id] = item
        return item

    def get_load_board_item(self, item_id: str) -> LoadBoardItem:
        return self._get(self._load_board, item_id, "Load board item")

    def list_load_board(
        self,
        equipment_type: Optional[str] = None,
        status: Optional[LoadBoardStatus] = None,
    ) -> list[LoadBoardItem]:
        """List postings, optionally filtered by equipment type and status."""
        items = list(self._load_board.values())
        if equipment_type is not None:
            items = [i for i in items if i.equipment_type.lower() == equipment_type.lower()]
        if status is not None:
            items = [i for i in items if i.status == status]
        return items

    def update_load_board_status(self, item_id: str, status: LoadBoardStatus) -> LoadBoardItem:
        item = self.get_load_board_item(item_id).model_copy(
            update={"status": LoadBoardStatus(status)}
        )
        self._load_board[item_id] = item
        self.logger.info("load_board_status_updated", load_id=item_id, status=item.status.value)
        return item

    # ------------------------------------------------------------------
    # fuel purchases

    def add_fuel_purchase(self, purchase: FuelPurchase) -> FuelPurchase:
        self.get_truck(purchase.truck_id)
        self._fuel_purchases[purchase.id] = purchase
        return purchase

    def list_fuel_purchases(
        self, truck_id: Optional[str] = None, load_id: Optional[str] = None
    ) -> list[FuelPurchase]:
        purchases = list(self._fuel_purchases.values())
        if truck_id is not None:
            purchases = [p for p in purchases if p.truck_id == truck_id]
        if load_id is not None:
            purchases = [p for p in purchases if p.load_id == load_id]
        return sorted(purchases, key=lambda p: p.purchase_date)

    def attach_fuel_purchase(self, purchase_id: str, load_id: str) -> FuelPurchase:
        """Attach a fuel purchase to a load."""
        self._get(self._loads, load_id, "Load")
        purchase = self._get(self._fuel_purchases, purchase_id, "Fuel purchase")
        purchase = purchase.model_copy(update={"load_id": load_id})
        self._fuel_purchases[purchase_id] = purchase
        return purchase

    def delete_fuel_purchase(self, purchase_id: str) -> None:
        self._get(self._fuel_purchases, purchase_id, "Fuel purchase")
        del self._fuel_purchases[purchase_id]

    # ------------------------------------------------------------------
    # HOS logs

    def add_hos_log(self, log: HosLog) -> HosLog:
        self.get_driver(log.driver_id)
        self._hos_logs[log.id] = log
        return log

    def list_hos_logs(self, driver_id: Optional[str] = None) -> list[HosLog]:
        logs = list(self._hos_logs.values())
        if driver_id is not None:
            logs = [log for log in logs if log.driver_id == driver_id]
        return sorted(logs, key=lambda log: log.timestamp)

    def latest_hos_log(self, driver_id: str) -> Optional[HosLog]:
        logs = self.list_hos_logs(driver_id)
        return logs[-1] if logs else None

    # ------------------------------------------------------------------
    # cost breakdowns

    def add_cost_breakdown(self, breakdown: TruckCostBreakdown) -> TruckCostBreakdown:
        """Store a weekly breakdown and carry its cost per mile onto the truck."""
        self.get_truck(breakdown.truck_id)
        self._cost_breakdowns[breakdown.id] = breakdown
        latest = self.latest_cost_breakdown(breakdown.truck_id)
        if latest is not None and latest.id == breakdown.id:
            self.update_truck(
                breakdown.truck_id,
                fixed_costs=breakdown.total_fixed_costs,
                variable_costs=breakdown.total_variable_costs,
                cost_per_mile=breakdown.cost_per_mile,
            )
        return breakdown

    def list_cost_breakdowns(self, truck_id: str) -> list[TruckCostBreakdown]:
        breakdowns = [b for b in self._cost_breakdowns.values() if b.truck_id == truck_id]
        return sorted(breakdowns, key=lambda b: (b.week_starting, b.created_at))

    def latest_cost_breakdown(self, truck_id: str) -> Optional[TruckCostBreakdown]:
        breakdowns = self.list_cost_breakdowns(truck_id)
        return breakdowns[-1] if breakdowns else None

    # ------------------------------------------------------------------
    # load plans

    def add_load_plan(self, plan: LoadPlan) -> LoadPlan:
        self._load_plans[plan.id] = self._with_totals(plan)
        return self._load_plans[plan.id]

    def get_load_plan(self, plan_id: str) -> LoadPlan:
        return self._get(self._load_plans, plan_id, "Load plan")

    def list_load_plans(self) -> list[LoadPlan]:
        return list(self._load_plans.values())

    def delete_load_plan(self, plan_id: str) -> None:
        self.get_load_plan(plan_id)
        del self._load_plans[plan_id]

    def add_load_plan_leg(self, leg: LoadPlanLeg) -> LoadPlan:
        """Append a leg to its plan and refresh the plan totals."""
        plan = self.get_load_plan(leg.plan_id)
        legs = sorted([*plan.legs, leg], key=lambda leg: leg.sequence)
        plan = self._with_totals(plan.model_copy(update={"legs": legs}))
        self._load_plans[plan.id] = plan
        return plan

    def delete_load_plan_leg(self, plan_id: str, leg_id: str) -> LoadPlan:
        plan = self.get_load_plan(plan_id)
        legs = [leg for leg in plan.legs if leg.id != leg_id]
        if len(legs) == len(plan.legs):
            raise KeyError(f"Load plan leg not found: {leg_id}")
        plan = self._with_totals(plan.model_copy(update={"legs": legs}))
        self._load_plans[plan.id] = plan
        return plan

    def _with_totals(self, plan: LoadPlan) -> LoadPlan:
        total_miles = sum(leg.miles for leg in plan.legs)
        total_revenue = sum((leg.rate for leg in plan.legs), Decimal("0"))
        estimated_profit = total_revenue - Decimal(total_miles) * self.plan_cost_per_mile
        return plan.model_copy(
            update={
                "total_miles": total_miles,
                "total_revenue": total_revenue,
                "estimated_profit": estimated_profit,
            }
        )
