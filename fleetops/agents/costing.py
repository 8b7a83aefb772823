"""
Cost Analysis Agent - Truck operating costs and load profitability.

This agent:
- Derives a truck's cost per mile from its weekly costs
- Runs the manual load profitability calculator
- Breaks a booked load's costs into truck and fuel components
- Summarizes fleet size, utilization and margin
- Totals multi-leg load plans
"""

from datetime import datetime
from decimal import Decimal
from time import time
from typing import Any, Optional

from pydantic import BaseModel

from fleetops.agents.base import AgentDecision, BaseAgent
from fleetops.data.models import (
    Driver,
    FuelPurchase,
    Load,
    LoadPlan,
    Truck,
    TruckCostBreakdown,
)

CENTS = Decimal("0.01")


class LoadProfitability(BaseModel):
    """Result of the manual load profitability calculator."""

    cost_per_mile: float
    load_rate_per_mile: float
    profit: Decimal
    is_profitable: bool
    fuel_cost_for_load: Decimal
    estimated_gallons: float
    miles_per_gallon: float
    fuel_efficiency: str  # "excellent", "good", "average", "poor"


class LoadCostAnalysis(BaseModel):
    """Cost breakdown for a booked load."""

    load_id: str
    miles: int
    pay: Decimal

    # Fuel
    estimated_fuel_cost: Decimal
    actual_fuel_cost: Decimal
    estimated_gallons: float
    actual_gallons: float
    estimated_fuel_cost_per_mile: float
    actual_fuel_cost_per_mile: float
    fuel_purchases_count: int
    has_fuel_purchases: bool

    # Truck
    truck_fixed_cost_per_mile: float = 0.0
    truck_variable_cost_per_mile: float = 0.0
    truck_cost_per_mile: float = 0.0
    total_cost_per_mile: float = 0.0
    net_profit: Decimal = Decimal("0")
    profit_per_mile: float = 0.0


class FleetSummary(BaseModel):
    """Fleet-level size, activity and profitability."""

    fleet_size: str  # "solo", "small", "medium", "large", "enterprise"
    total_trucks: int
    active_trucks: int
    total_drivers: int
    active_drivers: int
    total_loads: int
    total_miles: int
    total_revenue: Decimal
    avg_cost_per_mile: float
    utilization_rate: float
    profit_margin: float


class LoadPlanTotals(BaseModel):
    """Totals across a load plan's legs."""

    plan_id: str
    legs: int
    total_miles: int
    total_revenue: Decimal
    estimated_cost: Decimal
    estimated_profit: Decimal


class CostAnalysisAgent(BaseAgent):
    """
    Cost Analysis Agent for truck and load economics.

    All calculations are arithmetic over stored records; money stays in
    Decimal and per-mile figures are reported as floats.
    """

    def __init__(self, **kwargs: Any) -> None:
        """Initialize the cost analysis agent."""
        super().__init__(agent_name="costing", **kwargs)
        self.operations = self.config_manager.get_operating_config()

    @property
    def standard_weekly_miles(self) -> int:
        return int(self.operations.get("standard_weekly_miles", 3000))

    def truck_cost_per_mile(self, truck: Truck) -> float:
        """
        Weekly fixed plus variable costs per mile.

        Uses the truck's total miles, or the standard weekly miles when the
        truck has none recorded.
        """
        miles = truck.total_miles if truck.total_miles > 0 else self.standard_weekly_miles
        return float(truck.weekly_costs) / miles

    def calculate_load_profitability(
        self,
        fixed_costs: Decimal,
        variable_costs: Decimal,
        weekly_miles: int,
        load_pay: Decimal,
        load_miles: int,
        miles_per_gallon: Optional[float] = None,
        fuel_price: Optional[Decimal] = None,
    ) -> LoadProfitability:
        """
        Check whether a load pays more than the truck costs to run.

        Args:
            fixed_costs: Weekly fixed costs
            variable_costs: Weekly variable costs
            weekly_miles: Miles the truck runs in a week
            load_pay: Total pay for the load
            load_miles: Loaded miles
            miles_per_gallon: Truck fuel economy, when known
            fuel_price: Diesel price per gallon, when known

        Returns:
            LoadProfitability with profit, fuel cost and efficiency rating

        Raises:
            ValueError: If weekly or load miles are not positive
        """
        start_time = time()

        if weekly_miles <= 0 or load_miles <= 0:
            raise ValueError("Miles must be greater than zero")

        fixed_costs = Decimal(str(fixed_costs))
        variable_costs = Decimal(str(variable_costs))
        load_pay = Decimal(str(load_pay))

        cost_per_mile = (fixed_costs + variable_costs) / Decimal(weekly_miles)
        load_rpm = load_pay / Decimal(load_miles)

        mpg = miles_per_gallon or float(self.operations.get("mpg", 6.5))
        fuel_cost = Decimal("0")
        gallons = 0.0
        efficiency = "average"

        if miles_per_gallon and fuel_price:
            gallons = load_miles / miles_per_gallon
            fuel_cost = Decimal(str(gallons)) * Decimal(str(fuel_price))
            efficiency = self.rate_fuel_efficiency(miles_per_gallon)

        profit = load_pay - Decimal(load_miles) * cost_per_mile

        result = LoadProfitability(
            cost_per_mile=round(float(cost_per_mile), 3),
            load_rate_per_mile=round(float(load_rpm), 2),
            profit=profit.quantize(CENTS),
            is_profitable=load_rpm > cost_per_mile,
            fuel_cost_for_load=fuel_cost.quantize(CENTS),
            estimated_gallons=round(gallons, 1),
            miles_per_gallon=mpg,
            fuel_efficiency=efficiency,
        )

        self.log_decision(
            AgentDecision(
                timestamp=datetime.now(),
                agent_name=self.agent_name,
                decision_type="load_profitability",
                input_data={"load_pay": float(load_pay), "load_miles": load_miles},
                reasoning=f"Load pays ${result.load_rate_per_mile}/mi against ${result.cost_per_mile}/mi cost",
                confidence=1.0,  # Arithmetic
                output_data={"profit": float(result.profit), "is_profitable": result.is_profitable},
                tools_used=["profitability_calculator"],
                execution_time_seconds=time() - start_time,
            )
        )

        return result

    @staticmethod
    def rate_fuel_efficiency(miles_per_gallon: float) -> str:
        if miles_per_gallon >= 8:
            return "excellent"
        if miles_per_gallon >= 7:
            return "good"
        if miles_per_gallon >= 6:
            return "average"
        return "poor"

    def enrich_load_costs(
        self,
        load: Load,
        truck: Optional[Truck] = None,
        fuel_purchases: Optional[list[FuelPurchase]] = None,
    ) -> LoadCostAnalysis:
        """
        Break a load's costs into fuel and truck components.

        Actual fuel from purchases replaces the estimate when any exist.
        Truck costs are only applied when the load has a truck.
        """
        fuel_purchases = fuel_purchases or []
        miles = load.miles

        actual_fuel_cost = sum((p.total_cost or Decimal("0") for p in fuel_purchases), Decimal("0"))
        actual_gallons = float(sum((p.gallons for p in fuel_purchases), Decimal("0")))

        mpg = float(self.operations.get("mpg", 6.5))
        fuel_price = Decimal(str(self.operations.get("estimated_fuel_price_per_gallon", 3.45)))
        estimated_gallons = miles / mpg
        estimated_fuel_cost = Decimal(str(estimated_gallons)) * fuel_price

        actual_fuel_cpm = float(actual_fuel_cost) / miles if miles > 0 else 0.0
        estimated_fuel_cpm = float(estimated_fuel_cost) / miles if miles > 0 else 0.0

        analysis = LoadCostAnalysis(
            load_id=load.id,
            miles=miles,
            pay=load.pay,
            estimated_fuel_cost=estimated_fuel_cost.quantize(CENTS),
            actual_fuel_cost=actual_fuel_cost.quantize(CENTS),
            estimated_gallons=round(estimated_gallons, 1),
            actual_gallons=round(actual_gallons, 1),
            estimated_fuel_cost_per_mile=round(estimated_fuel_cpm, 3),
            actual_fuel_cost_per_mile=round(actual_fuel_cpm, 3),
            fuel_purchases_count=len(fuel_purchases),
            has_fuel_purchases=bool(fuel_purchases),
        )

        if truck is None:
            return analysis

        fixed_cpm = float(truck.fixed_costs) / self.standard_weekly_miles
        variable_cpm = float(truck.variable_costs) / self.standard_weekly_miles
        truck_cpm = fixed_cpm + variable_cpm
        fuel_cpm = actual_fuel_cpm if fuel_purchases else estimated_fuel_cpm
        total_cpm = truck_cpm + fuel_cpm

        net_profit = float(load.pay) - total_cpm * miles

        return analysis.model_copy(
            update={
                "truck_fixed_cost_per_mile": round(fixed_cpm, 3),
                "truck_variable_cost_per_mile": round(variable_cpm, 3),
                "truck_cost_per_mile": round(truck_cpm, 3),
                "total_cost_per_mile": round(total_cpm, 3),
                "net_profit": Decimal(str(net_profit)).quantize(CENTS),
                "profit_per_mile": round(net_profit / miles, 3) if miles > 0 else 0.0,
            }
        )

    @staticmethod
    def fleet_size_category(truck_count: int) -> str:
        if truck_count > 200:
            return "enterprise"
        if truck_count >= 51:
            return "large"
        if truck_count >= 11:
            return "medium"
        if truck_count >= 2:
            return "small"
        return "solo"

    def fleet_summary(
        self,
        trucks: list[Truck],
        drivers: list[Driver],
        loads: list[Load],
        latest_breakdowns: Optional[dict[str, TruckCostBreakdown]] = None,
    ) -> FleetSummary:
        """
        Summarize the fleet.

        Args:
            trucks: All trucks
            drivers: All drivers
            loads: All loads (revenue source)
            latest_breakdowns: Latest cost breakdown per truck id

        Returns:
            FleetSummary with average CPM over active trucks
        """
        latest_breakdowns = latest_breakdowns or {}

        active_trucks = [t for t in trucks if t.is_active]
        active_drivers = [d for d in drivers if d.is_active]
        total_miles = sum(t.total_miles for t in trucks)
        total_revenue = sum((load.pay for load in loads), Decimal("0"))

        total_cpm = 0.0
        for truck in active_trucks:
            breakdown = latest_breakdowns.get(truck.id)
            if breakdown is not None and breakdown.cost_per_mile > 0:
                total_cpm += breakdown.cost_per_mile
            elif truck.total_miles > 0:
                total_cpm += float(truck.weekly_costs) / truck.total_miles
        avg_cpm = round(total_cpm / len(active_trucks), 2) if active_trucks else 0.0

        revenue_per_mile = float(total_revenue) / total_miles if total_miles > 0 else 0.0
        profit_per_mile = revenue_per_mile - avg_cpm
        margin = profit_per_mile / revenue_per_mile * 100 if revenue_per_mile > 0 else 0.0

        summary = FleetSummary(
            fleet_size=self.fleet_size_category(len(trucks)),
            total_trucks=len(trucks),
            active_trucks=len(active_trucks),
            total_drivers=len(drivers),
            active_drivers=len(active_drivers),
            total_loads=len(loads),
            total_miles=total_miles,
            total_revenue=total_revenue,
            avg_cost_per_mile=avg_cpm,
            utilization_rate=round(len(active_trucks) / len(trucks) * 100, 1) if trucks else 0.0,
            profit_margin=round(margin, 1),
        )

        self.logger.info(
            "fleet_summary_calculated",
            fleet_size=summary.fleet_size,
            trucks=summary.total_trucks,
            avg_cost_per_mile=summary.avg_cost_per_mile,
        )

        return summary

    def load_plan_totals(self, plan: LoadPlan) -> LoadPlanTotals:
        """Total miles, revenue and estimated profit across a plan's legs."""
        cost_per_mile = Decimal(str(self.operations.get("plan_cost_per_mile", 1.50)))
        total_miles = sum(leg.miles for leg in plan.legs)
        total_revenue = sum((leg.rate for leg in plan.legs), Decimal("0"))
        estimated_cost = Decimal(total_miles) * cost_per_mile

        return LoadPlanTotals(
            plan_id=plan.id,
            legs=len(plan.legs),
            total_miles=total_miles,
            total_revenue=total_revenue,
            estimated_cost=estimated_cost.quantize(CENTS),
            estimated_profit=(total_revenue - estimated_cost).quantize(CENTS),
        )

    def execute(self, *args: Any, **kwargs: Any) -> LoadProfitability:
        """
        Execute a profitability calculation (delegates to calculate_load_profitability).

        Returns:
            LoadProfitability
        """
        return self.calculate_load_profitability(*args, **kwargs)


def main() -> None:
    """Example usage of the cost analysis agent."""
    from fleetops.core.logging import configure_logging

    configure_logging(json_output=False)

    agent = CostAnalysisAgent()

    result = agent.calculate_load_profitability(
        fixed_costs=Decimal("1850"),
        variable_costs=Decimal("2600"),
        weekly_miles=3000,
        load_pay=Decimal("1150"),
        load_miles=371,
        miles_per_gallon=6.8,
        fuel_price=Decimal("3.65"),
    )

    print("\n" + "=" * 80)
    print("LOAD PROFITABILITY")
    print("=" * 80)
    print(f"Cost Per Mile: ${result.cost_per_mile}")
    print(f"Load RPM: ${result.load_rate_per_mile}")
    print(f"Profit: ${result.profit}")
    print(f"Fuel: ${result.fuel_cost_for_load} ({result.estimated_gallons} gal, {result.fuel_efficiency})")
    print("PROFITABLE" if result.is_profitable else "NOT PROFITABLE")


if __name__ == "__main__":
    main()
