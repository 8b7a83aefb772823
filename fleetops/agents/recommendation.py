"""
Load Recommendation Agent - Scores load board postings for a truck.

This agent:
- Filters postings to available freight the truck's equipment can haul
- Scores each posting on rate per mile and distance
- Estimates profit potential and risk against the truck's cost per mile
- Checks the run against the driver's remaining Hours of Service
- Chains a forward-leg pass after an assignment to avoid deadhead
"""

from datetime import datetime
from enum import Enum
from time import time
from typing import Any, Optional, Union

from pydantic import BaseModel, Field

from fleetops.agents.base import AgentDecision, BaseAgent
from fleetops.data.models import LoadBoardItem, LoadBoardStatus, Location
from fleetops.data.repository import FleetRepository
from fleetops.tools.distance import is_nearby


class MarketDemand(str, Enum):
    """Freight demand level."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class RiskLevel(str, Enum):
    """Risk label derived from profit potential."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class DriverHours(BaseModel):
    """Hours of Service the driver has left today."""

    drive_time_remaining: float = Field(11.0, ge=0, le=14)
    on_duty_remaining: float = Field(14.0, ge=0, le=14)


class MarketConditions(BaseModel):
    """Market context supplied by the dispatcher."""

    fuel_price: float = Field(3.50, gt=0, description="Diesel price per gallon")
    seasonality: str = Field("standard", description="spring, summer, fall, winter or standard")
    market_demand: MarketDemand = MarketDemand.MEDIUM


class RecommendationRequest(BaseModel):
    """Everything needed to rank postings for one truck."""

    truck_id: str
    avg_cost_per_mile: float = Field(..., ge=0)
    equipment_type: str = "Dry Van"
    driver_hours: DriverHours = Field(default_factory=DriverHours)
    current_location: Optional[Location] = None
    market_conditions: Optional[MarketConditions] = None
    available_loads: list[LoadBoardItem] = Field(default_factory=list)


class RecommendationNotes(BaseModel):
    """Human-readable notes attached to a recommendation."""

    reasons: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    optimizations: list[str] = Field(default_factory=list)


class MarketAnalysis(BaseModel):
    """Market context for a single posting."""

    rate_competitiveness: float  # 0-100 against the equipment benchmark
    demand_forecast: str
    seasonal_factors: list[str]


class RouteOptimization(BaseModel):
    """Routing notes for a single posting."""

    suggested_route: str
    estimated_fuel_cost: float
    deadhead_optimization: str


class TimeCompatibility(BaseModel):
    """How the run fits in the driver's remaining hours."""

    estimated_drive_time: float
    total_time_required: float
    buffer_time: float
    compatible: bool


class LoadRecommendation(BaseModel):
    """Recommendation for a specific posting."""

    load: LoadBoardItem
    score: float  # 0-100, higher is better
    rate_score: float
    distance_score: float
    profit_potential: float  # Profit margin %
    risk_assessment: RiskLevel
    recommendations: RecommendationNotes
    market_analysis: MarketAnalysis
    route_optimization: RouteOptimization
    time_compatibility: TimeCompatibility
    board_reliability: int

    @property
    def load_id(self) -> str:
        return self.load.id


class RecommendationResult(BaseModel):
    """Result of a recommendation pass."""

    timestamp: datetime
    truck_id: str
    loads_analyzed: int
    loads_eligible: int
    recommendations: list[LoadRecommendation]
    top_recommendation: Optional[LoadRecommendation] = None
    execution_time_seconds: float


class ForwardLegResult(BaseModel):
    """Recommendations for the next leg after a load is assigned."""

    completed_load: LoadBoardItem
    current_location: Location
    driver_hours: DriverHours
    nearby_loads: int
    result: RecommendationResult


class AssignmentResult(BaseModel):
    """An assigned posting and the forward-leg pass that followed it."""

    assigned_load: LoadBoardItem
    forward_leg: ForwardLegResult


class RateAnalysis(BaseModel):
    """Rate per mile statistics over compatible postings."""

    avg_rate: float
    max_rate: float
    min_rate: float  # Lowest positive rate, 0 when none
    total_loads: int


class MarketInsights(BaseModel):
    """Board-wide trends for the truck's equipment."""

    rate_analysis: RateAnalysis
    total_available: int
    demand_by_equipment: dict[str, int]
    overall_trends: str
    rate_forecast: str
    recommended_strategy: str
    seasonal_factors: list[str]
    emerging_opportunities: list[str]


class TruckRecommendations(BaseModel):
    """Recommendations, market insights and metadata for one truck."""

    recommendations: list[LoadRecommendation]
    market_insights: MarketInsights
    metadata: dict[str, Any]


class LoadRecommendationAgent(BaseAgent):
    """
    Load Recommendation Agent for ranking freight opportunities.

    Scoring is deterministic:
    - Rate per mile bucket (premium / target / below target)
    - Distance bucket (optimal / acceptable / other)
    - A base score, capped at the configured maximum

    Profit potential, risk, HOS fit and market context are attached as
    annotations on each recommendation.
    """

    def __init__(self, **kwargs: Any) -> None:
        """Initialize the load recommendation agent."""
        super().__init__(agent_name="recommendation", **kwargs)

        # Load business rules from config
        self.rate_thresholds = self.config_manager.get_rate_thresholds()
        self.scoring = self.config_manager.get_scoring_config()
        self.profitability = self.config_manager.get_profitability_config()
        self.operations = self.config_manager.get_operating_config()
        self.equipment_config = self.config_manager.get_equipment_config()
        self.load_board_config = self.config_manager.get_load_board_config()
        self.seasonal_factors = self.config_manager.get_seasonal_factors()

        aliases = self.equipment_config.get("aliases", {})
        self._equipment_aliases = {str(k).lower(): str(v) for k, v in aliases.items()}

    # ------------------------------------------------------------------
    # Recommendations

    def generate_recommendations(self, request: RecommendationRequest) -> RecommendationResult:
        """
        Rank available, equipment-compatible postings for a truck.

        Args:
            request: Truck, driver hours and candidate postings

        Returns:
            RecommendationResult with at most max_recommendations entries,
            sorted by score then profit potential
        """
        start_time = time()

        eligible = [
            load
            for load in request.available_loads
            if load.status == LoadBoardStatus.AVAILABLE
            and self.is_equipment_compatible(load.equipment_type, request.equipment_type)
        ]

        self.logger.info(
            "recommendation_started",
            truck_id=request.truck_id,
            load_count=len(request.available_loads),
            eligible_count=len(eligible),
        )

        recommendations = []
        for load in eligible:
            try:
                recommendations.append(self.analyze_load(load, request))
            except Exception as e:
                self.logger.error("load_analysis_error", load_id=load.id, error=str(e))
                continue

        # Stable sort keeps input order for full ties
        recommendations.sort(key=lambda r: (-r.score, -r.profit_potential))

        max_recommendations = int(self.scoring.get("max_recommendations", 5))
        top_recommendations = recommendations[:max_recommendations]

        result = RecommendationResult(
            timestamp=datetime.now(),
            truck_id=request.truck_id,
            loads_analyzed=len(request.available_loads),
            loads_eligible=len(eligible),
            recommendations=top_recommendations,
            top_recommendation=top_recommendations[0] if top_recommendations else None,
            execution_time_seconds=time() - start_time,
        )

        top_score = result.top_recommendation.score if result.top_recommendation else 0.0
        self.log_decision(
            AgentDecision(
                timestamp=datetime.now(),
                agent_name=self.agent_name,
                decision_type="load_recommendation",
                input_data={
                    "truck_id": request.truck_id,
                    "equipment_type": request.equipment_type,
                    "avg_cost_per_mile": request.avg_cost_per_mile,
                    "loads": len(request.available_loads),
                },
                reasoning=f"Ranked {len(recommendations)} of {len(request.available_loads)} postings",
                confidence=top_score / 100.0,
                output_data={
                    "recommended_load_ids": [r.load_id for r in top_recommendations],
                    "top_score": top_score,
                },
                tools_used=["rule_based_scoring", "profitability_calculator"],
                execution_time_seconds=result.execution_time_seconds,
            )
        )

        self.logger.info(
            "recommendations_generated",
            truck_id=request.truck_id,
            loads_analyzed=result.loads_analyzed,
            recommendations_count=len(top_recommendations),
            top_score=top_score,
        )

        return result

    def analyze_load(self, load: LoadBoardItem, request: RecommendationRequest) -> LoadRecommendation:
        """
        Score and annotate a single posting.

        Args:
            load: Posting to analyze
            request: Request supplying cost per mile, hours and market context

        Returns:
            LoadRecommendation with score, risk and notes
        """
        miles = load.miles
        rate = float(load.rate)
        rate_per_mile = load.rate_per_mile

        rate_score = self.calculate_rate_score(rate_per_mile)
        distance_score = self.calculate_distance_score(miles)
        max_score = float(self.scoring.get("max_score", 100))
        base_score = float(self.scoring.get("base_score", 30))
        score = min(max_score, rate_score + distance_score + base_score)

        profit_potential = self.calculate_profit_potential(rate, miles, request.avg_cost_per_mile)
        risk = self.assess_risk(profit_potential)
        timing = self.check_time_compatibility(miles, request.driver_hours)

        fuel_price = (
            request.market_conditions.fuel_price
            if request.market_conditions
            else float(self.operations.get("fuel_price_per_gallon", 3.50))
        )
        seasonality = request.market_conditions.seasonality if request.market_conditions else "standard"
        demand = request.market_conditions.market_demand if request.market_conditions else None

        notes = RecommendationNotes(
            reasons=self._build_reasons(rate_per_mile, miles, profit_potential, timing),
            warnings=self._build_warnings(rate, rate_per_mile, miles, request, profit_potential, timing),
            optimizations=self._build_optimizations(miles),
        )

        return LoadRecommendation(
            load=load,
            score=score,
            rate_score=rate_score,
            distance_score=distance_score,
            profit_potential=profit_potential,
            risk_assessment=risk,
            recommendations=notes,
            market_analysis=MarketAnalysis(
                rate_competitiveness=self.assess_rate_competitiveness(rate_per_mile, load.equipment_type),
                demand_forecast=self.demand_forecast(demand),
                seasonal_factors=self.get_seasonal_factors(seasonality),
            ),
            route_optimization=RouteOptimization(
                suggested_route=load.lane,
                estimated_fuel_cost=self.estimate_fuel_cost(miles, fuel_price),
                deadhead_optimization="Plan return load to minimize deadhead miles",
            ),
            time_compatibility=timing,
            board_reliability=self.board_reliability(load.load_board_source),
        )

    def calculate_rate_score(self, rate_per_mile: float) -> float:
        """Rate bucket points: premium, target or below target."""
        points = self.scoring.get("rate_points", {})
        if rate_per_mile >= self.rate_thresholds.get("premium_rate_per_mile", 3.0):
            return float(points.get("premium", 40))
        if rate_per_mile >= self.rate_thresholds.get("target_rate_per_mile", 2.5):
            return float(points.get("target", 30))
        return float(points.get("below_target", 15))

    def calculate_distance_score(self, miles: int) -> float:
        """Distance bucket points: optimal, acceptable or other."""
        points = self.scoring.get("distance_points", {})
        optimal_low, optimal_high = self.scoring.get("optimal_miles", [300, 600])
        acceptable_low, acceptable_high = self.scoring.get("acceptable_miles", [200, 800])
        if optimal_low <= miles <= optimal_high:
            return float(points.get("optimal", 30))
        if acceptable_low <= miles <= acceptable_high:
            return float(points.get("acceptable", 20))
        return float(points.get("other", 10))

    def calculate_profit_potential(self, rate: float, miles: int, cost_per_mile: float) -> float:
        """
        Profit margin % after running costs and the fixed trip surcharge.

        Returns 0 when the posting pays nothing.
        """
        if rate <= 0:
            return 0.0
        fixed_trip_cost = float(self.profitability.get("fixed_trip_cost", 150))
        estimated_cost = miles * cost_per_mile + fixed_trip_cost
        return (rate - estimated_cost) / rate * 100

    def assess_risk(self, profit_potential: float) -> RiskLevel:
        if profit_potential >= self.profitability.get("low_risk_margin_pct", 20):
            return RiskLevel.LOW
        if profit_potential >= self.profitability.get("medium_risk_margin_pct", 10):
            return RiskLevel.MEDIUM
        return RiskLevel.HIGH

    def check_time_compatibility(self, miles: int, hours: DriverHours) -> TimeCompatibility:
        """Compare the run's drive and on-duty time with the driver's remaining hours."""
        speed = float(self.operations.get("average_speed_mph", 55))
        handling = float(self.operations.get("loading_unloading_hours", 2))

        drive_time = miles / speed
        total_time = drive_time + handling
        buffer = hours.on_duty_remaining - total_time
        compatible = total_time <= hours.on_duty_remaining and drive_time <= hours.drive_time_remaining

        return TimeCompatibility(
            estimated_drive_time=drive_time,
            total_time_required=total_time,
            buffer_time=max(0.0, buffer),
            compatible=compatible,
        )

    def estimate_fuel_cost(self, miles: int, fuel_price: float) -> float:
        mpg = float(self.operations.get("mpg", 6.5))
        return miles / mpg * fuel_price

    def assess_rate_competitiveness(self, rate_per_mile: float, equipment_type: str) -> float:
        """Rate per mile as a percentage of the equipment benchmark, clamped to 0-100."""
        benchmarks = self.equipment_config.get("rate_benchmarks", {})
        benchmark = benchmarks.get(self.normalize_equipment(equipment_type), 2.0)
        competitiveness = rate_per_mile / benchmark * 100
        return min(100.0, max(0.0, competitiveness))

    def demand_forecast(self, demand: Optional[MarketDemand]) -> str:
        if demand == MarketDemand.HIGH:
            return "High demand expected - rates likely to remain strong"
        if demand == MarketDemand.LOW:
            return "Soft demand - consider flexible pricing strategies"
        return "Stable demand forecasted based on current trends"

    def get_seasonal_factors(self, seasonality: str) -> list[str]:
        factors = self.seasonal_factors.get(seasonality.lower())
        if factors is None:
            factors = self.seasonal_factors.get("standard", ["Normal seasonal patterns apply"])
        return list(factors)

    def board_reliability(self, source: str) -> int:
        reliability = self.load_board_config.get("reliability", {})
        return int(reliability.get(source, self.load_board_config.get("default_reliability", 60)))

    def normalize_equipment(self, equipment_type: Optional[str]) -> str:
        """Map an equipment label to its canonical name ("van" -> "Dry Van")."""
        if not equipment_type:
            return ""
        key = " ".join(equipment_type.lower().split())
        fallback = self._equipment_aliases.get(key.replace(" ", ""), equipment_type.strip())
        return self._equipment_aliases.get(key, fallback)

    def is_equipment_compatible(self, load_equipment: Optional[str], truck_equipment: Optional[str]) -> bool:
        return self.normalize_equipment(load_equipment).lower() == self.normalize_equipment(truck_equipment).lower()

    def _build_reasons(
        self, rate_per_mile: float, miles: int, profit_potential: float, timing: TimeCompatibility
    ) -> list[str]:
        reasons = []

        if rate_per_mile >= self.rate_thresholds.get("premium_rate_per_mile", 3.0):
            reasons.append(f"Excellent rate: ${rate_per_mile:.2f}/mile")
        elif rate_per_mile >= self.rate_thresholds.get("target_rate_per_mile", 2.5):
            reasons.append(f"Strong rate: ${rate_per_mile:.2f}/mile")

        optimal_low, optimal_high = self.scoring.get("optimal_miles", [300, 600])
        if optimal_low <= miles <= optimal_high:
            reasons.append("Optimal distance range")

        if profit_potential > self.profitability.get("high_margin_pct", 25):
            reasons.append(f"High profit margin: {profit_potential:.1f}%")

        if timing.compatible:
            reasons.append("Compatible with current HOS")
            if timing.buffer_time > 3:
                reasons.append("Comfortable time buffer available")

        return reasons

    def _build_warnings(
        self,
        rate: float,
        rate_per_mile: float,
        miles: int,
        request: RecommendationRequest,
        profit_potential: float,
        timing: TimeCompatibility,
    ) -> list[str]:
        warnings = []

        min_rpm = self.rate_thresholds.get("minimum_rate_per_mile", 2.0)
        if rate_per_mile < min_rpm:
            warnings.append(f"Rate per mile (${rate_per_mile:.2f}) below minimum (${min_rpm:.2f})")

        if profit_potential < self.profitability.get("medium_risk_margin_pct", 10):
            warnings.append("Low profit margin - consider negotiating")

        fixed_trip_cost = float(self.profitability.get("fixed_trip_cost", 150))
        net_profit = rate - (miles * request.avg_cost_per_mile + fixed_trip_cost)
        if net_profit < 0:
            warnings.append(f"Load is unprofitable: ${-net_profit:.2f} loss")

        if miles > self.scoring.get("long_haul_miles", 800):
            warnings.append("Long haul - monitor driver fatigue")

        if not timing.compatible:
            warnings.append("HOS constraints - check timing carefully")

        return warnings

    def _build_optimizations(self, miles: int) -> list[str]:
        optimizations = ["Plan fuel stops for cost savings"]
        if miles > 500:
            optimizations.append("Consider rest stop locations for HOS compliance")
        optimizations.append("Monitor weather conditions along route")
        if miles < self.scoring.get("short_haul_miles", 200):
            optimizations.append("Consider combining with short backhaul")
        return optimizations

    # ------------------------------------------------------------------
    # Forward legs

    def generate_forward_leg_recommendations(
        self, completed_load: LoadBoardItem, request: RecommendationRequest
    ) -> ForwardLegResult:
        """
        Recommend the next load, picked up near where this one delivers.

        The driver's hours are reduced by the completed run and the truck is
        placed at the completed load's destination.

        Args:
            completed_load: Load just assigned or delivered
            request: Original recommendation request

        Returns:
            ForwardLegResult with the adjusted position, hours and ranking
        """
        speed = float(self.operations.get("average_speed_mph", 55))
        handling = float(self.operations.get("loading_unloading_hours", 2))
        radius = float(self.operations.get("forward_leg_radius_miles", 100))

        leg_drive_time = completed_load.miles / speed
        hours = DriverHours(
            drive_time_remaining=max(0.0, request.driver_hours.drive_time_remaining - leg_drive_time),
            on_duty_remaining=max(0.0, request.driver_hours.on_duty_remaining - (leg_drive_time + handling)),
        )
        location = completed_load.destination

        nearby = [
            load
            for load in request.available_loads
            if load.id != completed_load.id
            and is_nearby(
                load.origin_city,
                load.origin_state,
                completed_load.destination_city,
                completed_load.destination_state,
                radius_miles=radius,
            )
        ]

        self.logger.info(
            "forward_leg_search",
            completed_load_id=completed_load.id,
            location=str(location),
            nearby_loads=len(nearby),
            drive_time_remaining=round(hours.drive_time_remaining, 2),
        )

        forward_request = request.model_copy(
            update={
                "current_location": location,
                "driver_hours": hours,
                "available_loads": nearby,
            }
        )

        return ForwardLegResult(
            completed_load=completed_load,
            current_location=location,
            driver_hours=hours,
            nearby_loads=len(nearby),
            result=self.generate_recommendations(forward_request),
        )

    def assign_load(
        self, repository: FleetRepository, load_id: str, request: RecommendationRequest
    ) -> AssignmentResult:
        """
        Mark a posting assigned and chain a forward-leg pass from its destination.

        Raises:
            KeyError: If the posting is not on the board
        """
        previous = repository.get_load_board_item(load_id).status
        if previous != LoadBoardStatus.AVAILABLE:
            self.logger.warning("load_reassigned", load_id=load_id, previous_status=previous.value)
        assigned = repository.update_load_board_status(load_id, LoadBoardStatus.ASSIGNED)
        self.logger.info("load_assigned", load_id=load_id, truck_id=request.truck_id, lane=assigned.lane)

        candidates = request.available_loads or repository.list_load_board()
        forward_request = request.model_copy(
            update={
                "available_loads": [assigned if load.id == load_id else load for load in candidates]
            }
        )

        return AssignmentResult(
            assigned_load=assigned,
            forward_leg=self.generate_forward_leg_recommendations(assigned, forward_request),
        )

    # ------------------------------------------------------------------
    # Market insights

    def generate_market_insights(self, request: RecommendationRequest) -> MarketInsights:
        """
        Summarize board-wide rates and demand for the truck's equipment.

        Args:
            request: Request holding the board and market conditions

        Returns:
            MarketInsights with trend, forecast and strategy text
        """
        loads = request.available_loads
        compatible = [
            load for load in loads if self.is_equipment_compatible(load.equipment_type, request.equipment_type)
        ]
        rates = [load.rate_per_mile for load in compatible]
        positive_rates = [r for r in rates if r > 0]

        rate_analysis = RateAnalysis(
            avg_rate=sum(rates) / len(rates) if rates else 0.0,
            max_rate=max(rates, default=0.0),
            min_rate=min(positive_rates, default=0.0),
            total_loads=len(compatible),
        )

        demand_by_equipment: dict[str, int] = {}
        for load in loads:
            equipment = self.normalize_equipment(load.equipment_type)
            demand_by_equipment[equipment] = demand_by_equipment.get(equipment, 0) + 1

        if rate_analysis.avg_rate > 2.5:
            trends = "Strong market with premium rates available"
        elif rate_analysis.avg_rate > 2.0:
            trends = "Stable market with decent opportunities"
        else:
            trends = "Soft market - focus on operational efficiency"

        demand = request.market_conditions.market_demand if request.market_conditions else None
        if demand == MarketDemand.HIGH:
            trend = "increasing"
        elif demand == MarketDemand.LOW:
            trend = "decreasing"
        else:
            trend = "stable"

        if rate_analysis.avg_rate > request.avg_cost_per_mile * 1.5:
            strategy = "Take advantage of strong rates - prioritize high-paying loads"
        else:
            strategy = "Focus on operational efficiency and preferred lanes"

        seasonality = request.market_conditions.seasonality if request.market_conditions else "standard"

        insights = MarketInsights(
            rate_analysis=rate_analysis,
            total_available=len(loads),
            demand_by_equipment=demand_by_equipment,
            overall_trends=trends,
            rate_forecast=f"Rates trending {trend} - average ${rate_analysis.avg_rate:.2f}/mile",
            recommended_strategy=strategy,
            seasonal_factors=self.get_seasonal_factors(seasonality),
            emerging_opportunities=self._identify_opportunities(loads),
        )

        self.logger.info(
            "market_insights_generated",
            truck_id=request.truck_id,
            avg_rate=round(rate_analysis.avg_rate, 2),
            compatible_loads=rate_analysis.total_loads,
        )

        return insights

    def _identify_opportunities(self, loads: list[LoadBoardItem]) -> list[str]:
        opportunities = []

        premium_rpm = self.rate_thresholds.get("premium_opportunity_rate_per_mile", 2.5)
        premium_loads = sum(1 for load in loads if load.rate_per_mile > premium_rpm)
        if premium_loads > 0:
            opportunities.append(f"{premium_loads} premium rate loads available")

        short_hauls = sum(1 for load in loads if load.miles < 300)
        if short_hauls > 5:
            opportunities.append("Multiple short hauls available for quick turnaround")

        return opportunities

    # ------------------------------------------------------------------
    # Repository-backed entry points

    def truck_cost_per_mile(self, fixed_costs: float, variable_costs: float, total_miles: int) -> float:
        """Weekly costs spread over the truck's miles, or the standard weekly miles."""
        weekly_miles = total_miles if total_miles > 0 else int(self.operations.get("standard_weekly_miles", 3000))
        return (fixed_costs + variable_costs) / weekly_miles

    def recommend_for_truck(
        self,
        repository: FleetRepository,
        truck_id: str,
        driver_hours: Optional[DriverHours] = None,
        current_location: Optional[Location] = None,
        market_conditions: Optional[MarketConditions] = None,
    ) -> TruckRecommendations:
        """
        Rank the current load board for a stored truck.

        Raises:
            KeyError: If the truck does not exist
        """
        truck = repository.get_truck(truck_id)
        avg_cost_per_mile = self.truck_cost_per_mile(
            float(truck.fixed_costs), float(truck.variable_costs), truck.total_miles
        )
        equipment_type = truck.equipment_type or self.equipment_config.get("default_type", "Dry Van")
        available_loads = repository.list_load_board()

        request = RecommendationRequest(
            truck_id=truck.id,
            avg_cost_per_mile=avg_cost_per_mile,
            equipment_type=equipment_type,
            driver_hours=driver_hours or DriverHours(),
            current_location=current_location,
            market_conditions=market_conditions,
            available_loads=available_loads,
        )

        result = self.generate_recommendations(request)
        insights = self.generate_market_insights(request)

        return TruckRecommendations(
            recommendations=result.recommendations,
            market_insights=insights,
            metadata={
                "total_loads_analyzed": len(available_loads),
                "recommendations_generated": len(result.recommendations),
                "truck_info": {
                    "name": truck.name,
                    "equipment_type": equipment_type,
                    "avg_cost_per_mile": avg_cost_per_mile,
                },
                "timestamp": datetime.now().isoformat(),
            },
        )

    def execute(
        self, request: Union[RecommendationRequest, dict[str, Any]]
    ) -> RecommendationResult:
        """
        Execute a recommendation pass (delegates to generate_recommendations).

        Args:
            request: RecommendationRequest or a dict validated into one

        Returns:
            RecommendationResult
        """
        if not isinstance(request, RecommendationRequest):
            request = RecommendationRequest.model_validate(request)
        return self.generate_recommendations(request)


def main() -> None:
    """Example usage of the load recommendation agent."""
    from decimal import Decimal

    from fleetops.core.logging import configure_logging

    configure_logging(json_output=False)

    agent = LoadRecommendationAgent()

    postings = [
        LoadBoardItem(
            id="LB-001",
            load_board_source="DAT",
            origin_city="Memphis",
            origin_state="TN",
            destination_city="Atlanta",
            destination_state="GA",
            equipment_type="Dry Van",
            miles=371,
            rate=Decimal("1150"),
            broker_name="Delta Logistics",
        ),
        LoadBoardItem(
            id="LB-002",
            load_board_source="Truckstop",
            origin_city="Atlanta",
            origin_state="GA",
            destination_city="Savannah",
            destination_state="GA",
            equipment_type="Van",
            miles=250,
            rate=Decimal("700"),
        ),
        LoadBoardItem(
            id="LB-003",
            load_board_source="123Loadboard",
            origin_city="Chicago",
            origin_state="IL",
            destination_city="Memphis",
            destination_state="TN",
            equipment_type="Reefer",
            miles=341,
            rate=Decimal("1200"),
        ),
        LoadBoardItem(
            id="LB-004",
            load_board_source="DAT",
            origin_city="Memphis",
            origin_state="TN",
            destination_city="Rosenberg",
            destination_state="TX",
            equipment_type="Dry Van",
            miles=720,
            rate=Decimal("1500"),
        ),
    ]

    request = RecommendationRequest(
        truck_id="TRK-001",
        avg_cost_per_mile=1.45,
        equipment_type="Dry Van",
        driver_hours=DriverHours(drive_time_remaining=10.5, on_duty_remaining=13),
        market_conditions=MarketConditions(fuel_price=3.65, seasonality="fall", market_demand=MarketDemand.HIGH),
        available_loads=postings,
    )

    result = agent.execute(request)

    print("\n" + "=" * 80)
    print("LOAD RECOMMENDATIONS")
    print("=" * 80)
    for i, rec in enumerate(result.recommendations, 1):
        print(f"\n{i}. {rec.load.lane}  [{rec.load_id}]")
        print(f"   Score: {rec.score:.0f}/100  Profit: {rec.profit_potential:.1f}%  Risk: {rec.risk_assessment.value}")
        print(f"   Rate: ${rec.load.rate} ({rec.load.rate_per_mile:.2f}/mi over {rec.load.miles} mi)")
        for reason in rec.recommendations.reasons:
            print(f"   + {reason}")
        for warning in rec.recommendations.warnings:
            print(f"   ! {warning}")

    if result.top_recommendation:
        forward = agent.generate_forward_leg_recommendations(result.top_recommendation.load, request)
        print("\n" + "=" * 80)
        print(f"FORWARD LEG FROM {forward.current_location}")
        print("=" * 80)
        print(f"Hours left: {forward.driver_hours.drive_time_remaining:.1f}h drive, "
              f"{forward.driver_hours.on_duty_remaining:.1f}h on duty")
        for rec in forward.result.recommendations:
            print(f"  {rec.load.lane}: score {rec.score:.0f}")

    insights = agent.generate_market_insights(request)
    print("\n" + "=" * 80)
    print("MARKET INSIGHTS")
    print("=" * 80)
    print(insights.overall_trends)
    print(insights.rate_forecast)
    print(insights.recommended_strategy)


if __name__ == "__main__":
    main()
