"""Tests for the load recommendation agent."""

import json
from decimal import Decimal

import pytest
from pydantic import ValidationError
from structlog.testing import capture_logs

from fleetops.agents.recommendation import (
    DriverHours,
    MarketConditions,
    MarketDemand,
    RecommendationRequest,
    RiskLevel,
)
from fleetops.data.models import LoadBoardStatus, Location


# ----------------------------------------------------------------------
# Filtering


def test_filters_to_available_compatible_postings(recommendation_agent, make_posting, make_request):
    loads = [
        make_posting(id="dry", equipment_type="Dry Van"),
        make_posting(id="van", equipment_type="van"),
        make_posting(id="reefer", equipment_type="Reefer"),
        make_posting(id="taken", equipment_type="Dry Van", status=LoadBoardStatus.ASSIGNED),
    ]

    result = recommendation_agent.generate_recommendations(make_request(loads))

    assert result.loads_analyzed == 4
    assert result.loads_eligible == 2
    assert {r.load_id for r in result.recommendations} == {"dry", "van"}


def test_reefer_truck_matches_refrigerated_alias(recommendation_agent, make_posting, make_request):
    loads = [
        make_posting(id="ref", equipment_type="Refrigerated"),
        make_posting(id="dry", equipment_type="Dry Van"),
    ]

    result = recommendation_agent.generate_recommendations(make_request(loads, equipment_type="reefer"))

    assert [r.load_id for r in result.recommendations] == ["ref"]


def test_equipment_normalization(recommendation_agent):
    assert recommendation_agent.normalize_equipment("DRY  VAN") == "Dry Van"
    assert recommendation_agent.normalize_equipment("dryvan") == "Dry Van"
    assert recommendation_agent.normalize_equipment("Flat") == "Flatbed"
    assert recommendation_agent.normalize_equipment("Power Only") == "Power Only"
    assert recommendation_agent.normalize_equipment(None) == ""


def test_no_eligible_postings_returns_empty_result(recommendation_agent, make_posting, make_request):
    result = recommendation_agent.generate_recommendations(
        make_request([make_posting(equipment_type="Flatbed")])
    )

    assert result.recommendations == []
    assert result.top_recommendation is None


# ----------------------------------------------------------------------
# Scoring


@pytest.mark.parametrize(
    "miles,rate,expected",
    [
        (400, "1240", 100),  # premium rate, optimal distance
        (250, "650", 80),  # target rate, acceptable distance
        (900, "1350", 55),  # below target, long haul
        (100, "200", 55),  # below target, short haul
        (700, "2100", 90),  # premium rate, acceptable distance
        (300, "900", 100),  # exactly 3.00/mi, optimal lower edge
        (600, "1500", 90),  # exactly 2.50/mi, optimal upper edge
        (200, "500", 80),  # acceptable lower edge
        (800, "2400", 90),  # acceptable upper edge
        (801, "1602", 55),  # just past acceptable
        (199, "597", 80),  # just short of acceptable
    ],
)
def test_score_buckets(recommendation_agent, make_posting, make_request, miles, rate, expected):
    posting = make_posting(miles=miles, rate=Decimal(rate))

    rec = recommendation_agent.analyze_load(posting, make_request([posting]))

    assert rec.score == expected


def test_score_capped_at_max(config, make_posting, make_request):
    from fleetops.agents import LoadRecommendationAgent

    config.business_config["scoring"] = {**config.business_config["scoring"], "base_score": 60}
    agent = LoadRecommendationAgent(config_manager=config)
    posting = make_posting(miles=400, rate=Decimal("1240"))

    rec = agent.analyze_load(posting, make_request([posting]))

    assert rec.score == 100


def test_scores_stay_within_bounds(recommendation_agent, make_posting, make_request):
    loads = [make_posting(miles=m, rate=Decimal(r)) for m, r in [(0, "500"), (50, "0"), (2500, "9000"), (450, "900")]]

    result = recommendation_agent.generate_recommendations(make_request(loads))

    assert result.recommendations
    for rec in result.recommendations:
        assert 0 <= rec.score <= 100


# ----------------------------------------------------------------------
# Profitability and risk


@pytest.mark.parametrize(
    "miles,expected_profit,expected_risk",
    [
        (400, 25.0, RiskLevel.LOW),  # 1000 - (600 + 150)
        (500, 10.0, RiskLevel.MEDIUM),  # 1000 - (750 + 150)
        (550, 2.5, RiskLevel.HIGH),  # 1000 - (825 + 150)
    ],
)
def test_profit_potential_and_risk(recommendation_agent, make_posting, make_request, miles, expected_profit, expected_risk):
    posting = make_posting(miles=miles, rate=Decimal("1000"))

    rec = recommendation_agent.analyze_load(posting, make_request([posting], avg_cost_per_mile=1.5))

    assert rec.profit_potential == pytest.approx(expected_profit)
    assert rec.risk_assessment == expected_risk


def test_low_risk_threshold_is_inclusive(recommendation_agent, make_posting, make_request):
    posting = make_posting(miles=520, rate=Decimal("1000"))

    rec = recommendation_agent.analyze_load(posting, make_request([posting], avg_cost_per_mile=1.25))

    assert rec.profit_potential == pytest.approx(20.0)
    assert rec.risk_assessment == RiskLevel.LOW


def test_zero_rate_has_zero_profit(recommendation_agent, make_posting, make_request):
    posting = make_posting(rate=Decimal("0"))

    rec = recommendation_agent.analyze_load(posting, make_request([posting]))

    assert rec.profit_potential == 0
    assert rec.risk_assessment == RiskLevel.HIGH


# ----------------------------------------------------------------------
# Ordering


def test_returns_top_five_sorted_by_score(recommendation_agent, make_posting, make_request):
    loads = [make_posting(miles=100 * i, rate=Decimal(str(250 * i + 100 * (i % 3)))) for i in range(1, 10)]

    result = recommendation_agent.generate_recommendations(make_request(loads))

    assert len(result.recommendations) == 5
    scores = [r.score for r in result.recommendations]
    assert scores == sorted(scores, reverse=True)
    assert result.top_recommendation == result.recommendations[0]


def test_ties_broken_by_profit_then_input_order(recommendation_agent, make_posting, make_request):
    loads = [
        make_posting(id="first", miles=400, rate=Decimal("1240")),
        make_posting(id="richer", miles=400, rate=Decimal("1400")),
        make_posting(id="second", miles=400, rate=Decimal("1240")),
    ]

    result = recommendation_agent.generate_recommendations(make_request(loads))

    assert [r.load_id for r in result.recommendations] == ["richer", "first", "second"]


# ----------------------------------------------------------------------
# Notes and annotations


def test_reasons_for_strong_posting(recommendation_agent, make_posting, make_request):
    posting = make_posting(miles=400, rate=Decimal("1240"))

    rec = recommendation_agent.analyze_load(posting, make_request([posting], avg_cost_per_mile=1.0))

    reasons = rec.recommendations.reasons
    assert "Excellent rate: $3.10/mile" in reasons
    assert "Optimal distance range" in reasons
    assert any(r.startswith("High profit margin") for r in reasons)
    assert "Compatible with current HOS" in reasons
    assert "Comfortable time buffer available" in reasons
    assert rec.recommendations.warnings == []


def test_warnings_for_weak_long_haul(recommendation_agent, make_posting, make_request):
    posting = make_posting(miles=900, rate=Decimal("1350"))

    rec = recommendation_agent.analyze_load(posting, make_request([posting], avg_cost_per_mile=1.5))

    warnings = rec.recommendations.warnings
    assert any(w.startswith("Rate per mile ($1.50) below minimum") for w in warnings)
    assert "Low profit margin - consider negotiating" in warnings
    assert any(w.startswith("Load is unprofitable") for w in warnings)
    assert "Long haul - monitor driver fatigue" in warnings
    assert "HOS constraints - check timing carefully" in warnings
    assert not rec.time_compatibility.compatible


def test_hos_incompatible_when_drive_time_exceeds_remaining(recommendation_agent, make_posting, make_request):
    posting = make_posting(miles=400, rate=Decimal("1240"))
    request = make_request(
        [posting], driver_hours=DriverHours(drive_time_remaining=5, on_duty_remaining=14)
    )

    rec = recommendation_agent.analyze_load(posting, request)

    assert rec.time_compatibility.estimated_drive_time == pytest.approx(400 / 55)
    assert rec.time_compatibility.total_time_required == pytest.approx(400 / 55 + 2)
    assert not rec.time_compatibility.compatible
    assert "HOS constraints - check timing carefully" in rec.recommendations.warnings


def test_optimizations_by_distance(recommendation_agent, make_posting, make_request):
    short = make_posting(miles=150, rate=Decimal("500"))
    long = make_posting(miles=600, rate=Decimal("1800"))
    request = make_request([short, long])

    short_opts = recommendation_agent.analyze_load(short, request).recommendations.optimizations
    long_opts = recommendation_agent.analyze_load(long, request).recommendations.optimizations

    assert "Consider combining with short backhaul" in short_opts
    assert "Consider rest stop locations for HOS compliance" not in short_opts
    assert "Consider rest stop locations for HOS compliance" in long_opts
    assert "Plan fuel stops for cost savings" in long_opts
    assert "Monitor weather conditions along route" in long_opts


def test_fuel_cost_and_market_annotations(recommendation_agent, make_posting, make_request):
    posting = make_posting(miles=650, rate=Decimal("650"), load_board_source="Truckstop")

    default = recommendation_agent.analyze_load(posting, make_request([posting]))
    assert default.route_optimization.estimated_fuel_cost == pytest.approx(350.0)
    assert default.route_optimization.suggested_route == "Memphis, TN → Atlanta, GA"
    assert default.market_analysis.rate_competitiveness == pytest.approx(50.0)
    assert default.market_analysis.seasonal_factors == ["Normal seasonal patterns apply"]
    assert default.board_reliability == 90

    conditions = MarketConditions(fuel_price=4.0, seasonality="winter", market_demand=MarketDemand.HIGH)
    rec = recommendation_agent.analyze_load(posting, make_request([posting], market_conditions=conditions))
    assert rec.route_optimization.estimated_fuel_cost == pytest.approx(400.0)
    assert rec.market_analysis.demand_forecast.startswith("High demand expected")
    assert "Weather delays possible" in rec.market_analysis.seasonal_factors


def test_rate_competitiveness_clamped(recommendation_agent):
    assert recommendation_agent.assess_rate_competitiveness(3.1, "Dry Van") == 100
    assert recommendation_agent.assess_rate_competitiveness(1.25, "Reefer") == pytest.approx(50.0)
    assert recommendation_agent.assess_rate_competitiveness(0, "Flatbed") == 0


def test_unknown_board_gets_default_reliability(recommendation_agent):
    assert recommendation_agent.board_reliability("SomeNewBoard") == 60


# ----------------------------------------------------------------------
# Request validation


def test_driver_hours_validated():
    with pytest.raises(ValidationError):
        DriverHours(drive_time_remaining=15, on_duty_remaining=14)
    with pytest.raises(ValidationError):
        DriverHours(drive_time_remaining=-1, on_duty_remaining=14)


def test_market_conditions_validated():
    with pytest.raises(ValidationError):
        MarketConditions(fuel_price=0)
    with pytest.raises(ValidationError):
        MarketConditions(fuel_price=3.5, market_demand="extreme")


def test_execute_accepts_dict(recommendation_agent):
    result = recommendation_agent.execute(
        {
            "truck_id": "TRK-9",
            "avg_cost_per_mile": 1.2,
            "available_loads": [
                {
                    "origin_city": "Chicago",
                    "origin_state": "IL",
                    "destination_city": "Memphis",
                    "destination_state": "TN",
                    "miles": 341,
                    "rate": "1100",
                }
            ],
        }
    )

    assert len(result.recommendations) == 1
    assert result.truck_id == "TRK-9"


def test_execute_rejects_malformed_request(recommendation_agent):
    with pytest.raises(ValidationError):
        recommendation_agent.execute({"truck_id": "TRK-9", "avg_cost_per_mile": -1})


# ----------------------------------------------------------------------
# Forward legs


def test_forward_leg_moves_truck_and_reduces_hours(recommendation_agent, make_posting, make_request):
    completed = make_posting(id="done", miles=371)
    atlanta = make_posting(id="atl", origin_city="Atlanta", origin_state="GA", destination_city="Savannah",
                           destination_state="GA", miles=250, rate=Decimal("700"))
    savannah = make_posting(id="sav", origin_city="Savannah", origin_state="GA", miles=500, rate=Decimal("1400"))
    chicago = make_posting(id="chi", origin_city="Chicago", origin_state="IL")
    chattanooga = make_posting(id="cha", origin_city="Chattanooga", origin_state="TN")

    forward = recommendation_agent.generate_forward_leg_recommendations(
        completed, make_request([completed, atlanta, savannah, chicago, chattanooga])
    )

    assert forward.current_location == Location(city="Atlanta", state="GA")
    assert forward.driver_hours.drive_time_remaining == pytest.approx(11 - 371 / 55)
    assert forward.driver_hours.on_duty_remaining == pytest.approx(14 - (371 / 55 + 2))
    assert forward.nearby_loads == 2
    assert {r.load_id for r in forward.result.recommendations} == {"atl", "sav"}


def test_forward_leg_includes_nearby_cross_state_origin(recommendation_agent, make_posting, make_request):
    completed = make_posting(id="done", destination_city="Memphis", destination_state="TN",
                             origin_city="Nashville", origin_state="TN", miles=210)
    byhalia = make_posting(id="byh", origin_city="Byhalia", origin_state="MS")

    forward = recommendation_agent.generate_forward_leg_recommendations(completed, make_request([byhalia]))

    assert [r.load_id for r in forward.result.recommendations] == ["byh"]


def test_forward_leg_hours_never_negative(recommendation_agent, make_posting, make_request):
    completed = make_posting(id="done", miles=1000)
    nearby = make_posting(id="next", origin_city="Atlanta", origin_state="GA")

    forward = recommendation_agent.generate_forward_leg_recommendations(completed, make_request([completed, nearby]))

    assert forward.driver_hours.drive_time_remaining == 0
    assert forward.driver_hours.on_duty_remaining == 0
    assert all(r.load_id != "done" for r in forward.result.recommendations)
    assert all(not r.time_compatibility.compatible for r in forward.result.recommendations)


def test_assign_load_marks_posting_and_chains_forward_leg(recommendation_agent, repository, make_posting, make_request):
    first = make_posting(id="first", miles=371)
    follow_on = make_posting(id="next", origin_city="Atlanta", origin_state="GA",
                             destination_city="Savannah", destination_state="GA", miles=250, rate=Decimal("700"))
    for posting in (first, follow_on):
        repository.add_load_board_item(posting)

    outcome = recommendation_agent.assign_load(repository, "first", make_request([]))

    assert outcome.assigned_load.status == LoadBoardStatus.ASSIGNED
    assert repository.get_load_board_item("first").status == LoadBoardStatus.ASSIGNED
    assert [r.load_id for r in outcome.forward_leg.result.recommendations] == ["next"]


def test_reassigning_a_posting_logs_warning(recommendation_agent, repository, make_posting, make_request):
    repository.add_load_board_item(make_posting(id="taken", status=LoadBoardStatus.BOOKED))

    with capture_logs() as logs:
        outcome = recommendation_agent.assign_load(repository, "taken", make_request([]))

    assert outcome.assigned_load.status == LoadBoardStatus.ASSIGNED
    warnings = [e for e in logs if e["event"] == "load_reassigned"]
    assert len(warnings) == 1
    assert warnings[0]["log_level"] == "warning"
    assert warnings[0]["previous_status"] == "booked"


def test_assigning_available_posting_does_not_warn(recommendation_agent, repository, make_posting, make_request):
    repository.add_load_board_item(make_posting(id="open"))

    with capture_logs() as logs:
        recommendation_agent.assign_load(repository, "open", make_request([]))

    assert not [e for e in logs if e["event"] == "load_reassigned"]


def test_assign_unknown_load_raises(recommendation_agent, repository, make_request):
    with pytest.raises(KeyError):
        recommendation_agent.assign_load(repository, "missing", make_request([]))


# ----------------------------------------------------------------------
# Market insights


def test_market_insights(recommendation_agent, make_posting, make_request):
    loads = [
        make_posting(miles=300, rate=Decimal("900")),
        make_posting(miles=500, rate=Decimal("1000")),
        make_posting(miles=400, rate=Decimal("0")),
        make_posting(miles=200, rate=Decimal("700"), equipment_type="Reefer"),
    ]
    request = make_request(
        loads,
        avg_cost_per_mile=1.0,
        market_conditions=MarketConditions(fuel_price=3.5, market_demand=MarketDemand.HIGH),
    )

    insights = recommendation_agent.generate_market_insights(request)

    assert insights.rate_analysis.avg_rate == pytest.approx(5 / 3)
    assert insights.rate_analysis.max_rate == pytest.approx(3.0)
    assert insights.rate_analysis.min_rate == pytest.approx(2.0)
    assert insights.rate_analysis.total_loads == 3
    assert insights.total_available == 4
    assert insights.demand_by_equipment == {"Dry Van": 3, "Reefer": 1}
    assert insights.overall_trends.startswith("Soft market")
    assert insights.rate_forecast == "Rates trending increasing - average $1.67/mile"
    assert insights.recommended_strategy.startswith("Take advantage of strong rates")
    assert insights.emerging_opportunities == ["2 premium rate loads available"]


def test_market_insights_short_haul_note(recommendation_agent, make_posting, make_request):
    loads = [make_posting(miles=150, rate=Decimal("300")) for _ in range(6)]

    insights = recommendation_agent.generate_market_insights(make_request(loads))

    assert "Multiple short hauls available for quick turnaround" in insights.emerging_opportunities
    assert insights.rate_forecast.startswith("Rates trending stable")
    assert insights.recommended_strategy.startswith("Focus on operational efficiency")


def test_market_insights_empty_board(recommendation_agent, make_request):
    insights = recommendation_agent.generate_market_insights(make_request([]))

    assert insights.rate_analysis.avg_rate == 0
    assert insights.rate_analysis.min_rate == 0
    assert insights.emerging_opportunities == []


# ----------------------------------------------------------------------
# Repository-backed entry point


def test_recommend_for_truck(recommendation_agent, repository, make_posting):
    repository.add_load_board_item(make_posting(id="good", miles=400, rate=Decimal("1240")))
    repository.add_load_board_item(make_posting(id="reefer", equipment_type="Reefer"))

    output = recommendation_agent.recommend_for_truck(repository, "TRK-001")

    assert [r.load_id for r in output.recommendations] == ["good"]
    assert output.metadata["total_loads_analyzed"] == 2
    assert output.metadata["recommendations_generated"] == 1
    assert output.metadata["truck_info"]["avg_cost_per_mile"] == pytest.approx(1.0)
    assert output.market_insights.rate_analysis.total_loads == 1


def test_truck_cost_per_mile_uses_total_miles(recommendation_agent):
    assert recommendation_agent.truck_cost_per_mile(1500, 1500, 2000) == pytest.approx(1.5)
    assert recommendation_agent.truck_cost_per_mile(1500, 1500, 0) == pytest.approx(1.0)


def test_recommend_for_unknown_truck_raises(recommendation_agent, repository):
    with pytest.raises(KeyError):
        recommendation_agent.recommend_for_truck(repository, "nope")


# ----------------------------------------------------------------------
# Decision history


def test_decisions_recorded_and_exported(recommendation_agent, make_posting, make_request, tmp_path):
    recommendation_agent.generate_recommendations(make_request([make_posting(miles=400, rate=Decimal("1240"))]))

    assert len(recommendation_agent.decision_history) == 1
    decision = recommendation_agent.decision_history[0]
    assert decision.decision_type == "load_recommendation"
    assert decision.confidence == pytest.approx(1.0)

    path = tmp_path / "decisions.json"
    recommendation_agent.export_decisions(str(path))
    exported = json.loads(path.read_text())
    assert exported[0]["output_data"]["top_score"] == 100
