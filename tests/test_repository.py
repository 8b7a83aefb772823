"""Tests for the in-memory fleet repository."""

from datetime import date, datetime, timedelta
from decimal import Decimal

import pytest

from fleetops.agents import CostAnalysisAgent
from fleetops.data import FleetRepository
from fleetops.data.models import (
    Driver,
    DutyStatus,
    FuelPurchase,
    HosLog,
    Load,
    LoadBoardStatus,
    LoadPlan,
    LoadPlanLeg,
    LoadStop,
    StopType,
    TruckCostBreakdown,
)


def test_get_unknown_records_raise_key_error(repository):
    with pytest.raises(KeyError):
        repository.get_truck("missing")
    with pytest.raises(KeyError):
        repository.get_driver("missing")
    with pytest.raises(KeyError):
        repository.get_load("missing")
    with pytest.raises(KeyError):
        repository.get_load_board_item("missing")
    with pytest.raises(KeyError):
        repository.get_load_plan("missing")


def test_duplicate_cdl_rejected(repository):
    with pytest.raises(ValueError):
        repository.add_driver(Driver(first_name="Other", last_name="Driver", cdl_number="TN1234567"))


def test_update_driver_to_duplicate_cdl_rejected(repository):
    repository.add_driver(Driver(id="DRV-002", first_name="Kim", last_name="Lee", cdl_number="GA7654321"))

    with pytest.raises(ValueError):
        repository.update_driver("DRV-002", cdl_number="TN1234567")


def test_update_and_delete_truck(repository):
    truck = repository.update_truck("TRK-001", name="Unit 202", total_miles=1200)

    assert truck.name == "Unit 202"
    assert repository.get_truck("TRK-001").total_miles == 1200

    repository.delete_truck("TRK-001")
    assert repository.list_trucks() == []


def test_list_active_only(repository):
    repository.add_driver(Driver(first_name="Kim", last_name="Lee", cdl_number="GA7654321", is_active=False))

    assert len(repository.list_drivers()) == 2
    assert len(repository.list_drivers(active_only=True)) == 1


def test_assign_driver_links_both_records(repository):
    driver, truck = repository.assign_driver("DRV-001", "TRK-001")

    assert driver.current_truck_id == "TRK-001"
    assert truck.current_driver_id == "DRV-001"


def test_load_board_filters_and_status(repository, make_posting):
    repository.add_load_board_item(make_posting(id="a", equipment_type="Dry Van"))
    repository.add_load_board_item(make_posting(id="b", equipment_type="Reefer"))
    repository.add_load_board_item(make_posting(id="c", equipment_type="dry van", status=LoadBoardStatus.BOOKED))

    assert {i.id for i in repository.list_load_board(equipment_type="Dry Van")} == {"a", "c"}
    assert {i.id for i in repository.list_load_board(status=LoadBoardStatus.AVAILABLE)} == {"a", "b"}

    updated = repository.update_load_board_status("a", LoadBoardStatus.ASSIGNED)
    assert updated.status == LoadBoardStatus.ASSIGNED
    assert repository.get_load_board_item("a").status == LoadBoardStatus.ASSIGNED


def test_load_stops_kept_in_sequence(repository):
    repository.add_load(Load(id="L-1", pay=Decimal("2000"), miles=800))
    repository.add_load_stop(LoadStop(load_id="L-1", sequence=2, stop_type=StopType.DELIVERY, city="Atlanta", state="GA"))
    repository.add_load_stop(LoadStop(load_id="L-1", sequence=1, stop_type=StopType.PICKUP, city="Memphis", state="TN"))

    load = repository.get_load("L-1")

    assert [s.sequence for s in load.stops] == [1, 2]
    assert load.stops[0].stop_type == StopType.PICKUP


def test_stop_for_unknown_load_rejected(repository):
    with pytest.raises(KeyError):
        repository.add_load_stop(LoadStop(load_id="nope", sequence=1, stop_type=StopType.PICKUP, city="X", state="TN"))


def test_delete_load_removes_stops(repository):
    repository.add_load(Load(id="L-1", pay=Decimal("2000"), miles=800))
    repository.add_load_stop(LoadStop(load_id="L-1", sequence=1, stop_type=StopType.PICKUP, city="Memphis", state="TN"))

    repository.delete_load("L-1")

    assert repository.list_load_stops("L-1") == []
    assert repository.list_loads() == []


def test_fuel_purchases_by_truck_and_load(repository):
    repository.add_load(Load(id="L-1", truck_id="TRK-001", pay=Decimal("2000"), miles=800))
    first = repository.add_fuel_purchase(
        FuelPurchase(truck_id="TRK-001", gallons=Decimal("100"), price_per_gallon=Decimal("3.50"))
    )
    repository.add_fuel_purchase(
        FuelPurchase(truck_id="TRK-001", load_id="L-1", gallons=Decimal("40"), price_per_gallon=Decimal("3.40"))
    )

    assert len(repository.list_fuel_purchases(truck_id="TRK-001")) == 2
    assert len(repository.list_fuel_purchases(load_id="L-1")) == 1

    repository.attach_fuel_purchase(first.id, "L-1")
    assert len(repository.list_fuel_purchases(load_id="L-1")) == 2


def test_fuel_purchase_for_unknown_truck_rejected(repository):
    with pytest.raises(KeyError):
        repository.add_fuel_purchase(
            FuelPurchase(truck_id="ghost", gallons=Decimal("10"), price_per_gallon=Decimal("3.50"))
        )


def test_latest_hos_log(repository):
    now = datetime(2024, 6, 3, 12, 0)
    repository.add_hos_log(HosLog(driver_id="DRV-001", duty_status=DutyStatus.DRIVING, timestamp=now))
    repository.add_hos_log(
        HosLog(driver_id="DRV-001", duty_status=DutyStatus.OFF_DUTY, timestamp=now - timedelta(hours=3))
    )

    latest = repository.latest_hos_log("DRV-001")

    assert latest.duty_status == DutyStatus.DRIVING
    assert repository.latest_hos_log("DRV-999") is None


def test_cost_breakdown_updates_truck(repository):
    repository.add_cost_breakdown(
        TruckCostBreakdown(
            truck_id="TRK-001",
            week_starting=date(2024, 6, 3),
            truck_payment=Decimal("1000"),
            fuel=Decimal("1500"),
            miles_this_week=2000,
        )
    )

    truck = repository.get_truck("TRK-001")
    assert truck.cost_per_mile == pytest.approx(1.25)
    assert truck.fixed_costs == Decimal("1000")
    assert truck.variable_costs == Decimal("1500")


def test_older_breakdown_does_not_override_latest(repository):
    repository.add_cost_breakdown(
        TruckCostBreakdown(truck_id="TRK-001", week_starting=date(2024, 6, 10), fuel=Decimal("2000"), miles_this_week=2000)
    )
    repository.add_cost_breakdown(
        TruckCostBreakdown(truck_id="TRK-001", week_starting=date(2024, 6, 3), fuel=Decimal("3000"), miles_this_week=2000)
    )

    assert repository.latest_cost_breakdown("TRK-001").week_starting == date(2024, 6, 10)
    assert repository.get_truck("TRK-001").cost_per_mile == pytest.approx(1.0)


def test_plan_leg_refreshes_totals(repository):
    repository.add_load_plan(LoadPlan(id="P-1", name="Southeast loop"))

    repository.add_load_plan_leg(
        LoadPlanLeg(plan_id="P-1", sequence=2, origin_city="Atlanta", origin_state="GA",
                    destination_city="Savannah", destination_state="GA", miles=200, rate=Decimal("700"))
    )
    plan = repository.add_load_plan_leg(
        LoadPlanLeg(plan_id="P-1", sequence=1, origin_city="Memphis", origin_state="TN",
                    destination_city="Atlanta", destination_state="GA", miles=300, rate=Decimal("900"))
    )

    assert [leg.sequence for leg in plan.legs] == [1, 2]
    assert plan.total_miles == 500
    assert plan.total_revenue == Decimal("1600")
    assert plan.estimated_profit == Decimal("850")

    leg_id = plan.legs[0].id
    plan = repository.delete_load_plan_leg("P-1", leg_id)
    assert plan.total_miles == 200


def test_leg_for_unknown_plan_rejected(repository):
    with pytest.raises(KeyError):
        repository.add_load_plan_leg(
            LoadPlanLeg(plan_id="nope", sequence=1, origin_city="A", origin_state="TN",
                        destination_city="B", destination_state="GA", miles=10, rate=Decimal("50"))
        )


def test_plan_cost_per_mile_follows_config(config):
    config.business_config["operations"] = {**config.business_config["operations"], "plan_cost_per_mile": 2.0}
    repository = FleetRepository(config_manager=config)
    repository.add_load_plan(LoadPlan(id="P-1", name="Short hop"))

    plan = repository.add_load_plan_leg(
        LoadPlanLeg(plan_id="P-1", sequence=1, origin_city="Memphis", origin_state="TN",
                    destination_city="Byhalia", destination_state="MS", miles=100, rate=Decimal("500"))
    )
    totals = CostAnalysisAgent(config_manager=config).load_plan_totals(plan)

    assert plan.estimated_profit == Decimal("300")
    assert totals.estimated_profit == plan.estimated_profit


def test_update_load_replaces_stops(repository):
    repository.add_load(Load(id="L-1", pay=Decimal("2000"), miles=800))
    repository.add_load_stop(LoadStop(load_id="L-1", sequence=1, stop_type=StopType.PICKUP, city="Memphis", state="TN"))
    delivery = LoadStop(load_id="L-1", sequence=1, stop_type=StopType.DELIVERY, city="Atlanta", state="GA")

    updated = repository.update_load("L-1", stops=[delivery])

    assert [s.city for s in updated.stops] == ["Atlanta"]
    assert [s.city for s in repository.get_load("L-1").stops] == ["Atlanta"]


def test_stops_must_belong_to_their_load(repository):
    stray = LoadStop(load_id="L-2", sequence=1, stop_type=StopType.PICKUP, city="Memphis", state="TN")

    with pytest.raises(ValueError):
        repository.add_load(Load(id="L-1", pay=Decimal("2000"), miles=800, stops=[stray]))

    repository.add_load(Load(id="L-1", pay=Decimal("2000"), miles=800))
    with pytest.raises(ValueError):
        repository.update_load("L-1", stops=[stray])
