"""Shared fixtures for the fleet operations test suite."""

from decimal import Decimal
from pathlib import Path

import pytest

from fleetops.agents import ComplianceAgent, CostAnalysisAgent, LoadRecommendationAgent
from fleetops.agents.recommendation import RecommendationRequest
from fleetops.core.config import ConfigManager
from fleetops.data import FleetRepository
from fleetops.data.models import Driver, LoadBoardItem, Truck

CONFIG_DIR = Path(__file__).resolve().parent.parent / "config"


@pytest.fixture
def config() -> ConfigManager:
    return ConfigManager(config_dir=CONFIG_DIR)


@pytest.fixture
def recommendation_agent(config) -> LoadRecommendationAgent:
    return LoadRecommendationAgent(config_manager=config)


@pytest.fixture
def cost_agent(config) -> CostAnalysisAgent:
    return CostAnalysisAgent(config_manager=config)


@pytest.fixture
def compliance_agent(config) -> ComplianceAgent:
    return ComplianceAgent(config_manager=config)


@pytest.fixture
def make_posting():
    """Factory for load board postings with sensible defaults."""
    counter = {"n": 0}

    def _make(**overrides) -> LoadBoardItem:
        counter["n"] += 1
        data = {
            "id": f"LB-{counter['n']:03d}",
            "load_board_source": "DAT",
            "origin_city": "Memphis",
            "origin_state": "TN",
            "destination_city": "Atlanta",
            "destination_state": "GA",
            "equipment_type": "Dry Van",
            "miles": 400,
            "rate": Decimal("1000"),
        }
        data.update(overrides)
        return LoadBoardItem(**data)

    return _make


@pytest.fixture
def make_request():
    """Factory for recommendation requests."""

    def _make(loads, **overrides) -> RecommendationRequest:
        data = {
            "truck_id": "TRK-001",
            "avg_cost_per_mile": 1.5,
            "equipment_type": "Dry Van",
            "available_loads": loads,
        }
        data.update(overrides)
        return RecommendationRequest(**data)

    return _make


@pytest.fixture
def truck() -> Truck:
    return Truck(
        id="TRK-001",
        name="Unit 101",
        equipment_type="Dry Van",
        fixed_costs=Decimal("1500"),
        variable_costs=Decimal("1500"),
        total_miles=0,
    )


@pytest.fixture
def driver() -> Driver:
    return Driver(id="DRV-001", first_name="Sam", last_name="Rivera", cdl_number="TN1234567")


@pytest.fixture
def repository(config, truck, driver) -> FleetRepository:
    repo = FleetRepository(config_manager=config)
    repo.add_truck(truck)
    repo.add_driver(driver)
    return repo
