"""
Fleet data: pydantic models and the in-memory repository.
"""

from .repository import FleetRepository

__all__ = ["FleetRepository"]
