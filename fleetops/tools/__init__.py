"""
Tools for fleet operations.

This module provides:
- distance: Road-mile estimates between states and freight cities
"""

from .distance import (
    calculate_distance,
    calculate_distance_between_cities,
    haversine_miles,
    is_nearby,
    routing_factor,
)

__all__ = [
    "calculate_distance",
    "calculate_distance_between_cities",
    "haversine_miles",
    "is_nearby",
    "routing_factor",
]
