"""
Agents for fleet operations.

This module contains specialized agents for:
- Recommendation: Load board scoring, forward legs and market insights
- Costing: Cost per mile, load profitability and fleet summaries
- Compliance: Hours of Service checks and compliance overview
"""

from .base import AgentDecision, BaseAgent
from .compliance import ComplianceAgent
from .costing import CostAnalysisAgent
from .recommendation import LoadRecommendationAgent

__all__ = [
    "BaseAgent",
    "AgentDecision",
    "LoadRecommendationAgent",
    "CostAnalysisAgent",
    "ComplianceAgent",
]
