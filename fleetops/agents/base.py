"""
Base agent class for all fleet operations agents.

Provides common functionality:
- Configuration access
- Structured logging
- Decision tracking and export
"""

import json
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Optional

import structlog
from pydantic import BaseModel, Field

from fleetops.core.config import ConfigManager, get_config


class AgentDecision(BaseModel):
    """
    Structured format for agent decisions.

    Used to track reasoning and provide transparency.
    """

    timestamp: datetime
    agent_name: str
    decision_type: str
    input_data: dict[str, Any]
    reasoning: str
    confidence: float = Field(..., ge=0.0, le=1.0)
    output_data: dict[str, Any]
    tools_used: list[str]
    execution_time_seconds: float


class BaseAgent(ABC):
    """
    Base class for all fleet operations agents.

    Provides:
    - Configuration loading
    - Decision logging
    - Decision export
    """

    def __init__(
        self,
        agent_name: str,
        config_manager: Optional[ConfigManager] = None,
        logger: Optional[structlog.BoundLogger] = None,
    ) -> None:
        """
        Initialize the base agent.

        Args:
            agent_name: Name of the agent (e.g., "recommendation", "compliance")
            config_manager: Optional config manager (defaults to global instance)
            logger: Optional structured logger
        """
        self.agent_name = agent_name
        self.config_manager = config_manager or get_config()
        self.logger = logger or structlog.get_logger(agent_name=agent_name)

        # Decision history (for debugging and auditing)
        self.decision_history: list[AgentDecision] = []

        self.logger.debug("agent_initialized", agent_name=agent_name)

    def log_decision(self, decision: AgentDecision) -> None:
        """
        Log an agent decision for transparency and debugging.

        Args:
            decision: AgentDecision instance with decision details
        """
        self.decision_history.append(decision)
        self.logger.info(
            "agent_decision",
            decision_type=decision.decision_type,
            confidence=decision.confidence,
            reasoning=decision.reasoning,
            execution_time=decision.execution_time_seconds,
        )

    def export_decisions(self, filepath: str) -> None:
        """
        Export decision history to JSON file.

        Args:
            filepath: Path to output JSON file
        """
        with open(filepath, "w") as f:
            decisions_dict = [d.model_dump(mode="json") for d in self.decision_history]
            json.dump(decisions_dict, f, indent=2, default=str)

        self.logger.info("decisions_exported", filepath=filepath, count=len(self.decision_history))

    @abstractmethod
    def execute(self, *args: Any, **kwargs: Any) -> Any:
        """
        Execute the agent's primary function.

        Each agent must implement this method with their specific logic.

        Returns:
            Agent-specific output (varies by agent type)
        """
        pass

    def __repr__(self) -> str:
        """String representation of the agent."""
        return f"{self.__class__.__name__}(agent_name='{self.agent_name}')"
