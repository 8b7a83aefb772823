"""
Configuration management for the fleet operations platform.

Handles loading and accessing:
- Business configuration (config.yaml)
- Environment variables (.env)
"""

from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class EnvironmentSettings(BaseSettings):
    """Environment variables configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    config_dir: Optional[str] = Field(None, alias="FLEETOPS_CONFIG_DIR")

    # Logging
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_json: bool = Field(True, alias="LOG_JSON")


class ConfigManager:
    """
    Central configuration manager for the fleet operations platform.

    Loads and provides access to:
    - Business configuration from config/config.yaml
    - Environment variables from .env
    """

    def __init__(self, config_dir: Optional[Path] = None) -> None:
        """
        Initialize the configuration manager.

        Args:
            config_dir: Optional path to config directory. Defaults to
                FLEETOPS_CONFIG_DIR, then project root/config.
        """
        self._env_settings: Optional[EnvironmentSettings] = None

        if config_dir is None:
            if self.env.config_dir:
                config_dir = Path(self.env.config_dir)
            else:
                project_root = Path(__file__).parent.parent.parent
                config_dir = project_root / "config"

        self.config_dir = Path(config_dir)
        self._business_config: Optional[dict[str, Any]] = None

    @property
    def business_config(self) -> dict[str, Any]:
        """Load and return business configuration from config.yaml."""
        if self._business_config is None:
            config_path = self.config_dir / "config.yaml"
            with open(config_path, "r") as f:
                self._business_config = yaml.safe_load(f) or {}
        return self._business_config

    @property
    def env(self) -> EnvironmentSettings:
        """Load and return environment settings."""
        if self._env_settings is None:
            self._env_settings = EnvironmentSettings()
        return self._env_settings

    def get_section(self, name: str) -> dict[str, Any]:
        """
        Get a required section of the business config.

        Raises:
            KeyError: If the section is not present
        """
        if name not in self.business_config:
            raise KeyError(f"No configuration section found: {name}")
        return self.business_config[name]

    def get_company_info(self) -> dict[str, Any]:
        """Get company information from business config."""
        return self.business_config.get("company", {})

    def get_rate_thresholds(self) -> dict[str, Any]:
        """Get rate-per-mile thresholds from business config."""
        return self.business_config.get("rates", {})

    def get_scoring_config(self) -> dict[str, Any]:
        """Get recommendation scoring buckets from business config."""
        return self.business_config.get("scoring", {})

    def get_profitability_config(self) -> dict[str, Any]:
        """Get profitability and risk thresholds from business config."""
        return self.business_config.get("profitability", {})

    def get_operating_config(self) -> dict[str, Any]:
        """Get operating assumptions (speed, mpg, fuel price) from business config."""
        return self.business_config.get("operations", {})

    def get_hos_limits(self) -> dict[str, Any]:
        """Get Hours of Service limits from business config."""
        return self.business_config.get("hos", {})

    def get_equipment_config(self) -> dict[str, Any]:
        """Get equipment configuration from business config."""
        return self.business_config.get("equipment", {})

    def get_load_board_config(self) -> dict[str, Any]:
        """Get load board reliability ratings from business config."""
        return self.business_config.get("load_boards", {})

    def get_seasonal_factors(self) -> dict[str, list[str]]:
        """Get seasonal factor descriptions from business config."""
        return self.business_config.get("seasonality", {})


# Global config instance
_config_manager: Optional[ConfigManager] = None


def get_config() -> ConfigManager:
    """
    Get the global configuration manager instance.

    Returns:
        ConfigManager singleton instance
    """
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def reset_config() -> None:
    """Drop the global configuration manager so the next call reloads it."""
    global _config_manager
    _config_manager = None
