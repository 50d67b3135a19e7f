"""
CrowdFlow Configuration
=======================

This module handles configuration loading for the CrowdFlow engine.

Configuration Sources (in order of precedence):
    1. Environment variables (highest priority)
    2. config.yaml file
    3. Default values (lowest priority)

Environment Variable Mapping:
    CROWDFLOW_SEED           -> simulation.seed
    CROWDFLOW_TICK_INTERVAL  -> simulation.tick_interval_seconds
    CROWDFLOW_LIVE_UPDATES   -> simulation.live_updates
    CROWDFLOW_HISTORY_DAYS   -> simulation.history_days
    CROWDFLOW_CATALOG_PATH   -> catalog.path
    CROWDFLOW_PORT           -> server.port
    CROWDFLOW_LOG_LEVEL      -> logging.level
    PORT                     -> server.port (container platforms)

Example:
    from crowdflow.config import settings

    print(settings.service.name)
    print(settings.simulation.tick_interval_seconds)
"""

import os
import logging
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field


logger = logging.getLogger(__name__)


# =============================================================================
# Configuration Models
# =============================================================================

class ServiceConfig(BaseModel):
    """Service identification configuration."""

    name: str = Field(default="crowdflow-safety-engine", description="Service name")
    version: str = Field(default="v0.1.0", description="Service version")


class SimulationConfig(BaseModel):
    """Simulation cadence and randomness configuration."""

    seed: Optional[int] = Field(
        default=None,
        description="Seed for all random draws (None = nondeterministic)",
    )
    tick_interval_seconds: float = Field(
        default=3.0,
        gt=0,
        description="Delay between live-update ticks",
    )
    live_updates: bool = Field(
        default=True,
        description="Whether ticks run at startup",
    )
    history_days: int = Field(
        default=7,
        ge=1,
        description="Default number of days of synthetic history",
    )


class CatalogConfig(BaseModel):
    """Location catalog configuration."""

    path: Optional[str] = Field(
        default=None,
        description="Path to catalog JSON/YAML (None = bundled catalog)",
    )


class ServerConfig(BaseModel):
    """Server configuration."""

    host: str = Field(default="0.0.0.0", description="Bind host")
    port: int = Field(default=8002, ge=1, le=65535, description="Bind port")


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO", description="Log level")
    format: str = Field(default="json", description="Log format: json or text")


class Settings(BaseModel):
    """
    Main settings class for CrowdFlow.

    Loads configuration from YAML file and environment variables.
    Environment variables take precedence over file values.
    """

    service: ServiceConfig = Field(default_factory=ServiceConfig)
    simulation: SimulationConfig = Field(default_factory=SimulationConfig)
    catalog: CatalogConfig = Field(default_factory=CatalogConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


# =============================================================================
# Configuration Loading
# =============================================================================

def load_config(config_path: Optional[str] = None) -> Settings:
    """
    Load configuration from YAML file and environment variables.

    Priority (highest to lowest):
        1. Environment variables
        2. YAML config file
        3. Default values

    Args:
        config_path: Path to config.yaml. If None, searches common locations.

    Returns:
        Settings: Loaded configuration
    """
    if config_path is None:
        search_paths = [
            Path("config.yaml"),
            Path("config.yml"),
            Path(__file__).parent.parent.parent / "config.yaml",
        ]
        for path in search_paths:
            if path.exists():
                config_path = str(path)
                break

    config_data = {}
    if config_path and Path(config_path).exists():
        logger.info(f"Loading config from: {config_path}")
        with open(config_path, "r") as f:
            config_data = yaml.safe_load(f) or {}
    else:
        logger.info("No config file found, using defaults and environment variables")

    _apply_env_overrides(config_data)

    return Settings.model_validate(config_data)


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def _apply_env_overrides(config_data: dict) -> None:
    """Apply environment variable overrides to config data."""

    # Simulation settings
    if env_seed := os.environ.get("CROWDFLOW_SEED"):
        config_data.setdefault("simulation", {})["seed"] = int(env_seed)
    if env_interval := os.environ.get("CROWDFLOW_TICK_INTERVAL"):
        config_data.setdefault("simulation", {})["tick_interval_seconds"] = float(env_interval)
    if env_live := os.environ.get("CROWDFLOW_LIVE_UPDATES"):
        config_data.setdefault("simulation", {})["live_updates"] = _parse_bool(env_live)
    if env_days := os.environ.get("CROWDFLOW_HISTORY_DAYS"):
        config_data.setdefault("simulation", {})["history_days"] = int(env_days)

    # Catalog settings
    if env_catalog := os.environ.get("CROWDFLOW_CATALOG_PATH"):
        config_data.setdefault("catalog", {})["path"] = env_catalog

    # Server settings (container platforms use PORT)
    if env_port := os.environ.get("PORT"):
        config_data.setdefault("server", {})["port"] = int(env_port)
    elif env_port := os.environ.get("CROWDFLOW_PORT"):
        config_data.setdefault("server", {})["port"] = int(env_port)

    # Logging settings
    if env_log := os.environ.get("CROWDFLOW_LOG_LEVEL"):
        config_data.setdefault("logging", {})["level"] = env_log


def setup_logging(settings: Settings) -> None:
    """Configure logging based on settings."""
    log_level = getattr(logging, settings.logging.level.upper(), logging.INFO)

    if settings.logging.format == "json":
        log_format = '{"time": "%(asctime)s", "level": "%(levelname)s", "module": "%(name)s", "message": "%(message)s"}'
    else:
        log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    logging.basicConfig(
        level=log_level,
        format=log_format,
        datefmt="%Y-%m-%dT%H:%M:%S",
    )


# =============================================================================
# Global Settings Instance
# =============================================================================

# Global settings instance - loaded on import
settings = load_config()
setup_logging(settings)
