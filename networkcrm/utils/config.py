"""
Configuration Management

Loads configuration from YAML files with environment variable resolution.
"""

import os
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field


class RelationshipConfig(BaseModel):
    """Relationship strength classification thresholds."""
    strong_days: int = 30
    moderate_days: int = 90
    dormant_days: int = 180


class StatsConfig(BaseModel):
    """Networking statistics configuration."""
    top_companies: int = 5
    average_window_months: int = 3
    average_window_weeks: float = 12.0


class FollowUpConfig(BaseModel):
    """Follow-up metrics configuration."""
    upcoming_days: int = 7
    trend_weeks: int = 8


class ScoringConfig(BaseModel):
    """Networking score configuration."""
    sub_score_max: int = 25
    contact_target: int = 50
    weekly_target: int = 3
    full_credit_completion_rate: float = 0.8


class InsightsConfig(BaseModel):
    """Insight generation configuration."""
    max_insights: int = 3
    praise_weekly_additions: int = 5
    dormant_warning_ratio: float = 0.3


class OutputConfig(BaseModel):
    """Output generation configuration."""
    directory: str = "./outputs"
    formats: list[str] = Field(default_factory=lambda: ["json", "markdown", "csv"])
    timestamp_filenames: bool = True


class LoggingConfig(BaseModel):
    """Logging configuration."""
    level: str = "INFO"
    file: Optional[str] = None


class ProcessingConfig(BaseModel):
    """Analysis pass configuration."""
    parallel: bool = False


class Config(BaseModel):
    """Root configuration object."""
    relationship: RelationshipConfig = Field(default_factory=RelationshipConfig)
    stats: StatsConfig = Field(default_factory=StatsConfig)
    follow_up: FollowUpConfig = Field(default_factory=FollowUpConfig)
    scoring: ScoringConfig = Field(default_factory=ScoringConfig)
    insights: InsightsConfig = Field(default_factory=InsightsConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    processing: ProcessingConfig = Field(default_factory=ProcessingConfig)


def _resolve_env_vars(data: Any) -> Any:
    """Recursively resolve environment variables in config values.

    Supports ${VAR_NAME} and ${VAR_NAME:-default} syntax.
    """
    if isinstance(data, str):
        if data.startswith("${") and data.endswith("}"):
            var_expr = data[2:-1]
            if ":-" in var_expr:
                var_name, default = var_expr.split(":-", 1)
                return os.environ.get(var_name, default)
            return os.environ.get(var_expr, data)
        return data
    elif isinstance(data, dict):
        return {k: _resolve_env_vars(v) for k, v in data.items()}
    elif isinstance(data, list):
        return [_resolve_env_vars(item) for item in data]
    return data


def load_config(
    config_path: Optional[Path] = None,
    local_config_path: Optional[Path] = None,
) -> Config:
    """Load configuration from YAML files.

    Args:
        config_path: Path to main config file (default: config.yaml)
        local_config_path: Path to local overrides (default: config.local.yaml)

    Returns:
        Merged and validated Config object
    """
    project_root = Path(__file__).parent.parent.parent

    if config_path is None:
        config_path = project_root / "config.yaml"
    if local_config_path is None:
        local_config_path = project_root / "config.local.yaml"

    config_data: dict[str, Any] = {}

    if config_path.exists():
        with open(config_path) as f:
            config_data = yaml.safe_load(f) or {}

    # Local overrides win
    if local_config_path.exists():
        with open(local_config_path) as f:
            local_data = yaml.safe_load(f) or {}
            config_data = _deep_merge(config_data, local_data)

    config_data = _resolve_env_vars(config_data)

    return Config(**config_data)


def _deep_merge(base: dict, override: dict) -> dict:
    """Deep merge two dictionaries, with override taking precedence."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result
