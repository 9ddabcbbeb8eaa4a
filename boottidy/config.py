"""Configuration system with YAML parsing and Pydantic validation"""

from pathlib import Path

import yaml
from pydantic import BaseModel, Field


class TidyOptions(BaseModel):
    """Options of a single tidy summary."""
    conf_int: bool = False
    conf_level: float = Field(default=0.95, gt=0.0, le=1.0)
    conf_method: str = Field(default="perc", description="norm, basic, stud, perc or bca (prefixes allowed)")


class RoutinesConfig(BaseModel):
    """Delegated routine configuration."""
    backend: str = Field(default="mock", description="Routine backend name, see registry.get_routines")


class ExecutionConfig(BaseModel):
    """Execution configuration."""
    max_workers: int = Field(default=1, ge=1)
    show_progress: bool = False


class LoggingConfig(BaseModel):
    """Logging configuration."""
    level: str = "INFO"
    log_file: str | None = None


class TidyConfig(BaseModel):
    """Complete summary configuration."""
    tidy: TidyOptions = Field(default_factory=TidyOptions)
    routines: RoutinesConfig = Field(default_factory=RoutinesConfig)
    execution: ExecutionConfig = Field(default_factory=ExecutionConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def load_config(config_path: str | Path) -> TidyConfig:
    """Load and validate YAML config file."""
    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with config_path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    return TidyConfig(**(data or {}))
