"""Configuration management."""

import logging
from pathlib import Path
from typing import Literal, Optional

import yaml
from pydantic import BaseModel

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent / "config" / "config.yaml"


class Config(BaseModel):
    """Analytics configuration."""

    log_level: str = "INFO"
    # First column of the calendar grid
    week_start: Literal["sunday", "monday"] = "sunday"
    # Stage the rejected flow edge is drawn from; status history is not tracked,
    # so "Rejected" may include rejections after interviews either way
    rejection_source: Literal["applications", "interviewing"] = "applications"


_config: Optional[Config] = None


def load_config(config_path: Optional[Path] = None) -> Config:
    """Load configuration from YAML file."""
    global _config

    if _config is not None and config_path is None:
        return _config

    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH
        if not config_path.exists():
            logger.debug(f"No config file at {config_path}, using defaults")
            _config = Config()
            return _config

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(
            f"Config file not found: {config_path}. "
            "Copy config/config.yaml.example to config/config.yaml and fill in your settings."
        )

    with open(config_path) as f:
        data = yaml.safe_load(f) or {}

    _config = Config(**data)
    return _config


def get_config() -> Config:
    """Get the loaded configuration."""
    if _config is None:
        return load_config()
    return _config


def reset_config() -> None:
    """Forget the loaded configuration."""
    global _config
    _config = None
