from __future__ import annotations

import os
from typing import Optional

import yaml
from pydantic import BaseModel, Field

from .constants import DEFAULT_LIMIT, MAX_BATCH_SIZE, MAX_LIMIT


class PaginationConfig(BaseModel):
    """Page size settings for grant listings."""

    default_limit: int = Field(default=DEFAULT_LIMIT, gt=0)
    max_limit: int = Field(default=MAX_LIMIT, gt=0)


class GranterConfig(BaseModel):
    """Top-level configuration model."""

    database_url: Optional[str] = None
    account: str = "account"
    pagination: PaginationConfig = PaginationConfig()
    max_batch_size: int = Field(default=MAX_BATCH_SIZE, gt=0)


def load_config(path: Optional[str] = None) -> GranterConfig:
    """Load configuration from YAML file.

    Args:
        path: Optional path to config file. Falls back to GRANTER_CONFIG env
            variable or 'config.yaml' in the current directory.
    """

    config_path = path or os.getenv("GRANTER_CONFIG", "config.yaml")
    if os.path.exists(config_path):
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}
        config = GranterConfig(**data)
    else:
        config = GranterConfig()

    env_db_url = os.getenv("GRANTER_DATABASE_URL") or os.getenv("DATABASE_URL")
    if env_db_url:
        config.database_url = env_db_url
    return config
