"""Persistence layer for granter account state."""

from __future__ import annotations

import os
from typing import Optional

from ..config import GranterConfig, load_config
from .inmemory import InMemoryGrantRepository
from .repository import GrantRepository
from .sqlite import SQLiteGrantRepository

try:  # pragma: no cover - optional dependency
    from .postgres import PostgresGrantRepository
except ImportError:  # pragma: no cover - optional dependency
    PostgresGrantRepository = None  # type: ignore

_repository_instance: GrantRepository | None = None


def get_repository(
    database_url: Optional[str] = None, config: Optional[GranterConfig] = None
) -> GrantRepository:
    """Factory function to obtain a grant repository.

    The repository backend is selected based on ``database_url`` which can be
    provided explicitly, via environment variable ``GRANTER_DATABASE_URL`` or
    ``DATABASE_URL``, or from loaded configuration. When no database is
    configured, an in-memory repository is returned.
    """

    global _repository_instance
    if _repository_instance is not None and database_url is None and config is None:
        return _repository_instance

    config = config or load_config()
    database_url = (
        database_url
        or os.getenv("GRANTER_DATABASE_URL")
        or os.getenv("DATABASE_URL")
        or getattr(config, "database_url", None)
    )

    if not database_url:
        _repository_instance = InMemoryGrantRepository()
        return _repository_instance

    if database_url.startswith("sqlite://"):
        path = database_url.replace("sqlite://", "", 1)
        _repository_instance = SQLiteGrantRepository(path)
    elif database_url.startswith("postgres://") or database_url.startswith(
        "postgresql://"
    ):
        if PostgresGrantRepository is None:
            raise RuntimeError("Postgres support not available")
        _repository_instance = PostgresGrantRepository(database_url)
    else:
        raise ValueError(f"Unsupported database backend: {database_url}")

    return _repository_instance


__all__ = [
    "GrantRepository",
    "InMemoryGrantRepository",
    "SQLiteGrantRepository",
    "PostgresGrantRepository",
    "get_repository",
]
