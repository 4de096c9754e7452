"""Tests for configuration loading."""

import pytest

import granter.persistence as persistence
from granter.config import load_config
from granter.persistence import InMemoryGrantRepository, SQLiteGrantRepository, get_repository


@pytest.fixture(autouse=True)
def _reset_repository(monkeypatch):
    monkeypatch.setattr(persistence, "_repository_instance", None)
    monkeypatch.delenv("GRANTER_DATABASE_URL", raising=False)
    monkeypatch.delenv("DATABASE_URL", raising=False)


def test_load_config_from_env(tmp_path, monkeypatch):
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        """
account: cosmos1abc
max_batch_size: 8
pagination:
  default_limit: 5
  max_limit: 20
"""
    )
    monkeypatch.setenv("GRANTER_CONFIG", str(config_path))

    config = load_config()
    assert config.account == "cosmos1abc"
    assert config.max_batch_size == 8
    assert config.pagination.default_limit == 5
    assert config.pagination.max_limit == 20


def test_defaults_without_file(tmp_path, monkeypatch):
    monkeypatch.setenv("GRANTER_CONFIG", str(tmp_path / "missing.yaml"))

    config = load_config()
    assert config.database_url is None
    assert config.pagination.default_limit == 10
    assert config.pagination.max_limit == 30
    assert config.max_batch_size == 64


def test_database_url_env_override(tmp_path, monkeypatch):
    monkeypatch.setenv("GRANTER_CONFIG", str(tmp_path / "missing.yaml"))
    monkeypatch.setenv("GRANTER_DATABASE_URL", f"sqlite://{tmp_path / 'env.db'}")

    assert load_config().database_url == f"sqlite://{tmp_path / 'env.db'}"


def test_get_repository_uses_config(tmp_path, monkeypatch):
    config_path = tmp_path / "config.yaml"
    config_path.write_text(f"database_url: sqlite://{tmp_path / 'grants.db'}\n")
    monkeypatch.setenv("GRANTER_CONFIG", str(config_path))

    repo = get_repository()
    assert isinstance(repo, SQLiteGrantRepository)
    assert repo.db_path == str(tmp_path / "grants.db")
    assert get_repository() is repo


def test_get_repository_defaults_to_memory(tmp_path, monkeypatch):
    monkeypatch.setenv("GRANTER_CONFIG", str(tmp_path / "missing.yaml"))

    assert isinstance(get_repository(), InMemoryGrantRepository)


def test_get_repository_rejects_unknown_backend():
    with pytest.raises(ValueError):
        get_repository("mysql://localhost/db")
