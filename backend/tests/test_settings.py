"""
Tests for Settings and connection config derivation.
"""

import pytest

from config import PostgresConfig, RedisConfig, Settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("DATABASE_URL", "REDIS_URL", "POSTGRES_HOST", "POSTGRES_PORT"):
        monkeypatch.delenv(name, raising=False)


def test_database_url_built_from_parts():
    settings = Settings(
        _env_file=None,
        postgres_host="db",
        postgres_port=6543,
        postgres_user="u",
        postgres_password="p",
        postgres_db="registry",
    )

    assert settings.database_url == "postgresql://u:p@db:6543/registry"


def test_explicit_database_url_wins():
    settings = Settings(_env_file=None, database_url="postgresql://x@y/z", postgres_host="ignored")

    assert settings.database_url == "postgresql://x@y/z"


def test_environment_variables_are_read(monkeypatch):
    monkeypatch.setenv("REDIS_URL", "redis://cache:6379/0")

    assert Settings(_env_file=None).redis_url == "redis://cache:6379/0"


def test_rpc_urls_cover_every_network():
    settings = Settings(_env_file=None, soroban_rpc_testnet_url="http://rpc.local")

    assert set(settings.rpc_urls) == {'mainnet', 'testnet', 'futurenet'}
    assert settings.rpc_urls['testnet'] == "http://rpc.local"


def test_postgres_config_kwargs():
    settings = Settings(_env_file=None, db_pool_max_size=4, db_command_timeout=3.0)

    kwargs = PostgresConfig.from_settings(settings).to_asyncpg_kwargs()

    assert kwargs['dsn'] == settings.database_url
    assert kwargs['max_size'] == 4
    assert kwargs['command_timeout'] == 3.0


def test_redis_config_absent_without_url():
    assert RedisConfig.from_settings(Settings(_env_file=None)) is None
    assert RedisConfig.from_settings(Settings(_env_file=None, redis_url="redis://r")).url == "redis://r"
