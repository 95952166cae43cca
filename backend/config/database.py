"""
Database Configuration
======================

Centralized connection configuration for the registry API.
Handles the PostgreSQL pool and the Redis verification queue.
"""
from typing import Optional
from dataclasses import dataclass

from .settings import Settings, get_settings


@dataclass
class PostgresConfig:
    """PostgreSQL connection configuration."""
    dsn: str
    min_size: int = 2
    max_size: int = 10
    command_timeout: float = 10.0

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> 'PostgresConfig':
        """Create config from application settings."""
        settings = settings or get_settings()
        return cls(
            dsn=settings.database_url,
            min_size=settings.db_pool_min_size,
            max_size=settings.db_pool_max_size,
            command_timeout=settings.db_command_timeout,
        )

    def to_asyncpg_kwargs(self) -> dict:
        """Convert to asyncpg.create_pool kwargs."""
        return {
            'dsn': self.dsn,
            'min_size': self.min_size,
            'max_size': self.max_size,
            'command_timeout': self.command_timeout,
        }


@dataclass
class RedisConfig:
    """Redis connection configuration."""
    url: str

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> Optional['RedisConfig']:
        """Create config from settings; None when no queue is configured."""
        settings = settings or get_settings()
        if not settings.redis_url:
            return None
        return cls(url=settings.redis_url)


def get_postgres_config(settings: Optional[Settings] = None) -> PostgresConfig:
    """Get PostgreSQL configuration from settings."""
    return PostgresConfig.from_settings(settings)


def get_redis_config(settings: Optional[Settings] = None) -> Optional[RedisConfig]:
    """Get Redis configuration from settings."""
    return RedisConfig.from_settings(settings)


async def create_postgres_pool(settings: Optional[Settings] = None):
    """Create PostgreSQL connection pool from settings."""
    import asyncpg
    config = get_postgres_config(settings)
    return await asyncpg.create_pool(**config.to_asyncpg_kwargs())


async def create_job_queue(settings: Optional[Settings] = None):
    """Create and connect the Redis job queue, or None when not configured."""
    from services.job_queue import JobQueue
    config = get_redis_config(settings)
    if config is None:
        return None
    queue = JobQueue(config.url)
    await queue.connect()
    return queue
