from pydantic_settings import BaseSettings
from pydantic import Field, field_validator
from functools import lru_cache
from typing import Optional


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Environment variables can come from:
    - docker-compose.yml environment section
    - .env file
    - System environment

    Variable names match docker-compose conventions:
    - POSTGRES_HOST, POSTGRES_PORT, etc. (for database)
    - REDIS_URL (verification job queue, optional)
    - SOROBAN_RPC_*_URL (ledger lookups per network)
    """

    # Environment
    environment: str = "development"
    service_version: str = "0.1.0"
    log_level: str = "INFO"

    # PostgreSQL (from docker-compose)
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_user: str = "registry_user"
    postgres_password: str = "registry_pass"
    postgres_db: str = "soroban_registry"
    database_url: Optional[str] = Field(default=None, validate_default=True)

    # Pool sizing and per-statement timeout (seconds)
    db_pool_min_size: int = 2
    db_pool_max_size: int = 10
    db_command_timeout: float = 10.0

    # Redis - verification jobs are only enqueued when this is set
    redis_url: Optional[str] = None

    # Soroban RPC endpoints
    soroban_rpc_mainnet_url: str = "https://soroban-rpc.mainnet.stellar.gateway.fm"
    soroban_rpc_testnet_url: str = "https://soroban-testnet.stellar.org"
    soroban_rpc_futurenet_url: str = "https://rpc-futurenet.stellar.org"
    ledger_timeout: float = 10.0

    # Liveness probe must stay cheap
    health_probe_timeout: float = 2.0

    class Config:
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"  # Ignore extra env vars

    @field_validator('database_url', mode='before')
    @classmethod
    def construct_database_url(cls, v, info):
        """Construct database URL from components if not explicitly set"""
        if v:
            return v

        data = info.data
        host = data.get('postgres_host', 'localhost')
        port = data.get('postgres_port', 5432)
        user = data.get('postgres_user', 'registry_user')
        password = data.get('postgres_password', 'registry_pass')
        db = data.get('postgres_db', 'soroban_registry')

        return f"postgresql://{user}:{password}@{host}:{port}/{db}"

    @property
    def rpc_urls(self) -> dict:
        """Soroban RPC URL keyed by network label"""
        return {
            'mainnet': self.soroban_rpc_mainnet_url,
            'testnet': self.soroban_rpc_testnet_url,
            'futurenet': self.soroban_rpc_futurenet_url,
        }


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
