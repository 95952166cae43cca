"""
Registry schema

Three core relations plus verification requests. Uniqueness that the
registry relies on is enforced here, not in application code:
- publishers.stellar_address
- contracts (contract_id, network)
- contract_versions (contract_id, version)

ensure_schema() is idempotent; there is no migration tooling.
"""
import logging

from .store import StoreGateway

logger = logging.getLogger(__name__)


SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS publishers (
    id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
    stellar_address VARCHAR(56) NOT NULL UNIQUE,
    username VARCHAR(255),
    email VARCHAR(255),
    github_url VARCHAR(512),
    website VARCHAR(512),
    created_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
);

CREATE TABLE IF NOT EXISTS contracts (
    id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
    contract_id VARCHAR(56) NOT NULL,
    wasm_hash VARCHAR(64) NOT NULL,
    name VARCHAR(255) NOT NULL,
    description TEXT,
    publisher_id UUID NOT NULL REFERENCES publishers(id),
    network VARCHAR(16) NOT NULL,
    category VARCHAR(64),
    tags TEXT[] NOT NULL DEFAULT '{}',
    is_verified BOOLEAN NOT NULL DEFAULT FALSE,
    created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
    updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
    UNIQUE (contract_id, network)
);

CREATE INDEX IF NOT EXISTS idx_contracts_publisher ON contracts(publisher_id);
CREATE INDEX IF NOT EXISTS idx_contracts_created ON contracts(created_at DESC, id DESC);
CREATE INDEX IF NOT EXISTS idx_contracts_category ON contracts(category);

CREATE TABLE IF NOT EXISTS contract_versions (
    id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
    contract_id UUID NOT NULL REFERENCES contracts(id) ON DELETE CASCADE,
    version VARCHAR(64) NOT NULL,
    wasm_hash VARCHAR(64) NOT NULL,
    source_url VARCHAR(512),
    commit_hash VARCHAR(64),
    release_notes TEXT,
    created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
    UNIQUE (contract_id, version)
);

CREATE TABLE IF NOT EXISTS verifications (
    id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
    contract_id UUID NOT NULL REFERENCES contracts(id) ON DELETE CASCADE,
    status VARCHAR(16) NOT NULL DEFAULT 'pending'
        CHECK (status IN ('pending', 'verified', 'failed')),
    source_code TEXT,
    build_params JSONB NOT NULL DEFAULT '{}'::jsonb,
    compiler_version VARCHAR(64),
    error_message TEXT,
    created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
    verified_at TIMESTAMPTZ
);
"""


async def ensure_schema(store: StoreGateway) -> None:
    """Create tables and indexes if missing."""
    async with store.acquire() as conn:
        await conn.execute(SCHEMA_SQL)
    logger.info("Registry schema ensured")
