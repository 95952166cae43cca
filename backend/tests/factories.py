"""
Test factories: valid Stellar identifiers and asyncpg-shaped rows.
"""

import uuid
from datetime import datetime, timezone

from utils import strkey


def make_account(seed: int = 1) -> str:
    """Valid G... address derived from a seed byte"""
    return strkey.encode('account', bytes([seed]) * 32)


def make_contract_address(seed: int = 1) -> str:
    """Valid C... address derived from a seed byte"""
    return strkey.encode('contract', bytes([seed]) * 32)


WASM_HASH = "ab" * 32


def publisher_row(address=None, **overrides):
    row = {
        'id': uuid.uuid4(),
        'stellar_address': address or make_account(),
        'username': None,
        'email': None,
        'github_url': None,
        'website': None,
        'created_at': datetime(2024, 1, 1, tzinfo=timezone.utc),
    }
    row.update(overrides)
    return row


def contract_row(**overrides):
    row = {
        'id': uuid.uuid4(),
        'contract_id': make_contract_address(),
        'wasm_hash': WASM_HASH,
        'name': "Token",
        'description': "A fungible token",
        'publisher_id': uuid.uuid4(),
        'network': "testnet",
        'category': "token",
        'tags': ["defi"],
        'is_verified': False,
        'created_at': datetime(2024, 1, 1, tzinfo=timezone.utc),
        'updated_at': datetime(2024, 1, 1, tzinfo=timezone.utc),
    }
    row.update(overrides)
    return row


def version_row(contract_id=None, **overrides):
    row = {
        'id': uuid.uuid4(),
        'contract_id': contract_id or uuid.uuid4(),
        'version': "1.0.0",
        'wasm_hash': WASM_HASH,
        'source_url': None,
        'commit_hash': None,
        'release_notes': None,
        'created_at': datetime(2024, 1, 1, tzinfo=timezone.utc),
    }
    row.update(overrides)
    return row


def verification_row(contract_id=None, **overrides):
    row = {
        'id': uuid.uuid4(),
        'contract_id': contract_id or uuid.uuid4(),
        'status': "pending",
        'source_code': None,
        'build_params': "{}",
        'compiler_version': None,
        'error_message': None,
        'created_at': datetime(2024, 1, 1, tzinfo=timezone.utc),
        'verified_at': None,
    }
    row.update(overrides)
    return row
