"""
Tests for SorobanRpcClient against an in-process httpx.MockTransport.
"""

import base64
import json
import struct

import httpx
import pytest

from services.ledger_client import (
    SorobanRpcClient,
    contract_instance_key,
    wasm_hash_from_entry,
)
from utils import strkey
from utils.errors import NetworkError, NotFoundError, ValidationError

from .factories import WASM_HASH, make_contract_address

RPC_URLS = {
    'mainnet': "https://mainnet.rpc.test",
    'testnet': "https://testnet.rpc.test",
}
C1 = make_contract_address(5)


def _i32(value: int) -> bytes:
    return struct.pack('>i', value)


def instance_entry(executable: int = 0, wasm_hash: str = WASM_HASH) -> str:
    """LedgerEntryData XDR for a contract instance entry"""
    raw = (
        _i32(6) + _i32(0)
        + _i32(1) + strkey.decode('contract', C1)
        + _i32(20) + _i32(1)
        + _i32(19) + _i32(executable)
    )
    if executable == 0:
        raw += bytes.fromhex(wasm_hash)
    return base64.b64encode(raw).decode('ascii')


def make_client(handler) -> SorobanRpcClient:
    return SorobanRpcClient(RPC_URLS, timeout=1.0, transport=httpx.MockTransport(handler))


# =============================================================================
# XDR helpers
# =============================================================================

def test_contract_instance_key_layout():
    raw = base64.b64decode(contract_instance_key(C1))

    assert len(raw) == 4 + 4 + 32 + 4 + 4
    assert struct.unpack('>i', raw[:4])[0] == 6
    assert struct.unpack('>i', raw[4:8])[0] == 1
    assert raw[8:40] == strkey.decode('contract', C1)
    assert struct.unpack('>ii', raw[40:48]) == (20, 1)


def test_contract_instance_key_rejects_account():
    with pytest.raises(ValidationError):
        contract_instance_key(strkey.encode('account', b'\x01' * 32))


def test_wasm_hash_from_entry():
    assert wasm_hash_from_entry(instance_entry()) == WASM_HASH


def test_stellar_asset_contract_has_no_wasm():
    with pytest.raises(ValidationError):
        wasm_hash_from_entry(instance_entry(executable=1))


def test_truncated_entry_is_network_error():
    truncated = base64.b64encode(base64.b64decode(instance_entry())[:50]).decode('ascii')

    with pytest.raises(NetworkError):
        wasm_hash_from_entry(truncated)


# =============================================================================
# resolve_wasm_hash
# =============================================================================

@pytest.mark.asyncio
async def test_resolve_wasm_hash():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        body = json.loads(request.content)
        assert body['method'] == "getLedgerEntries"
        assert body['params'] == {'keys': [contract_instance_key(C1)]}
        return httpx.Response(200, json={
            'jsonrpc': "2.0",
            'id': body['id'],
            'result': {'entries': [{'xdr': instance_entry()}], 'latestLedger': 100},
        })

    client = make_client(handler)
    try:
        assert await client.resolve_wasm_hash('testnet', C1) == WASM_HASH
    finally:
        await client.close()

    assert str(seen[0].url) == RPC_URLS['testnet']


@pytest.mark.asyncio
async def test_missing_entry_is_not_found():
    def handler(request):
        return httpx.Response(200, json={'jsonrpc': "2.0", 'id': 1, 'result': {'entries': []}})

    client = make_client(handler)
    with pytest.raises(NotFoundError):
        await client.resolve_wasm_hash('mainnet', C1)
    await client.close()


@pytest.mark.asyncio
async def test_timeout_is_network_error():
    def handler(request):
        raise httpx.ReadTimeout("slow", request=request)

    client = make_client(handler)
    with pytest.raises(NetworkError):
        await client.resolve_wasm_hash('testnet', C1)
    await client.close()


@pytest.mark.asyncio
async def test_connection_failure_is_network_error():
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    client = make_client(handler)
    with pytest.raises(NetworkError):
        await client.resolve_wasm_hash('testnet', C1)
    await client.close()


@pytest.mark.asyncio
async def test_http_error_status_is_network_error():
    client = make_client(lambda request: httpx.Response(503, text="unavailable"))

    with pytest.raises(NetworkError):
        await client.resolve_wasm_hash('testnet', C1)
    await client.close()


@pytest.mark.asyncio
async def test_rpc_error_body_is_network_error():
    def handler(request):
        return httpx.Response(200, json={
            'jsonrpc': "2.0", 'id': 1, 'error': {'code': -32600, 'message': "bad"},
        })

    client = make_client(handler)
    with pytest.raises(NetworkError):
        await client.resolve_wasm_hash('testnet', C1)
    await client.close()


@pytest.mark.asyncio
async def test_network_without_rpc_url_is_validation_error():
    client = make_client(lambda request: httpx.Response(500))

    with pytest.raises(ValidationError):
        await client.resolve_wasm_hash('futurenet', C1)
    await client.close()


@pytest.mark.asyncio
async def test_malformed_contract_id_never_calls_rpc():
    calls = []
    client = make_client(lambda request: calls.append(request) or httpx.Response(200, json={}))

    with pytest.raises(ValidationError):
        await client.resolve_wasm_hash('testnet', "C1")
    await client.close()

    assert calls == []
