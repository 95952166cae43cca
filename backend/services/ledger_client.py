"""
SorobanRpcClient - resolves a deployed contract's WASM hash from the ledger.

Reads the contract-instance ledger entry through Soroban RPC
`getLedgerEntries` and pulls the WASM hash out of its executable.

Usage:
    client = SorobanRpcClient(settings.rpc_urls, timeout=10.0)
    wasm_hash = await client.resolve_wasm_hash('testnet', 'CA3D5K...')
    # Returns: 'a3f1...' (64 hex chars)

Failures:
- NotFoundError: no instance entry for that contract on that network
- NetworkError: RPC unreachable, timed out, or answered with an error
- ValidationError: malformed contract id, unknown network, or a
  Stellar Asset contract (it has no WASM)
"""
import base64
import itertools
import logging
import struct
from typing import Dict, Optional, Protocol

import httpx

from utils import strkey
from utils.errors import NetworkError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)

# XDR discriminants (Stellar-transaction.x / Stellar-contract.x)
LEDGER_ENTRY_CONTRACT_DATA = 6
SC_ADDRESS_ACCOUNT = 0
SC_ADDRESS_CONTRACT = 1
SCV_CONTRACT_INSTANCE = 19
SCV_LEDGER_KEY_CONTRACT_INSTANCE = 20
DURABILITY_PERSISTENT = 1
EXECUTABLE_WASM = 0
EXECUTABLE_STELLAR_ASSET = 1


class HashResolver(Protocol):
    """
    Ledger lookup collaborator used by the publication workflow.

    Any implementation must raise NotFoundError / NetworkError rather
    than returning a stand-in value.
    """

    async def resolve_wasm_hash(self, network: str, contract_id: str) -> str:
        ...


def contract_instance_key(contract_id: str) -> str:
    """
    Base64 XDR LedgerKey for a contract's instance entry.

    Raises:
        ValidationError: contract_id is not a contract strkey
    """
    contract_hash = strkey.decode('contract', contract_id)
    key = (
        struct.pack('>i', LEDGER_ENTRY_CONTRACT_DATA)
        + struct.pack('>i', SC_ADDRESS_CONTRACT) + contract_hash
        + struct.pack('>i', SCV_LEDGER_KEY_CONTRACT_INSTANCE)
        + struct.pack('>i', DURABILITY_PERSISTENT)
    )
    return base64.b64encode(key).decode('ascii')


class _XdrReader:
    """Sequential reader over big-endian XDR bytes"""

    def __init__(self, data: bytes):
        self.data = data
        self.pos = 0

    def int32(self) -> int:
        value = struct.unpack_from('>i', self.data, self.pos)[0]
        self.pos += 4
        return value

    def opaque(self, size: int) -> bytes:
        if self.pos + size > len(self.data):
            raise struct.error("XDR buffer too short")
        value = self.data[self.pos:self.pos + size]
        self.pos += size
        return value


def wasm_hash_from_entry(entry_xdr: str) -> str:
    """
    Extract the WASM hash from a base64 LedgerEntryData (contract instance).

    Raises:
        ValidationError: the contract executes a Stellar Asset, not WASM
        NetworkError: the RPC returned something that is not an instance entry
    """
    try:
        reader = _XdrReader(base64.b64decode(entry_xdr))

        if reader.int32() != LEDGER_ENTRY_CONTRACT_DATA:
            raise NetworkError("Unexpected ledger entry type")
        reader.int32()  # ext

        address_type = reader.int32()
        if address_type == SC_ADDRESS_ACCOUNT:
            reader.int32()  # public key type
        reader.opaque(32)

        if reader.int32() != SCV_LEDGER_KEY_CONTRACT_INSTANCE:
            raise NetworkError("Unexpected ledger entry key")
        reader.int32()  # durability

        if reader.int32() != SCV_CONTRACT_INSTANCE:
            raise NetworkError("Unexpected ledger entry value")

        executable = reader.int32()
        if executable == EXECUTABLE_STELLAR_ASSET:
            raise ValidationError("Stellar Asset contracts have no WASM hash")
        if executable != EXECUTABLE_WASM:
            raise NetworkError("Unknown contract executable type")

        return reader.opaque(32).hex()
    except (struct.error, ValueError) as e:
        raise NetworkError("Malformed ledger entry") from e


class SorobanRpcClient:
    """
    Soroban JSON-RPC client for contract hash resolution.

    One shared httpx.AsyncClient; every request carries the configured
    timeout, and nothing is retried here.
    """

    def __init__(self, rpc_urls: Dict[str, str], timeout: float = 10.0,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.rpc_urls = rpc_urls
        self.timeout = timeout
        self.transport = transport
        self.client: Optional[httpx.AsyncClient] = None
        self._ids = itertools.count(1)

    async def _ensure_client(self):
        """Ensure httpx client exists."""
        if self.client is None or self.client.is_closed:
            self.client = httpx.AsyncClient(timeout=self.timeout, transport=self.transport)

    async def close(self):
        """Close the client."""
        if self.client and not self.client.is_closed:
            await self.client.aclose()

    def _url_for(self, network: str) -> str:
        url = self.rpc_urls.get(network)
        if not url:
            raise ValidationError(f"Unknown network: {network}")
        return url

    async def _call(self, network: str, method: str, params: dict) -> dict:
        """Single JSON-RPC round-trip; returns the `result` object."""
        url = self._url_for(network)
        await self._ensure_client()

        payload = {
            "jsonrpc": "2.0",
            "id": next(self._ids),
            "method": method,
            "params": params,
        }

        try:
            response = await self.client.post(url, json=payload)
            response.raise_for_status()
            body = response.json()
        except httpx.TimeoutException as e:
            logger.warning(f"Soroban RPC timeout ({network}, {method})")
            raise NetworkError("Ledger request timed out") from e
        except httpx.HTTPError as e:
            logger.warning(f"Soroban RPC failure ({network}, {method}): {e}")
            raise NetworkError("Ledger request failed") from e
        except ValueError as e:
            raise NetworkError("Ledger returned invalid JSON") from e

        if body.get("error"):
            logger.warning(f"Soroban RPC error ({network}, {method}): {body['error']}")
            raise NetworkError("Ledger returned an error")

        return body.get("result") or {}

    async def resolve_wasm_hash(self, network: str, contract_id: str) -> str:
        """
        Resolve the WASM hash of a deployed contract.

        Args:
            network: 'mainnet', 'testnet' or 'futurenet'
            contract_id: Contract strkey (C...)

        Returns:
            64-char lowercase hex WASM hash
        """
        key = contract_instance_key(contract_id)
        result = await self._call(network, "getLedgerEntries", {"keys": [key]})

        entries = result.get("entries") or []
        if not entries:
            raise NotFoundError(f"Contract {contract_id} not found on {network}")

        wasm_hash = wasm_hash_from_entry(entries[0].get("xdr", ""))
        logger.debug(f"Resolved {contract_id} on {network} → {wasm_hash}")
        return wasm_hash
