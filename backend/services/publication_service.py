"""
Contract Publication Workflow

publish():
1. Registrar get_or_create(publisher_address)  - own statement, persists
2. HashResolver resolve_wasm_hash(network, contract_id)
3. ContractRepository.create(contract + first version) - one transaction

Step 1 is idempotent, so a caller retrying after a failure in step 2 or
3 never creates a second publisher. A failure in step 2 or 3 leaves no
contract row behind. No step holds a connection while another runs.
"""
import logging
import re
from typing import List, Optional

from models.domain.contract import (
    Contract,
    ContractVersion,
    Network,
    CATEGORY_MAX_LENGTH,
    COMMIT_HASH_MAX_LENGTH,
    NAME_MAX_LENGTH,
    URL_MAX_LENGTH,
    VERSION_MAX_LENGTH,
)
from repositories.contract_repository import ContractRepository
from repositories.publisher_repository import PublisherRepository
from services.ledger_client import HashResolver
from utils import strkey
from utils.errors import RegistryError, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_INITIAL_VERSION = "1.0.0"
WASM_HASH_PATTERN = re.compile(r'^[0-9a-f]{64}$')


def parse_network(network: str) -> Network:
    """
    Raises:
        ValidationError: unknown network label
    """
    try:
        return Network((network or "").lower())
    except ValueError:
        raise ValidationError(
            f"Unknown network: {network}. Must be one of: {[n.value for n in Network]}"
        )


def check_length(value: Optional[str], limit: int, what: str):
    """
    Raises:
        ValidationError: value longer than its column allows
    """
    if value is not None and len(value) > limit:
        raise ValidationError(f"{what} must be at most {limit} characters")


def normalize_tags(tags: Optional[List[str]]) -> List[str]:
    """Strip, drop blanks and de-duplicate while keeping order"""
    seen = []
    for tag in tags or []:
        tag = tag.strip()
        if tag and tag not in seen:
            seen.append(tag)
    return seen


class ContractPublicationService:
    """Orchestrates publisher registration, hash resolution and contract insert."""

    def __init__(
        self,
        publishers: PublisherRepository,
        contracts: ContractRepository,
        resolver: HashResolver
    ):
        self.publishers = publishers
        self.contracts = contracts
        self.resolver = resolver

    async def publish(
        self,
        contract_id: str,
        publisher_address: str,
        name: str,
        network: str,
        description: Optional[str] = None,
        category: Optional[str] = None,
        tags: Optional[List[str]] = None,
        version: str = DEFAULT_INITIAL_VERSION
    ) -> Contract:
        """
        Publish a deployed contract to the registry.

        Raises:
            ValidationError: malformed contract id / address, unknown network, empty name
            NotFoundError: contract not found on the ledger
            NetworkError: ledger unreachable
            ConflictError: contract already registered on that network
            InternalError: store failure
        """
        # Validate everything before any side effect
        net = parse_network(network)
        strkey.decode('contract', contract_id)
        if not name or not name.strip():
            raise ValidationError("Contract name is required")
        check_length(name.strip(), NAME_MAX_LENGTH, "Contract name")
        check_length(category, CATEGORY_MAX_LENGTH, "Category")
        check_length(version, VERSION_MAX_LENGTH, "Version")

        publisher = await self.publishers.get_or_create(publisher_address)

        try:
            wasm_hash = await self.resolver.resolve_wasm_hash(net.value, contract_id)
        except RegistryError as e:
            logger.warning(
                f"Hash resolution failed for {contract_id} on {net.value}: {type(e).__name__}"
            )
            raise

        contract = Contract(
            id=None,
            contract_id=contract_id,
            wasm_hash=wasm_hash,
            name=name.strip(),
            description=description,
            publisher_id=publisher.id,
            network=net,
            category=category,
            tags=normalize_tags(tags),
        )

        created = await self.contracts.create(contract, initial_version=version or DEFAULT_INITIAL_VERSION)
        logger.info(f"Published {contract_id} ({net.value}) for publisher {publisher.id}")
        return created

    async def publish_version(
        self,
        contract_id,
        version: str,
        wasm_hash: Optional[str] = None,
        source_url: Optional[str] = None,
        commit_hash: Optional[str] = None,
        release_notes: Optional[str] = None
    ) -> ContractVersion:
        """
        Append a version to an existing contract.

        When wasm_hash is omitted it is read from the ledger for the
        contract's network.

        Raises:
            NotFoundError: unknown contract (or not on ledger)
            ConflictError: version already recorded
            ValidationError: empty version or malformed hash
            NetworkError: ledger unreachable
        """
        if not version or not version.strip():
            raise ValidationError("Version is required")
        check_length(version.strip(), VERSION_MAX_LENGTH, "Version")
        check_length(source_url, URL_MAX_LENGTH, "source_url")
        check_length(commit_hash, COMMIT_HASH_MAX_LENGTH, "commit_hash")

        contract = await self.contracts.get_by_id(contract_id)

        if wasm_hash is None:
            wasm_hash = await self.resolver.resolve_wasm_hash(
                contract.network.value, contract.contract_id
            )
        else:
            wasm_hash = wasm_hash.lower()
            if not WASM_HASH_PATTERN.match(wasm_hash):
                raise ValidationError("wasm_hash must be 64 hex characters")

        return await self.contracts.add_version(ContractVersion(
            id=None,
            contract_id=contract.id,
            version=version.strip(),
            wasm_hash=wasm_hash,
            source_url=source_url,
            commit_hash=commit_hash,
            release_notes=release_notes,
        ))
