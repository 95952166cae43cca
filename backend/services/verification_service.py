"""
Verification Intake

Accepts a verification request: records it as pending and hands it to
the external verification engine through the job queue. Never waits for
the engine; pending -> verified/failed happens out of process.
"""
import logging
from typing import Optional

from redis.exceptions import RedisError

from models.domain.contract import Contract
from models.domain.verification import Verification, VerificationStatus
from repositories.contract_repository import ContractRepository
from repositories.verification_repository import VerificationRepository
from services.job_queue import JobQueue
from utils import strkey
from utils.errors import NotFoundError

logger = logging.getLogger(__name__)


class VerificationService:
    """Records pending verification requests and enqueues them."""

    def __init__(
        self,
        contracts: ContractRepository,
        verifications: VerificationRepository,
        job_queue: Optional[JobQueue] = None
    ):
        self.contracts = contracts
        self.verifications = verifications
        self.job_queue = job_queue

    async def _resolve_contract(self, contract_ref: str, network: Optional[str]) -> Contract:
        """Accept either the registry UUID or the on-ledger address (C...)."""
        if strkey.is_valid('contract', contract_ref):
            contract = await self.contracts.find_by_address(contract_ref, network)
            if contract is None:
                raise NotFoundError(f"Contract {contract_ref} is not registered")
            return contract
        return await self.contracts.get_by_id(contract_ref)

    async def request_verification(
        self,
        contract_ref: str,
        network: Optional[str] = None,
        source_code: Optional[str] = None,
        build_params: Optional[dict] = None,
        compiler_version: Optional[str] = None
    ) -> dict:
        """
        Accept a verification request.

        Returns:
            Acknowledgement with status 'pending'

        Raises:
            NotFoundError: contract not registered
            ValidationError: malformed reference
            InternalError: store failure (a queue failure is logged, the request stays pending)
        """
        contract = await self._resolve_contract(contract_ref, network)

        verification = await self.verifications.create_pending(Verification(
            id=None,
            contract_id=contract.id,
            source_code=source_code,
            build_params=build_params or {},
            compiler_version=compiler_version,
        ))

        if self.job_queue is not None:
            try:
                await self.job_queue.enqueue(JobQueue.VERIFICATION_QUEUE, {
                    'verification_id': str(verification.id),
                    'contract_id': str(contract.id),
                    'network': contract.network.value,
                    'wasm_hash': contract.wasm_hash,
                })
            except (RedisError, OSError) as e:
                # The pending row is durable; the engine picks it up on its next poll
                logger.error(f"Could not enqueue verification {verification.id}, left pending: {e}")
        else:
            logger.debug(f"No job queue configured; verification {verification.id} stays pending")

        return {
            'verification_id': str(verification.id),
            'contract_id': str(contract.id),
            'status': VerificationStatus.PENDING.value,
            'message': "Verification started",
        }

    async def get_verification(self, verification_id) -> Verification:
        return await self.verifications.get_by_id(verification_id)
