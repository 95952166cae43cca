"""
Verification Repository - PostgreSQL storage for verification requests

Storage: PostgreSQL (verifications table)

This service only ever writes rows in the pending state. The external
verification engine owns every later transition.
"""
import json
import logging

from models.domain.verification import Verification, VerificationStatus
from utils.ids import parse_uuid
from utils.errors import NotFoundError
from .store import StoreGateway

logger = logging.getLogger(__name__)

VERIFICATION_COLUMNS = """
    id, contract_id, status, source_code, build_params, compiler_version,
    error_message, created_at, verified_at
"""


class VerificationRepository:
    """Repository for Verification domain model."""

    def __init__(self, store: StoreGateway):
        self.store = store

    async def create_pending(self, verification: Verification) -> Verification:
        """
        Record a new pending verification request.

        Raises:
            NotFoundError: contract does not exist
        """
        async with self.store.acquire() as conn:
            row = await conn.fetchrow(f"""
                INSERT INTO verifications (
                    contract_id, status, source_code, build_params, compiler_version
                )
                VALUES ($1, 'pending', $2, $3::jsonb, $4)
                RETURNING {VERIFICATION_COLUMNS}
            """,
                verification.contract_id,
                verification.source_code,
                json.dumps(verification.build_params or {}),
                verification.compiler_version
            )

        created = self._row_to_verification(row)
        logger.info(f"Accepted verification {created.id} for contract {created.contract_id}")
        return created

    async def get_by_id(self, verification_id) -> Verification:
        """
        Retrieve verification by ID.

        Raises:
            NotFoundError: no such verification
        """
        vid = parse_uuid(verification_id, "verification id")
        async with self.store.acquire() as conn:
            row = await conn.fetchrow(f"""
                SELECT {VERIFICATION_COLUMNS} FROM verifications WHERE id = $1
            """, vid)

        if not row:
            raise NotFoundError(f"Verification {vid} not found")
        return self._row_to_verification(row)

    @staticmethod
    def _row_to_verification(row) -> Verification:
        build_params = row['build_params']
        if isinstance(build_params, str):
            build_params = json.loads(build_params)
        return Verification(
            id=parse_uuid(row['id']),
            contract_id=parse_uuid(row['contract_id']),
            status=VerificationStatus(row['status']),
            source_code=row['source_code'],
            build_params=build_params or {},
            compiler_version=row['compiler_version'],
            error_message=row['error_message'],
            created_at=row['created_at'],
            verified_at=row['verified_at'],
        )
