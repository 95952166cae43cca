"""
Verification domain model
"""
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional
import uuid


class VerificationStatus(str, Enum):
    """
    Verification lifecycle.

    pending -> verified | failed. Only the external verification
    engine moves a request out of pending.
    """
    PENDING = "pending"
    VERIFIED = "verified"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self is not VerificationStatus.PENDING


@dataclass
class Verification:
    """
    A verification request for a published contract.

    Storage: PostgreSQL (verifications table)
    """
    id: Optional[uuid.UUID]
    contract_id: uuid.UUID
    status: VerificationStatus = VerificationStatus.PENDING

    source_code: Optional[str] = None
    build_params: dict = field(default_factory=dict)
    compiler_version: Optional[str] = None
    error_message: Optional[str] = None

    created_at: Optional[datetime] = None
    verified_at: Optional[datetime] = None
