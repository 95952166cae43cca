"""
Publisher domain model
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional
import uuid

# Column widths in the publishers table
PROFILE_MAX_LENGTH = 255
PROFILE_URL_MAX_LENGTH = 512


@dataclass
class Publisher:
    """
    Publisher domain model - storage-agnostic representation

    Storage: PostgreSQL (publishers table)

    Identified externally by a Stellar account address (G...),
    unique across the registry. The UUID id is generated by the store.
    """
    id: Optional[uuid.UUID]
    stellar_address: str

    # Optional profile (only ever backfilled, never overwritten)
    username: Optional[str] = None
    email: Optional[str] = None
    github_url: Optional[str] = None
    website: Optional[str] = None

    created_at: Optional[datetime] = None
