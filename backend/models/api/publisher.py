"""
Pydantic models for Publisher
"""

from pydantic import BaseModel, Field, field_serializer
from datetime import datetime
from typing import Optional
from uuid import UUID

from models.domain.publisher import Publisher, PROFILE_MAX_LENGTH, PROFILE_URL_MAX_LENGTH


class PublisherCreate(BaseModel):
    """Model for creating a publisher with full profile"""
    stellar_address: str
    username: Optional[str] = Field(None, max_length=PROFILE_MAX_LENGTH)
    email: Optional[str] = Field(None, max_length=PROFILE_MAX_LENGTH)
    github_url: Optional[str] = Field(None, max_length=PROFILE_URL_MAX_LENGTH)
    website: Optional[str] = Field(None, max_length=PROFILE_URL_MAX_LENGTH)

    def to_domain(self) -> Publisher:
        return Publisher(
            id=None,
            stellar_address=self.stellar_address,
            username=self.username,
            email=self.email,
            github_url=self.github_url,
            website=self.website,
        )


class PublisherResponse(BaseModel):
    """Public publisher model"""
    id: UUID
    stellar_address: str
    username: Optional[str] = None
    email: Optional[str] = None
    github_url: Optional[str] = None
    website: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = {
        "from_attributes": True,
    }

    @field_serializer('id')
    def serialize_id(self, value: UUID) -> str:
        return str(value)
