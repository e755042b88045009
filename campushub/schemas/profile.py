"""Profile Pydantic schemas: API output for profiles and role requests."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from campushub.models.profile import RoleEnum
from campushub.schemas.endorsement import EndorsementListItem


class ProfileOut(BaseModel):
    """Public profile representation returned by the API."""
    id: str
    email: str
    name: str
    role: RoleEnum
    college: Optional[str] = None
    course: Optional[str] = None
    branch: Optional[str] = None
    year: Optional[str] = None
    bio: Optional[str] = None
    skills: List[str] = Field(default_factory=list)
    xp_points: int = 0
    level: Optional[str] = None
    trust_score: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    endorsements: List[EndorsementListItem] = Field(default_factory=list)

    model_config = {"from_attributes": True, "use_enum_values": True}


class RoleRequestOut(BaseModel):
    """Envelope returned by the request-admin / request-startup / request-student actions."""
    message: str
    success: bool
    profile: ProfileOut
