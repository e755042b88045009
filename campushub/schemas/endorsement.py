"""Endorsement Pydantic schemas."""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field


class EndorsementCreate(BaseModel):
    # rating is validated by the trust engine so bad values come back as 400
    target_user_id: Optional[str] = Field(default=None, alias="targetUserId")
    rating: Any = None
    comment: Optional[str] = None

    model_config = {"populate_by_name": True}


class EndorsementOut(BaseModel):
    id: int
    from_user_id: str
    target_user_id: str
    rating: int
    comment: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class EndorsementListItem(EndorsementOut):
    from_user_name: str
    percentage: int


class TrustScoreOut(BaseModel):
    user_id: str
    trust_score: int
    endorsement_count: int
