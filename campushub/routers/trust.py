"""
Trust router: peer endorsements and trust scores.

Endpoints:
    POST /api/trust/endorse                  → endorse another user (rating 1-5)
    GET  /api/trust/endorsements/{user_id}   → endorsements a user received
    GET  /api/trust/score/{user_id}          → current trust score
"""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from campushub.database import get_db
from campushub.routers.auth import Actor, get_current_actor
from campushub.schemas.endorsement import (
    EndorsementCreate,
    EndorsementListItem,
    EndorsementOut,
    TrustScoreOut,
)
from campushub.services.profile_store import ProfileStore
from campushub.services.trust import TrustEndorsementEngine

router = APIRouter(prefix="/api/trust", tags=["trust"])


def get_trust_engine(db: AsyncSession = Depends(get_db)) -> TrustEndorsementEngine:
    return TrustEndorsementEngine(ProfileStore(db))


@router.post("/endorse", response_model=EndorsementOut, status_code=status.HTTP_201_CREATED)
async def endorse(
    payload: EndorsementCreate,
    actor: Actor = Depends(get_current_actor),
    engine: TrustEndorsementEngine = Depends(get_trust_engine),
):
    """Record an endorsement from the current actor. Not idempotent."""
    return await engine.endorse(
        actor.id, payload.target_user_id, payload.rating, payload.comment
    )


@router.get("/endorsements/{user_id}", response_model=List[EndorsementListItem])
async def list_endorsements(
    user_id: str,
    actor: Actor = Depends(get_current_actor),
    engine: TrustEndorsementEngine = Depends(get_trust_engine),
):
    return await engine.list_endorsements(user_id)


@router.get("/score/{user_id}", response_model=TrustScoreOut)
async def trust_score(
    user_id: str,
    actor: Actor = Depends(get_current_actor),
    engine: TrustEndorsementEngine = Depends(get_trust_engine),
):
    return await engine.trust_score(user_id)
