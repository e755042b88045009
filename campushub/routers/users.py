"""
Users router: own profile, public profiles, profile edits and role requests.

Endpoints:
    GET  /api/users/me                → own profile (created on first call)
    GET  /api/users/profile/{id}      → another user's profile
    PUT  /api/users/profile           → partial update, optional role
    POST /api/users/request-admin     → become admin (designated account only)
    POST /api/users/request-startup   → switch to a startup account
    POST /api/users/request-student   → switch back to a student account

Every profile payload carries the endorsements the user has received.
"""

from typing import Any, Dict, Union

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from campushub.config import settings
from campushub.database import get_db
from campushub.models.profile import Profile, RoleEnum
from campushub.routers.auth import Actor, get_current_actor
from campushub.routers.trust import get_trust_engine
from campushub.schemas.endorsement import EndorsementListItem
from campushub.schemas.profile import ProfileOut, RoleRequestOut
from campushub.services.errors import BadRequest, NotFound, ServiceError
from campushub.services.profile_store import ProfileStore
from campushub.services.roles import AccountRoleManager
from campushub.services.trust import TrustEndorsementEngine


router = APIRouter(prefix="/api/users", tags=["users"])

# role → (message when changed, message when already held)
ROLE_MESSAGES = {
    RoleEnum.ADMIN: ("Admin access granted", "You are already an admin"),
    RoleEnum.STARTUP: ("Your account is now a startup account", "You already have a startup account"),
    RoleEnum.STUDENT: ("Your account is now a student account", "You already have a student account"),
}


def get_role_manager(db: AsyncSession = Depends(get_db)) -> AccountRoleManager:
    return AccountRoleManager(ProfileStore(db), settings.SUPER_ADMIN_ID)


async def _profile_out(profile: Profile, trust: TrustEndorsementEngine) -> ProfileOut:
    out = ProfileOut.model_validate(profile)
    out.endorsements = [
        EndorsementListItem.model_validate(item)
        for item in await trust.list_endorsements(profile.id)
    ]
    return out


# ═══════════════════════════════════════════════════════════════
#  Profiles
# ═══════════════════════════════════════════════════════════════

@router.get("/me", response_model=ProfileOut)
async def read_me(
    actor: Actor = Depends(get_current_actor),
    roles: AccountRoleManager = Depends(get_role_manager),
    trust: TrustEndorsementEngine = Depends(get_trust_engine),
):
    """Return the authenticated actor's profile, creating it on first login."""
    profile = await roles.ensure_profile(actor.id, actor.email, actor.metadata)
    return await _profile_out(profile, trust)


@router.get("/profile/{profile_id}", response_model=ProfileOut)
async def read_profile(
    profile_id: str,
    actor: Actor = Depends(get_current_actor),
    roles: AccountRoleManager = Depends(get_role_manager),
    trust: TrustEndorsementEngine = Depends(get_trust_engine),
):
    """Get a profile by id."""
    if not profile_id.strip():
        raise BadRequest("User id is required")
    profile = await roles.store.get_profile(profile_id.strip())
    if profile is None:
        raise NotFound("User not found")
    return await _profile_out(profile, trust)


@router.put("/profile", response_model=ProfileOut)
async def update_profile(
    fields: Any = Body(None),
    actor: Actor = Depends(get_current_actor),
    roles: AccountRoleManager = Depends(get_role_manager),
    trust: TrustEndorsementEngine = Depends(get_trust_engine),
):
    """Apply a partial update to the actor's own profile."""
    profile = await roles.update_profile_fields(actor.id, fields)
    return await _profile_out(profile, trust)


# ═══════════════════════════════════════════════════════════════
#  Role requests
# ═══════════════════════════════════════════════════════════════

async def _request_role(
    roles: AccountRoleManager, trust: TrustEndorsementEngine, actor: Actor, target: RoleEnum
) -> Union[Dict[str, Any], JSONResponse]:
    try:
        profile, changed = await roles.request_role(actor.id, target)
    except ServiceError as exc:
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": exc.message, "success": False},
        )

    changed_msg, unchanged_msg = ROLE_MESSAGES[target]
    return RoleRequestOut(
        message=changed_msg if changed else unchanged_msg,
        success=True,
        profile=await _profile_out(profile, trust),
    ).model_dump(mode="json")


@router.post("/request-admin")
async def request_admin(
    actor: Actor = Depends(get_current_actor),
    roles: AccountRoleManager = Depends(get_role_manager),
    trust: TrustEndorsementEngine = Depends(get_trust_engine),
):
    return await _request_role(roles, trust, actor, RoleEnum.ADMIN)


@router.post("/request-startup")
async def request_startup(
    actor: Actor = Depends(get_current_actor),
    roles: AccountRoleManager = Depends(get_role_manager),
    trust: TrustEndorsementEngine = Depends(get_trust_engine),
):
    return await _request_role(roles, trust, actor, RoleEnum.STARTUP)


@router.post("/request-student")
async def request_student(
    actor: Actor = Depends(get_current_actor),
    roles: AccountRoleManager = Depends(get_role_manager),
    trust: TrustEndorsementEngine = Depends(get_trust_engine),
):
    return await _request_role(roles, trust, actor, RoleEnum.STUDENT)
