"""
Account role management.

Every role change, whether it comes from a dedicated request-X endpoint or
from the generic profile update, is checked against ``ROLE_TRANSITIONS``.

    from \\ to   student     startup     admin
    student     anyone      anyone      designated
    startup     anyone      anyone      designated
    admin       designated  designated  designated

"designated" is the single configured super-admin id. A non-designated
account that somehow holds ``admin`` therefore cannot move anywhere and has
to be fixed out-of-band.
"""

import logging
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

from campushub.models.profile import Profile, RoleEnum
from campushub.services.errors import Forbidden, NotFound
from campushub.services.profile_patch import ACADEMIC_MAX_LENGTHS, NAME_MAX_LENGTH, build_update
from campushub.services.profile_store import ProfileStore

logger = logging.getLogger(__name__)

ActorPredicate = Callable[[str, str], bool]


def _anyone(actor_id: str, designated_id: str) -> bool:
    return True


def _designated_only(actor_id: str, designated_id: str) -> bool:
    return bool(designated_id) and actor_id == designated_id


S, T, A = RoleEnum.STUDENT, RoleEnum.STARTUP, RoleEnum.ADMIN

ROLE_TRANSITIONS: Dict[Tuple[RoleEnum, RoleEnum], ActorPredicate] = {
    (S, S): _anyone,
    (S, T): _anyone,
    (S, A): _designated_only,
    (T, S): _anyone,
    (T, T): _anyone,
    (T, A): _designated_only,
    (A, S): _designated_only,
    (A, T): _designated_only,
    (A, A): _designated_only,
}


def authorize_transition(
    actor_id: str, designated_id: str, current: RoleEnum, target: RoleEnum
) -> None:
    """Raise ``Forbidden`` unless ``actor_id`` may move from ``current`` to ``target``."""
    allowed = ROLE_TRANSITIONS.get((current, target))
    if allowed is not None and allowed(actor_id, designated_id):
        return

    if target is RoleEnum.ADMIN:
        message = "Only the designated administrator account can hold the admin role"
    else:
        message = "Admin accounts cannot change role through self-service"
    logger.warning(
        "Denied role change %s -> %s for actor %s", current.value, target.value, actor_id
    )
    raise Forbidden(message)


def default_name(email: str, metadata: Mapping[str, Any]) -> str:
    for key in ("name", "full_name"):
        value = metadata.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    local_part = (email or "").split("@")[0]
    return local_part or "Anonymous"


class AccountRoleManager:
    def __init__(self, store: ProfileStore, designated_admin_id: str):
        self.store = store
        self.designated_admin_id = designated_admin_id

    # ═══════════════════════════════════════════════════════════════
    #  ensure_profile
    # ═══════════════════════════════════════════════════════════════

    async def ensure_profile(
        self,
        actor_id: str,
        actor_email: str,
        actor_metadata: Optional[Mapping[str, Any]] = None,
    ) -> Profile:
        """Return the actor's profile, creating a student profile on first access."""
        profile = await self.store.get_profile(actor_id)
        if profile is not None:
            return profile

        metadata = actor_metadata or {}
        academic = {}
        for key, max_length in ACADEMIC_MAX_LENGTHS.items():
            value = metadata.get(key)
            if value is None:
                continue
            # clipped to the column width
            text = str(value).strip()[:max_length].strip()
            if text:
                academic[key] = text

        profile = Profile(
            id=actor_id,
            email=actor_email or "",
            name=default_name(actor_email, metadata)[:NAME_MAX_LENGTH].strip() or "Anonymous",
            role=RoleEnum.STUDENT,
            skills=[],
            **academic,
        )
        profile = await self.store.insert_profile(profile)
        logger.info("Created profile for %s", actor_id)
        return profile

    # ═══════════════════════════════════════════════════════════════
    #  request_role: dedicated request-X endpoints
    # ═══════════════════════════════════════════════════════════════

    async def request_role(self, actor_id: str, target_role: RoleEnum) -> Tuple[Profile, bool]:
        """
        Move the actor to ``target_role``.

        Returns ``(profile, changed)``; ``changed`` is False when the actor
        already held the role and nothing was written.
        """
        profile = await self.store.get_profile(actor_id)
        if profile is None:
            raise NotFound("Profile not found")

        authorize_transition(actor_id, self.designated_admin_id, profile.role, target_role)

        if profile.role == target_role:
            return profile, False

        previous = profile.role
        updated = await self.store.update_fields(actor_id, {"role": target_role})
        if updated is None:
            raise NotFound("Profile not found")
        await self.store.commit()
        logger.info(
            "Actor %s changed role %s -> %s", actor_id, previous.value, target_role.value
        )
        return updated, True

    # ═══════════════════════════════════════════════════════════════
    #  update_profile_fields: generic partial update
    # ═══════════════════════════════════════════════════════════════

    async def update_profile_fields(self, actor_id: str, raw_fields: Any) -> Profile:
        patch = build_update(raw_fields)

        profile = await self.store.get_profile(actor_id)
        if profile is None:
            raise NotFound("Profile not found")

        if patch.has_role:
            authorize_transition(actor_id, self.designated_admin_id, profile.role, patch.role)

        updated = await self.store.update_fields(actor_id, patch.as_values())
        if updated is None:
            raise NotFound("Profile not found")
        await self.store.commit()
        logger.info("Actor %s updated fields %s", actor_id, sorted(patch.as_values()))
        return updated
