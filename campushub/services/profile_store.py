"""
Profile / endorsement store: the persistence collaborator behind the
role, profile and trust services.

Methods only flush; callers decide when to ``commit()`` so a multi-step
write (endorsement + trust score) lands in one transaction. Any
``SQLAlchemyError`` is rolled back and re-raised as ``StoreFailure``.
"""

import functools
import logging
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from campushub.models.endorsement import Endorsement
from campushub.models.profile import Profile
from campushub.services.errors import StoreFailure

logger = logging.getLogger(__name__)


def _store_call(func_):
    """Translate driver errors into ``StoreFailure`` after rolling back."""

    @functools.wraps(func_)
    async def wrapper(self, *args, **kwargs):
        try:
            return await func_(self, *args, **kwargs)
        except SQLAlchemyError as exc:
            await self.db.rollback()
            logger.error("Store call %s failed: %s", func_.__name__, exc)
            raise StoreFailure(f"Database error: {exc}") from exc

    return wrapper


class ProfileStore:
    def __init__(self, db: AsyncSession):
        self.db = db

    # ═══════════════════════════════════════════════════════════════
    #  Profiles
    # ═══════════════════════════════════════════════════════════════

    @_store_call
    async def get_profile(self, profile_id: str) -> Optional[Profile]:
        result = await self.db.execute(
            select(Profile)
            .where(Profile.id == profile_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    @_store_call
    async def exists(self, profile_id: str) -> bool:
        result = await self.db.execute(
            select(Profile.id).where(Profile.id == profile_id)
        )
        return result.scalar_one_or_none() is not None

    async def insert_profile(self, profile: Profile) -> Profile:
        """
        Insert and commit a new profile.

        If another request created the same id first, the unique violation
        is swallowed and the stored row is returned instead.
        """
        self.db.add(profile)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            logger.info("Profile %s was created concurrently; reusing it", profile.id)
            existing = await self.get_profile(profile.id)
            if existing is None:
                raise StoreFailure(f"Could not create profile {profile.id}")
            return existing
        except SQLAlchemyError as exc:
            await self.db.rollback()
            logger.error("Profile insert failed: %s", exc)
            raise StoreFailure(f"Database error: {exc}") from exc

        await self.db.refresh(profile)
        return profile

    @_store_call
    async def update_fields(self, profile_id: str, values: Dict[str, Any]) -> Optional[Profile]:
        """
        ``UPDATE profiles SET <values> WHERE id = ...`` touching only the given
        columns, then re-read the row. Returns ``None`` if no row matched.
        """
        result = await self.db.execute(
            update(Profile)
            .where(Profile.id == profile_id)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            return None
        return await self.get_profile(profile_id)

    # ═══════════════════════════════════════════════════════════════
    #  Endorsements
    # ═══════════════════════════════════════════════════════════════

    @_store_call
    async def add_endorsement(self, endorsement: Endorsement) -> Endorsement:
        self.db.add(endorsement)
        await self.db.flush()
        await self.db.refresh(endorsement)
        return endorsement

    @_store_call
    async def rating_totals(self, profile_id: str) -> Tuple[int, int]:
        """Return ``(sum_of_ratings, count)`` for a profile's endorsements."""
        result = await self.db.execute(
            select(
                func.coalesce(func.sum(Endorsement.rating), 0),
                func.count(Endorsement.id),
            ).where(Endorsement.target_user_id == profile_id)
        )
        total, count = result.one()
        return int(total), int(count)

    @_store_call
    async def list_endorsements(self, profile_id: str) -> List[Tuple[Endorsement, Optional[str]]]:
        """Endorsements for a profile, newest first, with the endorser's name."""
        result = await self.db.execute(
            select(Endorsement, Profile.name)
            .outerjoin(Profile, Profile.id == Endorsement.from_user_id)
            .where(Endorsement.target_user_id == profile_id)
            .order_by(Endorsement.created_at.desc(), Endorsement.id.desc())
        )
        return [(row[0], row[1]) for row in result.all()]

    # ── Transaction control ──

    @_store_call
    async def commit(self) -> None:
        await self.db.commit()
