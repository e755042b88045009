"""
Peer endorsements and the trust score derived from them.

trust_score = round_half_up(mean(ratings) * 20), clamped to [0, 100];
a profile with no endorsements scores 0. The score is recomputed and stored
on the profile in the same transaction that records a new endorsement.
"""

import logging
from typing import Any, Dict, List, Optional

from campushub.models.endorsement import Endorsement
from campushub.services.errors import BadRequest, NotFound
from campushub.services.profile_store import ProfileStore

logger = logging.getLogger(__name__)

MIN_RATING = 1
MAX_RATING = 5
PERCENT_PER_POINT = 20


def validate_rating(rating: Any) -> int:
    # bool is an int subclass; True must not count as a rating of 1
    if isinstance(rating, bool):
        raise BadRequest("Rating must be an integer between 1 and 5")
    if isinstance(rating, float) and rating.is_integer():
        rating = int(rating)
    if not isinstance(rating, int) or not MIN_RATING <= rating <= MAX_RATING:
        raise BadRequest("Rating must be an integer between 1 and 5")
    return rating


def rating_percentage(rating: int) -> int:
    return rating * PERCENT_PER_POINT


def score_from_totals(total: int, count: int) -> int:
    """Mean rating as a 0-100 percentage, rounded half up."""
    if count <= 0:
        return 0
    # round(total * 20 / count) with exact integer half-up rounding
    score = (2 * PERCENT_PER_POINT * total + count) // (2 * count)
    return max(0, min(100, score))


class TrustEndorsementEngine:
    def __init__(self, store: ProfileStore):
        self.store = store

    async def endorse(
        self,
        from_actor_id: str,
        target_user_id: Optional[str],
        rating: Any,
        comment: Optional[str] = None,
    ) -> Endorsement:
        """Record an immutable endorsement and refresh the target's trust score."""
        rating = validate_rating(rating)

        target_id = (target_user_id or "").strip() if isinstance(target_user_id, str) else ""
        if target_id and target_id == from_actor_id:
            raise BadRequest("You cannot endorse yourself")
        if not target_id or not await self.store.exists(target_id):
            raise NotFound("Target user not found")

        if comment is not None and not isinstance(comment, str):
            raise BadRequest("Comment must be a string")
        comment = (comment or "").strip() or None

        endorsement = await self.store.add_endorsement(
            Endorsement(
                from_user_id=from_actor_id,
                target_user_id=target_id,
                rating=rating,
                comment=comment,
            )
        )
        total, count = await self.store.rating_totals(target_id)
        score = score_from_totals(total, count)
        await self.store.update_fields(target_id, {"trust_score": score})
        await self.store.commit()

        logger.info(
            "Endorsement %s: %s rated %s %d/5 (trust now %d%% over %d)",
            endorsement.id, from_actor_id, target_id, rating, score, count,
        )
        return endorsement

    async def trust_score(self, profile_id: str) -> Dict[str, Any]:
        if not await self.store.exists(profile_id):
            raise NotFound("User not found")
        total, count = await self.store.rating_totals(profile_id)
        return {
            "user_id": profile_id,
            "trust_score": score_from_totals(total, count),
            "endorsement_count": count,
        }

    async def list_endorsements(self, profile_id: str) -> List[Dict[str, Any]]:
        if not await self.store.exists(profile_id):
            raise NotFound("User not found")
        rows = await self.store.list_endorsements(profile_id)
        return [
            {
                "id": e.id,
                "from_user_id": e.from_user_id,
                "from_user_name": from_name or "Anonymous",
                "target_user_id": e.target_user_id,
                "rating": e.rating,
                "percentage": rating_percentage(e.rating),
                "comment": e.comment,
                "created_at": e.created_at,
            }
            for e, from_name in rows
        ]
