"""Peer endorsement model. Rows are insert-only."""

from datetime import datetime
from typing import Optional

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from campushub.database import Base


class Endorsement(Base):
    __tablename__ = "endorsements"
    __table_args__ = (
        CheckConstraint("rating BETWEEN 1 AND 5", name="ck_endorsements_rating_range"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    from_user_id: Mapped[str] = mapped_column(String(64), index=True, nullable=False)
    target_user_id: Mapped[str] = mapped_column(
        ForeignKey("profiles.id"), index=True, nullable=False
    )
    rating: Mapped[int] = mapped_column(Integer, nullable=False)
    comment: Mapped[Optional[str]] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
