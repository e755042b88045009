"""Profile model: one row per account, keyed by the identity provider's id."""

import enum
from datetime import datetime
from typing import List, Optional

from sqlalchemy import JSON, DateTime, Enum, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from campushub.database import Base


class RoleEnum(str, enum.Enum):
    STUDENT = "student"
    STARTUP = "startup"
    ADMIN = "admin"


DEFAULT_LEVEL = "explorer"


class Profile(Base):
    __tablename__ = "profiles"

    # ── Identity (owned by the identity provider) ──
    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    email: Mapped[str] = mapped_column(String(255), index=True, nullable=False)
    name: Mapped[str] = mapped_column(String(60), nullable=False)
    role: Mapped[RoleEnum] = mapped_column(
        Enum(RoleEnum, values_callable=lambda e: [m.value for m in e]),
        default=RoleEnum.STUDENT,
        nullable=False,
    )

    # ── Academic context ──
    college: Mapped[Optional[str]] = mapped_column(String(200))
    course: Mapped[Optional[str]] = mapped_column(String(150))
    branch: Mapped[Optional[str]] = mapped_column(String(150))
    year: Mapped[Optional[str]] = mapped_column(String(20))

    # ── Enrichment ──
    bio: Mapped[Optional[str]] = mapped_column(Text)
    skills: Mapped[List[str]] = mapped_column(JSON, default=list, nullable=False)
    xp_points: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    level: Mapped[str] = mapped_column(String(40), default=DEFAULT_LEVEL, nullable=False)
    trust_score: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    # ── Timestamps ──
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )
