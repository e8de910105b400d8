"""CitizenProfileRecord — one socio-economic profile per user."""

from __future__ import annotations

from datetime import date, datetime
from typing import Any

from sqlalchemy import Boolean, Date, DateTime, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from schemematch.models.base import Base, JSONType, TimestampMixin


class CitizenProfileRecord(TimestampMixin, Base):
    """Self-reported attributes used for scheme matching.

    The unique index on user_id enforces the 1:1 profile/user rule.
    """

    __tablename__ = "citizen_profiles"

    user_id: Mapped[str] = mapped_column(String(64), nullable=False, unique=True, index=True)

    # Identity
    full_name: Mapped[str] = mapped_column(String(200), nullable=False)
    date_of_birth: Mapped[date | None] = mapped_column(Date)
    gender: Mapped[str | None] = mapped_column(String(20))

    # Location
    state: Mapped[str] = mapped_column(String(100), nullable=False)
    district: Mapped[str | None] = mapped_column(String(100))
    pincode: Mapped[str | None] = mapped_column(String(10))

    # Socio-economic
    annual_income: Mapped[int | None] = mapped_column(Integer)
    category: Mapped[str | None] = mapped_column(String(20))
    occupation: Mapped[str | None] = mapped_column(String(100))
    education: Mapped[str | None] = mapped_column(String(100))
    family_size: Mapped[int | None] = mapped_column(Integer)
    has_disability: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    disability_type: Mapped[str | None] = mapped_column(Text)

    # Preferences
    language_preference: Mapped[str] = mapped_column(String(10), default="en", nullable=False)
    additional_details: Mapped[dict[str, Any] | None] = mapped_column(JSONType)

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<CitizenProfileRecord user_id={self.user_id} state={self.state}>"
