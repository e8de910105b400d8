"""SchemeRecord — a government welfare scheme in the shared catalog."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import Boolean, DateTime, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from schemematch.models.base import Base, JSONType, TimestampMixin


class SchemeRecord(TimestampMixin, Base):
    """Catalog entry. Read-only from the recommendation core's perspective."""

    __tablename__ = "schemes"

    name: Mapped[str] = mapped_column(String(300), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    ministry: Mapped[str] = mapped_column(String(300), nullable=False)
    state: Mapped[str | None] = mapped_column(String(100), comment="NULL for central schemes")

    eligibility_criteria: Mapped[dict[str, Any]] = mapped_column(JSONType, nullable=False, default=dict)
    benefits: Mapped[str] = mapped_column(Text, nullable=False)
    application_process: Mapped[str] = mapped_column(Text, nullable=False)
    documents: Mapped[list[str] | None] = mapped_column(JSONType, comment="Required documents")
    application_url: Mapped[str | None] = mapped_column(String(500))
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False, index=True)

    # Scoring inputs, NULL = unrestricted
    max_income: Mapped[int | None] = mapped_column(Integer)
    min_age: Mapped[int | None] = mapped_column(Integer)
    max_age: Mapped[int | None] = mapped_column(Integer)
    target_categories: Mapped[list[str] | None] = mapped_column(JSONType)
    target_occupations: Mapped[list[str] | None] = mapped_column(JSONType)

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<SchemeRecord name={self.name!r} active={self.is_active}>"
