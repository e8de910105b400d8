"""RecommendationRecord — persisted results of the recommendation engine."""

from __future__ import annotations

from sqlalchemy import Float, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from schemematch.models.base import Base, TimestampMixin


class RecommendationRecord(TimestampMixin, Base):
    """One ranked (user, scheme) pairing. Never updated in place."""

    __tablename__ = "recommendations"

    user_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    scheme_id: Mapped[str] = mapped_column(String(36), ForeignKey("schemes.id"), nullable=False)

    score: Mapped[float] = mapped_column(Float, nullable=False, comment="Score at generation time")
    reason: Mapped[str | None] = mapped_column(Text)

    def __repr__(self) -> str:
        return f"<RecommendationRecord user={self.user_id} scheme={self.scheme_id} score={self.score}>"
