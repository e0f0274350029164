import uuid
from datetime import datetime

from sqlalchemy import Boolean, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from pennypace.models.base import Base, TimestampMixin, generate_uuid


class Streak(TimestampMixin, Base):
    """Consecutive weeks a user stayed within their weekly budget."""

    __tablename__ = "streaks"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=generate_uuid)
    user_id: Mapped[str] = mapped_column(String(100), nullable=False, unique=True, index=True)
    current_streak: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    longest_streak: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    last_under_budget_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    weekly_under_budget: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
