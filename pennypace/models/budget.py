import uuid
from decimal import Decimal

from sqlalchemy import CheckConstraint, Enum, Numeric, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from pennypace.models.base import Base, TimestampMixin, generate_uuid
from pennypace.pacing.periods import PeriodKind


class Budget(TimestampMixin, Base):
    """A spending ceiling for one category.

    Flat budgets use ``amount`` for the whole period. When both
    ``weekday_amount`` and ``weekend_amount`` are set the budget is split
    into per-day ceilings and ``amount`` is kept only for display.
    """

    __tablename__ = "budgets"
    __table_args__ = (
        UniqueConstraint("user_id", "category", name="uq_budgets_user_category"),
        CheckConstraint("amount >= 0", name="ck_budgets_amount_non_negative"),
        CheckConstraint(
            "(weekday_amount IS NULL) = (weekend_amount IS NULL)",
            name="ck_budgets_split_both_or_neither",
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=generate_uuid)
    user_id: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    category: Mapped[str] = mapped_column(String(100), nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(precision=14, scale=2), nullable=False)
    period: Mapped[PeriodKind] = mapped_column(
        Enum(PeriodKind, native_enum=False), nullable=False, default=PeriodKind.monthly
    )
    weekday_amount: Mapped[Decimal | None] = mapped_column(
        Numeric(precision=14, scale=2), nullable=True
    )
    weekend_amount: Mapped[Decimal | None] = mapped_column(
        Numeric(precision=14, scale=2), nullable=True
    )

    @property
    def has_separate_budgets(self) -> bool:
        return self.weekday_amount is not None and self.weekend_amount is not None
