"""Period resolution: boundaries, day counts, weekday/weekend partition.

Weeks start on Sunday. A day is a weekend day when it is a Saturday or a
Sunday. All boundaries are computed in the tzinfo of ``now``; naive ``now``
values give naive boundaries.
"""

import calendar
import enum
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta

from pennypace.pacing.errors import InvalidInputError

DAYS_PER_WEEK = 7

# date.weekday(): Monday == 0 ... Sunday == 6
_SATURDAY = 5
_SUNDAY = 6


class PeriodKind(str, enum.Enum):
    weekly = "weekly"
    monthly = "monthly"


def is_weekend_day(day: date) -> bool:
    return day.weekday() in (_SATURDAY, _SUNDAY)


@dataclass(frozen=True)
class DaySplit:
    """Weekday/weekend day counts over a period, split at "today"."""

    weekday_days_total: int
    weekend_days_total: int
    weekday_days_elapsed: int
    weekend_days_elapsed: int

    @property
    def weekday_days_remaining(self) -> int:
        return self.weekday_days_total - self.weekday_days_elapsed

    @property
    def weekend_days_remaining(self) -> int:
        return self.weekend_days_total - self.weekend_days_elapsed


@dataclass(frozen=True)
class Period:
    """A resolved budget period.

    ``start`` is inclusive and ``end`` exclusive. ``as_of`` is the moment the
    period was resolved for and decides which kind of day "today" is.
    """

    kind: PeriodKind
    as_of: datetime
    start: datetime
    end: datetime
    days_elapsed: int
    days_total: int
    day_split: DaySplit

    @property
    def days_remaining(self) -> int:
        return max(0, self.days_total - self.days_elapsed)

    @property
    def weekday_days_total(self) -> int:
        return self.day_split.weekday_days_total

    @property
    def weekend_days_total(self) -> int:
        return self.day_split.weekend_days_total

    @property
    def weekday_days_remaining(self) -> int:
        return self.day_split.weekday_days_remaining

    @property
    def weekend_days_remaining(self) -> int:
        return self.day_split.weekend_days_remaining

    @property
    def is_today_weekend(self) -> bool:
        return self.is_weekend(self.as_of)

    def local(self, moment: datetime) -> datetime:
        """Express ``moment`` in the period's timezone when both are aware."""
        if not isinstance(moment, datetime):
            raise InvalidInputError(f"Expected a datetime, got {moment!r}")
        if self.start.tzinfo is not None and moment.tzinfo is not None:
            return moment.astimezone(self.start.tzinfo)
        return moment

    def is_weekend(self, moment: datetime) -> bool:
        return is_weekend_day(self.local(moment).date())

    def contains(self, moment: datetime) -> bool:
        local = self.local(moment)
        if (local.tzinfo is None) != (self.start.tzinfo is None):
            local = local.replace(tzinfo=self.start.tzinfo)
        return self.start <= local < self.end


def _midnight(day: date, tzinfo) -> datetime:
    return datetime.combine(day, time.min, tzinfo=tzinfo)


def _split_days(first_day: date, days_total: int, days_elapsed: int) -> DaySplit:
    weekday_total = weekend_total = weekday_elapsed = weekend_elapsed = 0
    for offset in range(days_total):
        day = first_day + timedelta(days=offset)
        elapsed = offset + 1 <= days_elapsed
        if is_weekend_day(day):
            weekend_total += 1
            weekend_elapsed += elapsed
        else:
            weekday_total += 1
            weekday_elapsed += elapsed
    return DaySplit(
        weekday_days_total=weekday_total,
        weekend_days_total=weekend_total,
        weekday_days_elapsed=weekday_elapsed,
        weekend_days_elapsed=weekend_elapsed,
    )


def _parse_kind(kind) -> PeriodKind:
    try:
        return PeriodKind(kind)
    except ValueError:
        raise InvalidInputError(f"Unknown period kind: {kind!r}")


def resolve_period(now: datetime, kind: PeriodKind | str) -> Period:
    """Resolve the weekly or monthly period that contains ``now``."""
    if not isinstance(now, datetime):
        raise InvalidInputError(f"now must be a datetime, got {now!r}")
    kind = _parse_kind(kind)
    today = now.date()

    if kind is PeriodKind.weekly:
        # Sunday-based index: Sunday == 0 ... Saturday == 6
        first_day = today - timedelta(days=(today.weekday() + 1) % DAYS_PER_WEEK)
        next_first_day = first_day + timedelta(days=DAYS_PER_WEEK)
        days_total = DAYS_PER_WEEK
    else:
        first_day = today.replace(day=1)
        days_total = calendar.monthrange(today.year, today.month)[1]
        next_first_day = first_day + timedelta(days=days_total)

    # start is midnight, so whole elapsed days == calendar day difference
    days_elapsed = (today - first_day).days + 1

    return Period(
        kind=kind,
        as_of=now,
        start=_midnight(first_day, now.tzinfo),
        end=_midnight(next_first_day, now.tzinfo),
        days_elapsed=days_elapsed,
        days_total=days_total,
        day_split=_split_days(first_day, days_total, days_elapsed),
    )
