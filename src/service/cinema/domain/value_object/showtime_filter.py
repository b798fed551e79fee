from datetime import date, datetime, time, timedelta, timezone
from typing import Optional

import attrs

from src.platform.exception.exceptions import DomainError


def _parse_date(value: Optional[str]) -> Optional[date]:
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise DomainError(f'Invalid date "{value}", expected YYYY-MM-DD')


def _parse_time(value: Optional[str]) -> Optional[time]:
    if not value:
        return None
    try:
        return datetime.strptime(value, '%H:%M').time()
    except ValueError:
        raise DomainError(f'Invalid time "{value}", expected HH:MM')


@attrs.define(frozen=True)
class ShowtimeFilter:
    """
    Filters for the grouped showtime listing. Dates and times are UTC.

    time_start is inclusive and time_end exclusive, both compared against the
    time-of-day of the showtime start.
    """

    day: Optional[date] = None
    time_start: Optional[time] = None
    time_end: Optional[time] = None
    genre_id: Optional[int] = None
    movie_id: Optional[int] = None

    @classmethod
    def parse(
        cls,
        *,
        date: Optional[str] = None,
        time_start: Optional[str] = None,
        time_end: Optional[str] = None,
        genre_id: Optional[int] = None,
        movie_id: Optional[int] = None,
    ) -> 'ShowtimeFilter':
        return cls(
            day=_parse_date(date),
            time_start=_parse_time(time_start),
            time_end=_parse_time(time_end),
            genre_id=genre_id,
            movie_id=movie_id,
        )

    def day_bounds(self) -> Optional[tuple[datetime, datetime]]:
        if self.day is None:
            return None
        start = datetime.combine(self.day, time.min, tzinfo=timezone.utc)
        return start, start + timedelta(days=1)

    def matches_time_of_day(self, start_time: datetime) -> bool:
        moment = start_time.astimezone(timezone.utc).time().replace(tzinfo=None)
        if self.time_start is not None and moment < self.time_start:
            return False
        if self.time_end is not None and moment >= self.time_end:
            return False
        return True
