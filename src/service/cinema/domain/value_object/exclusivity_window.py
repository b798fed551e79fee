from datetime import datetime, timedelta

import attrs


@attrs.define(frozen=True)
class ExclusivityWindow:
    """
    Minimum turnaround between two showtimes of the same hall.

    Two start instants conflict when they are at most `minutes` apart
    (both bounds inclusive): with a 30 minute window, 18:00 blocks
    17:30..18:30, so 18:30 conflicts and 18:31 does not.
    """

    minutes: int = 30

    @property
    def delta(self) -> timedelta:
        return timedelta(minutes=self.minutes)

    def bounds(self, start_time: datetime) -> tuple[datetime, datetime]:
        return start_time - self.delta, start_time + self.delta

    def conflicts(self, a: datetime, b: datetime) -> bool:
        return abs(a - b) <= self.delta
