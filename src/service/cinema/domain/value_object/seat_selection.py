from typing import Iterable, List

import attrs

from src.platform.exception.exceptions import DomainError


@attrs.define(frozen=True)
class SeatSelection:
    """Non-empty, duplicate-free set of seat ids requested for one booking."""

    seat_ids: tuple[int, ...]

    @classmethod
    def of(cls, seat_ids: Iterable[int]) -> 'SeatSelection':
        ids = list(seat_ids)
        if not ids:
            raise DomainError('At least one seat must be selected')
        if len(set(ids)) != len(ids):
            raise DomainError('Duplicate seats in selection')
        if any(seat_id <= 0 for seat_id in ids):
            raise DomainError('Seat ids must be positive')
        return cls(seat_ids=tuple(sorted(ids)))

    def __len__(self) -> int:
        return len(self.seat_ids)

    def as_list(self) -> List[int]:
        return list(self.seat_ids)

    def outside_of(self, allowed_seat_ids: Iterable[int]) -> List[int]:
        allowed = set(allowed_seat_ids)
        return [seat_id for seat_id in self.seat_ids if seat_id not in allowed]

    def overlapping(self, occupied_seat_ids: Iterable[int]) -> List[int]:
        occupied = set(occupied_seat_ids)
        return [seat_id for seat_id in self.seat_ids if seat_id in occupied]
