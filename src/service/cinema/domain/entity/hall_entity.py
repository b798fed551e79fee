from typing import List, Optional

import attrs

from src.service.cinema.domain.value_object.hall_dimensions import HallDimensions


@attrs.define(frozen=True)
class Seat:
    id: int
    hall_id: int
    row: int
    number: int
    is_taken: bool = False

    @property
    def position(self) -> tuple[int, int]:
        return self.row, self.number


@attrs.define
class Hall:
    id: int
    name: str
    seats: List[Seat] = attrs.field(factory=list)

    def __attrs_post_init__(self) -> None:
        # Canonical seat-map order
        self.seats.sort(key=lambda seat: seat.position)

    @property
    def total_seats(self) -> int:
        return len(self.seats)

    @property
    def seat_ids(self) -> List[int]:
        return [seat.id for seat in self.seats]

    @property
    def dimensions(self) -> Optional[HallDimensions]:
        return HallDimensions.from_positions(seat.position for seat in self.seats)

    def with_occupancy(self, taken_seat_ids: set[int]) -> 'Hall':
        return attrs.evolve(
            self,
            seats=[attrs.evolve(seat, is_taken=seat.id in taken_seat_ids) for seat in self.seats],
        )
