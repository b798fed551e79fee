from typing import List, Optional

from pydantic import BaseModel

from src.service.cinema.domain.entity.hall_entity import Hall, Seat
from src.service.cinema.domain.value_object.hall_dimensions import HallDimensions


class SeatResponse(BaseModel):
    id: int
    row: int
    number: int
    is_taken: bool = False

    @classmethod
    def from_entity(cls, seat: Seat) -> 'SeatResponse':
        return cls(id=seat.id, row=seat.row, number=seat.number, is_taken=seat.is_taken)


class HallSizeResponse(BaseModel):
    rows: int
    seats_per_row: int

    @classmethod
    def from_value(cls, dimensions: HallDimensions) -> 'HallSizeResponse':
        return cls(rows=dimensions.rows, seats_per_row=dimensions.seats_per_row)


class HallBasicResponse(BaseModel):
    id: int
    name: str
    rows: Optional[int] = None
    seats_per_row: Optional[int] = None

    @classmethod
    def from_entity(cls, hall: Hall) -> 'HallBasicResponse':
        dimensions = hall.dimensions
        return cls(
            id=hall.id,
            name=hall.name,
            rows=dimensions.rows if dimensions else None,
            seats_per_row=dimensions.seats_per_row if dimensions else None,
        )


class HallWithSeatsResponse(HallBasicResponse):
    model_config = {
        'json_schema_extra': {
            'example': {
                'id': 1,
                'name': 'Hall A',
                'rows': 2,
                'seats_per_row': 5,
                'seats': [
                    {'id': 1, 'row': 1, 'number': 1, 'is_taken': True},
                    {'id': 2, 'row': 1, 'number': 2, 'is_taken': False},
                ],
            }
        },
    }

    seats: List[SeatResponse]

    @classmethod
    def from_entity(cls, hall: Hall) -> 'HallWithSeatsResponse':
        return cls(
            **HallBasicResponse.from_entity(hall).model_dump(),
            seats=[SeatResponse.from_entity(seat) for seat in hall.seats],
        )
