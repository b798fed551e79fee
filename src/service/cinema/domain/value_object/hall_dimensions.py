from typing import Iterable

import attrs


@attrs.define(frozen=True)
class HallDimensions:
    rows: int
    seats_per_row: int

    @classmethod
    def from_positions(cls, positions: Iterable[tuple[int, int]]) -> 'HallDimensions | None':
        """
        rows = highest row number; seats_per_row = highest seat number of
        row 1, or of the lowest row present when row 1 has no seats.
        """
        by_row: dict[int, int] = {}
        for row, number in positions:
            by_row[row] = max(number, by_row.get(row, 0))
        if not by_row:
            return None
        reference_row = 1 if 1 in by_row else min(by_row)
        return cls(rows=max(by_row), seats_per_row=by_row[reference_row])
