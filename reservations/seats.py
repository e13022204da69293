import re
from typing import NamedTuple

from reservations.errors import ValidationError

DEFAULT_ROWS = "ABCDEFGH"
DEFAULT_COLUMNS = 10

_SEAT_RE = re.compile(r"^([A-Z])([1-9][0-9]?)$")


class SeatId(NamedTuple):
    row: str
    column: int

    def __str__(self) -> str:
        return f"{self.row}{self.column}"

    @classmethod
    def parse(cls, raw) -> "SeatId":
        """
        Accepts "A1", "h10" or an existing SeatId.
        Raises ValidationError for anything else.
        """
        if isinstance(raw, SeatId):
            return raw
        if not isinstance(raw, str):
            raise ValidationError(f"Invalid seat id: {raw!r}")

        m = _SEAT_RE.match(raw.strip().upper())
        if not m:
            raise ValidationError(f"Invalid seat id: {raw!r}")
        return cls(m.group(1), int(m.group(2)))


class SeatGrid:
    def __init__(self, rows: str = DEFAULT_ROWS, columns: int = DEFAULT_COLUMNS):
        self.rows = rows
        self.columns = columns

    @property
    def capacity(self) -> int:
        return len(self.rows) * self.columns

    def contains(self, seat: SeatId) -> bool:
        return seat.row in self.rows and 1 <= seat.column <= self.columns

    def all_seats(self) -> list[SeatId]:
        return [SeatId(r, c) for r in self.rows for c in range(1, self.columns + 1)]

    def parse_selection(self, raw_seats, max_seats: int = None) -> list[SeatId]:
        """
        Validates a user's seat selection against this grid.
        Returns SeatIds in the order the user picked them.
        """
        if not isinstance(raw_seats, (list, tuple)):
            raise ValidationError("Seats must be a list of seat ids")
        if not raw_seats:
            raise ValidationError("Select at least one seat")

        seats = []
        seen = set()
        for raw in raw_seats:
            seat = SeatId.parse(raw)
            if not self.contains(seat):
                raise ValidationError(f"Seat {seat} is outside the {len(self.rows)}x{self.columns} grid")
            if seat in seen:
                raise ValidationError(f"Seat {seat} selected more than once")
            seen.add(seat)
            seats.append(seat)

        if max_seats is not None and len(seats) > max_seats:
            raise ValidationError(f"At most {max_seats} seats per booking")
        return seats
