from reservations.seats import SeatId


class SeatMap:
    """Read-only view of which seats confirmed bookings hold for a showtime."""

    def __init__(self, ledger):
        self.ledger = ledger

    def booked_seats(self, showtime_id: int) -> set[SeatId]:
        return {SeatId.parse(code) for code in self.ledger.confirmed_seat_codes(showtime_id)}

    def available_seats(self, showtime) -> list[SeatId]:
        booked = self.booked_seats(showtime.id)
        return [s for s in showtime.grid.all_seats() if s not in booked]

    def snapshot(self, showtime) -> dict:
        # display only; a reservation re-checks inside its own transaction
        grid = showtime.grid
        booked = sorted(self.booked_seats(showtime.id))
        return {
            "showtime_id": showtime.id,
            "rows": list(grid.rows),
            "columns": grid.columns,
            "booked_seats": [str(s) for s in booked],
            "available_count": grid.capacity - len(booked),
        }
