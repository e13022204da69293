from sqlalchemy.exc import IntegrityError

from reservations.errors import ConflictError, NotFoundError, ValidationError
from reservations.locks import ShowtimeLocks
from reservations.seat_map import SeatMap
from reservations.seats import SeatGrid


def _check_price(price_per_seat) -> int:
    if isinstance(price_per_seat, bool) or not isinstance(price_per_seat, int):
        raise ValidationError("Price per seat must be an integer amount")
    if price_per_seat < 0:
        raise ValidationError("Price per seat cannot be negative")
    return price_per_seat


class ReservationCoordinator:
    """
    The only path that turns free seats into booked seats.

    For one showtime, the availability check and the booking insert run
    inside a single exclusive section and a single transaction, so two
    overlapping requests can never both commit. The losing request is
    rejected whole, never trimmed to the seats that happened to be free.
    """

    def __init__(self, ledger, locks: ShowtimeLocks = None, grid: SeatGrid = None, max_seats: int = None):
        self.ledger = ledger
        self.locks = locks or ShowtimeLocks()
        self.grid = grid or SeatGrid()
        self.max_seats = max_seats
        self.seat_map = SeatMap(ledger)

    def reserve(self, showtime_id: int, seats, user_id: int, price_per_seat: int):
        # validation happens before any ledger access
        requested = self.grid.parse_selection(seats, max_seats=self.max_seats)
        price = _check_price(price_per_seat)
        wanted = set(requested)

        with self.locks.hold(showtime_id):
            try:
                with self.ledger.atomic():
                    showtime = self.ledger.get_showtime(showtime_id, lock=True)
                    if showtime is None or not showtime.is_active:
                        raise NotFoundError("Showtime not found")

                    outside = [s for s in requested if not showtime.grid.contains(s)]
                    if outside:
                        raise ValidationError(f"Seat {outside[0]} does not exist for this showtime")

                    conflict = wanted & self.seat_map.booked_seats(showtime_id)
                    if conflict:
                        raise ConflictError(conflict)

                    booking = self.ledger.append_booking(
                        user_id=user_id,
                        showtime_id=showtime_id,
                        seat_codes=[str(s) for s in requested],
                        total_amount=len(requested) * price,
                    )
            except IntegrityError:
                # another process claimed a seat between our read and our insert
                with self.ledger.atomic():
                    conflict = wanted & self.seat_map.booked_seats(showtime_id)
                if not conflict:
                    # the colliding booking was cancelled before we re-read; nothing to prune
                    raise ConflictError(set(), message="Seat availability changed, refresh and try again") from None
                raise ConflictError(conflict) from None

        return booking
