from reservations.errors import AlreadyCancelledError, ForbiddenError, NotFoundError
from reservations.locks import ShowtimeLocks


class CancellationHandler:
    def __init__(self, ledger, locks: ShowtimeLocks = None):
        self.ledger = ledger
        self.locks = locks or ShowtimeLocks()

    def cancel(self, booking_id: int, requester_user_id: int, reason: str = None):
        """
        Cancels a confirmed booking owned by the requester and releases
        its seats. Repeated cancellation raises AlreadyCancelledError.
        """
        with self.ledger.atomic():
            booking = self.ledger.get_booking(booking_id)
            if booking is None:
                raise NotFoundError("Booking not found")
            showtime_id = booking.showtime_id

        with self.locks.hold(showtime_id):
            with self.ledger.atomic():
                self.ledger.get_showtime(showtime_id, lock=True)
                booking = self.ledger.get_booking(booking_id, lock=True)

                if booking.user_id != requester_user_id:
                    raise ForbiddenError("Booking belongs to another user")
                if not booking.is_confirmed:
                    raise AlreadyCancelledError()

                self.ledger.mark_cancelled(booking, reason)

        return booking
