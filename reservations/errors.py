class ReservationError(Exception):
    """Base class for every failure the reservation core reports to callers."""

    status_code = 400
    default_message = "Reservation failed"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"error": self.message}


class ValidationError(ReservationError):
    status_code = 400
    default_message = "Invalid reservation request"


class ConflictError(ReservationError):
    """
    Raised when requested seats are already held by a confirmed booking.
    `seats` lists exactly the contested seats, sorted row-major.
    """

    status_code = 409

    def __init__(self, seats, message: str = None):
        self.seats = sorted(seats)
        codes = ", ".join(str(s) for s in self.seats)
        super().__init__(message or f"Seats {codes} were just booked by someone else")

    def to_dict(self) -> dict:
        return {"error": self.message, "seats": [str(s) for s in self.seats]}


class NotFoundError(ReservationError):
    status_code = 404
    default_message = "Not found"


class ForbiddenError(ReservationError):
    status_code = 403
    default_message = "Forbidden"


class AlreadyCancelledError(ReservationError):
    status_code = 409
    default_message = "Booking already cancelled"


class StorageError(ReservationError):
    status_code = 503
    default_message = "Booking storage unavailable"
