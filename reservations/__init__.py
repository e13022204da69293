from .seats import SeatId, SeatGrid, DEFAULT_ROWS, DEFAULT_COLUMNS
from .errors import (
    ReservationError,
    ValidationError,
    ConflictError,
    NotFoundError,
    ForbiddenError,
    AlreadyCancelledError,
    StorageError,
)
