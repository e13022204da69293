from .db import db
from .audit_log import AuditLog
from .movie import Movie
from .showtime import Showtime
from .booking import Booking, SeatClaim, BOOKING_CONFIRMED, BOOKING_CANCELLED
