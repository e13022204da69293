from contextlib import contextmanager
from datetime import datetime

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from models.booking import Booking, SeatClaim, BOOKING_CONFIRMED, BOOKING_CANCELLED
from models.showtime import Showtime
from reservations.errors import StorageError


class ReservationLedger:
    """
    Durable store of bookings and their seat claims.

    Wraps a SQLAlchemy session handed in by the caller. Only
    ReservationCoordinator and CancellationHandler write through it.
    """

    def __init__(self, session):
        self.session = session

    @contextmanager
    def atomic(self):
        """
        Runs the block as one transaction and commits it.
        Seat-claim collisions propagate as IntegrityError; any other
        database failure is rolled back and reported as StorageError.
        """
        try:
            yield self
            self.session.commit()
        except IntegrityError:
            self.session.rollback()
            raise
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise StorageError("Booking storage unavailable") from exc
        except Exception:
            self.session.rollback()
            raise

    # ---------- reads ----------
    def get_showtime(self, showtime_id: int, lock: bool = False):
        q = self.session.query(Showtime).filter(Showtime.id == showtime_id)
        if lock:
            # row lock serializes writers across processes (no-op on SQLite)
            q = q.with_for_update()
        return q.first()

    def get_booking(self, booking_id: int, lock: bool = False):
        q = self.session.query(Booking).filter(Booking.id == booking_id)
        if lock:
            q = q.with_for_update()
        return q.first()

    def confirmed_seat_codes(self, showtime_id: int) -> list[str]:
        rows = (
            self.session.query(SeatClaim.seat_code)
            .join(Booking, SeatClaim.booking_id == Booking.id)
            .filter(
                SeatClaim.showtime_id == showtime_id,
                SeatClaim.released_at.is_(None),
                Booking.status == BOOKING_CONFIRMED,
            )
            .all()
        )
        return [r.seat_code for r in rows]

    def bookings_for_user(self, user_id: int, status: str = None) -> list[Booking]:
        q = self.session.query(Booking).filter(Booking.user_id == user_id)
        if status:
            q = q.filter(Booking.status == status)
        return q.order_by(Booking.created_at.desc(), Booking.id.desc()).all()

    def confirmed_totals(self) -> tuple[int, int]:
        """
        Returns (confirmed booking count, sum of their totals)
        """
        count, revenue = (
            self.session.query(
                func.count(Booking.id),
                func.coalesce(func.sum(Booking.total_amount), 0),
            )
            .filter(Booking.status == BOOKING_CONFIRMED)
            .one()
        )
        return int(count), int(revenue)

    # ---------- writes ----------
    def append_booking(self, user_id: int, showtime_id: int, seat_codes: list[str], total_amount: int) -> Booking:
        booking = Booking(
            user_id=user_id,
            showtime_id=showtime_id,
            total_amount=total_amount,
            status=BOOKING_CONFIRMED,
        )
        booking.claims = [
            SeatClaim(showtime_id=showtime_id, seat_code=code, position=i)
            for i, code in enumerate(seat_codes)
        ]
        self.session.add(booking)
        # surfaces uq_seat_claim_active violations before commit
        self.session.flush()
        return booking

    def mark_cancelled(self, booking: Booking, reason: str = None) -> Booking:
        now = datetime.utcnow()
        booking.status = BOOKING_CANCELLED
        booking.cancelled_at = now
        booking.cancel_reason = reason
        for claim in booking.claims:
            claim.released_at = now
        self.session.flush()
        return booking
