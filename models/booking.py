from datetime import datetime
from sqlalchemy import text

from models.db import db

BOOKING_CONFIRMED = "CONFIRMED"
BOOKING_CANCELLED = "CANCELLED"


class Booking(db.Model):
    __tablename__ = "bookings"

    id = db.Column(db.Integer, primary_key=True)

    user_id = db.Column(db.Integer, nullable=False, index=True)
    showtime_id = db.Column(db.Integer, db.ForeignKey("showtimes.id"), nullable=False, index=True)

    # seat count x price per seat, fixed at commit time
    total_amount = db.Column(db.Integer, nullable=False)

    status = db.Column(db.String(20), nullable=False, default=BOOKING_CONFIRMED)
    # status values: CONFIRMED, CANCELLED

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    cancelled_at = db.Column(db.DateTime, nullable=True)
    cancel_reason = db.Column(db.String(120), nullable=True)

    claims = db.relationship(
        "SeatClaim",
        back_populates="booking",
        order_by="SeatClaim.position",
        cascade="all, delete-orphan",
    )
    showtime = db.relationship("Showtime")

    @property
    def seats(self) -> list[str]:
        return [c.seat_code for c in self.claims]

    @property
    def is_confirmed(self) -> bool:
        return self.status == BOOKING_CONFIRMED

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "showtime_id": self.showtime_id,
            "seats": self.seats,
            "total_amount": self.total_amount,
            "status": self.status,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "cancelled_at": self.cancelled_at.isoformat() if self.cancelled_at else None,
        }


class SeatClaim(db.Model):
    """
    One row per seat of a booking. While a claim is unreleased it holds its
    seat: the partial unique index below lets the database reject a second
    live claim on the same (showtime, seat) no matter which process wrote it.
    """
    __tablename__ = "seat_claims"

    id = db.Column(db.Integer, primary_key=True)
    booking_id = db.Column(db.Integer, db.ForeignKey("bookings.id"), nullable=False, index=True)
    showtime_id = db.Column(db.Integer, db.ForeignKey("showtimes.id"), nullable=False)

    seat_code = db.Column(db.String(4), nullable=False)  # e.g. "A1", "H10"
    position = db.Column(db.Integer, nullable=False, default=0)  # selection order, display only

    released_at = db.Column(db.DateTime, nullable=True)

    booking = db.relationship("Booking", back_populates="claims")

    __table_args__ = (
        # Hard business-rule: a seat is held by at most one live claim per showtime
        db.Index(
            "uq_seat_claim_active",
            "showtime_id",
            "seat_code",
            unique=True,
            sqlite_where=text("released_at IS NULL"),
            postgresql_where=text("released_at IS NULL"),
        ),
    )
