from flask import Blueprint, request, jsonify, current_app, g

from models import db
from models.booking import BOOKING_CONFIRMED, BOOKING_CANCELLED
from reservations.cancellation import CancellationHandler
from reservations.coordinator import ReservationCoordinator
from reservations.errors import ConflictError, ReservationError, NotFoundError
from reservations.ledger import ReservationLedger
from reservations.seat_map import SeatMap
from reservations.seats import SeatGrid
from utils.auth_context import login_required
from utils.audit import log_event

booking_bp = Blueprint("booking", __name__)


def _ledger() -> ReservationLedger:
    return ReservationLedger(db.session)

def _locks():
    return current_app.extensions["showtime_locks"]

def _coordinator(ledger: ReservationLedger) -> ReservationCoordinator:
    grid = SeatGrid(
        rows=current_app.config.get("SEAT_ROWS", "ABCDEFGH"),
        columns=current_app.config.get("SEAT_COLUMNS", 10),
    )
    return ReservationCoordinator(
        ledger,
        locks=_locks(),
        grid=grid,
        max_seats=current_app.config.get("MAX_SEATS_PER_BOOKING"),
    )

def _error(exc: ReservationError):
    return jsonify(**exc.to_dict()), exc.status_code


# ---------- PUBLIC: seat map for a showtime ----------
@booking_bp.get("/showtimes/<int:showtime_id>/seats")
def booked_seats(showtime_id: int):
    ledger = _ledger()
    showtime = ledger.get_showtime(showtime_id)
    if not showtime or not showtime.is_active:
        return jsonify(error="Showtime not found"), 404

    payload = SeatMap(ledger).snapshot(showtime)
    payload["ticket_price"] = showtime.movie.ticket_price if showtime.movie else None
    return jsonify(payload), 200


# ---------- USERS: book seats (DOUBLE-BOOKING SAFE) ----------
@booking_bp.post("/showtimes/<int:showtime_id>/bookings")
@login_required
def create_booking(showtime_id: int):
    data = request.get_json(silent=True) or {}
    seats = data.get("seats")

    ledger = _ledger()
    showtime = ledger.get_showtime(showtime_id)
    if not showtime or not showtime.is_active or not showtime.movie:
        return jsonify(error="Showtime not found"), 404
    price = showtime.movie.ticket_price
    db.session.rollback()

    try:
        booking = _coordinator(ledger).reserve(showtime_id, seats, g.user_id, price)
    except ConflictError as exc:
        log_event(
            "BOOKING_FAIL_CONFLICT",
            user_id=g.user_id,
            entity="showtime",
            entity_id=showtime_id,
            metadata={"seats": [str(s) for s in exc.seats]},
        )
        payload = exc.to_dict()
        # fresh view so the client can prune its selection
        payload["booked_seats"] = [str(s) for s in sorted(SeatMap(ledger).booked_seats(showtime_id))]
        return jsonify(payload), exc.status_code
    except ReservationError as exc:
        return _error(exc)

    body = booking.to_dict()
    log_event("BOOKING_CREATE", user_id=g.user_id, entity="booking", entity_id=booking.id,
              metadata={"showtime_id": showtime_id, "seats": body["seats"]})
    return jsonify(body), 201


# ---------- USERS: cancel booking ----------
@booking_bp.post("/bookings/<int:booking_id>/cancel")
@login_required
def cancel_booking(booking_id: int):
    data = request.get_json(silent=True) or {}
    reason = (data.get("reason") or "").strip()[:120] or None

    handler = CancellationHandler(_ledger(), locks=_locks())
    try:
        booking = handler.cancel(booking_id, g.user_id, reason=reason)
    except NotFoundError as exc:
        return _error(exc)
    except ReservationError as exc:
        log_event("BOOKING_CANCEL_DENIED", user_id=g.user_id, entity="booking", entity_id=booking_id,
                  metadata={"reason": exc.message})
        return _error(exc)

    body = booking.to_dict()
    log_event("BOOKING_CANCEL", user_id=g.user_id, entity="booking", entity_id=booking_id, metadata={"reason": reason})
    return jsonify(body), 200


# ---------- USERS: view my bookings ----------
@booking_bp.get("/bookings/me")
@login_required
def my_bookings():
    status = (request.args.get("status") or "").upper() or None
    if status and status not in (BOOKING_CONFIRMED, BOOKING_CANCELLED):
        return jsonify(error="status must be CONFIRMED or CANCELLED"), 400

    rows = _ledger().bookings_for_user(g.user_id, status=status)

    out = []
    for b in rows:
        item = b.to_dict()
        s = b.showtime
        item["showtime"] = {
            "showtime_id": b.showtime_id,
            "show_time": s.show_time.isoformat() if s else None,
            "movie_title": s.movie.title if s and s.movie else None,
        }
        out.append(item)
    return jsonify(out), 200
