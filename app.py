from datetime import datetime, timedelta

import click
from flask import Flask, jsonify

from config import Config
from routes import health_bp, booking_bp, admin_bp

from models import db, Movie, Showtime
from flask_migrate import Migrate
from reservations.errors import StorageError
from reservations.ledger import ReservationLedger
from reservations.locks import ShowtimeLocks
from reservations.seat_map import SeatMap
from utils.auth_context import load_current_user


def create_app(config_object=None):
    app = Flask(__name__)
    app.config.from_object(config_object or Config)

    # Register routes
    app.register_blueprint(health_bp)
    app.register_blueprint(booking_bp)
    app.register_blueprint(admin_bp)

    # Database init
    db.init_app(app)

    # Migrations
    Migrate(app, db)

    # One exclusive section per showtime, shared by every request in this process
    app.extensions["showtime_locks"] = ShowtimeLocks()

    @app.before_request
    def _load_user():
        load_current_user()

    @app.errorhandler(StorageError)
    def _storage_error(exc):
        return jsonify(error=exc.message), exc.status_code

    @app.after_request
    def add_security_headers(resp):
        resp.headers["X-Content-Type-Options"] = "nosniff"
        resp.headers["X-Frame-Options"] = "DENY"
        resp.headers["Referrer-Policy"] = "no-referrer"
        resp.headers["Content-Security-Policy"] = "default-src 'none'; frame-ancestors 'none';"
        return resp

    register_cli(app)

    return app

#-------------------------

def register_cli(app):
    @app.cli.command("seed-demo")
    @click.option("--price", default=250, show_default=True, help="Ticket price per seat.")
    def seed_demo(price):
        """Create a demo movie with one showtime tomorrow evening."""
        movie = Movie(title="Demo Feature", ticket_price=price)
        tomorrow = datetime.utcnow().replace(hour=19, minute=0, second=0, microsecond=0) + timedelta(days=1)
        showtime = Showtime(movie=movie, show_time=tomorrow)
        db.session.add_all([movie, showtime])
        db.session.commit()
        print(f"Created movie {movie.id} with showtime {showtime.id}")

    @app.cli.command("booked-seats")
    @click.argument("showtime_id", type=int)
    def booked_seats(showtime_id):
        """Print the seats held by confirmed bookings for a showtime."""
        ledger = ReservationLedger(db.session)
        showtime = ledger.get_showtime(showtime_id)
        if not showtime:
            print("Showtime not found")
            return

        snap = SeatMap(ledger).snapshot(showtime)
        print(", ".join(snap["booked_seats"]) or "(none)")
        print(f"{snap['available_count']} seats available")

#-------------------------


if __name__ == "__main__":
    app = create_app()
    # Run locally
    app.run(host="127.0.0.1", port=5002)
