from datetime import datetime, timedelta

import pytest

from app import create_app
from config import TestConfig
from models import db, Movie, Showtime
from reservations.cancellation import CancellationHandler
from reservations.coordinator import ReservationCoordinator
from reservations.ledger import ReservationLedger
from reservations.locks import ShowtimeLocks

TICKET_PRICE = 250


@pytest.fixture
def app(tmp_path):
    # file-backed so worker threads get their own connections
    class _Config(TestConfig):
        SQLALCHEMY_DATABASE_URI = "sqlite:///" + str(tmp_path / "seatbook-test.db")

    app = create_app(_Config)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def movie(app):
    m = Movie(title="The Long Night", ticket_price=TICKET_PRICE)
    db.session.add(m)
    db.session.commit()
    return m


def _make_showtime(movie, hours_ahead=24):
    s = Showtime(movie_id=movie.id, show_time=datetime.utcnow() + timedelta(hours=hours_ahead))
    db.session.add(s)
    db.session.commit()
    return s


@pytest.fixture
def showtime(movie):
    return _make_showtime(movie)


@pytest.fixture
def other_showtime(movie):
    return _make_showtime(movie, hours_ahead=48)


@pytest.fixture
def locks():
    return ShowtimeLocks()


@pytest.fixture
def ledger(app):
    return ReservationLedger(db.session)


@pytest.fixture
def coordinator(ledger, locks):
    return ReservationCoordinator(ledger, locks=locks)


@pytest.fixture
def canceller(ledger, locks):
    return CancellationHandler(ledger, locks=locks)


@pytest.fixture
def auth():
    def _headers(user_id, roles=None):
        headers = {"X-User-Id": str(user_id)}
        if roles:
            headers["X-User-Roles"] = ",".join(roles)
        return headers
    return _headers
