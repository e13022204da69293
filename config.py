import os

BASE_DIR = os.path.abspath(os.path.dirname(__file__))

class Config:
    # Secrets
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-only-change-me")

    # SQLite database file stored next to this file as seatbook.db
    SQLALCHEMY_DATABASE_URI = os.getenv(
        "DATABASE_URL",
        "sqlite:///" + os.path.join(BASE_DIR, "seatbook.db")
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Auditorium layout: rows A-H, columns 1-10
    SEAT_ROWS = os.getenv("SEAT_ROWS", "ABCDEFGH")
    SEAT_COLUMNS = int(os.getenv("SEAT_COLUMNS", "10"))

    # Largest selection accepted in one booking
    MAX_SEATS_PER_BOOKING = int(os.getenv("MAX_SEATS_PER_BOOKING", "10"))

    # Identity forwarded by the auth service
    AUTH_USER_HEADER = os.getenv("AUTH_USER_HEADER", "X-User-Id")
    AUTH_ROLES_HEADER = os.getenv("AUTH_ROLES_HEADER", "X-User-Roles")

    AUDIT_LOG_ENABLED = os.getenv("AUDIT_LOG_ENABLED", "true").lower() == "true"

    # Basic app settings
    DEBUG = False


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite://"
