from datetime import datetime
from models.db import db
from reservations.seats import SeatGrid, DEFAULT_ROWS, DEFAULT_COLUMNS

class Showtime(db.Model):
    __tablename__ = "showtimes"

    id = db.Column(db.Integer, primary_key=True)
    movie_id = db.Column(db.Integer, db.ForeignKey("movies.id"), nullable=False, index=True)
    show_time = db.Column(db.DateTime, nullable=False, index=True)

    # layout is fixed per showtime; rows are letters, columns start at 1
    seat_rows = db.Column(db.String(26), nullable=False, default=DEFAULT_ROWS)
    seat_columns = db.Column(db.Integer, nullable=False, default=DEFAULT_COLUMNS)

    is_active = db.Column(db.Boolean, default=True, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    movie = db.relationship("Movie", back_populates="showtimes")

    @property
    def grid(self) -> SeatGrid:
        return SeatGrid(rows=self.seat_rows or DEFAULT_ROWS, columns=self.seat_columns or DEFAULT_COLUMNS)
