from datetime import datetime
from models.db import db

class Movie(db.Model):
    __tablename__ = "movies"

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(150), nullable=False)

    ticket_price = db.Column(db.Integer, nullable=False, default=0)  # smallest currency unit
    is_active = db.Column(db.Boolean, default=True, nullable=False)

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    showtimes = db.relationship("Showtime", back_populates="movie")
