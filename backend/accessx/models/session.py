"""Attendance session distributed as a QR code."""
from datetime import datetime
from accessx import db
from accessx.models.base import BaseModel

class AttendanceSession(BaseModel):
    """Instructor-defined attendance window identified by id and nonce."""

    __tablename__ = 'sessions'

    session_id = db.Column(db.String(64), primary_key=True)
    nonce = db.Column(db.String(64), nullable=False)
    title = db.Column(db.String(255), nullable=False)
    date = db.Column(db.String(10), nullable=False)
    start_time = db.Column(db.String(5), nullable=True)
    end_time = db.Column(db.String(5), nullable=True)
    instructor_wallet = db.Column(db.String(42), nullable=True, index=True)

    # Captured where the session was created
    instructor_latitude = db.Column(db.Float, nullable=True)
    instructor_longitude = db.Column(db.Float, nullable=True)

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False, index=True)

    def has_location(self) -> bool:
        return self.instructor_latitude is not None and self.instructor_longitude is not None

    def starts_at(self):
        """Datetime the attendance window opens, or None if unbounded."""
        if not self.start_time:
            return None
        return datetime.strptime(f'{self.date} {self.start_time}', '%Y-%m-%d %H:%M')

    def to_dict(self):
        """Convert to the API representation."""
        data = {
            'sessionId': self.session_id,
            'nonce': self.nonce,
            'title': self.title,
            'date': self.date,
            'startTime': self.start_time,
            'endTime': self.end_time,
            'instructorWallet': self.instructor_wallet,
            'createdAt': self.created_at.isoformat() if self.created_at else None
        }
        if self.has_location():
            data['instructorLocation'] = {
                'latitude': self.instructor_latitude,
                'longitude': self.instructor_longitude
            }
        return data

    def __repr__(self):
        return f'<AttendanceSession {self.title} ({self.session_id})>'
