"""Attendance record model with proof artifacts."""
from datetime import datetime
from accessx import db
from accessx.models.base import BaseModel

class AttendanceRecord(BaseModel):
    """One wallet's signed attendance for one session."""

    __tablename__ = 'attendance_records'
    __table_args__ = (
        db.UniqueConstraint('session_id', 'wallet_address', name='uq_attendance_session_wallet'),
    )

    id = db.Column(db.Integer, primary_key=True)
    session_id = db.Column(
        db.String(64),
        db.ForeignKey('sessions.session_id', ondelete='CASCADE'),
        nullable=False,
        index=True
    )
    wallet_address = db.Column(db.String(42), nullable=False, index=True)
    email = db.Column(db.String(255), nullable=False)

    # Simulated mint output
    token_id = db.Column(db.String(6), nullable=False)
    tx_hash = db.Column(db.String(66), nullable=False)

    signature = db.Column(db.Text, nullable=False)
    student_image = db.Column(db.Text, nullable=True)  # data URI, reviewed manually

    # Location where check-in happened
    student_latitude = db.Column(db.Float, nullable=True)
    student_longitude = db.Column(db.Float, nullable=True)

    timestamp = db.Column(db.DateTime, default=datetime.utcnow, nullable=False, index=True)

    def to_dict(self, include_image: bool = False):
        """Convert to the API representation."""
        data = {
            'id': self.id,
            'sessionId': self.session_id,
            'walletAddress': self.wallet_address,
            'email': self.email,
            'tokenId': self.token_id,
            'txHash': self.tx_hash,
            'signature': self.signature,
            'timestamp': self.timestamp.isoformat() if self.timestamp else None,
            'hasImage': bool(self.student_image)
        }
        if include_image:
            data['studentImage'] = self.student_image
        return data

    def __repr__(self):
        return f'<AttendanceRecord {self.session_id}-{self.wallet_address}>'
