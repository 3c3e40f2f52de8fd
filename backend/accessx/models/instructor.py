"""Instructor account used to own and manage sessions."""
from datetime import datetime
from werkzeug.security import generate_password_hash, check_password_hash
from accessx import db
from accessx.models.base import BaseModel

class Instructor(BaseModel):
    """Instructor identified by email and wallet address."""

    __tablename__ = 'instructors'

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    wallet_address = db.Column(db.String(42), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    def set_password(self, password: str) -> None:
        """Set instructor password with hashing."""
        self.password_hash = generate_password_hash(password)

    def check_password(self, password: str) -> bool:
        """Check if provided password matches."""
        return check_password_hash(self.password_hash, password)

    def save(self) -> 'Instructor':
        db.session.add(self)
        db.session.commit()
        return self

    def to_dict(self) -> dict:
        """Convert to dictionary excluding sensitive data."""
        return {
            'id': self.id,
            'email': self.email,
            'walletAddress': self.wallet_address,
            'createdAt': self.created_at.isoformat() if self.created_at else None
        }

    def __repr__(self) -> str:
        return f'<Instructor {self.email}>'
