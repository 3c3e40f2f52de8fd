"""Validation utilities for the application."""
import re
from datetime import datetime
from typing import Dict, List, Optional

from accessx.errors import ValidationError

WALLET_PATTERN = re.compile(r'^0x[0-9a-fA-F]{40}$')

class Validator:
    """Validation helper class."""

    @staticmethod
    def validate_email(email: str) -> bool:
        """Validate email format."""
        if not email:
            return False
        pattern = r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$'
        return bool(re.match(pattern, email))

    @staticmethod
    def validate_password(password: str) -> List[str]:
        """Validate password strength."""
        errors = []

        if not password:
            errors.append("Password is required")
        elif len(password) < 6:
            errors.append("Password must be at least 6 characters long")
        elif len(password) > 128:
            errors.append("Password is too long")

        return errors

    @staticmethod
    def validate_wallet_address(address: str) -> bool:
        """Check a hex account address (0x + 40 hex digits)."""
        return bool(address) and bool(WALLET_PATTERN.match(address.strip()))

    @staticmethod
    def missing_fields(data: Dict, required_fields: List[str]) -> List[str]:
        """Return the required fields that are absent or blank."""
        missing = []
        for field in required_fields:
            value = data.get(field) if data else None
            if value is None or (isinstance(value, str) and not value.strip()):
                missing.append(field)
        return missing

    @staticmethod
    def require_fields(data: Dict, required_fields: List[str], message: str = None) -> None:
        missing = Validator.missing_fields(data, required_fields)
        if missing:
            raise ValidationError(message or f"Missing required fields: {', '.join(missing)}")

    @staticmethod
    def require_strings(data: Dict, fields: List[str]) -> None:
        """Reject fields that are present but not text."""
        wrong = [
            field for field in fields
            if data and data.get(field) is not None and not isinstance(data.get(field), str)
        ]
        if wrong:
            raise ValidationError(f"Fields must be strings: {', '.join(wrong)}")

    @staticmethod
    def parse_date(value: str) -> datetime:
        """Parse a YYYY-MM-DD date."""
        try:
            return datetime.strptime(value.strip(), '%Y-%m-%d')
        except (AttributeError, ValueError):
            raise ValidationError(f"Invalid date '{value}', expected YYYY-MM-DD")

    @staticmethod
    def parse_time(value: str):
        """Parse an HH:MM clock time."""
        try:
            return datetime.strptime(value.strip(), '%H:%M').time()
        except (AttributeError, ValueError):
            raise ValidationError(f"Invalid time '{value}', expected HH:MM")

    @staticmethod
    def parse_coordinates(latitude, longitude) -> Optional[tuple]:
        """Return (lat, lon) floats, or None when both are absent."""
        if latitude is None and longitude is None:
            return None
        if latitude is None or longitude is None:
            raise ValidationError("Latitude and longitude must be provided together")
        try:
            lat, lon = float(latitude), float(longitude)
        except (TypeError, ValueError):
            raise ValidationError("Latitude and longitude must be numbers")
        if not -90 <= lat <= 90 or not -180 <= lon <= 180:
            raise ValidationError("Coordinates out of range")
        return lat, lon
