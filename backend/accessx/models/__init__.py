"""Models package with all models."""
from .base import BaseModel
from .session import AttendanceSession
from .attendance import AttendanceRecord
from .instructor import Instructor

__all__ = [
    'BaseModel', 'AttendanceSession', 'AttendanceRecord', 'Instructor'
]
