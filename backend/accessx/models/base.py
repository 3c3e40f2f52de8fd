"""Base model class with common functionality."""
from datetime import datetime
from typing import Dict, Any
from accessx import db

class BaseModel(db.Model):
    """Base model class with shared serialization helpers."""

    __abstract__ = True

    def to_record(self, exclude: list = None) -> Dict[str, Any]:
        """Dump table columns under their database names."""
        exclude = exclude or []
        result = {}

        for column in self.__table__.columns:
            key = column.name
            if key not in exclude:
                value = getattr(self, key)
                if isinstance(value, datetime):
                    value = value.isoformat()
                result[key] = value

        return result

    def __repr__(self) -> str:
        return f'<{self.__class__.__name__} {self.to_record()}>'
