"""Record store implementations."""
from .base import RecordStore
from .memory import MemoryRecordStore
from .sqlalchemy_store import SQLAlchemyRecordStore

STORE_BACKENDS = {
    'sqlalchemy': SQLAlchemyRecordStore,
    'memory': MemoryRecordStore
}

def create_record_store(name: str = 'sqlalchemy') -> RecordStore:
    """Instantiate the configured record store backend."""
    try:
        return STORE_BACKENDS[name]()
    except KeyError:
        raise ValueError(f"Unknown record store backend: {name}")

__all__ = ['RecordStore', 'MemoryRecordStore', 'SQLAlchemyRecordStore', 'create_record_store']
