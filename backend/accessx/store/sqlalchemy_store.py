"""Durable record store backed by Flask-SQLAlchemy."""
import logging
from functools import wraps
from typing import List, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from accessx import db
from accessx.errors import DuplicateAttendance, StoreUnavailable
from accessx.models import AttendanceSession, AttendanceRecord
from accessx.store.base import RecordStore

logger = logging.getLogger(__name__)


def _guarded(f):
    """Roll back and surface database failures as StoreUnavailable."""
    @wraps(f)
    def wrapper(*args, **kwargs):
        try:
            return f(*args, **kwargs)
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.error("Record store failure in %s: %s", f.__name__, e)
            raise StoreUnavailable() from e
    return wrapper


class SQLAlchemyRecordStore(RecordStore):
    """Record store using the application's SQLAlchemy session.

    Must be used inside an application context.
    """

    @_guarded
    def add_session(self, session: AttendanceSession) -> AttendanceSession:
        db.session.add(session)
        db.session.commit()
        return session

    @_guarded
    def get_session(self, session_id: str) -> Optional[AttendanceSession]:
        return db.session.get(AttendanceSession, session_id)

    @_guarded
    def list_sessions(self, instructor_wallet: str = None) -> List[AttendanceSession]:
        query = AttendanceSession.query
        if instructor_wallet:
            query = query.filter_by(instructor_wallet=instructor_wallet)
        return query.order_by(AttendanceSession.created_at.desc()).all()

    @_guarded
    def delete_session(self, session_id: str) -> int:
        removed = AttendanceRecord.query.filter_by(session_id=session_id).delete(
            synchronize_session=False
        )
        AttendanceSession.query.filter_by(session_id=session_id).delete(
            synchronize_session=False
        )
        db.session.commit()
        return removed

    @_guarded
    def add_attendance(self, record: AttendanceRecord) -> AttendanceRecord:
        db.session.add(record)
        try:
            db.session.commit()
        except IntegrityError as e:
            db.session.rollback()
            # Lost the race against a concurrent redemption for the same wallet
            raise DuplicateAttendance() from e
        return record

    @_guarded
    def get_attendance(self, record_id: int) -> Optional[AttendanceRecord]:
        return db.session.get(AttendanceRecord, record_id)

    @_guarded
    def find_attendance(self, session_id: str, wallet_address: str) -> Optional[AttendanceRecord]:
        return AttendanceRecord.query.filter_by(
            session_id=session_id,
            wallet_address=wallet_address
        ).first()

    @_guarded
    def list_attendance_for_session(self, session_id: str) -> List[AttendanceRecord]:
        return AttendanceRecord.query.filter_by(session_id=session_id).order_by(
            AttendanceRecord.timestamp.asc(), AttendanceRecord.id.asc()
        ).all()

    @_guarded
    def list_attendance_for_wallet(self, wallet_address: str, email: str) -> List[AttendanceRecord]:
        return AttendanceRecord.query.filter_by(
            wallet_address=wallet_address,
            email=email
        ).order_by(AttendanceRecord.timestamp.desc(), AttendanceRecord.id.desc()).all()

    @_guarded
    def delete_attendance(self, record_id: int) -> bool:
        removed = AttendanceRecord.query.filter_by(id=record_id).delete(
            synchronize_session=False
        )
        db.session.commit()
        return removed > 0
