"""In-process record store for tests and single-process demos."""
import itertools
import threading
from datetime import datetime
from typing import Dict, List, Optional

from accessx.errors import DuplicateAttendance
from accessx.models import AttendanceSession, AttendanceRecord
from accessx.store.base import RecordStore


class MemoryRecordStore(RecordStore):
    """Dictionary-backed store; one lock serializes every mutation."""

    def __init__(self):
        self._lock = threading.Lock()
        self._sessions: Dict[str, AttendanceSession] = {}
        self._records: Dict[int, AttendanceRecord] = {}
        self._ids = itertools.count(1)

    def add_session(self, session: AttendanceSession) -> AttendanceSession:
        with self._lock:
            if session.created_at is None:
                session.created_at = datetime.utcnow()
            self._sessions[session.session_id] = session
        return session

    def get_session(self, session_id: str) -> Optional[AttendanceSession]:
        return self._sessions.get(session_id)

    def list_sessions(self, instructor_wallet: str = None) -> List[AttendanceSession]:
        with self._lock:
            # Newest insertion first so equal timestamps keep that order
            sessions = list(reversed(list(self._sessions.values())))
        if instructor_wallet:
            sessions = [s for s in sessions if s.instructor_wallet == instructor_wallet]
        return sorted(sessions, key=lambda s: s.created_at, reverse=True)

    def delete_session(self, session_id: str) -> int:
        with self._lock:
            doomed = [rid for rid, r in self._records.items() if r.session_id == session_id]
            for rid in doomed:
                del self._records[rid]
            self._sessions.pop(session_id, None)
        return len(doomed)

    def add_attendance(self, record: AttendanceRecord) -> AttendanceRecord:
        with self._lock:
            for existing in self._records.values():
                if (existing.session_id == record.session_id
                        and existing.wallet_address == record.wallet_address):
                    raise DuplicateAttendance()
            record.id = next(self._ids)
            if record.timestamp is None:
                record.timestamp = datetime.utcnow()
            self._records[record.id] = record
        return record

    def get_attendance(self, record_id: int) -> Optional[AttendanceRecord]:
        return self._records.get(record_id)

    def find_attendance(self, session_id: str, wallet_address: str) -> Optional[AttendanceRecord]:
        with self._lock:
            for record in self._records.values():
                if record.session_id == session_id and record.wallet_address == wallet_address:
                    return record
        return None

    def list_attendance_for_session(self, session_id: str) -> List[AttendanceRecord]:
        with self._lock:
            records = [r for r in self._records.values() if r.session_id == session_id]
        return sorted(records, key=lambda r: (r.timestamp, r.id))

    def list_attendance_for_wallet(self, wallet_address: str, email: str) -> List[AttendanceRecord]:
        with self._lock:
            records = [
                r for r in self._records.values()
                if r.wallet_address == wallet_address and r.email == email
            ]
        return sorted(records, key=lambda r: (r.timestamp, r.id), reverse=True)

    def delete_attendance(self, record_id: int) -> bool:
        with self._lock:
            return self._records.pop(record_id, None) is not None
