"""Record store interface shared by every persistence backend."""
from abc import ABC, abstractmethod
from typing import List, Optional

from accessx.models import AttendanceSession, AttendanceRecord


class RecordStore(ABC):
    """Keyed storage for sessions and attendance records.

    Implementations must make ``add_attendance`` fail with
    ``DuplicateAttendance`` when a record for the same
    (session_id, wallet_address) already exists, including when two inserts
    race each other.
    """

    # Sessions
    @abstractmethod
    def add_session(self, session: AttendanceSession) -> AttendanceSession:
        ...

    @abstractmethod
    def get_session(self, session_id: str) -> Optional[AttendanceSession]:
        ...

    @abstractmethod
    def list_sessions(self, instructor_wallet: str = None) -> List[AttendanceSession]:
        """Newest first."""

    @abstractmethod
    def delete_session(self, session_id: str) -> int:
        """Delete a session and its records, returning the record count removed."""

    # Attendance records
    @abstractmethod
    def add_attendance(self, record: AttendanceRecord) -> AttendanceRecord:
        ...

    @abstractmethod
    def get_attendance(self, record_id: int) -> Optional[AttendanceRecord]:
        ...

    @abstractmethod
    def find_attendance(self, session_id: str, wallet_address: str) -> Optional[AttendanceRecord]:
        ...

    @abstractmethod
    def list_attendance_for_session(self, session_id: str) -> List[AttendanceRecord]:
        """Oldest first."""

    @abstractmethod
    def list_attendance_for_wallet(self, wallet_address: str, email: str) -> List[AttendanceRecord]:
        """Newest first."""

    @abstractmethod
    def delete_attendance(self, record_id: int) -> bool:
        ...
