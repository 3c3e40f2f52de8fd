"""Session issuance and instructor-side session management."""
import logging
import secrets
import uuid
from datetime import datetime
from typing import List, Optional

from accessx.errors import Forbidden, SessionNotFound, ValidationError
from accessx.models import AttendanceSession
from accessx.services.proof_service import normalize_address
from accessx.services.qr_service import QRService
from accessx.utils.validators import Validator

logger = logging.getLogger(__name__)

NONCE_BYTES = 12  # 96 bits, 24 hex characters


class SessionService:
    """Creates, lists and deletes attendance sessions."""

    def __init__(self, store, publisher=None):
        self.store = store
        self.publisher = publisher

    @staticmethod
    def generate_session_id() -> str:
        return str(uuid.uuid4())

    @staticmethod
    def generate_nonce() -> str:
        return secrets.token_hex(NONCE_BYTES)

    def create_session(
        self,
        title: str,
        date: str,
        start_time: str = None,
        end_time: str = None,
        instructor_wallet: str = None,
        latitude: float = None,
        longitude: float = None
    ) -> AttendanceSession:
        """Create and persist a session with a fresh id and nonce."""
        Validator.require_strings(
            {
                'title': title,
                'date': date,
                'startTime': start_time,
                'endTime': end_time,
                'instructorWallet': instructor_wallet
            },
            ['title', 'date', 'startTime', 'endTime', 'instructorWallet']
        )
        if not title or not str(title).strip() or not date or not str(date).strip():
            raise ValidationError("Title and Date are required")

        title, date = str(title).strip(), str(date).strip()
        if start_time:
            Validator.parse_date(date)
            start_time = Validator.parse_time(start_time).strftime('%H:%M')
        if end_time:
            end_time = Validator.parse_time(end_time).strftime('%H:%M')
        location = Validator.parse_coordinates(latitude, longitude)

        session = AttendanceSession(
            session_id=self.generate_session_id(),
            nonce=self.generate_nonce(),
            title=title,
            date=date,
            start_time=start_time or None,
            end_time=end_time or None,
            instructor_wallet=normalize_address(instructor_wallet) or None,
            instructor_latitude=location[0] if location else None,
            instructor_longitude=location[1] if location else None,
            created_at=datetime.utcnow()
        )
        self.store.add_session(session)
        logger.info("Created session %s (%s)", session.title, session.session_id)

        if self.publisher is not None:
            self.publisher.session_created(session)
        return session

    def get_session(self, session_id: str) -> AttendanceSession:
        session = self.store.get_session(session_id)
        if session is None:
            raise SessionNotFound()
        return session

    def list_sessions(self, instructor_wallet: Optional[str] = None) -> List[AttendanceSession]:
        return self.store.list_sessions(normalize_address(instructor_wallet) or None)

    def qr_payload(self, session: AttendanceSession) -> str:
        return QRService.build_payload(session.session_id, session.nonce)

    def delete_session(self, session_id: str, instructor_wallet: str) -> int:
        """Delete a session and every attendance record it holds."""
        session = self.get_session(session_id)
        self.ensure_owner(session, instructor_wallet)

        removed = self.store.delete_session(session_id)
        logger.info("Deleted session %s with %d attendance records", session_id, removed)

        if self.publisher is not None:
            self.publisher.session_deleted(session_id)
        return removed

    @staticmethod
    def ensure_owner(session: AttendanceSession, instructor_wallet: str) -> None:
        # Unowned sessions can be managed by any instructor
        if session.instructor_wallet and session.instructor_wallet != normalize_address(instructor_wallet):
            raise Forbidden()
