"""Attendance redemption: turns a scanned, signed QR payload into a record."""
import hmac
import logging
import secrets
from datetime import datetime
from typing import Callable, Optional, Tuple

from accessx.errors import (
    DuplicateAttendance, InvalidNonce, OutOfProximity, RecordNotFound,
    SessionNotFound, SessionNotStarted, SignatureMismatch, ValidationError,
    WindowExpired
)
from accessx.models import AttendanceRecord, AttendanceSession
from accessx.services.location_service import LocationService
from accessx.services.proof_service import ProofService, normalize_address
from accessx.services.session_service import SessionService
from accessx.utils.validators import Validator

logger = logging.getLogger(__name__)


def generate_proof_artifacts() -> Tuple[str, str]:
    """Return a simulated (token_id, tx_hash) pair for a new record.

    token_id is a uniform 6-digit number, tx_hash is 32 random bytes in
    0x-prefixed hex. Neither refers to a real ledger entry.
    """
    token_id = str(100000 + secrets.randbelow(900000))
    tx_hash = '0x' + secrets.token_hex(32)
    return token_id, tx_hash


class AttendanceService:
    """Validates redemptions and writes attendance records."""

    def __init__(
        self,
        store,
        window_minutes: int = 10,
        proximity_meters: float = 100,
        clock: Optional[Callable[[], datetime]] = None
    ):
        self.store = store
        self.window_minutes = window_minutes
        self.proximity_meters = proximity_meters
        self.clock = clock or datetime.now

    def redeem(
        self,
        session_id: str,
        nonce: str,
        email: str,
        wallet_address: str,
        signature: str,
        captured_image: str = None,
        latitude: float = None,
        longitude: float = None
    ) -> AttendanceRecord:
        """Record attendance for a wallet, or raise the first failed check."""
        fields = {
            'email': email,
            'sessionId': session_id,
            'nonce': nonce,
            'signature': signature,
            'walletAddress': wallet_address,
            'studentImage': captured_image
        }
        Validator.require_fields(
            fields,
            ['email', 'sessionId', 'nonce', 'signature', 'walletAddress'],
            message="Missing required fields"
        )
        Validator.require_strings(fields, list(fields))
        email = email.strip()
        wallet = normalize_address(wallet_address)

        # 1. Session lookup
        session = self.store.get_session(session_id)
        if session is None:
            raise SessionNotFound()

        # 2. Nonce from the QR payload must match
        if not hmac.compare_digest(str(nonce).encode(), session.nonce.encode()):
            logger.warning("Nonce mismatch for session %s from %s", session_id, wallet)
            raise InvalidNonce()

        # 3. Time window and proximity gates
        self.check_window(session)
        location = self.check_proximity(session, latitude, longitude, wallet)

        # 4. One attempt per wallet
        if self.store.find_attendance(session_id, wallet) is not None:
            raise DuplicateAttendance()

        # 5. Signature over the canonical message
        message = ProofService.build_message(email, session_id, nonce)
        if not ProofService.verify(message, signature, wallet):
            logger.warning("Signature mismatch for session %s, claimed wallet %s", session_id, wallet)
            raise SignatureMismatch()

        # 6-7. Mint and persist; the store rejects a concurrent duplicate
        token_id, tx_hash = generate_proof_artifacts()
        record = AttendanceRecord(
            session_id=session_id,
            wallet_address=wallet,
            email=email,
            token_id=token_id,
            tx_hash=tx_hash,
            signature=signature,
            student_image=captured_image or None,
            student_latitude=location[0] if location else None,
            student_longitude=location[1] if location else None,
            timestamp=datetime.utcnow()
        )
        self.store.add_attendance(record)
        logger.info("Attendance marked: %s -> %s (token %s)", email, session_id, token_id)
        return record

    def check_window(self, session: AttendanceSession) -> None:
        starts_at = session.starts_at()
        if starts_at is None:
            return

        elapsed_minutes = (self.clock() - starts_at).total_seconds() / 60
        if elapsed_minutes < 0:
            raise SessionNotStarted()
        if elapsed_minutes > self.window_minutes:
            raise WindowExpired(
                f"Attendance window closed {self.window_minutes} minutes after {session.start_time}"
            )

    def check_proximity(
        self, session: AttendanceSession, latitude, longitude, wallet: str
    ) -> Optional[Tuple[float, float]]:
        """Return the student's (lat, lon) when the session is location-gated."""
        if not session.has_location():
            return None
        location = Validator.parse_coordinates(latitude, longitude)
        if location is None:
            raise ValidationError("Location is required for this session")

        result = LocationService.is_within_proximity(
            location[0], location[1],
            session.instructor_latitude, session.instructor_longitude,
            self.proximity_meters
        )
        if not result['is_valid']:
            logger.warning(
                "Proximity check failed for %s in session %s: %dm away",
                wallet, session.session_id, result['distance']
            )
            raise OutOfProximity(
                f"You are {LocationService.format_distance(result['distance'])} away from "
                f"the instructor; the limit is {LocationService.format_distance(self.proximity_meters)}"
            )
        return location

    def delete_record(self, record_id: int, instructor_wallet: str) -> None:
        """Remove one attendance record, e.g. after manual fraud review."""
        record = self.store.get_attendance(record_id)
        if record is None:
            raise RecordNotFound()

        session_id = record.session_id
        session = self.store.get_session(session_id)
        if session is not None:
            SessionService.ensure_owner(session, instructor_wallet)

        self.store.delete_attendance(record_id)
        logger.info("Removed attendance record %s from session %s", record_id, session_id)
