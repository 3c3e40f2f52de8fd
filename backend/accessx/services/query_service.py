"""Read-side attendance lookups for the validator and dashboards."""
from typing import Dict, List, Optional

from accessx.models import AttendanceRecord
from accessx.services.proof_service import normalize_address


class QueryService:
    """Pure reads; nothing here raises when a lookup comes back empty."""

    def __init__(self, store, badge_image: str = None, badge_description: str = None):
        self.store = store
        self.badge_image = badge_image
        self.badge_description = badge_description or 'Attendance Proof'

    def find_by_session_and_wallet(self, session_id: str, wallet_address: str) -> Optional[AttendanceRecord]:
        return self.store.find_attendance((session_id or '').strip(), normalize_address(wallet_address))

    def find_by_wallet_and_email(self, wallet_address: str, email: str) -> List[AttendanceRecord]:
        return self.store.list_attendance_for_wallet(normalize_address(wallet_address), (email or '').strip())

    def list_by_session(self, session_id: str) -> List[AttendanceRecord]:
        return self.store.list_attendance_for_session(session_id)

    def validate(self, session_id: str, wallet_address: str) -> Dict:
        """Build the validator answer for a (session, wallet) pair."""
        record = self.find_by_session_and_wallet(session_id, wallet_address)
        if record is None:
            return {
                'verified': False,
                'error': 'No attendance record found for this wallet/session combination.'
            }

        session = self.store.get_session(record.session_id)
        title = session.title if session else 'Class'
        timestamp = record.timestamp.isoformat() if record.timestamp else None

        return {
            'verified': True,
            'tokenId': record.token_id,
            'txHash': record.tx_hash,
            'metadata': {
                'name': f'{title} Badge',
                'description': self.badge_description,
                'image': self.badge_image,
                'attributes': [
                    {'trait_type': 'Student Email', 'value': record.email},
                    {'trait_type': 'Date', 'value': session.date if session else timestamp},
                    {'trait_type': 'Timestamp', 'value': timestamp}
                ]
            }
        }
