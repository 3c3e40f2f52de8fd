"""Signed attendance proof construction and verification.

Students sign the canonical message below with their wallet using EIP-191
``personal_sign``. The server rebuilds the same text from the submitted
fields, recovers the signing address and compares it to the claimed one.
"""
import logging

from eth_account import Account
from eth_account.messages import encode_defunct

from accessx.errors import CryptoError

logger = logging.getLogger(__name__)

MESSAGE_TEMPLATE = (
    "Attendance Request\n"
    "Email: {email}\n"
    "Session: {session_id}\n"
    "Nonce: {nonce}"
)


def normalize_address(address: str) -> str:
    """Canonical form of an account address used for storage and comparison."""
    return (address or '').strip().lower()


class ProofService:
    """Service for attendance signature operations."""

    @staticmethod
    def build_message(email: str, session_id: str, nonce: str) -> str:
        """Build the exact text the student's wallet signs."""
        return MESSAGE_TEMPLATE.format(email=email, session_id=session_id, nonce=nonce)

    @staticmethod
    def recover_address(message: str, signature: str) -> str:
        """Recover the address that signed ``message``."""
        try:
            return Account.recover_message(encode_defunct(text=message), signature=signature)
        except Exception as e:
            logger.warning("Signature recovery failed: %s", e)
            raise CryptoError() from e

    @staticmethod
    def verify(message: str, signature: str, claimed_address: str) -> bool:
        """True iff ``signature`` over ``message`` was produced by ``claimed_address``."""
        if not signature:
            raise CryptoError("Signature is empty")
        recovered = ProofService.recover_address(message, signature)
        return normalize_address(recovered) == normalize_address(claimed_address)
