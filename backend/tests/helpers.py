"""Signing helpers shared by the tests."""
from eth_account.messages import encode_defunct

from accessx.services.proof_service import ProofService


def sign(account, email, session_id, nonce) -> str:
    """Sign the canonical attendance message the way a wallet would."""
    message = ProofService.build_message(email, session_id, nonce)
    signed = account.sign_message(encode_defunct(text=message))
    return '0x' + bytes(signed.signature).hex()
