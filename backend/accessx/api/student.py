"""Student endpoints: QR scan, signing and redemption."""
from flask import Blueprint, current_app, jsonify, request
from accessx import limiter
from accessx.services.proof_service import ProofService
from accessx.services.qr_service import QRService
from accessx.utils.helpers import get_services, success_response
from accessx.utils.validators import Validator

student_bp = Blueprint('student', __name__)

def _redeem_limit():
    return current_app.config.get('REDEEM_RATE_LIMIT', '30 per minute')

@student_bp.route('/message', methods=['POST'])
def signing_message():
    """Decode a scanned QR payload and return the text to sign."""
    data = request.get_json(silent=True) or {}
    Validator.require_fields(data, ['email', 'qrData'])
    Validator.require_strings(data, ['email', 'qrData'])

    session_id, nonce = QRService.parse_payload(data['qrData'])
    session = get_services().sessions.get_session(session_id)

    return success_response(
        data={
            'sessionId': session_id,
            'nonce': nonce,
            'title': session.title,
            'message': ProofService.build_message(data['email'].strip(), session_id, nonce)
        }
    )

@student_bp.route('/redeem', methods=['POST'])
@limiter.limit(_redeem_limit)
def redeem():
    """Verify a signed attendance request and mint the proof token."""
    data = request.get_json(silent=True) or {}

    record = get_services().attendance.redeem(
        session_id=data.get('sessionId'),
        nonce=data.get('nonce'),
        email=data.get('email'),
        wallet_address=data.get('walletAddress'),
        signature=data.get('signature'),
        captured_image=data.get('studentImage'),
        latitude=data.get('latitude'),
        longitude=data.get('longitude')
    )

    return jsonify({
        'success': True,
        'tokenId': record.token_id,
        'txHash': record.tx_hash
    })

@student_bp.route('/records', methods=['GET'])
def my_records():
    """Attendance history for a wallet and email, newest first."""
    Validator.require_fields(request.args, ['walletAddress', 'email'])

    records = get_services().queries.find_by_wallet_and_email(
        request.args['walletAddress'],
        request.args['email']
    )
    return success_response(
        data={
            'count': len(records),
            'records': [r.to_dict() for r in records]
        }
    )
