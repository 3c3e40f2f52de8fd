"""Public attendance verification endpoint."""
from flask import Blueprint, jsonify
from accessx.utils.helpers import get_services

validator_bp = Blueprint('validator', __name__)

@validator_bp.route('/<session_id>/<wallet_address>', methods=['GET'])
def verify_attendance(session_id, wallet_address):
    """Check whether a wallet attended a session."""
    result = get_services().queries.validate(session_id, wallet_address)
    return jsonify(result), (200 if result['verified'] else 404)
