"""Custom decorators for authorization."""
from functools import wraps
from flask_jwt_extended import get_jwt_identity, verify_jwt_in_request
from accessx.models.instructor import Instructor
from accessx.utils.helpers import error_response

def instructor_required(f):
    """Decorator to require a logged-in, still existing instructor."""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        verify_jwt_in_request()
        wallet = get_jwt_identity()
        instructor = Instructor.query.filter_by(wallet_address=wallet).first()

        if not instructor:
            return error_response("Instructor not found", 404)

        return f(*args, **kwargs)
    return decorated_function
