"""Typed failures raised by the attendance services.

Each error carries the HTTP status and a stable ``code`` so the API layer can
render it without knowing which service raised it.
"""


class AttendanceError(Exception):
    """Base class for all expected attendance failures."""

    status_code = 400
    code = 'AttendanceError'
    default_message = 'Attendance request failed'

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AttendanceError):
    code = 'ValidationError'
    default_message = 'Invalid request data'


class SessionNotFound(AttendanceError):
    status_code = 404
    code = 'SessionNotFound'
    default_message = 'Invalid Session ID'


class RecordNotFound(AttendanceError):
    status_code = 404
    code = 'RecordNotFound'
    default_message = 'Attendance record not found'


class InvalidNonce(AttendanceError):
    status_code = 401
    code = 'InvalidNonce'
    default_message = 'Invalid Nonce/QR Code'


class SessionNotStarted(AttendanceError):
    status_code = 403
    code = 'SessionNotStarted'
    default_message = 'Session has not started yet'


class WindowExpired(AttendanceError):
    status_code = 403
    code = 'WindowExpired'
    default_message = 'Attendance window has closed for this session'


class OutOfProximity(AttendanceError):
    status_code = 403
    code = 'OutOfProximity'
    default_message = 'You are too far from the instructor to mark attendance'


class DuplicateAttendance(AttendanceError):
    status_code = 409
    code = 'DuplicateAttendance'
    default_message = 'Attendance already marked for this wallet.'


class SignatureMismatch(AttendanceError):
    status_code = 401
    code = 'SignatureMismatch'
    default_message = 'Signature verification failed. Wallet mismatch.'


class CryptoError(AttendanceError):
    status_code = 500
    code = 'CryptoError'
    default_message = 'Crypto verification failed'


class Forbidden(AttendanceError):
    status_code = 403
    code = 'Forbidden'
    default_message = 'You can only manage your own sessions'


class AuthenticationFailed(AttendanceError):
    status_code = 401
    code = 'AuthenticationFailed'
    default_message = 'Invalid email or password'


class StoreUnavailable(AttendanceError):
    status_code = 503
    code = 'StoreUnavailable'
    default_message = 'Storage is temporarily unavailable. Please try again.'
