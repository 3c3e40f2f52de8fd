"""Instructor endpoints: session issuance and attendance management."""
from flask import Blueprint, Response, jsonify, request, stream_with_context
from flask_jwt_extended import get_jwt_identity, jwt_required
from accessx.services.export_service import ExportService
from accessx.services.qr_service import QRService
from accessx.utils.decorators import instructor_required
from accessx.utils.helpers import error_response, get_services, success_response

admin_bp = Blueprint('admin', __name__)

@admin_bp.route('/session', methods=['POST'])
@jwt_required(optional=True)
def create_session():
    """Create a session; a logged-in instructor becomes its owner."""
    data = request.get_json(silent=True) or {}
    instructor_wallet = get_jwt_identity() or data.get('instructorWallet')

    session = get_services().sessions.create_session(
        title=data.get('title'),
        date=data.get('date'),
        start_time=data.get('startTime'),
        end_time=data.get('endTime'),
        instructor_wallet=instructor_wallet,
        latitude=data.get('latitude'),
        longitude=data.get('longitude')
    )
    return jsonify(session.to_dict())

@admin_bp.route('/sessions', methods=['GET'])
@jwt_required(optional=True)
def list_sessions():
    """List sessions, newest first."""
    instructor_wallet = get_jwt_identity() or request.args.get('instructorWallet')
    sessions = get_services().sessions.list_sessions(instructor_wallet)
    return jsonify([s.to_dict() for s in sessions])

@admin_bp.route('/sessions/stream', methods=['GET'])
def stream_sessions():
    """Server-sent events for session creation and deletion."""
    publisher = get_services().publisher
    if not publisher.enabled:
        return error_response("Live session updates are not configured", 503)

    return Response(
        stream_with_context(publisher.stream()),
        mimetype='text/event-stream',
        headers={'Cache-Control': 'no-cache'}
    )

@admin_bp.route('/session/<session_id>', methods=['GET'])
def get_session(session_id):
    session = get_services().sessions.get_session(session_id)
    return jsonify(session.to_dict())

@admin_bp.route('/session/<session_id>/qr', methods=['GET'])
def session_qr(session_id):
    """QR payload and rendered image for a session."""
    services = get_services()
    session = services.sessions.get_session(session_id)
    payload = services.sessions.qr_payload(session)

    return success_response(
        data={
            'sessionId': session.session_id,
            'payload': payload,
            'qrImage': QRService.render_image(payload)
        },
        message="QR code generated successfully"
    )

@admin_bp.route('/session/<session_id>/attendance', methods=['GET'])
def session_attendance(session_id):
    """Attendance list for the instructor dashboard."""
    services = get_services()
    services.sessions.get_session(session_id)
    include_images = request.args.get('images', 'false').lower() in ('1', 'true', 'yes')

    records = services.queries.list_by_session(session_id)
    return success_response(
        data={
            'sessionId': session_id,
            'count': len(records),
            'records': [r.to_dict(include_image=include_images) for r in records]
        }
    )

@admin_bp.route('/session/<session_id>/attendance/export', methods=['GET'])
def export_attendance(session_id):
    """Download the attendance list as CSV."""
    services = get_services()
    session = services.sessions.get_session(session_id)
    records = services.queries.list_by_session(session_id)

    return Response(
        ExportService.attendance_csv(records),
        mimetype='text/csv',
        headers={
            'Content-Disposition': f'attachment; filename=attendance_{session.session_id}.csv'
        }
    )

@admin_bp.route('/session/<session_id>', methods=['DELETE'])
@instructor_required
def delete_session(session_id):
    """Delete a session and all of its attendance records."""
    removed = get_services().sessions.delete_session(session_id, get_jwt_identity())
    return success_response(
        data={'sessionId': session_id, 'recordsRemoved': removed},
        message="Session deleted"
    )

@admin_bp.route('/attendance/<int:record_id>', methods=['DELETE'])
@instructor_required
def delete_attendance(record_id):
    """Remove a single attendance record."""
    get_services().attendance.delete_record(record_id, get_jwt_identity())
    return success_response(message="Attendance record removed")
