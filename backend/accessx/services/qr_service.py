"""QR code payload encoding and rendering."""
import qrcode
import io
import base64
import json
from typing import Tuple

from accessx.errors import ValidationError

class QRService:
    """Service for QR code operations."""

    @staticmethod
    def build_payload(session_id: str, nonce: str) -> str:
        """Compact JSON carried by the QR code: the only credential a student needs."""
        return json.dumps({'sessionId': session_id, 'nonce': nonce}, separators=(',', ':'))

    @staticmethod
    def parse_payload(qr_data_string: str) -> Tuple[str, str]:
        """Return (session_id, nonce) from scanned QR text."""
        try:
            qr_data = json.loads(qr_data_string)
        except (TypeError, json.JSONDecodeError):
            raise ValidationError("Failed to parse QR code.")

        if not isinstance(qr_data, dict) or not qr_data.get('sessionId') or not qr_data.get('nonce'):
            raise ValidationError("Invalid QR Code format.")

        return str(qr_data['sessionId']), str(qr_data['nonce'])

    @staticmethod
    def render_image(payload: str) -> str:
        """Render the payload as a base64 PNG data URI."""
        qr = qrcode.QRCode(
            version=None,  # Auto-determine size
            error_correction=qrcode.constants.ERROR_CORRECT_M,
            box_size=10,
            border=4,
        )
        qr.add_data(payload)
        qr.make(fit=True)

        img = qr.make_image(fill_color="black", back_color="white")

        buffered = io.BytesIO()
        img.save(buffered, format="PNG")
        img_str = base64.b64encode(buffered.getvalue()).decode()

        return f"data:image/png;base64,{img_str}"
