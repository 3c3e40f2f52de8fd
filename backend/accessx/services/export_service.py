"""Attendance list export for instructors."""
import io

import pandas as pd

EXPORT_COLUMNS = ['email', 'wallet_address', 'token_id', 'tx_hash', 'timestamp']


class ExportService:
    """Service for turning attendance lists into downloadable files."""

    @staticmethod
    def to_dataframe(records) -> pd.DataFrame:
        rows = [record.to_record(exclude=['signature', 'student_image']) for record in records]
        df = pd.DataFrame(rows, columns=EXPORT_COLUMNS)
        return df

    @staticmethod
    def attendance_csv(records) -> bytes:
        """CSV with one row per record, oldest first."""
        buffer = io.StringIO()
        ExportService.to_dataframe(records).to_csv(buffer, index=False)
        return buffer.getvalue().encode('utf-8')
