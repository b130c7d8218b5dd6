"""
utils/errors.py
-----------------
Server-side failures of the attendance pipeline. Each carries the HTTP
status the API answers with; the app factory turns them into
{"success": false, "message": ...} responses.
"""


class AttendanceError(Exception):
    status_code = 500
    default_message = "Server error."

    def __init__(self, message=None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message


class ValidationError(AttendanceError):
    status_code = 400
    default_message = "Invalid request."


class AccessDeniedError(AttendanceError):
    status_code = 403
    default_message = "Access Denied."


class ConflictError(AttendanceError):
    status_code = 409
    default_message = "Resource already exists."


class StoreError(AttendanceError):
    """The photo could not be persisted. No record is created."""
    default_message = "Server error saving attendance photo."


class PersistenceError(AttendanceError):
    """The database rejected or could not take the write."""
    default_message = "Server error saving attendance record."
