import logging
from datetime import datetime
from html import escape

from flask import Blueprint

from models.leave import LeaveRequest
from utils.errors import ValidationError
from utils.http import missing_fields, request_fields, success
from utils.notifier import NotificationError
from utils.services import get_services

logger = logging.getLogger(__name__)

leave_bp = Blueprint("leave", __name__, url_prefix="/api/leave")

LEAVE_FIELDS = ("employerId", "loggerName", "leaveType", "startDate", "endDate", "reason")


def _parse_day(value, label):
    try:
        return datetime.strptime(str(value).strip()[:10], "%Y-%m-%d")
    except ValueError:
        raise ValidationError(f"{label} must be a date in YYYY-MM-DD format.")


# -------------------------------------------------------------
# SUBMIT LEAVE REQUEST
# -------------------------------------------------------------
@leave_bp.route("/submit", methods=["POST"])
def submit_leave():
    fields = request_fields()
    if missing_fields(fields, LEAVE_FIELDS):
        raise ValidationError("All leave form fields are required.")

    start_date = _parse_day(fields["startDate"], "Start date")
    end_date = _parse_day(fields["endDate"], "End date")
    if end_date < start_date:
        raise ValidationError("End date cannot be before start date.")

    leave = LeaveRequest(
        employer_id=str(fields["employerId"]).strip(),
        logger_name=str(fields["loggerName"]).strip(),
        leave_type=fields["leaveType"],
        start_date=start_date,
        end_date=end_date,
        reason=fields["reason"],
    )
    services = get_services()
    services.leaves.create(leave)

    # Notification is best effort; the request is already saved
    try:
        services.notifier.send(*leave_notification(leave))
    except NotificationError as e:
        logger.warning("Leave notification failed: %s", e)
    except Exception:
        logger.exception("Leave notification failed unexpectedly")

    return success("Leave request submitted successfully! HR has been notified.")


def leave_notification(leave):
    subject = f"[EPPI HR] NEW PENDING LEAVE REQUEST: {leave.logger_name} ({leave.employer_id})"
    html = (
        "<p>A new leave request has been submitted and is pending your approval.</p>"
        f"<p><strong>Employee:</strong> {escape(leave.logger_name)} ({escape(leave.employer_id)})</p>"
        f"<p><strong>Leave Type:</strong> {escape(str(leave.leave_type))}</p>"
        f"<p><strong>Period:</strong> {leave.start_date:%Y-%m-%d} to {leave.end_date:%Y-%m-%d}</p>"
        f"<p><strong>Reason:</strong> {escape(str(leave.reason))}</p>"
    )
    return subject, html
