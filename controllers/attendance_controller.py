import logging

from flask import Blueprint, current_app, request, send_file, send_from_directory

from utils.auth import admin_required
from utils.errors import PersistenceError, StoreError, ValidationError
from utils.http import missing_fields, success
from utils.photo_store import photo_name
from utils.report import XLSX_MIMETYPE, build_attendance_workbook
from utils.services import get_services

logger = logging.getLogger(__name__)

attendance_bp = Blueprint("attendance", __name__)

REQUIRED_FIELDS = ("employerId", "loggerName")


# ==========================================================
# MARK ATTENDANCE (photo upload)
# ==========================================================
@attendance_bp.route("/attendance", methods=["POST"])
@attendance_bp.route("/api/attendance/mark", methods=["POST"])
def mark_attendance():
    photo = request.files.get("photo")
    buffer = photo.read() if photo else b""
    if not buffer:
        raise ValidationError("No photo file was uploaded.")

    missing = missing_fields(request.form, REQUIRED_FIELDS)
    if missing:
        raise ValidationError(f"Missing required field(s): {', '.join(missing)}.")

    employer_id = request.form["employerId"].strip()
    logger_name = request.form["loggerName"].strip()
    client_timestamp = request.form.get("timestamp")

    services = get_services()
    now = services.attendance.clock()
    epoch_millis = int(now.timestamp() * 1000)

    # Photo first: a record must never point at a missing photo
    stored = services.photo_store.store(buffer, photo_name(employer_id, epoch_millis))

    try:
        record = services.attendance.create(
            employer_id, logger_name, stored, client_timestamp=client_timestamp, now=now
        )
    except PersistenceError:
        discard_orphan_photo(services.photo_store, stored)
        raise

    logger.info("Attendance recorded for %s at %s %s", employer_id, record.date, record.time)
    return success("Attendance recorded and photo saved!", record=record.summary())


def discard_orphan_photo(photo_store, stored):
    if not stored.handle:
        logger.warning("Orphaned photo %s has no handle; left in store", stored.url)
        return
    try:
        photo_store.delete(stored.handle)
    except StoreError:
        logger.exception("Could not remove orphaned photo %s", stored.handle)


# ==========================================================
# EXCEL REPORT (admin only)
# ==========================================================
@attendance_bp.route("/attendance/report", methods=["GET"])
@attendance_bp.route("/api/attendance/report", methods=["GET"])
@admin_required
def download_report():
    records = get_services().attendance.list()
    output = build_attendance_workbook(records)

    return send_file(output, mimetype=XLSX_MIMETYPE, as_attachment=True,
                     download_name="attendance_report.xlsx")


# ==========================================================
# LOCALLY STORED PHOTOS
# ==========================================================
@attendance_bp.route("/uploads/<path:filename>", methods=["GET"])
def uploaded_photo(filename):
    return send_from_directory(current_app.config["UPLOAD_FOLDER"], filename)
