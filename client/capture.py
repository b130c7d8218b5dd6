"""
client/capture.py
------------------
Turns one button press into one uploaded attendance photo.

States: idle <-> camera_active (toggle). A capture freezes one frame,
closes the camera straight away and uploads; the person has to start the
camera again before another capture. Only one capture runs at a time.
"""

import logging
from datetime import datetime, timezone

import requests

from .camera import OpenCVCamera, encode_jpeg
from .errors import CaptureBusyError, DeviceError, NetworkError, SubmissionError

logger = logging.getLogger(__name__)

IDLE = "idle"
CAMERA_ACTIVE = "camera_active"

MARK_PATH = "/api/attendance/mark"


class CaptureClient:

    def __init__(self, server_url, employer_id, logger_name, cache,
                 camera_factory=OpenCVCamera, http=None, timeout=30):
        self.server_url = server_url.rstrip("/")
        self.employer_id = employer_id
        self.logger_name = logger_name
        self.cache = cache
        self.camera_factory = camera_factory
        self.http = http or requests
        self.timeout = timeout

        self.camera = None
        self.busy = False

    @property
    def state(self):
        return CAMERA_ACTIVE if self.camera is not None else IDLE

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.stop_camera()

    # -------------------------------------------------------------
    # CAMERA
    # -------------------------------------------------------------
    def start_camera(self):
        if self.camera is not None:
            return self.camera

        camera = self.camera_factory()
        try:
            camera.open()
        except DeviceError:
            camera.release()
            logger.warning("Camera could not be opened")
            raise
        self.camera = camera
        return camera

    def stop_camera(self):
        camera, self.camera = self.camera, None
        if camera is not None:
            camera.release()

    def toggle_camera(self):
        if self.camera is not None:
            self.stop_camera()
        else:
            self.start_camera()
        return self.state

    # -------------------------------------------------------------
    # CAPTURE + SUBMIT
    # -------------------------------------------------------------
    def capture_and_submit(self):
        if self.busy:
            raise CaptureBusyError("A capture is already being recorded.")
        if self.camera is None:
            raise DeviceError("Start the camera before capturing.")

        self.busy = True
        try:
            try:
                frame = self.camera.read_frame()
                photo = encode_jpeg(frame)
            finally:
                # One shot per camera session
                self.stop_camera()

            record = self._submit(photo, client_timestamp())
            try:
                self.cache.set(record["date"], record["time"])
            except OSError as e:
                logger.warning("Attendance saved but local cache not updated: %s", e)
            logger.info("Attendance saved: %s %s", record["date"], record["time"])
            return record
        finally:
            self.busy = False

    def _submit(self, photo, timestamp):
        epoch_millis = int(datetime.now(timezone.utc).timestamp() * 1000)
        files = {"photo": (f"{self.employer_id}_{epoch_millis}.jpeg", photo, "image/jpeg")}
        data = {
            "timestamp": timestamp,
            "employerId": self.employer_id,
            "loggerName": self.logger_name,
        }

        try:
            r = self.http.post(self.server_url + MARK_PATH, files=files, data=data, timeout=self.timeout)
        except requests.RequestException as e:
            raise NetworkError("Failed to connect to the server.") from e

        try:
            body = r.json()
        except ValueError:
            raise SubmissionError(f"Unexpected server response ({r.status_code}).", r.status_code)

        if not body.get("success"):
            raise SubmissionError(body.get("message") or "Attendance was not recorded.", r.status_code)

        record = body.get("record") or {}
        if not record.get("date") or not record.get("time"):
            raise SubmissionError("Server response did not include the attendance record.", r.status_code)
        return record


def client_timestamp():
    """ISO-8601 device time; the server ignores it for ordering."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
