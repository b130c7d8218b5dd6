"""Kiosk-side capture client for the attendance server."""

from .cache_mirror import CachedAttendance, LocalCacheMirror
from .camera import OpenCVCamera
from .capture import CaptureClient
from .errors import CaptureBusyError, ClientError, DeviceError, NetworkError, SubmissionError

__all__ = [
    "CachedAttendance",
    "LocalCacheMirror",
    "OpenCVCamera",
    "CaptureClient",
    "CaptureBusyError",
    "ClientError",
    "DeviceError",
    "NetworkError",
    "SubmissionError",
]
