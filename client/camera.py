"""
client/camera.py
-----------------
Thin OpenCV wrapper around one camera device handle.
"""

import logging

import cv2

from .errors import DeviceError

logger = logging.getLogger(__name__)

JPEG_QUALITY = 0.8


class OpenCVCamera:

    def __init__(self, index=0, backend=None):
        self.index = index
        self.backend = backend
        self._cap = None

    @property
    def is_open(self):
        return self._cap is not None

    def open(self):
        if self.backend is None:
            cap = cv2.VideoCapture(self.index)
        else:
            cap = cv2.VideoCapture(self.index, self.backend)

        if not cap.isOpened():
            cap.release()
            raise DeviceError("Could not access the camera. Make sure it is connected and permitted.")
        self._cap = cap
        logger.debug("Camera %s opened", self.index)

    def read_frame(self):
        if self._cap is None:
            raise DeviceError("Camera is not started.")
        ok, frame = self._cap.read()
        if not ok or frame is None:
            raise DeviceError("Camera returned no frame.")
        return frame

    def release(self):
        if self._cap is not None:
            self._cap.release()
            self._cap = None
            logger.debug("Camera %s released", self.index)


def encode_jpeg(frame, quality=JPEG_QUALITY):
    """Lossy JPEG bytes of `frame`; quality is a 0..1 fraction."""
    ok, encoded = cv2.imencode(".jpg", frame, [int(cv2.IMWRITE_JPEG_QUALITY), int(round(quality * 100))])
    if not ok:
        raise DeviceError("Could not encode the captured frame.")
    return encoded.tobytes()
