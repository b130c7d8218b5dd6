class ClientError(Exception):
    """Base for failures shown to the person at the kiosk."""


class DeviceError(ClientError):
    """Camera missing, busy or permission denied."""


class NetworkError(ClientError):
    """The server could not be reached."""


class SubmissionError(ClientError):
    """The server answered but refused or failed the submission."""

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.status_code = status_code


class CaptureBusyError(ClientError):
    """A capture is already in flight."""
