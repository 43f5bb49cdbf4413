"""Custom exceptions for Jump Marker."""


class JumpMarkerError(Exception):
    """Base exception for all Jump Marker errors."""

    pass


class InvalidFrameRateError(JumpMarkerError):
    """Frame rate is not a finite value between 1 and 1000."""

    def __init__(self, message: str = "Please enter a valid FPS value between 1 and 1000") -> None:
        self.message = message
        super().__init__(self.message)


class IncompleteSessionError(JumpMarkerError):
    """Analysis was requested before both valid marks were set."""

    def __init__(self, message: str = "Please mark both take-off and landing frames") -> None:
        self.message = message
        super().__init__(self.message)


class SessionNotStartedError(JumpMarkerError):
    """An editing operation was invoked before a frame rate was confirmed."""

    def __init__(self, message: str = "Confirm the video frame rate first") -> None:
        self.message = message
        super().__init__(self.message)


class MediaAcquisitionError(JumpMarkerError):
    """Video file or camera could not be opened."""

    def __init__(self, message: str = "Could not open video source") -> None:
        self.message = message
        super().__init__(self.message)


class ShareUnavailableError(JumpMarkerError):
    """A share channel is unavailable or failed to deliver."""

    def __init__(self, message: str = "Sharing is not available") -> None:
        self.message = message
        super().__init__(self.message)


class HandoffError(JumpMarkerError):
    """Stored result record is missing or malformed."""

    def __init__(self, message: str = "No stored jump results") -> None:
        self.message = message
        super().__init__(self.message)


class BenchmarkError(JumpMarkerError):
    """Unknown benchmark category or malformed benchmark table."""

    def __init__(self, message: str = "Invalid benchmark table") -> None:
        self.message = message
        super().__init__(self.message)
