class DomainError(Exception):
    """Base exception for errors surfaced to the user as a notification."""

    default_message = "Something went wrong."

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return str(self)


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class CameraError(DomainError):
    """Camera could not be started."""


class PermissionDenied(CameraError):
    default_message = "Camera permission denied. Please allow camera access for this device."


class DeviceUnavailable(CameraError):
    default_message = "Unable to access camera. Please check your device has a camera."


class SourceNotReady(DomainError):
    default_message = "Camera is not ready yet. Please wait a moment."


class MissingPhoto(DomainError):
    default_message = "Please capture a photo before checking in."


class UploadFailed(DomainError):
    default_message = "Photo upload failed."


class RecordWriteFailed(DomainError):
    default_message = "Could not save the attendance record."


class QueryFailed(DomainError):
    default_message = "Could not load data."


class RoleUpdateFailed(DomainError):
    default_message = "Could not update the user role."


class BackendError(Exception):
    """Raised by the data store / object storage boundary.

    Carries the backing service's message verbatim.
    """


class StorageError(BackendError):
    """Object storage rejected an operation."""
