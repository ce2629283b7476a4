"""Application lifecycle exceptions."""

from .base import ConflictException, NotFoundException, ValidationException


class ApplicationNotFoundException(NotFoundException):
    """Raised when an application cannot be found."""

    def __init__(self, application_id: str):
        super().__init__(
            message=f"Application not found: {application_id}",
            code="APPLICATION_NOT_FOUND",
        )
        self.application_id = application_id


class InvalidApplicationException(ValidationException):
    """Raised when a submitted application is invalid."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            code="INVALID_APPLICATION",
        )


class InvalidStatusTransitionException(ConflictException):
    """Raised when a lifecycle transition is not allowed from the current status."""

    def __init__(self, application_id: str, current_status: str, action: str):
        super().__init__(
            message=f"Cannot {action} application {application_id} in status {current_status}",
            code="INVALID_STATUS_TRANSITION",
        )
        self.application_id = application_id
        self.current_status = current_status
        self.action = action
