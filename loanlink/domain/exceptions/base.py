"""Base domain exceptions and error categories."""


class DomainException(Exception):
    """
    Base exception for all domain-level errors.

    Domain exceptions represent business rule violations or
    domain-specific error conditions.
    """

    def __init__(self, message: str, code: str = "DOMAIN_ERROR"):
        self.message = message
        self.code = code
        super().__init__(self.message)


class ValidationException(DomainException):
    """Raised when input is malformed or missing."""

    def __init__(self, message: str, code: str = "VALIDATION_ERROR"):
        super().__init__(message=message, code=code)


class UnauthorizedException(DomainException):
    """Raised when a credential is missing or invalid."""

    def __init__(self, message: str = "Unauthorized access", code: str = "UNAUTHORIZED"):
        super().__init__(message=message, code=code)


class ForbiddenException(DomainException):
    """Raised when an authenticated principal lacks the role or ownership required."""

    def __init__(self, message: str = "Forbidden", code: str = "FORBIDDEN"):
        super().__init__(message=message, code=code)


class NotFoundException(DomainException):
    """Raised when a referenced entity does not exist."""

    def __init__(self, message: str, code: str = "NOT_FOUND"):
        super().__init__(message=message, code=code)


class ConflictException(DomainException):
    """Raised when an operation conflicts with the current state of a record."""

    def __init__(self, message: str, code: str = "CONFLICT"):
        super().__init__(message=message, code=code)


class UpstreamException(DomainException):
    """Raised when an external provider is unreachable or returns an error."""

    def __init__(
        self,
        message: str,
        code: str = "UPSTREAM_ERROR",
        status_code: int | None = None,
    ):
        super().__init__(message=message, code=code)
        self.status_code = status_code
