"""Authentication and authorization exceptions."""

from .base import ForbiddenException, UnauthorizedException, UpstreamException


class MissingCredentialException(UnauthorizedException):
    """Raised when a request carries no bearer credential."""

    def __init__(self):
        super().__init__(
            message="Unauthorized: token missing",
            code="TOKEN_MISSING",
        )


class InvalidCredentialException(UnauthorizedException):
    """Raised when the identity provider rejects a credential."""

    def __init__(self):
        super().__init__(
            message="Invalid token",
            code="TOKEN_INVALID",
        )


class RoleRequiredException(ForbiddenException):
    """Raised when a principal's role does not satisfy an operation."""

    def __init__(self, email: str, required_roles: list[str]):
        super().__init__(
            message=f"Forbidden: {' or '.join(required_roles)} only",
            code="ROLE_REQUIRED",
        )
        self.email = email
        self.required_roles = required_roles


class AccountSuspendedException(ForbiddenException):
    """Raised when a suspended account attempts a role-gated operation."""

    def __init__(self, email: str):
        super().__init__(
            message="Forbidden: account suspended",
            code="ACCOUNT_SUSPENDED",
        )
        self.email = email


class OwnershipRequiredException(ForbiddenException):
    """Raised when a principal acts on a record they do not own."""

    def __init__(self, message: str = "Forbidden: not the owner of this record"):
        super().__init__(message=message, code="OWNERSHIP_REQUIRED")


class IdentityProviderException(UpstreamException):
    """Raised when the identity provider is unreachable or errors."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(
            message=message,
            code="IDENTITY_PROVIDER_ERROR",
            status_code=status_code,
        )
