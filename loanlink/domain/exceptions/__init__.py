"""Domain Exceptions - Business rule violations and domain errors."""

from .base import (
    DomainException,
    ValidationException,
    UnauthorizedException,
    ForbiddenException,
    NotFoundException,
    ConflictException,
    UpstreamException,
)
from .auth import (
    MissingCredentialException,
    InvalidCredentialException,
    RoleRequiredException,
    AccountSuspendedException,
    OwnershipRequiredException,
    IdentityProviderException,
)
from .application import (
    ApplicationNotFoundException,
    InvalidApplicationException,
    InvalidStatusTransitionException,
)
from .payment import (
    InvalidPaymentRequestException,
    PaymentIncompleteException,
    ApplicationFeeAlreadyPaidException,
    ApplicationNotPayableException,
    PaymentProviderException,
    PaymentProviderTimeoutException,
)
from .catalog import LoanNotFoundException, UserNotFoundException

__all__ = [
    "DomainException",
    "ValidationException",
    "UnauthorizedException",
    "ForbiddenException",
    "NotFoundException",
    "ConflictException",
    "UpstreamException",
    "MissingCredentialException",
    "InvalidCredentialException",
    "RoleRequiredException",
    "AccountSuspendedException",
    "OwnershipRequiredException",
    "IdentityProviderException",
    "ApplicationNotFoundException",
    "InvalidApplicationException",
    "InvalidStatusTransitionException",
    "InvalidPaymentRequestException",
    "PaymentIncompleteException",
    "ApplicationFeeAlreadyPaidException",
    "ApplicationNotPayableException",
    "PaymentProviderException",
    "PaymentProviderTimeoutException",
    "LoanNotFoundException",
    "UserNotFoundException",
]
