"""External API client implementations."""

from .identity_client import HttpIdentityVerifierClient
from .payment_client import HttpPaymentProcessorClient

__all__ = [
    "HttpIdentityVerifierClient",
    "HttpPaymentProcessorClient",
]
