"""External client interfaces."""

from abc import ABC, abstractmethod
from typing import Dict

from loanlink.domain.entities import ProcessorSession


class PaymentProcessorClient(ABC):
    """
    Abstract client for the hosted-checkout payment processor.

    Amounts always cross this boundary as integer minor units.
    """

    @abstractmethod
    async def create_checkout_session(
        self,
        amount_minor: int,
        currency: str,
        product_name: str,
        customer_email: str,
        metadata: Dict[str, str],
        success_url: str,
        cancel_url: str,
    ) -> ProcessorSession:
        """
        Create a hosted checkout session.

        Returns:
            The created session, including its redirect URL

        Raises:
            PaymentProviderException: If the processor rejects the request
            PaymentProviderTimeoutException: If the request times out
        """
        ...

    @abstractmethod
    async def retrieve_checkout_session(self, session_id: str) -> ProcessorSession:
        """
        Retrieve the current state of a checkout session.

        Raises:
            PaymentProviderException: If the session is unknown or the
                processor errors
            PaymentProviderTimeoutException: If the request times out
        """
        ...


class IdentityVerifier(ABC):
    """
    Abstract client for the external identity provider.

    Validates bearer credentials issued by the provider.
    """

    @abstractmethod
    async def verify_token(self, token: str) -> str:
        """
        Verify an ID token and return the verified principal email.

        Raises:
            InvalidCredentialException: If the token is invalid or expired
            IdentityProviderException: If the provider is unreachable
        """
        ...
