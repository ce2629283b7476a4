"""HTTP implementation of IdentityVerifier."""

import httpx
import structlog

from loanlink.core.config import settings
from loanlink.core.metrics import record_upstream_failure, track_upstream_latency
from loanlink.domain.exceptions import (
    IdentityProviderException,
    InvalidCredentialException,
)
from loanlink.domain.interfaces import IdentityVerifier

logger = structlog.get_logger(__name__)

UPSTREAM = "identity"


class HttpIdentityVerifierClient(IdentityVerifier):
    """
    Verifies ID tokens against an Identity Toolkit compatible endpoint.

    A token is valid when ``accounts:lookup`` resolves it to an account
    with an email address.
    """

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._base_url = (base_url or settings.identity_api_url).rstrip("/")
        self._api_key = api_key if api_key is not None else settings.identity_api_key
        self._timeout = timeout or settings.identity_timeout
        self._transport = transport

    async def verify_token(self, token: str) -> str:
        url = f"{self._base_url}/accounts:lookup"

        try:
            with track_upstream_latency(UPSTREAM):
                async with httpx.AsyncClient(
                    timeout=self._timeout,
                    transport=self._transport,
                ) as client:
                    response = await client.post(
                        url,
                        params={"key": self._api_key},
                        json={"idToken": token},
                    )
        except httpx.TimeoutException:
            record_upstream_failure(UPSTREAM, "timeout")
            logger.warning("identity_provider_timeout")
            raise IdentityProviderException("Identity provider request timed out")
        except httpx.HTTPError as e:
            record_upstream_failure(UPSTREAM, "error")
            logger.error("identity_provider_error", error=str(e))
            raise IdentityProviderException(f"Identity provider unreachable: {str(e)}")

        # Expired, revoked and malformed tokens all come back as 400
        if response.status_code in (400, 401, 403, 404):
            record_upstream_failure(UPSTREAM, "rejected")
            raise InvalidCredentialException()

        if response.status_code >= 400:
            record_upstream_failure(UPSTREAM, "error")
            raise IdentityProviderException(
                message=f"Identity provider error: {response.text}",
                status_code=response.status_code,
            )

        email = self._extract_email(response)

        if not email:
            raise InvalidCredentialException()

        return email

    def _extract_email(self, response: httpx.Response) -> str | None:
        """Read the first account's email from an accounts:lookup body."""
        try:
            body = response.json()
            users = body.get("users") or []
            account = users[0] if users else {}
            email = account.get("email")
            if email is not None and not isinstance(email, str):
                raise TypeError("email is not a string")
        except (AttributeError, TypeError, KeyError, ValueError) as e:
            record_upstream_failure(UPSTREAM, "malformed")
            logger.error("identity_provider_malformed_response", error=str(e))
            raise IdentityProviderException(
                message="Identity provider returned a malformed response",
                status_code=response.status_code,
            )

        return email
