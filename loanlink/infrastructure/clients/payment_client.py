"""HTTP implementation of PaymentProcessorClient."""

import asyncio
import uuid
from typing import Any, Dict

import httpx
import structlog

from loanlink.core.config import settings
from loanlink.core.metrics import (
    record_upstream_failure,
    record_upstream_retry,
    track_upstream_latency,
)
from loanlink.domain.entities import ProcessorSession
from loanlink.domain.exceptions import (
    PaymentProviderException,
    PaymentProviderTimeoutException,
)
from loanlink.domain.interfaces import PaymentProcessorClient

logger = structlog.get_logger(__name__)

UPSTREAM = "payment"


class HttpPaymentProcessorClient(PaymentProcessorClient):
    """
    HTTP client for a Stripe-compatible hosted checkout API.

    Requests are form-encoded and authenticated with the secret key.
    Timeouts and transport errors are retried with exponential backoff;
    error responses from the processor are not.
    """

    def __init__(
        self,
        base_url: str | None = None,
        secret_key: str | None = None,
        timeout: float | None = None,
        max_retries: int | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._base_url = (base_url or settings.payment_api_url).rstrip("/")
        self._secret_key = secret_key if secret_key is not None else settings.payment_secret_key
        self._timeout = timeout or settings.payment_timeout
        self._max_retries = max_retries or settings.payment_max_retries
        self._transport = transport

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
        """Create a one-line-item payment-mode checkout session."""
        form = {
            "mode": "payment",
            "line_items[0][quantity]": "1",
            "line_items[0][price_data][currency]": currency,
            "line_items[0][price_data][unit_amount]": str(amount_minor),
            "line_items[0][price_data][product_data][name]": product_name,
            "customer_email": customer_email,
            "success_url": success_url,
            "cancel_url": cancel_url,
        }
        for key, value in metadata.items():
            form[f"metadata[{key}]"] = value

        # Same key on every attempt so a retried create is not duplicated
        headers = {"Idempotency-Key": str(uuid.uuid4())}

        data = await self._request("POST", "/checkout/sessions", data=form, headers=headers)
        return self._parse_session(data)

    async def retrieve_checkout_session(self, session_id: str) -> ProcessorSession:
        data = await self._request("GET", f"/checkout/sessions/{session_id}")
        return self._parse_session(data)

    async def _request(
        self,
        method: str,
        path: str,
        data: Dict[str, str] | None = None,
        headers: Dict[str, str] | None = None,
    ) -> Dict[str, Any]:
        """
        Issue a request against the processor.

        Implements retry logic with exponential backoff.
        """
        url = f"{self._base_url}{path}"
        request_headers = {"Authorization": f"Bearer {self._secret_key}"}
        request_headers.update(headers or {})

        last_exception: PaymentProviderException | None = None

        for attempt in range(self._max_retries):
            try:
                with track_upstream_latency(UPSTREAM):
                    async with httpx.AsyncClient(
                        timeout=self._timeout,
                        transport=self._transport,
                    ) as client:
                        response = await client.request(
                            method,
                            url,
                            data=data,
                            headers=request_headers,
                        )

                if response.status_code >= 400:
                    record_upstream_failure(UPSTREAM, "rejected")
                    raise PaymentProviderException(
                        message=f"Payment provider error: {self._error_message(response)}",
                        status_code=response.status_code,
                    )

                return self._decode(response)

            except httpx.TimeoutException:
                record_upstream_failure(UPSTREAM, "timeout")
                last_exception = PaymentProviderTimeoutException()
                logger.warning(
                    "payment_provider_timeout",
                    path=path,
                    attempt=attempt + 1,
                    max_retries=self._max_retries,
                )
            except httpx.HTTPError as e:
                record_upstream_failure(UPSTREAM, "error")
                last_exception = PaymentProviderException(
                    message=f"Payment provider unreachable: {str(e)}",
                )
                logger.error(
                    "payment_provider_error",
                    path=path,
                    attempt=attempt + 1,
                    error=str(e),
                )

            # Exponential backoff
            if attempt < self._max_retries - 1:
                record_upstream_retry(UPSTREAM)
                await asyncio.sleep(2**attempt * 0.1)

        raise last_exception or PaymentProviderException("Payment provider request failed")

    def _decode(self, response: httpx.Response) -> Dict[str, Any]:
        """Decode a success body, treating anything but a JSON object as a provider fault."""
        try:
            body = response.json()
        except ValueError:
            body = None

        if not isinstance(body, dict):
            record_upstream_failure(UPSTREAM, "malformed")
            logger.error(
                "payment_provider_malformed_response",
                status_code=response.status_code,
                content_type=response.headers.get("content-type"),
            )
            raise PaymentProviderException(
                message="Payment provider returned a malformed response",
                status_code=response.status_code,
            )

        return body

    def _error_message(self, response: httpx.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return response.text

        error = body.get("error") if isinstance(body, dict) else None
        if isinstance(error, dict) and error.get("message"):
            return error["message"]
        return response.text

    def _parse_session(self, data: Dict[str, Any]) -> ProcessorSession:
        """Parse a raw checkout session object."""
        try:
            payment_intent = data.get("payment_intent")
            if isinstance(payment_intent, dict):
                payment_intent = payment_intent.get("id")
            if payment_intent is not None and not isinstance(payment_intent, str):
                raise TypeError("payment_intent is not a string")

            metadata = data.get("metadata") or {}

            return ProcessorSession(
                id=data.get("id", ""),
                url=data.get("url"),
                payment_status=data.get("payment_status") or "unpaid",
                transaction_id=payment_intent,
                amount_total=int(data.get("amount_total") or 0),
                currency=(data.get("currency") or settings.payment_currency).lower(),
                customer_email=data.get("customer_email"),
                metadata={str(k): str(v) for k, v in metadata.items()},
            )
        except (AttributeError, TypeError, ValueError) as e:
            record_upstream_failure(UPSTREAM, "malformed")
            logger.error("payment_provider_malformed_session", error=str(e))
            raise PaymentProviderException(
                message=f"Payment provider returned a malformed session: {str(e)}",
            )
