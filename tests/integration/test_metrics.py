"""
Integration tests for metrics tracking.

These tests verify:
1. Metrics endpoint returns valid Prometheus format
2. Lifecycle transitions and settlement outcomes are counted
3. HTTP requests are labelled by route template
"""

import pytest
from httpx import AsyncClient
from prometheus_client import REGISTRY

from tests.integration.conftest import FakePaymentProcessor, auth


def sample(name: str, **labels) -> float:
    """Current value of a sample, treating an unseen series as zero."""
    return REGISTRY.get_sample_value(name, labels) or 0.0


# =============================================================================
# Metrics Endpoint Tests
# =============================================================================

class TestMetricsEndpoint:
    """Tests for GET /metrics endpoint."""

    @pytest.mark.asyncio
    async def test_metrics_endpoint_returns_prometheus_format(self, client: AsyncClient):
        response = await client.get("/metrics")

        assert response.status_code == 200

        content_type = response.headers.get("content-type", "")
        assert "text/plain" in content_type or "text/openmetrics" in content_type
        assert "# HELP loanlink_application_submitted_total" in response.text

    @pytest.mark.asyncio
    async def test_health_endpoint(self, client: AsyncClient):
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json()["version"]


# =============================================================================
# Business Metrics Tests
# =============================================================================

class TestLifecycleMetrics:
    """Tests for application lifecycle counters."""

    @pytest.mark.asyncio
    async def test_submission_and_approval_are_counted(
        self,
        client: AsyncClient,
        application_request: dict,
    ):
        submitted_before = sample("loanlink_application_submitted_total")
        approved_before = sample("loanlink_application_transitions_total", transition="approve")

        response = await client.post(
            "/applications",
            json=application_request,
            headers=auth("borrower-token"),
        )
        await client.patch(
            f"/applications/approve/{response.json()['id']}",
            headers=auth("manager-token"),
        )

        assert sample("loanlink_application_submitted_total") == submitted_before + 1
        assert (
            sample("loanlink_application_transitions_total", transition="approve")
            == approved_before + 1
        )

    @pytest.mark.asyncio
    async def test_refused_transition_is_not_counted(
        self,
        client: AsyncClient,
        submitted_application: dict,
    ):
        path = f"/applications/reject/{submitted_application['id']}"
        await client.patch(path, headers=auth("manager-token"))
        rejected = sample("loanlink_application_transitions_total", transition="reject")

        response = await client.patch(path, headers=auth("manager-token"))

        assert response.status_code == 409
        assert sample("loanlink_application_transitions_total", transition="reject") == rejected


class TestSettlementMetrics:
    """Tests for settlement outcome counters."""

    @pytest.mark.asyncio
    async def test_settlement_outcomes_and_volume(
        self,
        client: AsyncClient,
        submitted_application: dict,
        payment_processor: FakePaymentProcessor,
    ):
        settled = sample("loanlink_settlement_total", outcome="settled")
        replayed = sample("loanlink_settlement_total", outcome="already_settled")
        volume = sample("loanlink_payment_amount_dollars_total", currency="usd")

        checkout = await client.post(
            "/payment-checkout-system",
            json={"application_id": submitted_application["id"], "amount": "50.00"},
            headers=auth("borrower-token"),
        )
        session_id = checkout.json()["session_id"]
        payment_processor.complete(session_id)

        await client.patch("/payment-success", params={"session_id": session_id})
        await client.patch("/payment-success", params={"session_id": session_id})

        assert sample("loanlink_settlement_total", outcome="settled") == settled + 1
        assert sample("loanlink_settlement_total", outcome="already_settled") == replayed + 1
        assert sample("loanlink_payment_amount_dollars_total", currency="usd") == volume + 50.0

    @pytest.mark.asyncio
    async def test_incomplete_payment_is_counted(
        self,
        client: AsyncClient,
        submitted_application: dict,
    ):
        incomplete = sample("loanlink_settlement_total", outcome="incomplete")

        checkout = await client.post(
            "/payment-checkout-system",
            json={"application_id": submitted_application["id"], "amount": "50.00"},
            headers=auth("borrower-token"),
        )
        await client.patch(
            "/payment-success",
            params={"session_id": checkout.json()["session_id"]},
        )

        assert sample("loanlink_settlement_total", outcome="incomplete") == incomplete + 1


# =============================================================================
# Technical Metrics Tests
# =============================================================================

class TestHttpMetrics:
    """Tests for HTTP request metrics."""

    @pytest.mark.asyncio
    async def test_requests_labelled_by_route_template(
        self,
        client: AsyncClient,
        submitted_application: dict,
    ):
        labels = {
            "method": "GET",
            "endpoint": "/applications/{application_id}",
            "status": "200",
        }
        before = sample("loanlink_http_requests_total", **labels)

        await client.get(
            f"/applications/{submitted_application['id']}",
            headers=auth("borrower-token"),
        )

        assert sample("loanlink_http_requests_total", **labels) == before + 1


# =============================================================================
# Application Wiring Tests
# =============================================================================

class TestAppWiring:
    """Tests for the app-level setup in loanlink.main."""

    @pytest.mark.asyncio
    async def test_openapi_lists_marketplace_tags(self, client: AsyncClient):
        response = await client.get("/openapi.json")

        tags = [tag["name"] for tag in response.json()["tags"]]
        assert tags == ["Applications", "Payments", "Loans", "Users", "Health"]
        assert response.json()["info"]["title"] == "LoanLink"

    @pytest.mark.asyncio
    async def test_cors_exposes_request_id(self, client: AsyncClient):
        response = await client.get(
            "/health",
            headers={"Origin": "http://localhost:5173", "X-Request-ID": "req-123"},
        )

        assert response.headers["x-request-id"] == "req-123"
        assert "x-request-id" in response.headers["access-control-expose-headers"].lower()

    @pytest.mark.asyncio
    async def test_root_redirects_to_docs(self, client: AsyncClient):
        response = await client.get("/", follow_redirects=False)

        assert response.status_code == 307
        assert response.headers["location"] == "/docs"
