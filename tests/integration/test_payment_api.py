"""
Integration tests for checkout and payment settlement.

These tests verify:
1. POST /payment-checkout-system - amount conversion and ownership rules
2. PATCH /payment-success - settlement, idempotency, incomplete payments
3. GET /payments and /admin/payments - ledger visibility
"""

from decimal import Decimal

import pytest
from httpx import AsyncClient

from tests.integration.conftest import BORROWER, FakePaymentProcessor, auth


async def open_checkout(client: AsyncClient, application_id: str, amount="50.00") -> dict:
    response = await client.post(
        "/payment-checkout-system",
        json={
            "application_id": application_id,
            "loan_title": "Market Stall Starter",
            "amount": amount,
        },
        headers=auth("borrower-token"),
    )
    assert response.status_code == 200
    return response.json()


# =============================================================================
# POST /payment-checkout-system Tests
# =============================================================================

class TestCreateCheckoutSession:
    """Tests for POST /payment-checkout-system."""

    @pytest.mark.asyncio
    async def test_checkout_converts_amount_to_minor_units(
        self,
        client: AsyncClient,
        submitted_application: dict,
        payment_processor: FakePaymentProcessor,
    ):
        data = await open_checkout(client, submitted_application["id"], amount=50.00)

        assert data["session_id"] == "cs_test_1"
        assert data["url"].startswith("https://checkout.test/")

        created = payment_processor.created[0]
        assert created["amount_minor"] == 5000
        assert created["currency"] == "usd"
        assert created["customer_email"] == BORROWER
        assert created["metadata"] == {
            "applicationId": submitted_application["id"],
            "payerEmail": BORROWER,
            "loanTitle": "Market Stall Starter",
        }
        assert created["success_url"].endswith(
            "/dashboard/payment-success?session_id={CHECKOUT_SESSION_ID}"
        )
        assert created["cancel_url"].endswith("/dashboard/my-loans")

    @pytest.mark.asyncio
    async def test_checkout_writes_nothing_locally(
        self,
        client: AsyncClient,
        submitted_application: dict,
    ):
        await open_checkout(client, submitted_application["id"])

        payments = await client.get("/payments", headers=auth("borrower-token"))
        current = await client.get(
            f"/applications/{submitted_application['id']}",
            headers=auth("borrower-token"),
        )

        assert payments.json() == []
        assert current.json()["application_fee_status"] == "Unpaid"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("amount", ["0", "-5", "0.004", "abc"])
    async def test_checkout_rejects_invalid_amounts(
        self,
        client: AsyncClient,
        submitted_application: dict,
        payment_processor: FakePaymentProcessor,
        amount: str,
    ):
        response = await client.post(
            "/payment-checkout-system",
            json={"application_id": submitted_application["id"], "amount": amount},
            headers=auth("borrower-token"),
        )

        assert response.status_code == 400
        assert payment_processor.created == []

    @pytest.mark.asyncio
    async def test_checkout_rounds_sub_cent_amounts(
        self,
        client: AsyncClient,
        submitted_application: dict,
        payment_processor: FakePaymentProcessor,
    ):
        await open_checkout(client, submitted_application["id"], amount="10.005")

        assert payment_processor.created[0]["amount_minor"] == 1001

    @pytest.mark.asyncio
    async def test_checkout_for_someone_elses_application_forbidden(
        self,
        client: AsyncClient,
        submitted_application: dict,
    ):
        response = await client.post(
            "/payment-checkout-system",
            json={"application_id": submitted_application["id"], "amount": "50.00"},
            headers=auth("other-token"),
        )

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_checkout_for_paid_application_returns_409(
        self,
        client: AsyncClient,
        submitted_application: dict,
    ):
        await client.patch(
            f"/applications/approve/{submitted_application['id']}",
            headers=auth("manager-token"),
        )

        response = await client.post(
            "/payment-checkout-system",
            json={"application_id": submitted_application["id"], "amount": "50.00"},
            headers=auth("borrower-token"),
        )

        assert response.status_code == 409
        assert response.json()["error"] == "FEE_ALREADY_PAID"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "path, token",
        [("reject", "manager-token"), ("cancel", "borrower-token")],
    )
    async def test_checkout_for_closed_application_returns_409(
        self,
        client: AsyncClient,
        submitted_application: dict,
        payment_processor: FakePaymentProcessor,
        path: str,
        token: str,
    ):
        await client.patch(
            f"/applications/{path}/{submitted_application['id']}",
            headers=auth(token),
        )

        response = await client.post(
            "/payment-checkout-system",
            json={"application_id": submitted_application["id"], "amount": "50.00"},
            headers=auth("borrower-token"),
        )

        assert response.status_code == 409
        assert response.json()["error"] == "APPLICATION_NOT_PAYABLE"
        assert payment_processor.created == []

    @pytest.mark.asyncio
    async def test_checkout_for_unknown_application_returns_404(self, client: AsyncClient):
        response = await client.post(
            "/payment-checkout-system",
            json={"application_id": "00000000-0000-0000-0000-000000000000", "amount": "50.00"},
            headers=auth("borrower-token"),
        )

        assert response.status_code == 404


# =============================================================================
# PATCH /payment-success Tests
# =============================================================================

class TestSettlePayment:
    """Tests for PATCH /payment-success."""

    @pytest.mark.asyncio
    async def test_settlement_marks_application_paid_and_records_payment(
        self,
        client: AsyncClient,
        submitted_application: dict,
        payment_processor: FakePaymentProcessor,
    ):
        checkout = await open_checkout(client, submitted_application["id"])
        transaction_id = payment_processor.complete(checkout["session_id"])

        response = await client.patch(
            "/payment-success",
            params={"session_id": checkout["session_id"]},
        )

        assert response.status_code == 200

        result = response.json()
        assert result["transaction_id"] == transaction_id
        assert result["tracking_id"].startswith("LL-")
        assert result["already_settled"] is False
        assert result["application_updated"] is True
        assert result["payment_recorded"] is True

        application = await client.get(
            f"/applications/{submitted_application['id']}",
            headers=auth("borrower-token"),
        )
        data = application.json()
        assert data["application_fee_status"] == "Paid"
        assert data["payment_status"] == "Paid"
        assert data["transaction_id"] == transaction_id
        assert data["tracking_id"] == result["tracking_id"]
        assert data["paid_at"] is not None
        # Payment does not decide the application
        assert data["status"] == "Pending"

        payments = (await client.get("/payments", headers=auth("borrower-token"))).json()
        assert len(payments) == 1
        assert Decimal(payments[0]["amount"]) == Decimal("50.00")
        assert payments[0]["transaction_id"] == transaction_id
        assert payments[0]["tracking_id"] == result["tracking_id"]
        assert payments[0]["payer_email"] == BORROWER

    @pytest.mark.asyncio
    async def test_repeated_settlement_is_idempotent(
        self,
        client: AsyncClient,
        submitted_application: dict,
        payment_processor: FakePaymentProcessor,
    ):
        checkout = await open_checkout(client, submitted_application["id"])
        payment_processor.complete(checkout["session_id"])
        params = {"session_id": checkout["session_id"]}

        first = (await client.patch("/payment-success", params=params)).json()
        second = (await client.patch("/payment-success", params=params)).json()
        third = (await client.patch("/payment-success", params=params)).json()

        assert second["already_settled"] is True
        assert third["already_settled"] is True
        assert second["transaction_id"] == first["transaction_id"]
        assert second["tracking_id"] == first["tracking_id"]
        assert third["tracking_id"] == first["tracking_id"]
        assert second["payment_recorded"] is False
        assert second["application_updated"] is False

        payments = (await client.get("/payments", headers=auth("borrower-token"))).json()
        assert len(payments) == 1

    @pytest.mark.asyncio
    async def test_unpaid_session_returns_400_and_writes_nothing(
        self,
        client: AsyncClient,
        submitted_application: dict,
    ):
        checkout = await open_checkout(client, submitted_application["id"])

        response = await client.patch(
            "/payment-success",
            params={"session_id": checkout["session_id"]},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "PAYMENT_INCOMPLETE"

        application = await client.get(
            f"/applications/{submitted_application['id']}",
            headers=auth("borrower-token"),
        )
        assert application.json()["application_fee_status"] == "Unpaid"
        assert application.json()["tracking_id"] is None

        payments = (await client.get("/payments", headers=auth("borrower-token"))).json()
        assert payments == []

    @pytest.mark.asyncio
    async def test_missing_session_id_returns_400(self, client: AsyncClient):
        response = await client.patch("/payment-success")

        assert response.status_code == 400
        assert response.json()["error"] == "INVALID_PAYMENT_REQUEST"

    @pytest.mark.asyncio
    async def test_unknown_session_returns_502(self, client: AsyncClient):
        response = await client.patch("/payment-success", params={"session_id": "cs_missing"})

        assert response.status_code == 502
        assert response.json()["error"] == "PAYMENT_PROVIDER_ERROR"

    @pytest.mark.asyncio
    async def test_processor_timeout_returns_502_and_writes_nothing(
        self,
        client: AsyncClient,
        submitted_application: dict,
        payment_processor: FakePaymentProcessor,
    ):
        checkout = await open_checkout(client, submitted_application["id"])
        payment_processor.complete(checkout["session_id"])
        payment_processor.fail_retrieve = True

        response = await client.patch(
            "/payment-success",
            params={"session_id": checkout["session_id"]},
        )

        assert response.status_code == 502
        assert response.json()["error"] == "PAYMENT_PROVIDER_TIMEOUT"

        payments = (await client.get("/payments", headers=auth("borrower-token"))).json()
        assert payments == []

    @pytest.mark.asyncio
    async def test_settlement_for_deleted_application_returns_404(
        self,
        client: AsyncClient,
        submitted_application: dict,
        payment_processor: FakePaymentProcessor,
    ):
        checkout = await open_checkout(client, submitted_application["id"])
        payment_processor.complete(checkout["session_id"])
        await client.delete(
            f"/applications/{submitted_application['id']}",
            headers=auth("borrower-token"),
        )

        response = await client.patch(
            "/payment-success",
            params={"session_id": checkout["session_id"]},
        )

        assert response.status_code == 404


# =============================================================================
# Payment listing Tests
# =============================================================================

class TestListPayments:
    """Tests for GET /payments and GET /admin/payments."""

    @pytest.mark.asyncio
    async def test_listing_another_users_payments_forbidden(self, client: AsyncClient):
        response = await client.get(
            "/payments",
            params={"email": BORROWER},
            headers=auth("other-token"),
        )

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_listing_own_payments_by_email(self, client: AsyncClient):
        response = await client.get(
            "/payments",
            params={"email": BORROWER},
            headers=auth("borrower-token"),
        )

        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_own_history_is_newest_first(
        self,
        client: AsyncClient,
        application_request: dict,
        payment_processor: FakePaymentProcessor,
    ):
        settled = []
        for _ in range(2):
            submitted = await client.post(
                "/applications",
                json=application_request,
                headers=auth("borrower-token"),
            )
            checkout = await open_checkout(client, submitted.json()["id"])
            payment_processor.complete(checkout["session_id"])
            result = await client.patch(
                "/payment-success",
                params={"session_id": checkout["session_id"]},
            )
            settled.append(result.json()["transaction_id"])

        response = await client.get("/payments", headers=auth("borrower-token"))

        assert response.status_code == 200
        assert [p["transaction_id"] for p in response.json()] == list(reversed(settled))

    @pytest.mark.asyncio
    async def test_email_filter_ignores_case(
        self,
        client: AsyncClient,
        submitted_application: dict,
        payment_processor: FakePaymentProcessor,
    ):
        checkout = await open_checkout(client, submitted_application["id"])
        payment_processor.complete(checkout["session_id"])
        await client.patch("/payment-success", params={"session_id": checkout["session_id"]})

        exact = await client.get(
            "/payments",
            params={"email": BORROWER},
            headers=auth("borrower-token"),
        )
        shouted = await client.get(
            "/payments",
            params={"email": BORROWER.upper()},
            headers=auth("borrower-token"),
        )

        assert exact.status_code == 200
        assert shouted.status_code == 200
        assert len(exact.json()) == 1
        assert shouted.json() == exact.json()

    @pytest.mark.asyncio
    async def test_admin_lists_all_payments(
        self,
        client: AsyncClient,
        submitted_application: dict,
        payment_processor: FakePaymentProcessor,
    ):
        checkout = await open_checkout(client, submitted_application["id"])
        payment_processor.complete(checkout["session_id"])
        await client.patch("/payment-success", params={"session_id": checkout["session_id"]})

        admin = await client.get("/admin/payments", headers=auth("admin-token"))
        borrower = await client.get("/admin/payments", headers=auth("borrower-token"))

        assert admin.status_code == 200
        assert len(admin.json()) == 1
        assert borrower.status_code == 403

    @pytest.mark.asyncio
    async def test_payments_require_authentication(self, client: AsyncClient):
        response = await client.get("/payments")

        assert response.status_code == 401
