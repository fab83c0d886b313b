"""
Tests for storefront/services/payment_client.py
"""
from unittest.mock import MagicMock, patch

import pytest
import requests
from fastapi.testclient import TestClient

from storefront.domain.exceptions import PaymentDeclined, PaymentFailed, PaymentOutcomeUnknown
from storefront.payment_mock.main import app as mock_provider
from storefront.services.payment_client import PaymentClient


def _response(status_code, body):
    resp = MagicMock(spec=requests.Response)
    resp.status_code = status_code
    resp.json.return_value = body
    return resp


@pytest.fixture
def payment_client():
    return PaymentClient(base_url="https://stripe.test/", secret_key="sk_test_123")


class TestCreateCharge:

    def test_successful_charge(self, payment_client):
        body = {"id": "ch_1", "amount": 2500, "currency": "usd", "status": "succeeded"}

        with patch("storefront.services.payment_client.requests.post", return_value=_response(200, body)) as post:
            charge = payment_client.create_charge(2500, "USD", "tok_visa", idempotency_key="key-1")

        assert charge.id == "ch_1"
        assert charge.amount == 2500
        assert charge.currency == "USD"

        args, kwargs = post.call_args
        assert args[0] == "https://stripe.test/v1/charges"
        assert kwargs["data"] == {"amount": 2500, "currency": "usd", "source": "tok_visa"}
        assert kwargs["headers"] == {"Idempotency-Key": "key-1"}
        assert kwargs["auth"] == ("sk_test_123", "")

    def test_card_declined(self, payment_client):
        body = {"error": {"type": "card_error", "code": "card_declined", "decline_code": "insufficient_funds",
                          "message": "Your card has insufficient funds."}}

        with patch("storefront.services.payment_client.requests.post", return_value=_response(402, body)):
            with pytest.raises(PaymentDeclined) as exc:
                payment_client.create_charge(2500, "USD", "tok_x", idempotency_key="key-1")

        assert exc.value.message == "Your card has insufficient funds."
        assert exc.value.details["decline_code"] == "insufficient_funds"

    def test_provider_error_is_not_retried(self, payment_client):
        body = {"error": {"type": "invalid_request_error", "message": "Invalid currency"}}

        with patch("storefront.services.payment_client.requests.post", return_value=_response(400, body)) as post:
            with pytest.raises(PaymentFailed) as exc:
                payment_client.create_charge(2500, "XXX", "tok_visa", idempotency_key="key-1")

        assert not isinstance(exc.value, PaymentDeclined)
        assert post.call_count == 1

    def test_network_failure_retried_then_reported(self, payment_client):
        with patch(
            "storefront.services.payment_client.requests.post",
            side_effect=requests.ConnectionError("connection reset"),
        ) as post:
            with pytest.raises(PaymentFailed):
                payment_client.create_charge(2500, "USD", "tok_visa", idempotency_key="key-1")

        assert post.call_count == 3
        # to samo Idempotency-Key przy kazdej probie
        assert {c.kwargs["headers"]["Idempotency-Key"] for c in post.call_args_list} == {"key-1"}

    def test_transient_failure_recovers(self, payment_client):
        ok = _response(200, {"id": "ch_2", "amount": 100, "currency": "usd"})

        with patch(
            "storefront.services.payment_client.requests.post",
            side_effect=[requests.Timeout("slow"), ok],
        ) as post:
            charge = payment_client.create_charge(100, "USD", "tok_visa", idempotency_key="key-2")

        assert charge.id == "ch_2"
        assert post.call_count == 2

    def test_read_timeout_outcome_is_unknown(self, payment_client):
        """Zadanie wyslane, odpowiedz nie dotarla: nie wolno twierdzic ze nic nie pobrano."""
        with patch(
            "storefront.services.payment_client.requests.post",
            side_effect=requests.ReadTimeout("read timed out"),
        ) as post:
            with pytest.raises(PaymentOutcomeUnknown) as exc:
                payment_client.create_charge(2500, "USD", "tok_visa", idempotency_key="key-3")

        assert not isinstance(exc.value, PaymentFailed)
        assert "not been charged" not in exc.value.message
        assert exc.value.idempotency_key == "key-3"
        assert post.call_count == 3

    def test_connect_timeout_means_not_charged(self, payment_client):
        with patch(
            "storefront.services.payment_client.requests.post",
            side_effect=requests.ConnectTimeout("connect timed out"),
        ):
            with pytest.raises(PaymentFailed):
                payment_client.create_charge(2500, "USD", "tok_visa", idempotency_key="key-4")

    def test_provider_5xx_outcome_is_unknown(self, payment_client):
        body = {"error": {"type": "api_error", "message": "Something went wrong"}}

        with patch("storefront.services.payment_client.requests.post", return_value=_response(500, body)):
            with pytest.raises(PaymentOutcomeUnknown):
                payment_client.create_charge(2500, "USD", "tok_visa", idempotency_key="key-5")

    def test_unreadable_success_body(self, payment_client):
        resp = _response(200, None)
        resp.json.side_effect = ValueError("not json")

        with patch("storefront.services.payment_client.requests.post", return_value=resp):
            with pytest.raises(PaymentOutcomeUnknown) as exc:
                payment_client.create_charge(2500, "USD", "tok_visa", idempotency_key="key-6")

        assert exc.value.details["idempotency_key"] == "key-6"

    def test_success_body_without_id(self, payment_client):
        with patch(
            "storefront.services.payment_client.requests.post",
            return_value=_response(200, {"amount": 2500, "currency": "usd"}),
        ):
            with pytest.raises(PaymentOutcomeUnknown):
                payment_client.create_charge(2500, "USD", "tok_visa", idempotency_key="key-7")


class TestMockProvider:

    def test_charge_and_idempotent_replay(self):
        provider = TestClient(mock_provider)
        form = {"amount": 2500, "currency": "usd", "source": "tok_visa"}

        first = provider.post("/v1/charges", data=form, headers={"Idempotency-Key": "k1"}).json()
        replay = provider.post("/v1/charges", data=form, headers={"Idempotency-Key": "k1"}).json()

        assert first["amount"] == 2500
        assert first["id"].startswith("ch_")
        assert replay["id"] == first["id"]

    def test_declined_token(self):
        provider = TestClient(mock_provider)
        resp = provider.post(
            "/v1/charges",
            data={"amount": 100, "currency": "usd", "source": "tok_chargeDeclined"},
        )
        assert resp.status_code == 402
        assert resp.json()["error"]["code"] == "card_declined"
