# storefront/services/payment_client.py
from dataclasses import dataclass

import requests
from requests import RequestException

from storefront.domain.exceptions import PaymentDeclined, PaymentFailed, PaymentOutcomeUnknown
from storefront.utils.retry import http_retry
from storefront.utils.settings import STRIPE_API_URL, STRIPE_SECRET_KEY
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class Charge:
    id: str
    amount: int
    currency: str


class PaymentClient:
    """
    Klient Stripe Charges API.
    Ponowienia sa bezpieczne, kazde obciazenie ma Idempotency-Key.
    """

    def __init__(self, base_url: str | None = None, secret_key: str | None = None, timeout: int = 10):
        self.base_url = (base_url or STRIPE_API_URL).rstrip("/")
        self.secret_key = secret_key if secret_key is not None else STRIPE_SECRET_KEY
        self.timeout = timeout

    @http_retry()
    def _post_charge(self, amount: int, currency: str, token: str, idempotency_key: str) -> requests.Response:
        url = f"{self.base_url}/v1/charges"
        logger.info(f"PaymentClient POST {url} amount={amount} {currency}")

        return requests.post(
            url,
            data={"amount": amount, "currency": currency.lower(), "source": token},
            auth=(self.secret_key, ""),
            headers={"Idempotency-Key": idempotency_key},
            timeout=self.timeout,
        )

    def create_charge(self, amount: int, currency: str, token: str, idempotency_key: str) -> Charge:
        try:
            resp = self._post_charge(amount, currency, token, idempotency_key)
        except requests.ConnectionError as e:
            #polaczenie nie nawiazane, zadanie nie wyszlo do providera
            logger.error(f"Payment provider unreachable: {e}")
            raise PaymentFailed(
                "Payment provider is unavailable, you have not been charged",
                details={"idempotency_key": idempotency_key},
            ) from e
        except RequestException as e:
            #timeout odczytu itp., provider mogl juz obciazyc karte
            logger.error(f"No answer from payment provider for idempotency key {idempotency_key}: {e!r}")
            raise PaymentOutcomeUnknown(idempotency_key, e) from e

        if resp.status_code == 402:
            error = _error_body(resp)
            logger.warning(f"Charge declined: {error.get('code')} {error.get('decline_code')}")
            raise PaymentDeclined(
                error.get("message") or "Your card was declined",
                details={"code": error.get("code"), "decline_code": error.get("decline_code")},
            )

        if resp.status_code >= 500:
            #blad po stronie providera, obciazenie moglo zostac wykonane
            logger.error(f"Provider returned HTTP {resp.status_code} for idempotency key {idempotency_key}")
            raise PaymentOutcomeUnknown(idempotency_key, RuntimeError(f"HTTP {resp.status_code}"))

        if resp.status_code >= 400:
            error = _error_body(resp)
            logger.error(f"Charge failed with HTTP {resp.status_code}: {error.get('type')} {error.get('message')}")
            raise PaymentFailed(
                error.get("message") or "Payment could not be processed",
                details={"status_code": resp.status_code, "type": error.get("type")},
            )

        try:
            body = resp.json()
            return Charge(
                id=body["id"],
                amount=int(body["amount"]),
                currency=str(body.get("currency", currency)).upper(),
            )
        except (ValueError, KeyError, TypeError) as e:
            logger.error(
                f"Unreadable HTTP {resp.status_code} charge response for idempotency key {idempotency_key}: {e!r}"
            )
            raise PaymentOutcomeUnknown(idempotency_key, e) from e


def _error_body(resp: requests.Response) -> dict:
    try:
        return resp.json().get("error") or {}
    except (ValueError, AttributeError):
        return {}
