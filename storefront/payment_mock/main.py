# storefront/payment_mock/main.py
import uuid

from fastapi import FastAPI, Form, Header
from fastapi.responses import JSONResponse

app = FastAPI(title="Payment Provider (dev mock)")

# tokeny testowe jak u Stripe
DECLINED_TOKENS = {
    "tok_chargeDeclined": "card_declined",
    "tok_chargeDeclinedInsufficientFunds": "insufficient_funds",
}

CHARGES: dict[str, dict] = {}


@app.post("/v1/charges")
def create_charge(
    amount: int = Form(...),
    currency: str = Form(...),
    source: str = Form(...),
    idempotency_key: str | None = Header(None, alias="Idempotency-Key"),
):
    if idempotency_key and idempotency_key in CHARGES:
        return CHARGES[idempotency_key]

    if source in DECLINED_TOKENS:
        return JSONResponse(
            status_code=402,
            content={
                "error": {
                    "type": "card_error",
                    "code": "card_declined",
                    "decline_code": DECLINED_TOKENS[source],
                    "message": "Your card was declined.",
                }
            },
        )

    charge = {
        "id": f"ch_{uuid.uuid4().hex[:24]}",
        "object": "charge",
        "amount": amount,
        "currency": currency,
        "status": "succeeded",
    }
    if idempotency_key:
        CHARGES[idempotency_key] = charge
    return charge
