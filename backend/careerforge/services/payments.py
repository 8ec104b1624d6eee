"""Premium export payments through Stripe (card) and PayPal (wallet).

A payment moves ``idle -> intent_created -> awaiting_provider_confirmation``
and ends ``verified`` or ``failed``. Success is only ever decided from the
provider's own record of the payment, and that record must name the caller
as its owner.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

import httpx
import stripe

from careerforge.errors import PaymentError


logger = logging.getLogger(__name__)

PRODUCT_DESCRIPTION = "CareerForge AI Lifetime Export Pass"


class PaymentState(str, Enum):
    IDLE = "idle"
    INTENT_CREATED = "intent_created"
    AWAITING_PROVIDER_CONFIRMATION = "awaiting_provider_confirmation"
    VERIFIED = "verified"
    FAILED = "failed"


@dataclass(frozen=True)
class PaymentVerification:
    state: PaymentState
    provider_status: str
    reference: str

    @property
    def verified(self) -> bool:
        return self.state is PaymentState.VERIFIED


class StripeGateway:
    provider = "stripe"

    def __init__(self, secret_key: str, amount_cents: int = 499, currency: str = "usd") -> None:
        self.secret_key = secret_key
        self.amount_cents = amount_cents
        self.currency = currency

    def create_intent(self, user_id: str) -> str:
        try:
            intent = stripe.PaymentIntent.create(
                api_key=self.secret_key,
                amount=self.amount_cents,
                currency=self.currency,
                description=PRODUCT_DESCRIPTION,
                automatic_payment_methods={"enabled": True},
                metadata={"userId": user_id},
            )
        except stripe.StripeError as exc:
            raise PaymentError("Failed to create payment intent", detail=str(exc)) from exc

        logger.info("Stripe intent %s created for user %s (%s)", intent.id, user_id, PaymentState.INTENT_CREATED.value)
        return intent.client_secret

    def verify(self, payment_intent_id: str, user_id: str) -> PaymentVerification:
        try:
            intent = stripe.PaymentIntent.retrieve(payment_intent_id, api_key=self.secret_key)
        except stripe.StripeError as exc:
            raise PaymentError("Failed to verify payment", detail=str(exc)) from exc

        metadata = intent.metadata or {}
        owner = metadata.get("userId")
        if intent.status == "succeeded" and owner == user_id:
            state = PaymentState.VERIFIED
        else:
            state = PaymentState.FAILED
            logger.warning(
                "Stripe intent %s refused for user %s: status=%s owner=%s",
                payment_intent_id,
                user_id,
                intent.status,
                owner,
            )
        return PaymentVerification(state=state, provider_status=str(intent.status), reference=payment_intent_id)


class PayPalGateway:
    provider = "paypal"

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        base_url: str = "https://api-m.sandbox.paypal.com",
        amount_cents: int = 499,
        currency: str = "usd",
        http_client: httpx.Client | None = None,
    ) -> None:
        self.client_id = client_id
        self.client_secret = client_secret
        self.base_url = base_url.rstrip("/")
        self.amount_cents = amount_cents
        self.currency = currency
        self.http_client = http_client or httpx.Client(timeout=30)

    @property
    def amount_value(self) -> str:
        return f"{self.amount_cents / 100:.2f}"

    def _access_token(self) -> str:
        response = self.http_client.post(
            f"{self.base_url}/v1/oauth2/token",
            auth=(self.client_id, self.client_secret),
            data={"grant_type": "client_credentials"},
        )
        response.raise_for_status()
        return response.json()["access_token"]

    def _call(self, method: str, path: str, failure: str, json: dict[str, Any] | None = None) -> dict[str, Any]:
        try:
            token = self._access_token()
            response = self.http_client.request(
                method,
                f"{self.base_url}{path}",
                json=json,
                headers={"Authorization": f"Bearer {token}", "Content-Type": "application/json"},
            )
            response.raise_for_status()
            return response.json()
        except (httpx.HTTPError, KeyError, ValueError) as exc:
            raise PaymentError(failure, detail=str(exc)) from exc

    def create_order(self, user_id: str) -> str:
        order = self._call(
            "POST",
            "/v2/checkout/orders",
            "Failed to create PayPal order",
            json={
                "intent": "CAPTURE",
                "purchase_units": [
                    {
                        "custom_id": user_id,
                        "description": PRODUCT_DESCRIPTION,
                        "amount": {"currency_code": self.currency.upper(), "value": self.amount_value},
                    }
                ],
            },
        )
        logger.info("PayPal order %s created for user %s (%s)", order.get("id"), user_id, PaymentState.INTENT_CREATED.value)
        return str(order["id"])

    def capture_order(self, order_id: str, user_id: str) -> PaymentVerification:
        order = self._call("GET", f"/v2/checkout/orders/{order_id}", "Failed to capture PayPal order")
        units = order.get("purchase_units") or [{}]
        owner = units[0].get("custom_id")
        if owner != user_id:
            logger.warning("PayPal order %s refused for user %s: owner=%s", order_id, user_id, owner)
            return PaymentVerification(
                state=PaymentState.FAILED,
                provider_status=str(order.get("status", "")),
                reference=order_id,
            )

        capture = self._call("POST", f"/v2/checkout/orders/{order_id}/capture", "Failed to capture PayPal order")
        status = str(capture.get("status", ""))
        state = PaymentState.VERIFIED if status == "COMPLETED" else PaymentState.FAILED
        if state is PaymentState.FAILED:
            logger.warning("PayPal order %s capture for user %s ended with status %s", order_id, user_id, status)
        return PaymentVerification(state=state, provider_status=status, reference=order_id)
