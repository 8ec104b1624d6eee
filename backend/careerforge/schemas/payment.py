from __future__ import annotations

from pydantic import Field

from careerforge.schemas.base import CamelModel


class EmptyRequest(CamelModel):
    pass


class StripeIntentOut(CamelModel):
    client_secret: str


class StripeVerifyRequest(CamelModel):
    payment_intent_id: str = Field(min_length=1)


class PaymentResultOut(CamelModel):
    success: bool


class PayPalOrderOut(CamelModel):
    order_id: str = Field(alias="orderID")


class PayPalCaptureRequest(CamelModel):
    order_id: str = Field(alias="orderID", min_length=1)
