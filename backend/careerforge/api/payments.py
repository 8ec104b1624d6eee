from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from careerforge.auth import AuthenticatedUser, get_current_user
from careerforge.contracts import get_contract
from careerforge.database import get_db
from careerforge.providers import get_paypal_gateway, get_stripe_gateway
from careerforge.schemas.payment import (
    EmptyRequest,
    PaymentResultOut,
    PayPalCaptureRequest,
    PayPalOrderOut,
    StripeIntentOut,
    StripeVerifyRequest,
)
from careerforge.services.payments import PayPalGateway, StripeGateway
from careerforge.services.storage import premium_store


logger = logging.getLogger(__name__)

router = APIRouter()

CREATE_STRIPE_INTENT = get_contract("payments.createStripeIntent")
VERIFY_STRIPE_PAYMENT = get_contract("payments.verifyStripePayment")
CREATE_PAYPAL_ORDER = get_contract("payments.createPaypalOrder")
CAPTURE_PAYPAL_ORDER = get_contract("payments.capturePaypalOrder")


@router.post(CREATE_STRIPE_INTENT.route_path, response_model=CREATE_STRIPE_INTENT.responses[200])
def create_stripe_intent(
    payload: EmptyRequest | None = None,
    current_user: AuthenticatedUser = Depends(get_current_user),
    gateway: StripeGateway = Depends(get_stripe_gateway),
) -> StripeIntentOut:
    return StripeIntentOut(client_secret=gateway.create_intent(current_user.id))


@router.post(VERIFY_STRIPE_PAYMENT.route_path, response_model=VERIFY_STRIPE_PAYMENT.responses[200])
def verify_stripe_payment(
    payload: StripeVerifyRequest,
    db: Session = Depends(get_db),
    current_user: AuthenticatedUser = Depends(get_current_user),
    gateway: StripeGateway = Depends(get_stripe_gateway),
) -> PaymentResultOut:
    verification = gateway.verify(payload.payment_intent_id, current_user.id)
    if not verification.verified:
        raise HTTPException(status_code=400, detail="Payment not successful or user mismatch")

    premium_store.grant(db, current_user.id, gateway.provider, verification.reference)
    logger.info("Premium export unlocked for user %s via %s", current_user.id, gateway.provider)
    return PaymentResultOut(success=True)


@router.post(CREATE_PAYPAL_ORDER.route_path, response_model=CREATE_PAYPAL_ORDER.responses[200])
def create_paypal_order(
    payload: EmptyRequest | None = None,
    current_user: AuthenticatedUser = Depends(get_current_user),
    gateway: PayPalGateway = Depends(get_paypal_gateway),
) -> PayPalOrderOut:
    return PayPalOrderOut(order_id=gateway.create_order(current_user.id))


@router.post(CAPTURE_PAYPAL_ORDER.route_path, response_model=CAPTURE_PAYPAL_ORDER.responses[200])
def capture_paypal_order(
    payload: PayPalCaptureRequest,
    db: Session = Depends(get_db),
    current_user: AuthenticatedUser = Depends(get_current_user),
    gateway: PayPalGateway = Depends(get_paypal_gateway),
) -> PaymentResultOut:
    verification = gateway.capture_order(payload.order_id, current_user.id)
    if not verification.verified:
        raise HTTPException(status_code=400, detail="Payment not successful or user mismatch")

    premium_store.grant(db, current_user.id, gateway.provider, verification.reference)
    logger.info("Premium export unlocked for user %s via %s", current_user.id, gateway.provider)
    return PaymentResultOut(success=True)
