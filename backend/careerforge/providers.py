from __future__ import annotations

import logging
from dataclasses import dataclass

from fastapi import HTTPException, Request, status

from careerforge.auth import SupabaseIdentityProvider
from careerforge.config import Settings
from careerforge.services.generation import CareerGenerator, OpenAIChatClient
from careerforge.services.job_page import JobPageFetcher
from careerforge.services.payments import PayPalGateway, StripeGateway


logger = logging.getLogger(__name__)


@dataclass
class Providers:
    """External collaborators, built once per process and shared by all requests."""

    identity: SupabaseIdentityProvider | None = None
    generator: CareerGenerator | None = None
    job_fetcher: JobPageFetcher | None = None
    stripe: StripeGateway | None = None
    paypal: PayPalGateway | None = None


def build_providers(settings: Settings) -> Providers:
    providers = Providers(
        identity=SupabaseIdentityProvider(
            settings.supabase_url,
            settings.supabase_service_role_key,
            timeout=settings.auth_timeout_seconds,
        ),
        job_fetcher=JobPageFetcher(
            timeout=settings.job_fetch_timeout_seconds,
            max_chars=settings.job_page_max_chars,
        ),
    )
    if not settings.auth_configured:
        logger.warning("SUPABASE_URL or SUPABASE_SERVICE_ROLE_KEY is missing. Authenticated routes will answer 500.")

    if settings.openai_api_key:
        client = OpenAIChatClient(settings.openai_api_key, settings.openai_model, base_url=settings.openai_base_url)
        providers.generator = CareerGenerator(client)
    else:
        logger.warning("OPENAI_API_KEY is missing. AI generation requests will fail.")

    if settings.stripe_secret_key:
        providers.stripe = StripeGateway(
            settings.stripe_secret_key,
            amount_cents=settings.export_price_cents,
            currency=settings.export_currency,
        )
    if settings.paypal_client_id and settings.paypal_client_secret:
        providers.paypal = PayPalGateway(
            settings.paypal_client_id,
            settings.paypal_client_secret,
            base_url=settings.paypal_api_base,
            amount_cents=settings.export_price_cents,
            currency=settings.export_currency,
        )
    return providers


def _not_configured(what: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=f"{what} is not configured")


def get_generator(request: Request) -> CareerGenerator:
    generator = request.app.state.providers.generator
    if generator is None:
        raise _not_configured("AI provider")
    return generator


def get_job_fetcher(request: Request) -> JobPageFetcher:
    fetcher = request.app.state.providers.job_fetcher
    if fetcher is None:
        raise _not_configured("Job fetcher")
    return fetcher


def get_stripe_gateway(request: Request) -> StripeGateway:
    gateway = request.app.state.providers.stripe
    if gateway is None:
        raise _not_configured("Stripe")
    return gateway


def get_paypal_gateway(request: Request) -> PayPalGateway:
    gateway = request.app.state.providers.paypal
    if gateway is None:
        raise _not_configured("PayPal")
    return gateway
