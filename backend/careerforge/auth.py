from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

import httpx
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer


logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class AuthenticatedUser:
    id: str
    email: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)


class IdentityProviderError(Exception):
    pass


class SupabaseIdentityProvider:
    """Resolves access tokens to users through the Supabase auth REST API."""

    def __init__(
        self,
        url: str,
        service_role_key: str,
        timeout: float = 10.0,
        http_client: httpx.Client | None = None,
    ) -> None:
        self.url = url.rstrip("/")
        self.service_role_key = service_role_key
        self.http_client = http_client or httpx.Client(timeout=timeout)

    @property
    def configured(self) -> bool:
        return bool(self.url and self.service_role_key)

    def resolve(self, token: str) -> AuthenticatedUser | None:
        try:
            response = self.http_client.get(
                f"{self.url}/auth/v1/user",
                headers={"apikey": self.service_role_key, "Authorization": f"Bearer {token}"},
            )
        except httpx.HTTPError as exc:
            raise IdentityProviderError(str(exc)) from exc

        if response.status_code in (401, 403, 404):
            return None
        if response.status_code >= 400:
            raise IdentityProviderError(f"identity provider returned {response.status_code}")

        try:
            payload = response.json()
        except ValueError as exc:
            raise IdentityProviderError("identity provider returned a non-JSON body") from exc
        if not isinstance(payload, dict):
            raise IdentityProviderError("identity provider returned an unexpected body")

        user_id = payload.get("id")
        if not user_id:
            return None
        return AuthenticatedUser(
            id=str(user_id),
            email=payload.get("email"),
            metadata=payload.get("user_metadata") or {},
        )


def get_identity_provider(request: Request) -> SupabaseIdentityProvider:
    return request.app.state.providers.identity


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    provider: SupabaseIdentityProvider = Depends(get_identity_provider),
) -> AuthenticatedUser:
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="No authorization header")

    if provider is None or not provider.configured:
        logger.error("Identity provider credentials are missing; rejecting authenticated request")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Authentication is misconfigured")

    try:
        user = provider.resolve(credentials.credentials)
    except IdentityProviderError as exc:
        logger.warning("Token resolution failed: %s", exc)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Auth failed") from exc

    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")
    return user
