import httpx
import pytest

from careerforge.auth import IdentityProviderError, SupabaseIdentityProvider


def _provider(handler, url="https://project.supabase.co", key="service-role") -> SupabaseIdentityProvider:
    return SupabaseIdentityProvider(url, key, http_client=httpx.Client(transport=httpx.MockTransport(handler)))


def test_resolve_returns_user():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(
            200,
            json={"id": "user-alice", "email": "alice@example.com", "user_metadata": {"full_name": "Alice"}},
        )

    user = _provider(handler).resolve("alice-token")

    assert user.id == "user-alice"
    assert user.email == "alice@example.com"
    assert user.metadata == {"full_name": "Alice"}
    request = seen[0]
    assert str(request.url) == "https://project.supabase.co/auth/v1/user"
    assert request.headers["apikey"] == "service-role"
    assert request.headers["Authorization"] == "Bearer alice-token"


@pytest.mark.parametrize("status_code", [401, 403, 404])
def test_rejected_token_resolves_to_none(status_code):
    assert _provider(lambda request: httpx.Response(status_code, json={"msg": "bad jwt"})).resolve("x") is None


def test_provider_outage_raises():
    with pytest.raises(IdentityProviderError):
        _provider(lambda request: httpx.Response(503)).resolve("x")


def test_transport_failure_raises():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("unreachable", request=request)

    with pytest.raises(IdentityProviderError):
        _provider(handler).resolve("x")


def test_configured_requires_url_and_key():
    assert _provider(lambda request: httpx.Response(200)).configured
    assert not _provider(lambda request: httpx.Response(200), url="").configured
    assert not _provider(lambda request: httpx.Response(200), key="").configured


def test_identity_outage_is_unauthorized(app, providers, client, alice):
    providers.identity = _provider(lambda request: httpx.Response(503))

    response = client.get("/api/resumes", headers=alice)
    assert response.status_code == 401
    assert response.json() == {"message": "Auth failed"}


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(200, text="<html>proxy</html>"),
        httpx.Response(200, json=["not", "an", "object"]),
    ],
)
def test_unreadable_user_body_raises(response):
    with pytest.raises(IdentityProviderError):
        _provider(lambda request: response).resolve("x")


def test_unreadable_user_body_is_unauthorized(app, providers, client, alice):
    providers.identity = _provider(lambda request: httpx.Response(200, text="<html>proxy</html>"))

    response = client.get("/api/resumes", headers=alice)
    assert response.status_code == 401
    assert response.json() == {"message": "Auth failed"}
