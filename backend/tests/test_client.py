import json
from types import SimpleNamespace

import httpx
import pytest
import stripe
from fastapi.testclient import TestClient
from pydantic import ValidationError

from careerforge.client import ApiError, CareerForgeClient, QueryCache, ResponseValidationError
from careerforge.contracts import get_contract


@pytest.fixture
def api(app) -> CareerForgeClient:
    return CareerForgeClient(http_client=TestClient(app), token_provider=lambda: "alice-token")


def _counting_client(handler):
    requests = []

    def transport(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return handler(request)

    http = httpx.Client(base_url="http://testserver", transport=httpx.MockTransport(transport))
    return CareerForgeClient(http_client=http, token_provider=lambda: "alice-token"), requests


def test_query_cache_invalidation_by_prefix():
    cache = QueryCache()
    cache.set("/api/resumes", [])
    cache.set("/api/resumes/1", {})
    cache.set("/api/resumes-archive", [])
    cache.set("/api/cover-letters", [])

    cache.invalidate("/api/resumes")

    assert "/api/resumes" not in cache
    assert "/api/resumes/1" not in cache
    assert "/api/resumes-archive" in cache
    assert "/api/cover-letters" in cache


def test_create_invalidates_cached_list(api):
    assert api.list_resumes() == []
    assert "/api/resumes" in api.cache

    created = api.create_resume({"title": "CV", "content": "<p>cv</p>"})
    assert created.user_id == "user-alice"
    assert "/api/resumes" not in api.cache

    assert [item.id for item in api.list_resumes()] == [created.id]


def test_update_and_delete_round_trip(api):
    created = api.create_resume({"title": "CV", "content": "<p>cv</p>"})

    updated = api.update_resume(created.id, {"title": "CV v2"})
    assert updated.title == "CV v2"
    assert updated.content == "<p>cv</p>"
    assert updated.updated_at > created.updated_at

    assert api.delete_resume(created.id) is None
    assert api.get_resume(created.id) is None
    assert api.list_resumes() == []


def test_cover_letter_helpers(api):
    created = api.create_cover_letter({"title": "Letter", "content": "<p>Dear</p>"})
    assert api.get_cover_letter(created.id).title == "Letter"
    api.delete_cover_letter(created.id)
    assert api.list_cover_letters() == []


def test_cached_query_is_served_without_request():
    client, requests = _counting_client(lambda request: httpx.Response(200, json=[]))

    client.list_resumes()
    client.list_resumes()
    assert len(requests) == 1

    client.query(get_contract("resumes.list"), refresh=True)
    assert len(requests) == 2


def test_invalid_input_is_rejected_before_sending():
    client, requests = _counting_client(lambda request: httpx.Response(500))

    with pytest.raises(ValidationError):
        client.create_resume({"title": 5, "content": "x"})
    with pytest.raises(ValidationError):
        client.optimize_linkedin({})
    assert requests == []


def test_request_body_uses_wire_names():
    captured = []

    def handler(request: httpx.Request) -> httpx.Response:
        captured.append(request)
        return httpx.Response(200, json={"success": True})

    client, _ = _counting_client(handler)
    client.capture_paypal_order("ORDER-1")

    assert captured[0].headers["Authorization"] == "Bearer alice-token"
    assert json.loads(captured[0].content) == {"orderID": "ORDER-1"}


def test_bad_response_shape_names_the_field():
    client, _ = _counting_client(lambda request: httpx.Response(200, json=[{"id": "not-a-number"}]))

    with pytest.raises(ResponseValidationError) as excinfo:
        client.list_resumes()
    assert "0.id" in excinfo.value.message
    assert "/api/resumes" not in client.cache


def test_undeclared_status_is_a_validation_error():
    client, _ = _counting_client(lambda request: httpx.Response(202, json={}))

    with pytest.raises(ResponseValidationError):
        client.list_resumes()


def test_server_errors_surface_message(app):
    client = CareerForgeClient(http_client=TestClient(app), token_provider=lambda: None)

    with pytest.raises(ApiError) as excinfo:
        client.list_resumes()
    assert excinfo.value.status_code == 401
    assert excinfo.value.message == "No authorization header"


@pytest.fixture
def stripe_paid(monkeypatch):
    monkeypatch.setattr(
        stripe.PaymentIntent,
        "retrieve",
        lambda intent_id, api_key=None: SimpleNamespace(status="succeeded", metadata={"userId": "user-alice"}),
    )


def test_payment_unlock_refreshes_current_user(api, stripe_paid):
    assert api.current_user().has_premium_export is False

    assert api.verify_stripe_payment("pi_paid").success is True
    assert api.current_user().has_premium_export is True

