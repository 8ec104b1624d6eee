from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from careerforge.auth import AuthenticatedUser
from careerforge.config import Settings
from careerforge.main import create_app
from careerforge.providers import Providers
from careerforge.services.generation import CareerGenerator
from careerforge.services.payments import StripeGateway


class FakeIdentityProvider:
    def __init__(self, users: dict[str, AuthenticatedUser], configured: bool = True) -> None:
        self.users = users
        self.configured = configured

    def resolve(self, token: str) -> AuthenticatedUser | None:
        return self.users.get(token)


class FakeChatClient:
    def __init__(self) -> None:
        self.replies: list = []
        self.calls: list[tuple[str, bool]] = []

    def queue(self, *replies) -> None:
        self.replies.extend(replies)

    def complete(self, prompt: str, *, json_mode: bool = False) -> str:
        self.calls.append((prompt, json_mode))
        reply = self.replies.pop(0) if self.replies else ""
        if isinstance(reply, Exception):
            raise reply
        return reply


USERS = {
    "alice-token": AuthenticatedUser(id="user-alice", email="alice@example.com"),
    "bob-token": AuthenticatedUser(id="user-bob", email="bob@example.com"),
}


@pytest.fixture
def chat() -> FakeChatClient:
    return FakeChatClient()


@pytest.fixture
def providers(chat: FakeChatClient) -> Providers:
    return Providers(
        identity=FakeIdentityProvider(USERS),
        generator=CareerGenerator(chat),
        stripe=StripeGateway("sk_test_123"),
    )


@pytest.fixture
def app(providers: Providers):
    return create_app(Settings(database_url="sqlite://", log_level="WARNING"), providers=providers)


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def alice() -> dict[str, str]:
    return {"Authorization": "Bearer alice-token"}


@pytest.fixture
def bob() -> dict[str, str]:
    return {"Authorization": "Bearer bob-token"}
