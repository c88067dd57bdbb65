from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from farmer_ivr.config import Settings
from farmer_ivr.main import create_app
from farmer_ivr.twilio_client import DeliveryError, Receipt


class FakeProvider:
    """Records every send/call instead of talking to Twilio."""

    def __init__(self, fail_with: str | None = None) -> None:
        self.fail_with = fail_with
        self.messages: list[tuple[str, str]] = []
        self.calls: list[tuple[str, str]] = []

    def send_message(self, to: str, body: str) -> Receipt:
        self.messages.append((to, body))
        if self.fail_with:
            raise DeliveryError(self.fail_with)
        return Receipt(sid=f"SM{len(self.messages):032d}")

    def place_call(self, to: str, message: str) -> Receipt:
        self.calls.append((to, message))
        if self.fail_with:
            raise DeliveryError(self.fail_with)
        return Receipt(sid=f"CA{len(self.calls):032d}")


def make_settings(farmer_mobile_number: str | None = None) -> Settings:
    return Settings(
        twilio_account_sid="ACtest",
        twilio_auth_token="secret",
        twilio_phone_number="+15005550006",
        farmer_mobile_number=farmer_mobile_number,
    )


@pytest.fixture
def provider() -> FakeProvider:
    return FakeProvider()


@pytest.fixture
def client(provider: FakeProvider) -> TestClient:
    return TestClient(create_app(make_settings(), provider=provider))


@pytest.fixture
def farmer_client(provider: FakeProvider) -> TestClient:
    """App with FARMER_MOBILE_NUMBER configured."""
    return TestClient(create_app(make_settings("+919000000001"), provider=provider))
