"""
Pytest fixtures for the payments API.

Every test gets its own app built with create_app(), wired to the mock
gateway, so nothing talks to Razorpay.
"""

import os

# set before app.main is imported, it builds a module-level app
os.environ["PAYMENT_GATEWAY"] = "mock"
os.environ.setdefault("RAZORPAY_KEY_ID", "rzp_test_key")
os.environ.setdefault("RAZORPAY_KEY_SECRET", "test_secret")

import pytest
from fastapi.testclient import TestClient

from app.config import Settings
from app.main import create_app
from app.mockGateway import MockRazorpayClient


SECRET = "S"


class FailingGateway:
    """Gateway whose order.create always blows up."""

    def __init__(self, exc=None):
        self.order = self
        self.exc = exc or RuntimeError("Authentication failed")

    def create(self, data):
        raise self.exc


class RecordingGateway(MockRazorpayClient):
    """Mock gateway that remembers the payloads it was sent."""

    def __init__(self, auth):
        super().__init__(auth)
        self.calls = []
        create = self.order.create

        def recording_create(data):
            self.calls.append(data)
            return create(data=data)

        self.order.create = recording_create


@pytest.fixture
def settings():
    return Settings(
        PAYMENT_GATEWAY="mock",
        RAZORPAY_KEY_ID="rzp_test_key",
        RAZORPAY_KEY_SECRET=SECRET,
        LOG_LEVEL="DEBUG",
    )


@pytest.fixture
def gateway(settings):
    return RecordingGateway(auth=(settings.RAZORPAY_KEY_ID, settings.RAZORPAY_KEY_SECRET))


@pytest.fixture
def app(settings, gateway):
    return create_app(settings, gateway=gateway)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c
