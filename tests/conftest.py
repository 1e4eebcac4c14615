"""Pytest fixtures: a scripted platform bridge and a stub Paystack API."""

import asyncio

import pytest

from paystack_plugin import PaystackConfig, PaystackPlugin, PlatformError, SdkContext


class FakeBridge:
    """Answers the handshake methods and records every call."""

    def __init__(self, answers=None, fail_on=None, hang_on=None):
        self.answers = answers or {
            "getUserAgent": "TestAgent/1.0",
            "getVersionCode": "42",
            "getDeviceId": "device-123",
        }
        self.fail_on = fail_on
        self.hang_on = hang_on
        self.calls = []

    async def invoke(self, method, args=None):
        self.calls.append(method)
        await asyncio.sleep(0)
        if method == self.hang_on:
            await asyncio.Event().wait()
        if method == self.fail_on:
            raise PlatformError("bridge_down", f"{method} unavailable")
        return self.answers[method]


class StubAPI:
    def __init__(self, banks=None, failures=0):
        self.banks = banks if banks is not None else [{"id": 1, "name": "Test Bank", "code": "001"}]
        self.failures = failures
        self.list_calls = 0
        self.closed = False

    def list_banks(self):
        self.list_calls += 1
        if self.failures > 0:
            self.failures -= 1
            raise OSError("connection reset")
        return self.banks

    def close(self):
        self.closed = True


@pytest.fixture
def bridge():
    return FakeBridge()


@pytest.fixture
def stub_api():
    return StubAPI()


@pytest.fixture
def config():
    return PaystackConfig(bank_fetch_attempts=2, bank_fetch_delay=0, bank_fetch_backoff=1)


@pytest.fixture
def make_plugin(bridge, stub_api, config):
    def _make(**kwargs):
        kwargs.setdefault("bridge", bridge)
        kwargs.setdefault("config", config)
        kwargs.setdefault("context", SdkContext())
        kwargs.setdefault("api_factory", lambda secret_key: stub_api)
        return PaystackPlugin(**kwargs)

    return _make
