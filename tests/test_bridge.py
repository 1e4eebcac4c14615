"""Tests for the local platform bridge and configuration."""

import pytest

from paystack_plugin import LocalPlatformBridge, PaystackConfig, PlatformError, __version__
from paystack_plugin.bridge import fetch_platform_info


@pytest.mark.asyncio
async def test_local_bridge_answers_handshake():
    info = await fetch_platform_info(LocalPlatformBridge())

    assert info.user_agent.startswith("Python/")
    assert info.build_id == __version__
    assert info.device_id.startswith("py_")


@pytest.mark.asyncio
async def test_local_bridge_device_id_is_stable():
    bridge = LocalPlatformBridge()

    assert await bridge.invoke("getDeviceId") == await bridge.invoke("getDeviceId")


@pytest.mark.asyncio
async def test_local_bridge_rejects_unknown_methods():
    with pytest.raises(PlatformError) as exc_info:
        await LocalPlatformBridge().invoke("getBatteryLevel")

    assert exc_info.value.code == "unimplemented"


def test_config_from_env():
    config = PaystackConfig.from_env({
        "PAYSTACK_PUBLIC_KEY": "pk_test_env",
        "PAYSTACK_BASE_URL": "https://sandbox.example.test",
        "PAYSTACK_BRIDGE_TIMEOUT": "2.5",
    })

    assert config.public_key == "pk_test_env"
    assert config.secret_key is None
    assert config.base_url == "https://sandbox.example.test"
    assert config.bridge_timeout == 2.5


def test_config_defaults():
    config = PaystackConfig.from_env({})

    assert config.base_url == "https://api.paystack.co"
    assert config.bridge_timeout is None
