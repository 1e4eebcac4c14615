"""
Platform bridge — the async method channel between the plugin and the host.

On a phone the host side is native code answering ``getUserAgent``,
``getVersionCode`` and ``getDeviceId``. Any object with a matching
``invoke`` coroutine works; ``LocalPlatformBridge`` answers from the Python
runtime so the plugin can run on servers and in tests.
"""

import asyncio
import hashlib
import logging
import platform
import uuid
from abc import ABC, abstractmethod

from paystack_plugin.errors import PlatformError
from paystack_plugin.models import PlatformInfo

logger = logging.getLogger(__name__)

GET_USER_AGENT = "getUserAgent"
GET_VERSION_CODE = "getVersionCode"
GET_DEVICE_ID = "getDeviceId"


class PlatformBridge(ABC):
    """Interface for the host method channel."""

    @abstractmethod
    async def invoke(self, method: str, args: dict = None) -> str:
        """Call ``method`` on the host. Raises PlatformError on failure."""
        pass


class LocalPlatformBridge(PlatformBridge):
    def __init__(self, build_id: str = None):
        self._build_id = build_id

    async def invoke(self, method: str, args: dict = None) -> str:
        if method == GET_USER_AGENT:
            return (
                f"Python/{platform.python_version()} "
                f"({platform.system()} {platform.release()}; {platform.machine()})"
            )
        if method == GET_VERSION_CODE:
            if self._build_id:
                return self._build_id
            from paystack_plugin import __version__
            return __version__
        if method == GET_DEVICE_ID:
            node = f"{uuid.getnode():012x}:{platform.node()}"
            return "py_" + hashlib.sha256(node.encode()).hexdigest()[:32]
        raise PlatformError("unimplemented", f"Method {method} is not implemented by LocalPlatformBridge")


async def _invoke(bridge: PlatformBridge, method: str, timeout: float = None) -> str:
    logger.debug("Invoking platform method %s", method)
    if timeout is None:
        return await bridge.invoke(method)
    try:
        return await asyncio.wait_for(bridge.invoke(method), timeout)
    except asyncio.TimeoutError:
        raise PlatformError("timeout", f"{method} did not answer within {timeout}s") from None


async def fetch_platform_info(bridge: PlatformBridge, timeout: float = None) -> PlatformInfo:
    """Run the init handshake: three bridge calls, one after another.

    The calls are awaited in order, never concurrently. A PlatformError from
    any of them propagates unchanged.
    """
    user_agent = await _invoke(bridge, GET_USER_AGENT, timeout)
    build_id = await _invoke(bridge, GET_VERSION_CODE, timeout)
    device_id = await _invoke(bridge, GET_DEVICE_ID, timeout)
    return PlatformInfo(user_agent=user_agent, build_id=build_id, device_id=device_id)
