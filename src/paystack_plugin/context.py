"""
SDK context — credentials, the initialized flag and everything tied to them.

One context per SDK instance replaces process-wide globals: tests build a
fresh one, and ``close()`` cancels whatever background work the context
started.
"""

import asyncio
import logging

from paystack_plugin.errors import NotInitializedError
from paystack_plugin.models import PlatformInfo

logger = logging.getLogger(__name__)


class SdkContext:
    def __init__(self):
        self._public_key = None
        self._secret_key = None
        self._initialized = False
        self.platform_info: PlatformInfo = None
        self.api = None
        self.banks = None
        self._init_lock = None
        self._tasks = set()

    @property
    def init_lock(self) -> asyncio.Lock:
        # Built on first use so it belongs to the loop that runs initialize()
        if self._init_lock is None:
            self._init_lock = asyncio.Lock()
        return self._init_lock

    @property
    def initialized(self) -> bool:
        return self._initialized

    def set_credentials(self, public_key: str, secret_key: str = None):
        self._public_key = public_key
        self._secret_key = secret_key

    def mark_initialized(self, platform_info: PlatformInfo):
        self.platform_info = platform_info
        self._initialized = True

    def get_public_key(self) -> str:
        if not self._initialized:
            raise NotInitializedError()
        return self._public_key

    def get_secret_key(self) -> str:
        if not self._initialized:
            raise NotInitializedError()
        return self._secret_key

    def spawn(self, coro) -> asyncio.Task:
        """Run ``coro`` as a detached task that lives no longer than the context."""
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    @property
    def pending_tasks(self) -> set:
        return set(self._tasks)

    async def close(self):
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
            logger.debug("Cancelled %d background task(s)", len(tasks))

    def reset(self):
        """Forget credentials and state. Background tasks are left to close()."""
        self._public_key = None
        self._secret_key = None
        self._initialized = False
        self.platform_info = None
        self.banks = None
        self.api = None
