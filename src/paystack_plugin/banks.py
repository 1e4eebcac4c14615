"""Supported-bank cache for bank checkout.

The list is fetched speculatively when the SDK is initialized with a secret
key. Nobody waits on that fetch: if it fails, bank checkout refetches through
``BankCache.get()``, which runs the same bounded retry.
"""

import asyncio
import functools
import logging

from paystack_plugin.client import PaystackAPI
from paystack_plugin.errors import PaystackError

logger = logging.getLogger(__name__)


def async_retry(max_attempts: int = 3, delay: float = 1.0, backoff: float = 2.0, exceptions=(Exception,)):
    """
    Retry decorator for coroutines, with exponential backoff.

    Args:
        max_attempts: Maximum attempts, including the first
        delay: Initial delay between attempts (seconds)
        backoff: Multiplier for delay after each attempt
        exceptions: Tuple of exceptions to catch and retry
    """
    def decorator(func):
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            current_delay = delay
            last_exception = None

            for attempt in range(max_attempts):
                try:
                    return await func(*args, **kwargs)
                except exceptions as e:
                    last_exception = e
                    if attempt < max_attempts - 1:
                        logger.debug("Attempt %d of %s failed: %s", attempt + 1, func.__name__, e)
                        await asyncio.sleep(current_delay)
                        current_delay *= backoff

            raise last_exception

        return wrapper
    return decorator


class BankCache:
    def __init__(self, api: PaystackAPI, attempts: int = 3, delay: float = 1.0, backoff: float = 2.0):
        self._api = api
        self._banks = None
        self._lock = asyncio.Lock()
        self._fetch = async_retry(
            max_attempts=attempts,
            delay=delay,
            backoff=backoff,
            exceptions=(PaystackError, OSError),
        )(self._fetch_once)

    async def _fetch_once(self) -> list:
        # requests is blocking; keep it off the event loop
        banks = await asyncio.to_thread(self._api.list_banks)
        if banks is None:
            raise PaystackError("Bank list response carried no data")
        return banks

    async def get(self) -> list:
        """Return the cached banks, fetching them if the cache is empty."""
        async with self._lock:
            if self._banks is None:
                self._banks = await self._fetch()
                logger.debug("Cached %d supported banks", len(self._banks))
        return self._banks

    async def warm(self):
        """Fill the cache, logging instead of raising on failure."""
        try:
            await self.get()
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.warning("Could not prefetch supported banks: %s", e)
