"""Runtime configuration for the Paystack plugin.

Usage:
    from paystack_plugin import PaystackConfig, PaystackPlugin

    config = PaystackConfig.from_env()
    plugin = PaystackPlugin(config=config)
    await plugin.initialize(config.public_key, config.secret_key)
"""

import os
from dataclasses import dataclass

DEFAULT_BASE_URL = "https://api.paystack.co"


@dataclass
class PaystackConfig:
    public_key: str = None
    secret_key: str = None
    base_url: str = DEFAULT_BASE_URL
    http_timeout: float = 30.0
    # None waits on the platform bridge indefinitely
    bridge_timeout: float = None
    bank_fetch_attempts: int = 3
    bank_fetch_delay: float = 1.0
    bank_fetch_backoff: float = 2.0

    @classmethod
    def from_env(cls, environ=None) -> "PaystackConfig":
        """Build a config from PAYSTACK_* environment variables.

        Unset variables fall back to the dataclass defaults.
        """
        env = os.environ if environ is None else environ
        bridge_timeout = env.get("PAYSTACK_BRIDGE_TIMEOUT")
        return cls(
            public_key=env.get("PAYSTACK_PUBLIC_KEY"),
            secret_key=env.get("PAYSTACK_SECRET_KEY"),
            base_url=env.get("PAYSTACK_BASE_URL", DEFAULT_BASE_URL),
            bridge_timeout=float(bridge_timeout) if bridge_timeout else None,
        )
