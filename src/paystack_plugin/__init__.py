"""Paystack plugin SDK — card charges and checkout behind one gated facade."""

__version__ = "0.1.0"

from paystack_plugin.bridge import LocalPlatformBridge, PlatformBridge
from paystack_plugin.client import PaystackAPI
from paystack_plugin.config import PaystackConfig
from paystack_plugin.context import SdkContext
from paystack_plugin.errors import (
    PaystackError,
    InvalidArgumentError,
    NotInitializedError,
    MissingKeyError,
    AuthenticationError,
    ChargeConfigurationError,
    InvalidAmountError,
    InvalidEmailError,
    PlatformError,
    PaystackAPIError,
    RateLimitError,
)
from paystack_plugin.models import (
    Charge,
    ChargeOutcome,
    ChargeResult,
    CheckoutMethod,
    CheckoutResponse,
    KeyKind,
    PaymentCard,
    PlatformInfo,
    Transaction,
)
from paystack_plugin.plugin import PaystackPlugin
from paystack_plugin.transaction import TransactionManager
