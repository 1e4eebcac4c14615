"""Exception hierarchy for the Paystack plugin.

Setup errors (bad keys, calling before initialize, malformed checkout charges)
are raised to the caller before anything touches the network or the UI.
Runtime payment failures are delivered through the ``on_error`` callback of
``PaystackPlugin.charge_card`` instead.
"""


class PaystackError(Exception):
    """Base exception for all Paystack plugin errors."""
    pass


class InvalidArgumentError(PaystackError):
    """Malformed credentials were passed to initialize()."""
    pass


class NotInitializedError(PaystackError):
    """A gated operation was called before the SDK finished initializing."""

    def __init__(self, detail: str = None):
        super().__init__(
            detail
            or "Paystack SDK has not been initialized. "
            "The SDK has to be initialized before use"
        )


class MissingKeyError(PaystackError):
    """The key required by an operation was never supplied."""

    def __init__(self, kind: str):
        self.kind = kind
        super().__init__(
            f"No {kind} key found. Pass your {kind} key to "
            f"PaystackPlugin.initialize() before using this operation"
        )


class AuthenticationError(PaystackError):
    """The public key failed local format validation."""
    pass


class ChargeConfigurationError(PaystackError):
    """The charge cannot be used with the requested checkout method."""
    pass


class InvalidAmountError(ChargeConfigurationError):
    def __init__(self, amount):
        self.amount = amount
        super().__init__(f"{amount!r} is not a valid amount. Amount must be a non-negative integer in minor units")


class InvalidEmailError(ChargeConfigurationError):
    def __init__(self, email):
        self.email = email
        super().__init__(f"{email!r} is not a valid email")


class PlatformError(PaystackError):
    """A platform-bridge call failed.

    ``code`` is the bridge's machine-readable failure code (``"timeout"`` when
    the call exceeded the configured bridge timeout).
    """

    def __init__(self, code: str, message: str = None, details=None):
        self.code = code
        self.message = message
        self.details = details
        msg = f"Platform call failed ({code})"
        if message:
            msg += f": {message}"
        super().__init__(msg)


class PaystackAPIError(PaystackError):
    """HTTP error from the Paystack API."""

    def __init__(self, status_code: int, detail: str, response=None):
        self.status_code = status_code
        self.detail = detail
        self.response = response
        super().__init__(f"Paystack API error {status_code}: {detail}")


class RateLimitError(PaystackAPIError):
    """Rate limit exceeded (HTTP 429)."""

    def __init__(self, detail: str = "Rate limit exceeded", response=None):
        super().__init__(429, detail, response)


def key_error_message(kind: str) -> str:
    return (
        f"Invalid {kind} key. To create a transaction, you need to pass your "
        f"{kind} key to PaystackPlugin.initialize(). "
        f"You can find your keys at https://dashboard.paystack.co/#/settings/developer"
    )
