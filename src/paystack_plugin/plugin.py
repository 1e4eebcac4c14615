"""
PaystackPlugin — the entry point applications call.

Every operation is gated: the SDK must be initialized, and the key the
operation needs (public for card charges, secret for checkout) must be
present. After the gate, work is handed to the transaction manager or the
checkout presenter supplied by the application.

Usage:
    from paystack_plugin import Charge, CheckoutMethod, PaystackPlugin

    plugin = PaystackPlugin(
        transaction_manager_factory=MyTransactionManager,
        checkout_presenter=show_checkout_dialog,
    )
    await plugin.initialize(public_key="pk_test_...", secret_key="sk_test_...")

    # Charge a card; progress and failures arrive through the callbacks
    await plugin.charge_card(
        Charge(amount=50000, email="ada@example.com", card=card),
        before_validate=lambda tx: print("validating", tx.reference),
        on_success=lambda tx: print("paid", tx.reference),
        on_error=lambda err, tx: print("failed", err),
    )

    # Let the checkout UI handle everything
    response = await plugin.checkout(
        Charge(amount=50000, email="ada@example.com", reference="order_1042"),
        method=CheckoutMethod.CARD,
    )
    if response.status:
        fulfil_order(response.reference)
"""

import asyncio
import inspect
import logging

from paystack_plugin.banks import BankCache
from paystack_plugin.bridge import LocalPlatformBridge, PlatformBridge, fetch_platform_info
from paystack_plugin.client import PaystackAPI
from paystack_plugin.config import PaystackConfig
from paystack_plugin.context import SdkContext
from paystack_plugin.errors import (
    AuthenticationError,
    ChargeConfigurationError,
    InvalidAmountError,
    InvalidArgumentError,
    InvalidEmailError,
    MissingKeyError,
    NotInitializedError,
    PaystackError,
    key_error_message,
)
from paystack_plugin.models import (
    Charge,
    ChargeOutcome,
    ChargeResult,
    CheckoutMethod,
    CheckoutResponse,
    KeyKind,
    Transaction,
)
from paystack_plugin.transaction import (
    CheckoutPresenter,
    OnTransactionChange,
    OnTransactionError,
    TransactionManagerFactory,
)

logger = logging.getLogger(__name__)

PUBLIC_KEY_PREFIX = "pk_"
NO_ACCESS_CODE_REFERENCE = "Pass either an access code or transaction reference"


def validate_charge(charge: Charge):
    """Reject charges that no checkout method can process."""
    if charge is None:
        raise ChargeConfigurationError("charge must not be null")
    amount = charge.amount
    if amount is None or isinstance(amount, bool) or not isinstance(amount, int) or amount < 0:
        raise InvalidAmountError(amount)
    if not charge.email:
        raise InvalidEmailError(charge.email)


class PaystackPlugin:
    """Facade over the Paystack SDK for one application."""

    def __init__(
        self,
        bridge: PlatformBridge = None,
        config: PaystackConfig = None,
        context: SdkContext = None,
        transaction_manager_factory: TransactionManagerFactory = None,
        checkout_presenter: CheckoutPresenter = None,
        api_factory=None,
    ):
        self.config = config or PaystackConfig()
        self._bridge = bridge or LocalPlatformBridge()
        self._context = context or SdkContext()
        self._transaction_manager_factory = transaction_manager_factory
        self._checkout_presenter = checkout_presenter
        self._api_factory = api_factory or self._default_api

    def _default_api(self, secret_key: str) -> PaystackAPI:
        return PaystackAPI(
            secret_key=secret_key,
            base_url=self.config.base_url,
            timeout=self.config.http_timeout,
        )

    # --- Lifecycle ---

    async def initialize(self, public_key: str, secret_key: str = None) -> "PaystackPlugin":
        """Initialize the SDK. Call it as early as possible.

        Validates the keys, then runs the platform handshake once. Calling it
        again after success returns immediately. Concurrent first calls share
        a single handshake.

        Args:
            public_key: Your Paystack public key. Mandatory.
            secret_key: Your Paystack secret key. Only needed for checkout,
                where the plugin initializes transactions and lists banks.

        Returns:
            This plugin, ready for use.

        Raises:
            InvalidArgumentError: If a key is missing or empty.
            PlatformError: If the platform handshake fails. The SDK stays
                uninitialized and initialize() can be retried.
        """
        if not public_key:
            raise InvalidArgumentError("public_key cannot be null or empty")
        if secret_key is not None and not secret_key:
            raise InvalidArgumentError(
                "secret_key can be None but it cannot be empty. "
                "Unless you are using checkout, you don't need to pass a secret_key"
            )

        if self._context.initialized:
            return self

        async with self._context.init_lock:
            if self._context.initialized:
                return self

            self._context.set_credentials(public_key, secret_key)

            # Checkout will need the bank list; prefetch it without waiting.
            # BankCache.get() refetches if this fails.
            warmup = None
            if secret_key is not None:
                self._context.api = self._api_factory(secret_key)
                self._context.banks = BankCache(
                    self._context.api,
                    attempts=self.config.bank_fetch_attempts,
                    delay=self.config.bank_fetch_delay,
                    backoff=self.config.bank_fetch_backoff,
                )
                warmup = self._context.spawn(self._context.banks.warm())

            try:
                platform_info = await fetch_platform_info(self._bridge, self.config.bridge_timeout)
            except Exception:
                await self._discard_api(warmup)
                raise
            self._context.mark_initialized(platform_info)
            logger.info(
                "Paystack SDK initialized (build %s, checkout %s)",
                platform_info.build_id,
                "enabled" if secret_key is not None else "disabled",
            )
        return self

    async def _discard_api(self, warmup: asyncio.Task = None):
        """Undo the bank prefetch setup of a failed initialize()."""
        if warmup is not None:
            warmup.cancel()
            await asyncio.gather(warmup, return_exceptions=True)
        if self._context.api is not None:
            self._context.api.close()
        self._context.api = None
        self._context.banks = None

    async def close(self):
        """Cancel background work and release the HTTP session."""
        await self._context.close()
        if self._context.api is not None:
            self._context.api.close()

    @property
    def sdk_initialized(self) -> bool:
        return self._context.initialized

    @property
    def public_key(self) -> str:
        return self._context.get_public_key()

    @property
    def secret_key(self) -> str:
        return self._context.get_secret_key()

    @property
    def platform_info(self):
        self.require_initialized()
        return self._context.platform_info

    @property
    def api(self) -> PaystackAPI:
        """Secret-key API client, for checkout presenters that initialize by reference."""
        self._perform_checks(KeyKind.SECRET)
        return self._context.api

    # --- Gating ---

    def require_initialized(self):
        if not self._context.initialized:
            raise NotInitializedError()

    def require_key(self, kind: KeyKind):
        key = self.public_key if kind is KeyKind.PUBLIC else self.secret_key
        if not key:
            raise MissingKeyError(kind.value)

    def _perform_checks(self, kind: KeyKind):
        self.require_initialized()
        self.require_key(kind)

    # --- Card charge ---

    async def charge_card(
        self,
        charge: Charge,
        before_validate: OnTransactionChange,
        on_success: OnTransactionChange,
        on_error: OnTransactionError,
    ) -> ChargeResult:
        """Charge the user's card.

        Args:
            charge: The charge, with amount and card details.
            before_validate: Called before the transaction is validated.
            on_success: Called when the payment completes successfully.
            on_error: Called with (error, transaction) when the payment fails.

        Returns:
            ChargeResult with SUCCESS once the transaction manager has run,
            or RUNTIME_FAULT carrying the error already passed to on_error.

        Raises:
            NotInitializedError, MissingKeyError: Before any callback runs.
            AuthenticationError: If the public key is malformed. on_error is
                not called for this.
        """
        self._perform_checks(KeyKind.PUBLIC)

        public_key = self.public_key
        if not public_key or not public_key.startswith(PUBLIC_KEY_PREFIX):
            raise AuthenticationError(key_error_message("public"))

        try:
            if self._transaction_manager_factory is None:
                raise PaystackError("No transaction manager configured for card charges")
            manager = self._transaction_manager_factory(charge, before_validate, on_success, on_error)
            result = manager.charge_card()
            if inspect.isawaitable(result):
                result = await result
        except AuthenticationError:
            raise
        except Exception as e:
            logger.debug("Card charge failed: %s", e)
            on_error(e, None)
            return ChargeResult(ChargeOutcome.RUNTIME_FAULT, error=e)

        transaction = result if isinstance(result, Transaction) else None
        return ChargeResult(ChargeOutcome.SUCCESS, transaction=transaction)

    async def charge_card_result(
        self,
        charge: Charge,
        before_validate: OnTransactionChange,
        on_success: OnTransactionChange,
        on_error: OnTransactionError,
    ) -> ChargeResult:
        """Like charge_card(), but setup faults come back as CONFIGURATION_FAULT."""
        try:
            return await self.charge_card(charge, before_validate, on_success, on_error)
        except (NotInitializedError, MissingKeyError, AuthenticationError) as e:
            return ChargeResult(ChargeOutcome.CONFIGURATION_FAULT, error=e)

    # --- Checkout ---

    async def checkout(self, charge: Charge, method: CheckoutMethod = CheckoutMethod.SELECTABLE) -> CheckoutResponse:
        """Make payment through the checkout UI, which handles the whole process.

        The charge needs an amount (minor units) and an email. For
        CheckoutMethod.CARD and CheckoutMethod.SELECTABLE it also needs an
        access code or a reference:

        * With an access code, the transaction is already initialized and
          payment starts immediately.
        * With a reference, the checkout initializes the transaction
          (POST /transaction/initialize) with that reference.

        Returns:
            The presenter's CheckoutResponse, or CheckoutResponse.defaults()
            if the checkout was dismissed without a result.

        Raises:
            NotInitializedError, MissingKeyError: If the SDK is not ready or
                no secret key was given.
            ChargeConfigurationError: If the charge can't be used with
                ``method``. Raised before any UI is shown.
        """
        if method is None:
            raise InvalidArgumentError(
                "method must not be None. Pass CheckoutMethod.SELECTABLE to let the user choose"
            )
        try:
            method = CheckoutMethod(method)
        except ValueError:
            raise InvalidArgumentError(f"{method!r} is not a checkout method") from None
        self._perform_checks(KeyKind.SECRET)
        validate_charge(charge)

        if method in (CheckoutMethod.SELECTABLE, CheckoutMethod.CARD) and (
            charge.access_code is None and charge.reference is None
        ):
            raise ChargeConfigurationError(NO_ACCESS_CODE_REFERENCE)

        if self._checkout_presenter is None:
            raise PaystackError("No checkout presenter configured")

        response = await self._checkout_presenter(method, charge)
        if response is None:
            return CheckoutResponse.defaults()
        return response

    async def supported_banks(self) -> list:
        """Banks available for bank checkout, from cache or refetched on miss."""
        self._perform_checks(KeyKind.SECRET)
        return await self._context.banks.get()
