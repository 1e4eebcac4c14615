"""Collaborator interfaces the facade delegates to.

The card-charge lifecycle (validation, PIN/OTP challenges, polling) and the
checkout UI live behind these interfaces. The application, or a UI binding,
supplies concrete implementations to ``PaystackPlugin``.
"""

from abc import ABC, abstractmethod
from typing import Awaitable, Callable, Optional

from paystack_plugin.models import Charge, CheckoutMethod, CheckoutResponse, Transaction

OnTransactionChange = Callable[[Transaction], None]
OnTransactionError = Callable[[Exception, Optional[Transaction]], None]


class TransactionManager(ABC):
    """Drives one card charge from start to finish.

    Implementations report progress only through the callbacks they were
    built with; ``charge_card`` may be a plain method or a coroutine.
    """

    def __init__(
        self,
        charge: Charge,
        before_validate: OnTransactionChange,
        on_success: OnTransactionChange,
        on_error: OnTransactionError,
    ):
        self.charge = charge
        self.before_validate = before_validate
        self.on_success = on_success
        self.on_error = on_error

    @abstractmethod
    def charge_card(self):
        pass


TransactionManagerFactory = Callable[
    [Charge, OnTransactionChange, OnTransactionChange, OnTransactionError],
    TransactionManager,
]

# Shows the checkout modal and resolves with its result, or None if dismissed.
CheckoutPresenter = Callable[[CheckoutMethod, Charge], Awaitable[Optional[CheckoutResponse]]]
