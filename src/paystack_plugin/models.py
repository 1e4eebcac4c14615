"""Value types passed between the application and the plugin."""

import enum
from dataclasses import dataclass

USER_TERMINATED = "Transaction terminated"


class CheckoutMethod(enum.Enum):
    CARD = "card"
    BANK = "bank"
    SELECTABLE = "selectable"


class KeyKind(enum.Enum):
    PUBLIC = "public"
    SECRET = "secret"


@dataclass
class PaymentCard:
    number: str = None
    cvc: str = None
    expiry_month: int = None
    expiry_year: int = None
    name: str = None

    def __post_init__(self):
        if self.number:
            self.number = "".join(ch for ch in str(self.number) if ch.isdigit())

    @property
    def last4(self) -> str:
        if not self.number or len(self.number) < 4:
            return None
        return self.number[-4:]

    def __repr__(self):
        return (
            f"PaymentCard(last4={self.last4!r}, expiry_month={self.expiry_month!r}, "
            f"expiry_year={self.expiry_year!r}, name={self.name!r})"
        )


@dataclass
class Charge:
    """A payment to be made, with the amount in minor units (kobo for NGN).

    Checkout with ``CheckoutMethod.CARD`` or ``CheckoutMethod.SELECTABLE``
    also needs either ``access_code`` (transaction already initialized on
    your server) or ``reference`` (the plugin initializes it).
    """

    amount: int = None
    email: str = None
    currency: str = "NGN"
    reference: str = None
    access_code: str = None
    card: PaymentCard = None
    metadata: dict = None
    plan: str = None
    subaccount: str = None
    transaction_charge: int = None
    bearer: str = None

    def to_payload(self) -> dict:
        """Body for POST /transaction/initialize."""
        payload = {
            "amount": self.amount,
            "email": self.email,
            "currency": self.currency,
        }
        if self.reference:
            payload["reference"] = self.reference
        if self.metadata:
            payload["metadata"] = self.metadata
        if self.plan:
            payload["plan"] = self.plan
        if self.subaccount:
            payload["subaccount"] = self.subaccount
        if self.transaction_charge is not None:
            payload["transaction_charge"] = self.transaction_charge
        if self.bearer:
            payload["bearer"] = self.bearer
        return payload


@dataclass
class Transaction:
    id: str = None
    reference: str = None
    message: str = None


@dataclass
class CheckoutResponse:
    message: str = None
    reference: str = None
    status: bool = False
    method: CheckoutMethod = CheckoutMethod.SELECTABLE
    verify: bool = False
    card: PaymentCard = None

    @classmethod
    def defaults(cls) -> "CheckoutResponse":
        """Response returned when the checkout is dismissed without a result."""
        return cls(message=USER_TERMINATED)


@dataclass(frozen=True)
class PlatformInfo:
    user_agent: str
    build_id: str
    device_id: str


class ChargeOutcome(enum.Enum):
    SUCCESS = "success"
    CONFIGURATION_FAULT = "configuration_fault"
    RUNTIME_FAULT = "runtime_fault"


@dataclass
class ChargeResult:
    outcome: ChargeOutcome
    transaction: Transaction = None
    error: Exception = None

    @property
    def ok(self) -> bool:
        return self.outcome is ChargeOutcome.SUCCESS
