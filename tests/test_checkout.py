"""Tests for checkout dispatch."""

import pytest
import pytest_asyncio

from paystack_plugin import (
    Charge,
    ChargeConfigurationError,
    CheckoutMethod,
    CheckoutResponse,
    InvalidAmountError,
    InvalidArgumentError,
    InvalidEmailError,
    MissingKeyError,
    NotInitializedError,
)


class FakePresenter:
    def __init__(self, response=None):
        self.response = response
        self.calls = []

    async def __call__(self, method, charge):
        self.calls.append((method, charge))
        return self.response


@pytest.fixture
def presenter():
    return FakePresenter(CheckoutResponse(message="Success", reference="ref_9", status=True, method=CheckoutMethod.CARD))


@pytest_asyncio.fixture
async def ready_plugin(make_plugin, presenter):
    plugin = make_plugin(checkout_presenter=presenter)
    await plugin.initialize("pk_test_abc", "sk_test_abc")
    yield plugin
    await plugin.close()


@pytest.mark.asyncio
async def test_checkout_before_initialize(make_plugin, presenter):
    plugin = make_plugin(checkout_presenter=presenter)

    with pytest.raises(NotInitializedError):
        await plugin.checkout(Charge(amount=100, email="a@b.co", reference="r"))

    assert presenter.calls == []


@pytest.mark.asyncio
async def test_checkout_requires_secret_key(make_plugin, presenter):
    plugin = make_plugin(checkout_presenter=presenter)
    await plugin.initialize("pk_test_abc")

    with pytest.raises(MissingKeyError) as exc_info:
        await plugin.checkout(Charge(amount=100, email="a@b.co", reference="r"))

    assert exc_info.value.kind == "secret"
    assert presenter.calls == []


@pytest.mark.asyncio
@pytest.mark.parametrize("method", [CheckoutMethod.CARD, CheckoutMethod.SELECTABLE])
async def test_card_checkout_needs_access_code_or_reference(ready_plugin, presenter, method):
    with pytest.raises(ChargeConfigurationError):
        await ready_plugin.checkout(Charge(amount=100, email="a@b.co"), method=method)

    assert presenter.calls == []


@pytest.mark.asyncio
async def test_bank_checkout_does_not_need_reference(ready_plugin, presenter):
    charge = Charge(amount=100, email="a@b.co")

    response = await ready_plugin.checkout(charge, method=CheckoutMethod.BANK)

    assert response.status is True
    assert presenter.calls == [(CheckoutMethod.BANK, charge)]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "charge, error",
    [
        (Charge(amount=None, email="a@b.co", reference="r"), InvalidAmountError),
        (Charge(amount=-1, email="a@b.co", reference="r"), InvalidAmountError),
        (Charge(amount=10.5, email="a@b.co", reference="r"), InvalidAmountError),
        (Charge(amount=100, email="", reference="r"), InvalidEmailError),
        (None, ChargeConfigurationError),
    ],
)


async def test_malformed_charge_is_rejected_before_ui(ready_plugin, presenter, charge, error):
    with pytest.raises(error):
        await ready_plugin.checkout(charge)

    assert presenter.calls == []


@pytest.mark.asyncio
async def test_checkout_passes_method_and_charge_to_presenter(ready_plugin, presenter):
    charge = Charge(amount=50000, email="ada@example.com", access_code="ac_123")

    response = await ready_plugin.checkout(charge, method=CheckoutMethod.CARD)

    assert presenter.calls == [(CheckoutMethod.CARD, charge)]
    assert response.reference == "ref_9"


@pytest.mark.asyncio
async def test_dismissed_checkout_returns_defaults(ready_plugin, presenter):
    presenter.response = None

    response = await ready_plugin.checkout(Charge(amount=100, email="a@b.co", reference="r"))

    assert response == CheckoutResponse.defaults()
    assert response.status is False
    assert response.message == "Transaction terminated"
    assert response.method is CheckoutMethod.SELECTABLE


@pytest.mark.asyncio
async def test_string_method_is_coerced_before_validation(ready_plugin, presenter):
    with pytest.raises(ChargeConfigurationError):
        await ready_plugin.checkout(Charge(amount=100, email="a@b.co"), method="card")

    charge = Charge(amount=100, email="a@b.co")
    await ready_plugin.checkout(charge, method="bank")

    assert presenter.calls == [(CheckoutMethod.BANK, charge)]


@pytest.mark.asyncio
async def test_unknown_method_is_rejected(ready_plugin, presenter):
    with pytest.raises(InvalidArgumentError):
        await ready_plugin.checkout(Charge(amount=100, email="a@b.co", reference="r"), method="paypal")

    assert presenter.calls == []
