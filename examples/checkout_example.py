#!/usr/bin/env python3
"""
Paystack Plugin Example — Terminal Checkout

Runs a checkout with a console "presenter" standing in for the mobile
checkout dialog: it initializes the transaction by reference, prints the
authorization URL for the customer, then verifies the payment once you
press Enter.

Prerequisites:
  pip install -e .

  Set your test keys as environment variables:

    export PAYSTACK_PUBLIC_KEY="pk_test_..."
    export PAYSTACK_SECRET_KEY="sk_test_..."

Usage:
  python checkout_example.py --email ada@example.com --amount 50000
  python checkout_example.py --banks        # list banks for bank checkout
"""

import argparse
import asyncio
import logging
import sys
import uuid

from paystack_plugin import (
    Charge,
    CheckoutMethod,
    CheckoutResponse,
    PaystackConfig,
    PaystackError,
    PaystackPlugin,
)


class ConsoleCheckout:
    """Checkout presenter that talks to the customer through the terminal."""

    def __init__(self):
        self.plugin = None

    async def __call__(self, method: CheckoutMethod, charge: Charge):
        api = self.plugin.api
        if charge.access_code is None:
            tx = await asyncio.to_thread(api.initialize_transaction, charge)
            print(f"  Pay here: {tx['authorization_url']}")
        answer = await asyncio.to_thread(input, "  Press Enter once paid (or type 'q' to cancel): ")
        if answer.strip().lower() == "q":
            return None

        result = await asyncio.to_thread(api.verify_transaction, charge.reference)
        return CheckoutResponse(
            message=result.get("gateway_response"),
            reference=charge.reference,
            status=result.get("status") == "success",
            method=method,
            verify=True,
        )


async def run(args, config: PaystackConfig):
    presenter = ConsoleCheckout()
    plugin = PaystackPlugin(config=config, checkout_presenter=presenter)
    presenter.plugin = plugin
    try:
        await plugin.initialize(config.public_key, config.secret_key)

        if args.banks:
            for bank in await plugin.supported_banks():
                print(f"  {bank['code']:>6}  {bank['name']}")
            return

        charge = Charge(
            amount=args.amount,
            email=args.email,
            reference=f"demo_{uuid.uuid4().hex[:12]}",
        )
        response = await plugin.checkout(charge, method=CheckoutMethod.CARD)
        print(f"\n  {response.message} (reference: {response.reference}, paid: {response.status})")
    finally:
        await plugin.close()


def main():
    parser = argparse.ArgumentParser(description="Paystack Plugin Checkout Example")
    parser.add_argument("--email", default="customer@example.com")
    parser.add_argument("--amount", type=int, default=50000, help="Amount in kobo")
    parser.add_argument("--banks", action="store_true", help="List supported banks and exit")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    config = PaystackConfig.from_env()
    if not config.public_key or not config.secret_key:
        print("Error: PAYSTACK_PUBLIC_KEY and PAYSTACK_SECRET_KEY must be set.")
        print()
        print("Get test keys from https://dashboard.paystack.co/#/settings/developer")
        sys.exit(1)

    try:
        asyncio.run(run(args, config))
    except PaystackError as e:
        print(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
