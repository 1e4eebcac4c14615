"""
Paystack API client — the slice of the REST API the plugin itself talks to.

Card charging and OTP/PIN challenges run inside the transaction manager; this
client only covers what the plugin needs directly: the supported-bank list for
bank checkout and transaction initialization/verification for checkout by
reference. Every call is authenticated with the secret key.

Usage:
    from paystack_plugin.client import PaystackAPI

    api = PaystackAPI(secret_key="sk_test_...")

    banks = api.list_banks()
    tx = api.initialize_transaction(Charge(amount=50000, email="ada@example.com", reference="ref_1"))
    status = api.verify_transaction("ref_1")
"""

import logging

import requests

from paystack_plugin.config import DEFAULT_BASE_URL
from paystack_plugin.errors import PaystackAPIError, RateLimitError
from paystack_plugin.models import Charge

logger = logging.getLogger(__name__)


class PaystackAPI:
    """Blocking HTTP client over a shared requests session."""

    def __init__(self, secret_key: str, base_url: str = DEFAULT_BASE_URL, timeout: float = 30.0, session: requests.Session = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers["Authorization"] = f"Bearer {secret_key}"
        self.session.headers["Content-Type"] = "application/json"

    def _request(self, method: str, path: str, **kwargs) -> dict:
        """Make an authenticated request to the Paystack API.

        Centralizes error handling — converts HTTP errors to typed exceptions
        and unwraps the ``data`` field of the response envelope.
        """
        url = f"{self.base_url}{path}"
        logger.debug("%s %s", method, url)
        resp = self.session.request(method, url, timeout=self.timeout, **kwargs)

        if resp.status_code == 429:
            raise RateLimitError(response=resp)

        if not resp.ok:
            try:
                detail = resp.json().get("message", resp.text)
            except (ValueError, AttributeError):
                detail = resp.text
            raise PaystackAPIError(resp.status_code, detail, resp)

        body = resp.json()
        if body.get("status") is False:
            raise PaystackAPIError(resp.status_code, body.get("message", "Request failed"), resp)
        return body.get("data")

    def list_banks(self, per_page: int = 100, pay_with_bank: bool = True, gateway: str = None) -> list:
        """List banks that support pay-with-bank.

        Returns:
            List of bank dicts with at least 'id', 'name' and 'code'.
        """
        params = {"perPage": per_page}
        if pay_with_bank:
            params["pay_with_bank"] = "true"
        if gateway:
            params["gateway"] = gateway
        return self._request("GET", "/bank", params=params) or []

    def initialize_transaction(self, charge: Charge) -> dict:
        """Initialize a transaction for the charge's reference.

        Returns:
            Dict with 'authorization_url', 'access_code' and 'reference'.
        """
        return self._request("POST", "/transaction/initialize", json=charge.to_payload())

    def verify_transaction(self, reference: str) -> dict:
        return self._request("GET", f"/transaction/verify/{reference}")

    def close(self):
        self.session.close()
