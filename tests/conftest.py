"""
Shared pytest fixtures for nodeless-sdk tests.

This module provides wire-format sample payloads for every resource and a
factory for clients backed by httpx.MockTransport, so no test touches the
network.
"""

import json

import httpx
import pytest

from nodeless_sdk.client import NodelessClient


TEST_API_KEY = "test_api_key"
TEST_BASE_URL = "https://api.example.com"
CREATED_AT = "2023-11-14T22:13:20.000000Z"  # 1700000000


class Recorder:
    """
    MockTransport handler that answers every request with one canned reply
    and remembers the requests it saw.
    """

    def __init__(self, payload=None, status_code=200, content=None):
        self.payload = payload
        self.status_code = status_code
        self.content = content
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.content is not None:
            return httpx.Response(self.status_code, content=self.content)
        return httpx.Response(self.status_code, json=self.payload)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_body(self):
        """Decoded JSON body of the last request."""
        return json.loads(self.last.content)


@pytest.fixture
def make_client():
    """Factory building a NodelessClient on top of a MockTransport handler."""

    def factory(handler, **kwargs):
        http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return NodelessClient(
            api_key=TEST_API_KEY,
            base_url=kwargs.pop("base_url", TEST_BASE_URL),
            http_client=http,
            **kwargs,
        )

    return factory


@pytest.fixture
def mock_api(make_client):
    """
    Factory returning (client, recorder) for a single canned response.

    Usage:
        client, recorder = mock_api({"data": {...}})
    """

    def factory(payload=None, status_code=200, content=None):
        recorder = Recorder(payload, status_code=status_code, content=content)
        return make_client(recorder), recorder

    return factory


@pytest.fixture
def store_payload():
    """Store as returned by the API."""
    return {
        "id": "store_123",
        "name": "Satoshi's Shop",
        "url": "https://shop.example.com",
        "email": "shop@example.com",
        "createdAt": CREATED_AT,
    }


@pytest.fixture
def invoice_payload(store_payload):
    """Freshly created store invoice."""
    return {
        "id": "inv_123",
        "checkoutLink": "https://nodeless.io/checkout/inv_123",
        "satsAmount": 58321,
        "status": "new",
        "buyerEmail": "hi@nodeless.io",
        "redirectUrl": "https://nodeless.io",
        "metadata": None,
        "createdAt": CREATED_AT,
        "paidAt": None,
        "onchainAddress": "bc1qxy2kgdygjrsqtzq2n0yrf2493p83kkfjhx0wlh",
        "lightningInvoice": "lnbc583210n1pj...",
        "store": store_payload,
        "qrCodes": {
            "unified": "data:image/png;base64,AAA",
            "onchain": "data:image/png;base64,BBB",
            "lightning": "data:image/png;base64,CCC",
        },
    }


@pytest.fixture
def paywall_payload():
    """Redirect paywall with server-assigned fields."""
    return {
        "id": "pw_123",
        "name": "Helloworld",
        "type": "redirect",
        "price": 1042,
        "settings": {"redirect_url": "https://example.com/secret"},
        "created_at": CREATED_AT,
        "updated_at": CREATED_AT,
    }


@pytest.fixture
def paywall_request_payload(paywall_payload):
    """Pending paywall request with its paywall embedded."""
    return {
        "id": "req_123",
        "satsAmount": 1042,
        "status": "new",
        "metadata": None,
        "createdAt": CREATED_AT,
        "paidAt": None,
        "onchainAddress": "bc1qar0srrr7xfkvy5l643lydnw9re59gtzzwf5mdq",
        "lightningInvoice": "lnbc10420n1pj...",
        "paywall": paywall_payload,
    }


@pytest.fixture
def transaction_payload():
    """Settled donation transaction."""
    return {
        "id": "tx_123",
        "transactable_type": "Donation",
        "transactable": {
            "id": 42,
            "uuid": "5f0c2a0e-8e55-4a57-9d0c-0d4c7f7f3a11",
            "donation_page_id": 7,
            "amount": 2100,
            "amount_paid": 2100,
            "name": "Hal",
            "message": "running bitcoin",
            "status": "paid",
            "type": "lightning",
            "metadata": None,
            "created_at": CREATED_AT,
            "updated_at": CREATED_AT,
            "paid_at": "2023-11-14T22:14:00.000000Z",
        },
        "amount": 2100.0,
        "type": "credit",
        "status": "settled",
        "created_at": CREATED_AT,
        "updated_at": CREATED_AT,
        "is_fee": False,
    }


@pytest.fixture
def webhook_payload():
    """Inactive store webhook."""
    return {
        "id": "wh_123",
        "secret": "RjnNCIN9pRRMEIn3clq1shoHiXIej0XL",
        "status": "inactive",
        "events": ["new"],
        "url": "https://nodless.io",
        "createdAt": CREATED_AT,
        "lastDeliveryAt": None,
    }
