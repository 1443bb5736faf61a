"""
Location: nodeless_sdk/client.py

Summary:
    Main NodelessClient class for the nodeless-sdk. Holds the API key,
    base URL and pooled httpx client, exposes the four JSON transport
    primitives, and implements one coroutine per Nodeless API endpoint.

Usage:
    The primary entry point for using the SDK. Every resource operation
    builds its path, calls a primitive, unwraps the envelope and decodes
    the payload into a model from types.py. One client can be shared by
    any number of concurrent tasks.

Example:
    from nodeless_sdk import NodelessClient
    from nodeless_sdk.types import InvoiceRequest

    async with NodelessClient(api_key="...") as client:
        invoice = await client.create_store_invoice(
            "store_id",
            InvoiceRequest(
                amount=21.21,
                currency="USD",
                buyer_email="hi@nodeless.io",
                redirect_url="https://nodeless.io",
            ),
        )
        status = await client.get_store_invoice_status("store_id", invoice.id)
"""

import json
import logging
from typing import Any, Optional, Union
from urllib.parse import quote

import httpx

from .envelope import decode, encode, unwrap
from .errors import InvalidResponseError, InvalidUrlError, TransportError
from .types import (
    CreateWebhook,
    Invoice,
    InvoiceRequest,
    InvoiceStatus,
    Paywall,
    PaywallRequest,
    ServerStatusResponse,
    Store,
    Transaction,
    Webhook,
)

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://nodeless.io"
API_PREFIX = "api/v1"

# Parent resources that own webhooks
STORE_SCOPE = "store"
PAYWALL_SCOPE = "paywall"

URLTypes = Union[httpx.URL, str]


class NodelessClient:
    """
    Async client for the Nodeless API.

    Configuration is fixed at construction time; the client keeps no
    other state, so concurrent calls need no coordination. Nothing is
    retried or cached: each call is a single request and any failure is
    raised to the caller.

    Attributes:
        api_key: Nodeless API token sent as a Bearer token
        base_url: Parsed base URL requests are resolved against
        default_headers: Extra headers sent on every request
    """

    def __init__(
        self,
        api_key: str,
        base_url: Optional[str] = None,
        *,
        timeout: Optional[float] = None,
        headers: Optional[dict[str, str]] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize the NodelessClient.

        No request is made here, so a wrong API key only shows up on the
        first call.

        Args:
            api_key: Nodeless API token
            base_url: API host (default https://nodeless.io)
            timeout: Request timeout in seconds (default: httpx's default)
            headers: Optional default headers for all requests
            http_client: Optional httpx.AsyncClient to reuse; it is not
                         closed by close()

        Raises:
            InvalidUrlError: If base_url is not an absolute http(s) URL
        """
        self._api_key = api_key
        self._base_url = _parse_base_url(DEFAULT_BASE_URL if base_url is None else base_url)
        self._default_headers = dict(headers or {})

        if http_client is not None:
            self._http = http_client
            self._owns_http = False
        else:
            options: dict[str, Any] = {}
            if timeout is not None:
                options["timeout"] = timeout
            self._http = httpx.AsyncClient(**options)
            self._owns_http = True

    @property
    def api_key(self) -> str:
        return self._api_key

    @property
    def base_url(self) -> httpx.URL:
        return self._base_url

    @property
    def default_headers(self) -> dict[str, str]:
        return dict(self._default_headers)

    async def close(self) -> None:
        """
        Close the HTTP client and release resources.

        A client passed in through http_client is left open for its owner.
        """
        if self._owns_http:
            await self._http.aclose()

    async def __aenter__(self) -> "NodelessClient":
        """Enter async context manager."""
        return self

    async def __aexit__(self, *args) -> None:
        """Exit async context manager and close resources."""
        await self.close()

    # -- transport primitives -------------------------------------------------

    def endpoint(self, *segments: str, params: Optional[dict[str, str]] = None) -> httpx.URL:
        """
        Build an absolute API URL.

        Each segment is percent-escaped and appended under /api/v1/.

        Args:
            segments: Path segments, e.g. ("store", store_id, "invoice")
            params: Optional query parameters

        Returns:
            The resolved httpx.URL

        Raises:
            InvalidUrlError: If a segment is empty or not a string
        """
        parts = [API_PREFIX]
        for segment in segments:
            if not isinstance(segment, str) or not segment:
                raise InvalidUrlError(f"path segment must be a non-empty string, got {segment!r}")
            parts.append(quote(segment, safe=""))

        url = self._base_url.join("/".join(parts))
        if params:
            url = url.copy_merge_params(params)
        return url

    async def get(self, url: URLTypes) -> Any:
        """
        Send a GET request and return the parsed JSON body.

        Args:
            url: Absolute request URL

        Returns:
            Parsed JSON document (None for an empty body)

        Raises:
            TransportError: On network failure or a non-2xx status
            InvalidResponseError: If the body is not JSON
        """
        return await self._send("GET", url)

    async def post(self, url: URLTypes, body: Any = None) -> Any:
        """
        Send a POST request with a JSON body.

        A missing body is sent as the JSON literal null, which is what
        body-less create endpoints expect.

        Args:
            url: Absolute request URL
            body: JSON-compatible value

        Returns:
            Parsed JSON document (None for an empty body)
        """
        return await self._send("POST", url, body, has_body=True)

    async def put(self, url: URLTypes, body: Any = None) -> Any:
        """Send a PUT request with a JSON body (null when omitted)."""
        return await self._send("PUT", url, body, has_body=True)

    async def delete(self, url: URLTypes) -> Any:
        """Send a DELETE request without a body."""
        return await self._send("DELETE", url)

    async def _send(
        self,
        method: str,
        url: URLTypes,
        body: Any = None,
        *,
        has_body: bool = False,
    ) -> Any:
        headers = {**self._default_headers, **self._auth_headers()}
        content = json.dumps(body) if has_body else None

        logger.debug("%s %s", method, url)
        try:
            response = await self._http.request(method, url, content=content, headers=headers)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status_code = exc.response.status_code
            raise TransportError(
                f"{method} {url} returned HTTP {status_code}: {exc.response.text[:200]}",
                status_code=status_code,
            ) from exc
        except httpx.HTTPError as exc:
            raise TransportError(f"{method} {url} failed: {exc!r}") from exc

        return _parse_json_body(response)

    def _auth_headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    # -- server ---------------------------------------------------------------

    async def get_server_status(self) -> ServerStatusResponse:
        """Get the API health status."""
        document = await self.get(self.endpoint("status"))
        return decode(ServerStatusResponse, unwrap(document))

    # -- stores and invoices --------------------------------------------------

    async def get_stores(self) -> list[Store]:
        """Get all stores on the account."""
        document = await self.get(self.endpoint("store"))
        return decode(list[Store], unwrap(document))

    async def get_store(self, store_id: str) -> Store:
        """Get a single store by ID."""
        document = await self.get(self.endpoint("store", store_id))
        return decode(Store, unwrap(document))

    async def create_store_invoice(self, store_id: str, invoice: InvoiceRequest) -> Invoice:
        """
        Create an invoice in a store.

        The server assigns the ID, the satoshi amount and the payment
        details; a new invoice starts with status NEW.

        Args:
            store_id: Store to invoice from
            invoice: Buyer-facing invoice fields

        Returns:
            The created Invoice
        """
        document = await self.post(self.endpoint("store", store_id, "invoice"), encode(invoice))
        return decode(Invoice, unwrap(document))

    async def get_store_invoice(self, store_id: str, invoice_id: str) -> Invoice:
        """Get a store invoice by ID."""
        document = await self.get(self.endpoint("store", store_id, "invoice", invoice_id))
        return decode(Invoice, unwrap(document))

    async def get_store_invoice_status(self, store_id: str, invoice_id: str) -> InvoiceStatus:
        """
        Get only the status of a store invoice.

        Lighter than get_store_invoice and meant for polling. Statuses the
        SDK does not know come back as InvoiceStatus UNKNOWN carrying the
        server's text.
        """
        url = self.endpoint("store", store_id, "invoice", invoice_id, "status")
        document = await self.get(url)
        return decode(InvoiceStatus, unwrap(document, "status"))

    # -- transactions ---------------------------------------------------------

    async def get_transaction(self, transaction_id: str) -> Transaction:
        """Get a transaction by ID."""
        document = await self.get(self.endpoint("transaction", transaction_id))
        return decode(Transaction, unwrap(document))

    async def get_transactions(self, is_fee: bool = False) -> list[Transaction]:
        """
        Get account transactions.

        Args:
            is_fee: Only return fee transactions (sends ?isFee=1)
        """
        params = {"isFee": "1"} if is_fee else None
        document = await self.get(self.endpoint("transaction", params=params))
        return decode(list[Transaction], unwrap(document))

    # -- paywalls -------------------------------------------------------------

    async def create_paywall(self, paywall: Paywall) -> Paywall:
        """
        Create a paywall.

        Args:
            paywall: Paywall to create; id and timestamps are not sent

        Returns:
            The created Paywall including its server-assigned id
        """
        document = await self.post(self.endpoint("paywall"), encode(paywall))
        return decode(Paywall, unwrap(document))

    async def get_paywalls(self) -> list[Paywall]:
        """Get all paywalls on the account."""
        document = await self.get(self.endpoint("paywall"))
        return decode(list[Paywall], unwrap(document))

    async def get_paywall(self, paywall_id: str) -> Optional[Paywall]:
        """Get a paywall by ID, or None if the server returns no data."""
        document = await self.get(self.endpoint("paywall", paywall_id))
        return decode(Optional[Paywall], unwrap(document))

    async def update_paywall(self, paywall_id: str, paywall: Paywall) -> None:
        """
        Replace a paywall's fields.

        The response body is not decoded; call get_paywall to see the
        result.
        """
        await self.put(self.endpoint("paywall", paywall_id), encode(paywall))

    async def delete_paywall(self, paywall_id: str) -> None:
        """Delete a paywall."""
        await self.delete(self.endpoint("paywall", paywall_id))

    # -- paywall requests -----------------------------------------------------

    async def create_paywall_request(self, paywall_id: str) -> PaywallRequest:
        """
        Start a payment attempt against a paywall.

        Args:
            paywall_id: Paywall to pay

        Returns:
            PaywallRequest whose id is used for get_paywall_request and
            get_paywall_request_status
        """
        document = await self.post(self.endpoint("paywall", paywall_id, "request"))
        return decode(PaywallRequest, unwrap(document))

    async def get_paywall_request(self, paywall_id: str, request_id: str) -> PaywallRequest:
        """Get a paywall request by ID."""
        url = self.endpoint("paywall", paywall_id, "request", request_id)
        document = await self.get(url)
        return decode(PaywallRequest, unwrap(document))

    async def get_paywall_request_status(self, paywall_id: str, request_id: str) -> str:
        """Get only the status string of a paywall request."""
        url = self.endpoint("paywall", paywall_id, "request", request_id, "status")
        document = await self.get(url)
        return decode(str, unwrap(document, "status"))

    # -- store webhooks -------------------------------------------------------

    async def get_store_webhooks(self, store_id: str) -> list[Webhook]:
        """Get all webhooks of a store."""
        return await self._get_webhooks(STORE_SCOPE, store_id)

    async def get_store_webhook(self, store_id: str, webhook_id: str) -> Webhook:
        """Get a store webhook by ID."""
        return await self._get_webhook(STORE_SCOPE, store_id, webhook_id)

    async def create_store_webhook(self, store_id: str, webhook: CreateWebhook) -> Webhook:
        """Create a webhook on a store."""
        return await self._create_webhook(STORE_SCOPE, store_id, webhook)

    async def update_store_webhook(
        self,
        store_id: str,
        webhook_id: str,
        webhook: CreateWebhook,
    ) -> Webhook:
        """Replace a store webhook and return the updated record."""
        return await self._update_webhook(STORE_SCOPE, store_id, webhook_id, webhook)

    async def delete_store_webhook(self, store_id: str, webhook_id: str) -> None:
        """
        Delete a store webhook.

        Request failures are logged and discarded, so this also returns
        normally for a webhook that does not exist (or when the request
        failed for any other reason).

        Raises:
            InvalidUrlError: If an ID is empty
        """
        await self._delete_webhook(STORE_SCOPE, store_id, webhook_id)

    # -- paywall webhooks -----------------------------------------------------

    async def get_paywall_webhooks(self, paywall_id: str) -> list[Webhook]:
        """Get all webhooks of a paywall."""
        return await self._get_webhooks(PAYWALL_SCOPE, paywall_id)

    async def get_paywall_webhook(self, paywall_id: str, webhook_id: str) -> Webhook:
        """Get a paywall webhook by ID."""
        return await self._get_webhook(PAYWALL_SCOPE, paywall_id, webhook_id)

    async def create_paywall_webhook(self, paywall_id: str, webhook: CreateWebhook) -> Webhook:
        """Create a webhook on a paywall."""
        return await self._create_webhook(PAYWALL_SCOPE, paywall_id, webhook)

    async def update_paywall_webhook(
        self,
        paywall_id: str,
        webhook_id: str,
        webhook: CreateWebhook,
    ) -> Webhook:
        """Replace a paywall webhook and return the updated record."""
        return await self._update_webhook(PAYWALL_SCOPE, paywall_id, webhook_id, webhook)

    async def delete_paywall_webhook(self, paywall_id: str, webhook_id: str) -> None:
        """
        Delete a paywall webhook.

        Same failure handling as delete_store_webhook.
        """
        await self._delete_webhook(PAYWALL_SCOPE, paywall_id, webhook_id)

    # -- webhook helpers shared by both scopes --------------------------------

    async def _get_webhooks(self, scope: str, parent_id: str) -> list[Webhook]:
        document = await self.get(self.endpoint(scope, parent_id, "webhook"))
        return decode(list[Webhook], unwrap(document))

    async def _get_webhook(self, scope: str, parent_id: str, webhook_id: str) -> Webhook:
        document = await self.get(self.endpoint(scope, parent_id, "webhook", webhook_id))
        return decode(Webhook, unwrap(document))

    async def _create_webhook(self, scope: str, parent_id: str, webhook: CreateWebhook) -> Webhook:
        document = await self.post(self.endpoint(scope, parent_id, "webhook"), encode(webhook))
        return decode(Webhook, unwrap(document))

    async def _update_webhook(
        self,
        scope: str,
        parent_id: str,
        webhook_id: str,
        webhook: CreateWebhook,
    ) -> Webhook:
        url = self.endpoint(scope, parent_id, "webhook", webhook_id)
        document = await self.put(url, encode(webhook))
        return decode(Webhook, unwrap(document))

    async def _delete_webhook(self, scope: str, parent_id: str, webhook_id: str) -> None:
        url = self.endpoint(scope, parent_id, "webhook", webhook_id)
        # TODO: confirm with Nodeless whether a 404 here means "already deleted";
        # until then every request failure is discarded, not only that one.
        try:
            await self.delete(url)
        except (TransportError, InvalidResponseError) as exc:
            logger.warning("Ignoring failed webhook delete %s: %s", url, exc)


def _parse_base_url(value: str) -> httpx.URL:
    """
    Parse and check the configured base URL.

    Raises:
        InvalidUrlError: If the value is not an absolute http(s) URL
    """
    try:
        url = httpx.URL(value)
    except (httpx.InvalidURL, TypeError) as exc:
        raise InvalidUrlError(f"invalid base URL {value!r}: {exc}") from exc

    if url.scheme not in ("http", "https") or not url.host:
        raise InvalidUrlError(f"base URL must be an absolute http(s) URL, got {value!r}")
    return url


def _parse_json_body(response: httpx.Response) -> Any:
    """
    Parse a response body as JSON.

    Returns:
        The parsed document, or None for an empty body

    Raises:
        InvalidResponseError: If the body is not valid JSON
    """
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError as exc:
        raise InvalidResponseError(
            f"response from {response.request.url} is not JSON: {response.text[:200]}"
        ) from exc
