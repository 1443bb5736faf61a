"""
Location: nodeless_sdk/types.py

Summary:
    Pydantic models for the nodeless-sdk. Defines the Nodeless API
    resources (stores, invoices, paywalls, paywall requests, transactions,
    webhooks, server status) and the enums used in their fields.

Usage:
    These models are decoded from API responses by envelope.py and
    client.py, and passed to client.py as request bodies. Field names are
    snake_case in Python; aliases carry the wire names, and
    populate_by_name lets either form be used when constructing.

    Timestamps are whole epoch seconds (int). URLs are pydantic AnyUrl.
    Use model_dump(mode="json", by_alias=True) for the wire form.

Example:
    from nodeless_sdk.types import Paywall, PaywallType

    paywall = Paywall(name="Helloworld", type=PaywallType.REDIRECT, price=1042)
    paywall.model_dump(mode="json", by_alias=True)
    # {'name': 'Helloworld', 'type': 'redirect', 'price': 1042, 'settings': None}
"""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field, SerializerFunctionWrapHandler, model_serializer

from .codecs import OpenEnum, OptionalTimestamp, OptionalUrl, Timestamp, Url


class InvoiceStatus(OpenEnum):
    """Invoice lifecycle state; unrecognised states decode as UNKNOWN."""
    NEW = "new"
    PAID = "paid"
    EXPIRED = "expired"


class TransactableType(OpenEnum):
    """Kind of ledger item a transaction refers to."""
    DONATION = "Donation"


class TransactionStatus(OpenEnum):
    """Settlement state of a transaction."""
    SETTLED = "settled"


class PaywallType(str, Enum):
    """What a paywall unlocks once paid."""
    CONTENT = "content"
    DOWNLOAD = "download"
    REDIRECT = "redirect"
    WP_ARTICLE = "wp_article"


class WebHookType(str, Enum):
    """Resource a webhook is attached to."""
    STORE = "store"
    DONATION_PAGE = "donation_page"
    PAYWALL = "paywall"
    INBOX = "inbox"


class WebhookEvent(str, Enum):
    """Event that triggers a webhook delivery."""
    NEW = "new"
    PENDING_CONFIRMATION = "pending_confirmation"
    PAID = "paid"
    EXPIRED = "expired"
    CANCELLED = "cancelled"
    UNDERPAID = "underpaid"
    OVERPAID = "overpaid"
    IN_FLIGHT = "in_flight"


class WebhookStatus(str, Enum):
    """Whether a webhook is delivering."""
    ACTIVE = "active"
    INACTIVE = "inactive"


class ServerStatusResponse(BaseModel):
    """
    Health snapshot returned by the status endpoint.

    Attributes:
        code: Status code reported by the API (200 when healthy)
        status: Human readable status text
        node: Identifier of the node that answered
    """
    code: int
    status: str
    node: str


class Store(BaseModel):
    """
    A merchant store.

    Attributes:
        id: Store identifier
        name: Display name
        url: Store website, if set
        email: Contact email, if set
        created_at: Creation time in epoch seconds
    """
    id: str
    name: str
    url: OptionalUrl = None
    email: Optional[str] = None
    created_at: Timestamp = Field(alias="createdAt")

    model_config = {"populate_by_name": True}


class QrCodes(BaseModel):
    """QR code images (data URIs) for paying an invoice."""
    unified: str
    onchain: str
    lightning: str


class InvoiceRequest(BaseModel):
    """
    Request body for creating a store invoice.

    Only the buyer-facing fields; everything else is assigned by the
    server.

    Attributes:
        amount: Amount in currency units (e.g. 21.21)
        currency: Currency code (e.g. "USD")
        buyer_email: Email the receipt goes to
        redirect_url: Where the buyer is sent after paying
        metadata: Optional free-form string map
    """
    amount: float
    currency: str
    buyer_email: str = Field(alias="buyerEmail")
    redirect_url: Url = Field(alias="redirectUrl")
    metadata: Optional[dict[str, str]] = None

    model_config = {"populate_by_name": True}


class Invoice(BaseModel):
    """
    A store invoice as returned by the API.

    Attributes:
        id: Invoice identifier
        checkout_link: Hosted checkout page
        sats_amount: Amount due in satoshis
        status: Current InvoiceStatus
        buyer_email: Buyer email from the request
        redirect_url: Redirect URL from the request
        metadata: Metadata from the request
        created_at: Creation time in epoch seconds
        paid_at: Payment time in epoch seconds, once paid
        onchain_address: Bitcoin address for on-chain payment
        lightning_invoice: BOLT11 invoice for lightning payment
        store: The store the invoice belongs to
        qr_codes: QR codes for the payment options
    """
    id: Optional[str] = None
    checkout_link: OptionalUrl = Field(None, alias="checkoutLink")
    sats_amount: int = Field(alias="satsAmount")
    status: InvoiceStatus
    buyer_email: str = Field(alias="buyerEmail")
    redirect_url: Url = Field(alias="redirectUrl")
    metadata: Optional[dict[str, str]] = None
    created_at: Timestamp = Field(alias="createdAt")
    paid_at: OptionalTimestamp = Field(None, alias="paidAt")
    onchain_address: str = Field(alias="onchainAddress")
    lightning_invoice: str = Field(alias="lightningInvoice")
    store: Store
    qr_codes: QrCodes = Field(alias="qrCodes")

    model_config = {"populate_by_name": True}


class Paywall(BaseModel):
    """
    A paywall. The same model is the create/update body and the response.

    The wire form never carries id (the server takes it from the URL or
    assigns it), and leaves out created_at and updated_at when they are
    None, so a fetched paywall can go straight into update_paywall and a
    decoded paywall dumps back without its id.

    Attributes:
        id: Paywall identifier (server assigned)
        name: Display name
        type: PaywallType
        price: Price in satoshis
        settings: Type-specific settings (e.g. redirect target)
        created_at: Creation time in epoch seconds
        updated_at: Last update time in epoch seconds
    """
    id: Optional[str] = None
    name: Optional[str] = None
    type: PaywallType
    price: int
    settings: Optional[dict[str, str]] = None
    created_at: OptionalTimestamp = None
    updated_at: OptionalTimestamp = None

    @model_serializer(mode="wrap")
    def _omit_server_fields(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        data = handler(self)
        data.pop("id", None)
        for key in ("created_at", "updated_at"):
            if key in data and data[key] is None:
                del data[key]
        return data


class PaywallRequest(BaseModel):
    """
    One payment attempt against a paywall.

    Attributes:
        id: Request identifier, used to poll its status
        sats_amount: Amount due in satoshis
        status: Status string as reported by the server
        metadata: Optional metadata list
        created_at: Creation time in epoch seconds
        paid_at: Payment time in epoch seconds, once paid
        onchain_address: Bitcoin address for on-chain payment
        lightning_invoice: BOLT11 invoice for lightning payment
        paywall: The paywall being paid, when embedded
    """
    id: str
    sats_amount: int = Field(alias="satsAmount")
    status: str
    metadata: Optional[list[str]] = None
    created_at: Timestamp = Field(alias="createdAt")
    paid_at: OptionalTimestamp = Field(None, alias="paidAt")
    onchain_address: str = Field(alias="onchainAddress")
    lightning_invoice: str = Field(alias="lightningInvoice")
    paywall: Optional[Paywall] = None

    model_config = {"populate_by_name": True}


class Transactable(BaseModel):
    """The ledger item behind a transaction, such as a donation."""
    id: int
    uuid: str
    donation_page_id: Optional[int] = None
    amount: int
    amount_paid: int
    name: Optional[str] = None
    message: Optional[str] = None
    status: str
    type: str
    metadata: Optional[dict[str, str]] = None
    created_at: Timestamp
    updated_at: OptionalTimestamp = None
    paid_at: OptionalTimestamp = None


class Transaction(BaseModel):
    """
    A ledger entry on the account.

    Attributes:
        id: Transaction identifier
        transactable_type: Kind of the underlying item
        transactable: The underlying item
        amount: Amount of the entry
        type: Entry type tag (e.g. "credit")
        status: TransactionStatus
        created_at: Creation time in epoch seconds
        updated_at: Last update time in epoch seconds
        is_fee: True for fee entries
    """
    id: str
    transactable_type: TransactableType
    transactable: Transactable
    amount: float
    type: str
    status: TransactionStatus
    created_at: Timestamp
    updated_at: Timestamp
    is_fee: bool


class CreateWebhook(BaseModel):
    """
    Request body for creating or updating a webhook. All fields required.

    Attributes:
        type: WebHookType matching the parent resource
        url: Delivery URL
        events: Events that trigger a delivery
        secret: Shared secret the server signs deliveries with
        status: WebhookStatus
    """
    type: WebHookType
    url: Url
    events: list[WebhookEvent]
    secret: str
    status: WebhookStatus


class Webhook(BaseModel):
    """
    A webhook as returned by the API.

    Every field is optional because some responses only carry part of
    the record.
    """
    id: Optional[str] = None
    type: Optional[WebHookType] = None
    secret: Optional[str] = None
    status: Optional[WebhookStatus] = None
    events: Optional[list[WebhookEvent]] = None
    url: OptionalUrl = None
    created_at: OptionalTimestamp = Field(None, alias="createdAt")
    last_delivery_at: OptionalTimestamp = Field(None, alias="lastDeliveryAt")

    model_config = {"populate_by_name": True}
