"""
Location: nodeless_sdk/__init__.py

Summary:
    Main package initialization for nodeless-sdk. Exports all public classes
    and functions for convenient importing.

Usage:
    from nodeless_sdk import NodelessClient, Paywall, PaywallType

    # Or import specific modules
    from nodeless_sdk.codecs import format_timestamp, parse_timestamp
    from nodeless_sdk.errors import TransportError

Version: 0.1.0 (Nodeless API v1)
"""

from .client import NodelessClient, DEFAULT_BASE_URL
from .codecs import (
    OpenEnum,
    format_timestamp,
    format_url,
    parse_optional_url,
    parse_timestamp,
    parse_url,
)
from .envelope import decode, encode, unwrap
from .errors import (
    NodelessError,
    InvalidUrlError,
    InvalidTimestampError,
    TransportError,
    DecodeError,
    InvalidResponseError,
)
from .types import (
    CreateWebhook,
    Invoice,
    InvoiceRequest,
    InvoiceStatus,
    Paywall,
    PaywallRequest,
    PaywallType,
    QrCodes,
    ServerStatusResponse,
    Store,
    Transactable,
    TransactableType,
    Transaction,
    TransactionStatus,
    Webhook,
    WebhookEvent,
    WebhookStatus,
    WebHookType,
)

__version__ = "0.1.0"

__all__ = [
    # Main client
    "NodelessClient",
    "DEFAULT_BASE_URL",
    # Models
    "CreateWebhook",
    "Invoice",
    "InvoiceRequest",
    "Paywall",
    "PaywallRequest",
    "QrCodes",
    "ServerStatusResponse",
    "Store",
    "Transactable",
    "Transaction",
    "Webhook",
    # Enums
    "InvoiceStatus",
    "PaywallType",
    "TransactableType",
    "TransactionStatus",
    "WebhookEvent",
    "WebhookStatus",
    "WebHookType",
    # Exceptions
    "NodelessError",
    "InvalidUrlError",
    "InvalidTimestampError",
    "TransportError",
    "DecodeError",
    "InvalidResponseError",
    # Codecs
    "OpenEnum",
    "format_timestamp",
    "format_url",
    "parse_optional_url",
    "parse_timestamp",
    "parse_url",
    # Envelope helpers
    "decode",
    "encode",
    "unwrap",
]
