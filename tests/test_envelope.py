"""
Tests for nodeless_sdk.envelope module.

Tests envelope unwrapping and typed decoding of untyped JSON documents.
"""

from typing import Optional

import pytest

from nodeless_sdk.envelope import decode, encode, unwrap
from nodeless_sdk.errors import DecodeError, InvalidResponseError
from nodeless_sdk.types import InvoiceStatus, Paywall, PaywallType, Store


class TestUnwrap:
    """Tests for unwrap function."""

    def test_data_field(self):
        """Test the default data envelope."""
        assert unwrap({"data": {"id": "x"}}) == {"id": "x"}

    def test_named_field(self):
        """Test unwrapping a named top-level field."""
        assert unwrap({"status": "paid"}, "status") == "paid"

    def test_missing_field_is_none(self):
        """Test that a missing key behaves as null."""
        assert unwrap({"message": "Not found"}) is None

    def test_non_object_rejected(self):
        """Test that arrays, scalars and null are not envelopes."""
        for document in ([], "ok", 3, None):
            with pytest.raises(InvalidResponseError):
                unwrap(document)


class TestDecode:
    """Tests for decode function."""

    def test_model(self, store_payload):
        """Test decoding into a model."""
        store = decode(Store, store_payload)
        assert isinstance(store, Store)
        assert store.id == "store_123"

    def test_list(self, store_payload):
        """Test decoding into a list of models."""
        stores = decode(list[Store], [store_payload, store_payload])
        assert len(stores) == 2

    def test_optional_none(self):
        """Test that null decodes to None for an Optional target."""
        assert decode(Optional[Paywall], None) is None

    def test_required_none_fails(self):
        """Test that null for a required model is a DecodeError."""
        with pytest.raises(DecodeError):
            decode(Store, None)

    def test_open_enum(self):
        """Test decoding a bare open enum value."""
        assert decode(InvoiceStatus, "expired") is InvoiceStatus.EXPIRED
        assert decode(InvoiceStatus, "refunded").value == "refunded"

    def test_closed_enum_rejects(self):
        """Test that a closed enum fails with DecodeError."""
        with pytest.raises(DecodeError):
            decode(PaywallType, "subscription")

    def test_chains_validation_error(self, store_payload):
        """Test the pydantic error is kept as the cause."""
        del store_payload["id"]
        with pytest.raises(DecodeError) as exc_info:
            decode(Store, store_payload)
        assert exc_info.value.__cause__ is not None
        assert "Store" in str(exc_info.value)


class TestEncode:
    """Tests for encode function."""

    def test_uses_wire_names(self, store_payload):
        """Test encode returns aliased JSON-ready data."""
        wire = encode(decode(Store, store_payload))
        assert wire["createdAt"] == "2023-11-14T22:13:20.000000Z"
        assert "created_at" not in wire
