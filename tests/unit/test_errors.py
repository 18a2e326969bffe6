"""
Module 02 - Error Taxonomy Tests
Tests for core/schemas/errors.py
"""
import pytest

from core.schemas.errors import (
    AlreadyMintedException,
    ErrorCodes,
    InsufficientPaymentException,
    InvalidIdentifierException,
    MintGateError,
    MintGateException,
    SupplyExceededException,
    TransferFailedException,
)


class TestExceptionCodes:
    """Each exception carries its stable code."""

    @pytest.mark.parametrize(
        "exc,code",
        [
            (AlreadyMintedException(), ErrorCodes.ALREADY_MINTED),
            (InsufficientPaymentException(required=2, received=1), ErrorCodes.INSUFFICIENT_PAYMENT),
            (SupplyExceededException(requested=1, total_issued=5, max_supply=5), ErrorCodes.SUPPLY_EXCEEDED),
            (InvalidIdentifierException("bad", value="0x1"), ErrorCodes.INVALID_IDENTIFIER),
        ],
    )
    def test_codes(self, exc, code):
        assert exc.code == code
        assert isinstance(exc, MintGateException)

    def test_invalid_identifier_is_value_error(self):
        with pytest.raises(ValueError):
            raise InvalidIdentifierException("bad")

    def test_transfer_details(self):
        exc = TransferFailedException("rejected", amount=7, destination="0xabc")

        assert exc.details == {"amount": 7, "destination": "0xabc"}


class TestErrorModel:
    """Conversion between exceptions and MintGateError."""

    def test_to_error_model(self):
        model = InsufficientPaymentException(required=2, received=1).to_error_model()

        assert model.code == ErrorCodes.INSUFFICIENT_PAYMENT
        assert model.details == {"required": 2, "received": 1}
        assert model.retryable is False

    def test_round_trip(self):
        original = SupplyExceededException(requested=3, total_issued=9, max_supply=10)

        restored = original.to_error_model().to_exception()

        assert restored.code == original.code
        assert restored.message == original.message
        assert restored.details == original.details

    def test_model_rejects_unknown_fields(self):
        with pytest.raises(ValueError):
            MintGateError(code="X", message="m", extra_field=1)
