"""Tests for lookup types."""

from __future__ import annotations

from decimal import Decimal

import pytest

from wataxrate.lookup.types import (
    AddressQuery,
    Jurisdiction,
    ResultCode,
    TaxInfo,
)


class TestResultCode:
    """Tests for ResultCode enum."""

    def test_values_match_dor_codes(self) -> None:
        """ResultCode values should match the DOR interface."""
        assert ResultCode(0) is ResultCode.ADDRESS_FOUND
        assert ResultCode(5) is ResultCode.ZIP5_FOUND_NO_ADDRESS_OR_ZIP4
        assert ResultCode(6) is ResultCode.NO_ADDRESS_NO_ZIP
        assert ResultCode(9) is ResultCode.INTERNAL_ERROR

    def test_code_8_is_not_defined(self) -> None:
        """DOR does not use code 8."""
        with pytest.raises(ValueError):
            ResultCode(8)

    @pytest.mark.parametrize("code", [0, 1, 2, 3, 4, 5])
    def test_match_codes_are_not_errors(self, code: int) -> None:
        """Codes 0-5 carry usable rates."""
        assert ResultCode(code).is_error is False

    @pytest.mark.parametrize("code", [6, 7, 9])
    def test_error_codes(self, code: int) -> None:
        """Codes 6, 7 and 9 mean the values are garbage."""
        assert ResultCode(code).is_error is True

    def test_only_internal_error_is_retryable(self) -> None:
        """Only an internal error is worth retrying."""
        retryable = [code for code in ResultCode if code.is_retryable]

        assert retryable == [ResultCode.INTERNAL_ERROR]


class TestAddressQuery:
    """Tests for AddressQuery validation."""

    def test_valid_query(self) -> None:
        """AddressQuery keeps the fields verbatim."""
        query = AddressQuery(street="400 Broad St", city="Seattle", postal_code="98109")

        assert query.street == "400 Broad St"
        assert query.city == "Seattle"
        assert query.postal_code == "98109"

    def test_keeps_special_characters(self) -> None:
        """Special characters are left for the HTTP layer to encode."""
        query = AddressQuery(street="12 A&B Way #3", city="Tacoma", postal_code="98402-1234")

        assert query.street == "12 A&B Way #3"

    @pytest.mark.parametrize(
        ("street", "city", "postal_code", "field"),
        [
            ("", "Seattle", "98109", "street"),
            ("400 Broad St", "", "98109", "city"),
            ("400 Broad St", "Seattle", "   ", "postal_code"),
        ],
    )
    def test_empty_field_raises(
        self, street: str, city: str, postal_code: str, field: str
    ) -> None:
        """Every field is required."""
        with pytest.raises(ValueError, match=f"{field} cannot be empty"):
            AddressQuery(street=street, city=city, postal_code=postal_code)

    def test_non_string_field_raises(self) -> None:
        """Fields must be strings."""
        with pytest.raises(TypeError, match="postal_code must be a string"):
            AddressQuery(street="400 Broad St", city="Seattle", postal_code=98109)  # type: ignore[arg-type]


class TestTaxInfo:
    """Tests for TaxInfo."""

    def test_state_rate_from_jurisdiction(self) -> None:
        """state_rate should come from the jurisdiction when present."""
        info = TaxInfo(
            rate=Decimal("0.101"),
            result_code=ResultCode.ADDRESS_FOUND,
            location_code=1726,
            local_rate=Decimal("0.036"),
            jurisdiction=Jurisdiction(
                name="SEATTLE",
                code="1726",
                state_rate=Decimal("0.065"),
                local_rate=Decimal("0.036"),
            ),
        )

        assert info.state_rate == Decimal("0.065")

    def test_state_rate_without_jurisdiction(self) -> None:
        """state_rate should fall back to rate minus local rate."""
        info = TaxInfo(
            rate=Decimal("0.101"),
            result_code=ResultCode.ADDRESS_FOUND,
            location_code=1726,
            local_rate=Decimal("0.036"),
        )

        assert info.state_rate == Decimal("0.065")

    def test_percentage(self) -> None:
        """percentage should scale the rate by 100."""
        info = TaxInfo(
            rate=Decimal("0.101"),
            result_code=ResultCode.ADDRESS_FOUND,
            location_code=1726,
            local_rate=Decimal("0.036"),
        )

        assert info.percentage == Decimal("10.1")

    def test_is_immutable(self) -> None:
        """TaxInfo should be frozen."""
        info = TaxInfo(
            rate=Decimal("0.101"),
            result_code=ResultCode.ADDRESS_FOUND,
            location_code=1726,
            local_rate=Decimal("0.036"),
        )

        with pytest.raises(AttributeError):
            info.rate = Decimal("0.2")  # type: ignore[misc]
