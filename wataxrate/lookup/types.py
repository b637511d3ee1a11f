"""Types for address tax-rate lookups."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import IntEnum


class ResultCode(IntEnum):
    """
    Match codes reported by the DOR Address Rates interface.

    Codes 6, 7 and 9 mean the rate fields in the response are garbage
    (DOR sends -1 for the rate in that case).
    """

    ADDRESS_FOUND = 0
    ADDRESS_NOT_FOUND_ZIP_FOUND = 1
    ADDRESS_UPDATED_AND_FOUND = 2
    ADDRESS_UPDATED_ZIP_FOUND = 3
    ADDRESS_CORRECTED_AND_FOUND = 4
    ZIP5_FOUND_NO_ADDRESS_OR_ZIP4 = 5
    NO_ADDRESS_NO_ZIP = 6
    INVALID_LONG_LAT = 7
    INTERNAL_ERROR = 9

    @property
    def is_error(self) -> bool:
        """Return True when the response values cannot be trusted."""
        return self in {
            ResultCode.NO_ADDRESS_NO_ZIP,
            ResultCode.INVALID_LONG_LAT,
            ResultCode.INTERNAL_ERROR,
        }

    @property
    def is_retryable(self) -> bool:
        """Return True when repeating the same lookup may succeed."""
        return self is ResultCode.INTERNAL_ERROR


@dataclass(frozen=True, slots=True)
class AddressQuery:
    """
    Address to look up.

    Attributes:
        street: Street address line (e.g. '400 Broad St').
        city: City name.
        postal_code: ZIP or ZIP+4 code.
    """

    street: str
    city: str
    postal_code: str

    def __post_init__(self) -> None:
        """Validate that every field is present."""
        for name in ("street", "city", "postal_code"):
            value = getattr(self, name)
            if not isinstance(value, str):
                msg = f"{name} must be a string"
                raise TypeError(msg)
            if not value.strip():
                msg = f"{name} cannot be empty"
                raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class MatchedAddress:
    """
    Address range DOR matched the query to.

    Attributes:
        house_low: Lowest house number in the matched range.
        house_high: Highest house number in the matched range.
        even_odd: Side of the street ('E', 'O' or 'B' for both).
        street: Normalized street name.
        zip_code: Five-digit ZIP code.
        plus4: ZIP+4 extension.
        period: Rate period the match belongs to (e.g. 'Q12024').
        rta: Regional Transit Authority flag.
        ptba: Public Transportation Benefit Area.
        cez: Community Empowerment Zone.
    """

    house_low: int | None = None
    house_high: int | None = None
    even_odd: str | None = None
    street: str | None = None
    zip_code: str | None = None
    plus4: str | None = None
    period: str | None = None
    rta: str | None = None
    ptba: str | None = None
    cez: str | None = None


@dataclass(frozen=True, slots=True)
class Jurisdiction:
    """
    Taxing location whose rates apply to the address.

    Attributes:
        name: Location name (e.g. 'SEATTLE').
        code: DOR location code.
        state_rate: State portion of the rate.
        local_rate: Local portion of the rate.
    """

    name: str
    code: str
    state_rate: Decimal
    local_rate: Decimal


@dataclass(frozen=True, slots=True)
class TaxInfo:
    """
    Sales tax information for one address.

    Attributes:
        rate: Combined sales tax rate as a fraction (0.101 is 10.1%).
        result_code: How the address was matched.
        location_code: DOR location code.
        local_rate: Local portion of the combined rate.
        debug_hint: Diagnostic text DOR attaches to some responses.
        address: Matched address range, when reported.
        jurisdiction: Taxing location breakdown, when reported.
    """

    rate: Decimal
    result_code: ResultCode
    location_code: int
    local_rate: Decimal
    debug_hint: str | None = None
    address: MatchedAddress | None = None
    jurisdiction: Jurisdiction | None = None

    @property
    def state_rate(self) -> Decimal:
        """Return the state portion of the combined rate."""
        if self.jurisdiction is not None:
            return self.jurisdiction.state_rate
        return self.rate - self.local_rate

    @property
    def percentage(self) -> Decimal:
        """Return the combined rate as a percentage (10.1 for 0.101)."""
        return self.rate * 100
