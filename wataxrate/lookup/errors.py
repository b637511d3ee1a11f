"""Error types for tax-rate lookups."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from wataxrate.lookup.types import ResultCode, TaxInfo


class LookupErrorKind(str, Enum):
    """Why a lookup failed."""

    NETWORK = "network"
    REMOTE_REJECTED = "remote_rejected"
    DECODE = "decode"
    RETRIES_EXHAUSTED = "retries_exhausted"


@dataclass(frozen=True, slots=True)
class TaxLookupError:
    """
    Error returned by a failed lookup.

    Attributes:
        kind: Which failure happened.
        message: Human-readable error message.
        status_code: HTTP status of the response, if one was received.
        body: Start of the response body, if one was received.
        result_code: DOR match code when DOR reported the failure itself.
        tax_info: Raw response values DOR sent with an error code.
        details: Additional error details (optional).
        last_error: Final underlying error after retries ran out.
    """

    kind: LookupErrorKind
    message: str
    status_code: int | None = None
    body: str | None = None
    result_code: ResultCode | None = None
    tax_info: TaxInfo | None = None
    details: str | None = None
    last_error: TaxLookupError | None = None

    def __str__(self) -> str:
        """Return string representation of the error."""
        return f"{self.kind.value}: {self.message}"

    @property
    def is_retryable(self) -> bool:
        """Check whether repeating the same lookup may succeed."""
        if self.kind is LookupErrorKind.NETWORK:
            return True
        if self.kind is LookupErrorKind.REMOTE_REJECTED:
            if self.result_code is not None:
                return self.result_code.is_retryable
            return self.status_code is not None and (
                self.status_code == 429 or self.status_code >= 500
            )
        return False


def NetworkError(
    message: str = "Network error",
    details: str | None = None,
) -> TaxLookupError:
    """Create a network error."""
    return TaxLookupError(
        kind=LookupErrorKind.NETWORK,
        message=message,
        details=details,
    )


def RemoteRejectedError(
    message: str = "Lookup rejected by remote service",
    status_code: int | None = None,
    body: str | None = None,
    result_code: ResultCode | None = None,
    tax_info: TaxInfo | None = None,
) -> TaxLookupError:
    """Create a rejection error, from an HTTP status or a DOR match code."""
    return TaxLookupError(
        kind=LookupErrorKind.REMOTE_REJECTED,
        message=message,
        status_code=status_code,
        body=body,
        result_code=result_code,
        tax_info=tax_info,
    )


def DecodeError(
    message: str = "Failed to decode response",
    details: str | None = None,
    status_code: int | None = None,
    body: str | None = None,
) -> TaxLookupError:
    """Create a decode error."""
    return TaxLookupError(
        kind=LookupErrorKind.DECODE,
        message=message,
        details=details,
        status_code=status_code,
        body=body,
    )


def RetriesExhaustedError(
    attempts: int,
    last_error: TaxLookupError | None = None,
) -> TaxLookupError:
    """Create an error for a retrying lookup that never succeeded."""
    return TaxLookupError(
        kind=LookupErrorKind.RETRIES_EXHAUSTED,
        message=f"Lookup failed after {attempts} attempts",
        last_error=last_error,
    )
