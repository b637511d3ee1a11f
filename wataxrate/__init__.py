"""wataxrate: Washington State sales tax rates for street addresses."""

__version__ = "0.1.0"

from wataxrate.core.result import Failure, Result, Success
from wataxrate.lookup import (
    AddressQuery,
    Jurisdiction,
    LookupErrorKind,
    MatchedAddress,
    ResultCode,
    TaxInfo,
    TaxLookupClient,
    TaxLookupError,
    get,
    get_with_retries,
)

__all__ = [
    "AddressQuery",
    "Failure",
    "Jurisdiction",
    "LookupErrorKind",
    "MatchedAddress",
    "Result",
    "ResultCode",
    "Success",
    "TaxInfo",
    "TaxLookupClient",
    "TaxLookupError",
    "__version__",
    "get",
    "get_with_retries",
]
