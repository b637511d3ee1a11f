"""Address tax-rate lookup package."""

from wataxrate.lookup.client import TaxLookupClient, get, get_with_retries
from wataxrate.lookup.errors import (
    DecodeError,
    LookupErrorKind,
    NetworkError,
    RemoteRejectedError,
    RetriesExhaustedError,
    TaxLookupError,
)
from wataxrate.lookup.schema import DorXmlSchema, RateSchema, SchemaError
from wataxrate.lookup.types import (
    AddressQuery,
    Jurisdiction,
    MatchedAddress,
    ResultCode,
    TaxInfo,
)

__all__ = [
    "AddressQuery",
    "DecodeError",
    "DorXmlSchema",
    "Jurisdiction",
    "LookupErrorKind",
    "MatchedAddress",
    "NetworkError",
    "RateSchema",
    "RemoteRejectedError",
    "ResultCode",
    "RetriesExhaustedError",
    "SchemaError",
    "TaxInfo",
    "TaxLookupClient",
    "TaxLookupError",
    "get",
    "get_with_retries",
]
