"""
Request encoding and response decoding for the tax-rate service.

The client only knows the ``RateSchema`` protocol, so a different remote
contract can be plugged in without touching ``TaxInfo`` or the client.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from lxml import etree

from wataxrate.lookup.types import Jurisdiction, MatchedAddress, ResultCode, TaxInfo

if TYPE_CHECKING:
    from wataxrate.lookup.types import AddressQuery


class SchemaError(ValueError):
    """Response body does not match the expected structure."""


@runtime_checkable
class RateSchema(Protocol):
    """Protocol for a remote tax-rate service contract."""

    def build_params(self, query: AddressQuery) -> dict[str, str]:
        """
        Build the query parameters identifying the address.

        Values are passed unencoded; the HTTP layer percent-encodes them.
        """
        ...

    def parse(self, body: bytes) -> TaxInfo:
        """
        Decode a response body.

        A well-formed response reporting a failed match is still returned
        as TaxInfo; only malformed bodies raise.

        Raises:
            SchemaError: If the body cannot be decoded.
        """
        ...


class DorXmlSchema:
    """
    WA DOR Address Rates URL interface, XML output.

    A response looks like::

        <response loccode="1726" localrate="0.036" rate="0.101" code="0">
          <addressline houselow="400" househigh="498" evenodd="E"
                       street="BROAD ST" zip="98109" plus4="4611"
                       period="Q12024" rta="Y" ptba="" cez=""/>
          <rate name="SEATTLE" code="1726" staterate="0.065" localrate="0.036"/>
        </response>
    """

    def build_params(self, query: AddressQuery) -> dict[str, str]:
        """Build DOR query parameters."""
        return {
            "output": "xml",
            "addr": query.street,
            "city": query.city,
            "zip": query.postal_code,
        }

    def parse(self, body: bytes) -> TaxInfo:
        """Decode a DOR XML response into TaxInfo."""
        parser = etree.XMLParser(resolve_entities=False, no_network=True)
        try:
            root = etree.fromstring(body, parser)
        except (etree.XMLSyntaxError, ValueError) as e:
            raise SchemaError(f"Invalid XML: {e}") from e

        if root is None or _local_name(root) != "response":
            raise SchemaError("Missing <response> root element")

        result_code = _result_code(_required(root, "code"))
        rate = _decimal(root, "rate")

        # Error codes come with placeholder rates such as -1
        if not result_code.is_error and not (Decimal(0) <= rate < Decimal(1)):
            raise SchemaError(f"Rate out of range: {rate}")

        address: MatchedAddress | None = None
        jurisdiction: Jurisdiction | None = None
        for child in root:
            if not isinstance(child.tag, str):
                continue
            tag = _local_name(child)
            try:
                if tag == "addressline":
                    address = _matched_address(child)
                elif tag == "rate":
                    jurisdiction = _jurisdiction(child)
            except SchemaError:
                # Error responses may carry placeholder children
                if not result_code.is_error:
                    raise

        return TaxInfo(
            rate=rate,
            result_code=result_code,
            location_code=_int(root, "loccode"),
            local_rate=_decimal(root, "localrate"),
            debug_hint=_optional(root, "debughint"),
            address=address,
            jurisdiction=jurisdiction,
        )


def _local_name(element: etree._Element) -> str:
    return etree.QName(element).localname


def _required(element: etree._Element, attr: str) -> str:
    value = element.get(attr)
    if value is None or not value.strip():
        raise SchemaError(f"<{_local_name(element)}> is missing '{attr}'")
    return value.strip()


def _optional(element: etree._Element, attr: str) -> str | None:
    value = element.get(attr)
    if value is None or not value.strip():
        return None
    return value.strip()


def _decimal(element: etree._Element, attr: str) -> Decimal:
    raw = _required(element, attr)
    try:
        value = Decimal(raw)
    except InvalidOperation as e:
        raise SchemaError(f"'{attr}' is not a number: {raw!r}") from e
    if not value.is_finite():
        raise SchemaError(f"'{attr}' is not a finite number: {raw!r}")
    return value


def _int(element: etree._Element, attr: str) -> int:
    raw = _required(element, attr)
    try:
        return int(raw)
    except ValueError as e:
        raise SchemaError(f"'{attr}' is not an integer: {raw!r}") from e


def _optional_int(element: etree._Element, attr: str) -> int | None:
    if _optional(element, attr) is None:
        return None
    return _int(element, attr)


def _result_code(raw: str) -> ResultCode:
    try:
        return ResultCode(int(raw))
    except ValueError as e:
        raise SchemaError(f"Unknown result code: {raw!r}") from e


def _matched_address(element: etree._Element) -> MatchedAddress:
    return MatchedAddress(
        house_low=_optional_int(element, "houselow"),
        house_high=_optional_int(element, "househigh"),
        even_odd=_optional(element, "evenodd"),
        street=_optional(element, "street"),
        zip_code=_optional(element, "zip"),
        plus4=_optional(element, "plus4"),
        period=_optional(element, "period"),
        rta=_optional(element, "rta"),
        ptba=_optional(element, "ptba"),
        cez=_optional(element, "cez"),
    )


def _jurisdiction(element: etree._Element) -> Jurisdiction:
    return Jurisdiction(
        name=(element.get("name") or "").strip(),
        code=(element.get("code") or "").strip(),
        state_rate=_decimal(element, "staterate"),
        local_rate=_decimal(element, "localrate"),
    )
