"""HTTP client for the WA DOR address tax-rate service."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import httpx

from wataxrate.core.config import get_settings
from wataxrate.core.logging import get_logger
from wataxrate.core.result import Result, Success, failure, success
from wataxrate.lookup.errors import (
    DecodeError,
    NetworkError,
    RemoteRejectedError,
    RetriesExhaustedError,
    TaxLookupError,
)
from wataxrate.lookup.schema import DorXmlSchema, SchemaError
from wataxrate.lookup.types import AddressQuery, TaxInfo

if TYPE_CHECKING:
    from wataxrate.core.config import LookupSettings
    from wataxrate.lookup.schema import RateSchema

logger = get_logger(__name__)

# Characters of response body kept on errors and in debug logs
BODY_PREVIEW_LENGTH = 500


class TaxLookupClient:
    """
    Client for address tax-rate lookups.

    Every lookup opens its own HTTP connection and closes it when done,
    so one client can be shared freely between concurrent tasks.

    Attributes:
        settings: Endpoint, timeout and retry settings.
        schema: Request/response contract of the remote service.
    """

    def __init__(
        self,
        settings: LookupSettings | None = None,
        schema: RateSchema | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            settings: Lookup settings (defaults to environment settings).
            schema: Remote service contract (defaults to DOR XML).
            transport: Optional httpx transport, mainly for testing.
        """
        self.settings = settings if settings is not None else get_settings()
        self.schema: RateSchema = schema if schema is not None else DorXmlSchema()
        self._transport = transport

    def _build_client(self, timeout: float | None) -> httpx.AsyncClient:
        """Create an HTTP client for a single lookup."""
        return httpx.AsyncClient(
            timeout=timeout,
            transport=self._transport,
            follow_redirects=True,
            headers={
                "Accept": "application/xml, text/xml",
                "User-Agent": self.settings.user_agent,
            },
        )

    async def get(
        self,
        street: str,
        city: str,
        postal_code: str,
    ) -> Result[TaxInfo, TaxLookupError]:
        """
        Look up the sales tax rate for an address.

        Makes exactly one request, with no retries.

        Args:
            street: Street address line.
            city: City name.
            postal_code: ZIP or ZIP+4 code.

        Returns:
            Result containing TaxInfo or TaxLookupError.

        Raises:
            ValueError: If any address field is empty.
        """
        query = AddressQuery(street=street, city=city, postal_code=postal_code)
        return await self._lookup(query, timeout=self.settings.timeout)

    async def get_with_retries(
        self,
        street: str,
        city: str,
        postal_code: str,
        *,
        max_attempts: int | None = None,
        attempt_timeout: float | None = None,
    ) -> Result[TaxInfo, TaxLookupError]:
        """
        Look up the sales tax rate, retrying transient failures.

        Each attempt is bounded by ``attempt_timeout``. Timeouts, network
        errors, HTTP 429/5xx and DOR internal errors are retried; any other
        failure is returned immediately.

        Args:
            street: Street address line.
            city: City name.
            postal_code: ZIP or ZIP+4 code.
            max_attempts: Attempts to make (defaults to settings).
            attempt_timeout: Seconds allowed per attempt (defaults to settings).

        Returns:
            Result containing TaxInfo, the first non-retryable error, or a
            RETRIES_EXHAUSTED error wrapping the last failure.

        Raises:
            ValueError: If any address field is empty or the limits are invalid.
        """
        query = AddressQuery(street=street, city=city, postal_code=postal_code)
        attempts = max_attempts if max_attempts is not None else self.settings.max_attempts
        per_attempt = (
            attempt_timeout if attempt_timeout is not None else self.settings.attempt_timeout
        )
        if attempts < 1:
            msg = "max_attempts must be at least 1"
            raise ValueError(msg)
        if per_attempt <= 0:
            msg = "attempt_timeout must be positive"
            raise ValueError(msg)

        last_error: TaxLookupError | None = None
        for attempt in range(1, attempts + 1):
            try:
                async with asyncio.timeout(per_attempt):
                    result = await self._lookup(query, timeout=per_attempt)
            except TimeoutError:
                last_error = NetworkError(
                    message="Attempt timed out",
                    details=f"No response within {per_attempt}s",
                )
                logger.warning("Tax rate lookup attempt timed out", attempt=attempt)
                continue

            if isinstance(result, Success):
                return result

            if not result.error.is_retryable:
                return result

            last_error = result.error
            logger.warning(
                "Retryable tax rate lookup failure",
                attempt=attempt,
                max_attempts=attempts,
                error=str(result.error),
            )

        logger.error("Tax rate lookup retries exhausted", attempts=attempts)
        return failure(RetriesExhaustedError(attempts, last_error))

    async def _lookup(
        self,
        query: AddressQuery,
        timeout: float | None,
    ) -> Result[TaxInfo, TaxLookupError]:
        """Perform one request/response round trip."""
        params = self.schema.build_params(query)
        logger.debug("Requesting tax rate", url=self.settings.base_url, params=params)

        try:
            async with self._build_client(timeout) as client:
                response = await client.get(self.settings.base_url, params=params)
        except httpx.TimeoutException as e:
            logger.error("Tax rate request timeout", url=self.settings.base_url)
            return failure(NetworkError(message="Request timeout", details=str(e)))
        except httpx.RequestError as e:
            logger.error("Tax rate request error", url=self.settings.base_url, error=str(e))
            return failure(NetworkError(message="Request failed", details=str(e)))

        return self._handle_response(response)

    def _handle_response(self, response: httpx.Response) -> Result[TaxInfo, TaxLookupError]:
        """Convert a response into a Result."""
        preview = response.text[:BODY_PREVIEW_LENGTH]
        logger.debug(
            "Tax rate response received",
            status_code=response.status_code,
            body=preview,
        )

        if response.status_code >= 400:
            logger.warning("Tax rate service error", status_code=response.status_code)
            return failure(
                RemoteRejectedError(
                    message=f"Service returned status {response.status_code}",
                    status_code=response.status_code,
                    body=preview,
                )
            )

        try:
            info = self.schema.parse(response.content)
        except SchemaError as e:
            logger.error("Failed to decode tax rate response", error=str(e))
            return failure(
                DecodeError(
                    details=str(e),
                    status_code=response.status_code,
                    body=preview,
                )
            )

        if info.result_code.is_error:
            logger.warning(
                "Address not resolved",
                result_code=info.result_code.name,
                debug_hint=info.debug_hint,
            )
            return failure(
                RemoteRejectedError(
                    message=f"Address not resolved: {info.result_code.name}",
                    status_code=response.status_code,
                    body=preview,
                    result_code=info.result_code,
                    tax_info=info,
                )
            )

        return success(info)


async def get(
    street: str,
    city: str,
    postal_code: str,
) -> Result[TaxInfo, TaxLookupError]:
    """Look up an address with default settings, making a single request."""
    return await TaxLookupClient().get(street, city, postal_code)


async def get_with_retries(
    street: str,
    city: str,
    postal_code: str,
    *,
    max_attempts: int | None = None,
    attempt_timeout: float | None = None,
) -> Result[TaxInfo, TaxLookupError]:
    """Look up an address with default settings, retrying transient failures."""
    return await TaxLookupClient().get_with_retries(
        street,
        city,
        postal_code,
        max_attempts=max_attempts,
        attempt_timeout=attempt_timeout,
    )
