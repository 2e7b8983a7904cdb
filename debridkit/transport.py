"""
Debrid Transport
Shared HTTP layer: auth placement, JSON decoding, 429 retries and
provider error classification.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Optional

import httpx
from loguru import logger
from tenacity import (
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_fixed,
)

from debridkit.exceptions import (
    DecodeError,
    MissingCredential,
    ProviderError,
    RateLimitError,
    TransportError,
)

ErrorParser = Callable[[Any, int], Optional[ProviderError]]

DEFAULT_TIMEOUT = 30.0
DEFAULT_MAX_ATTEMPTS = 3
DEFAULT_RETRY_DELAY = 1.0


class AuthStyle(str, Enum):
    BEARER = "bearer"
    QUERY = "query"


@dataclass(frozen=True)
class AuthPlacement:
    """Where a provider expects the token: a bearer header or a query parameter."""
    style: AuthStyle = AuthStyle.BEARER
    param: str = ""

    @classmethod
    def bearer(cls) -> "AuthPlacement":
        return cls(AuthStyle.BEARER)

    @classmethod
    def query(cls, param: str) -> "AuthPlacement":
        return cls(AuthStyle.QUERY, param)


class Transport:
    """
    Issues requests against one provider's REST API.

    Each client owns a Transport configured with the provider's base URL,
    auth placement, fixed query parameters and an error parser that turns
    the provider's error payload into a ProviderError.
    """

    def __init__(
        self,
        name: str,
        base_url: str,
        auth: AuthPlacement,
        error_parser: Optional[ErrorParser] = None,
        default_params: Optional[Dict[str, Any]] = None,
        http: Optional[httpx.Client] = None,
        timeout: float = DEFAULT_TIMEOUT,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        retry_delay: float = DEFAULT_RETRY_DELAY,
    ):
        self.name = name
        self.base_url = base_url.rstrip("/")
        self.auth = auth
        self.error_parser = error_parser
        self.default_params = dict(default_params or {})
        self.client = http or httpx.Client(timeout=timeout)
        self.timeout = timeout
        self.max_attempts = max(1, max_attempts)
        self.retry_delay = retry_delay
        self.token: Optional[str] = None

    @property
    def headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.auth.style == AuthStyle.BEARER:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def _params(self, params: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        merged = dict(self.default_params)
        if params:
            merged.update(params)
        if self.auth.style == AuthStyle.QUERY:
            merged[self.auth.param] = self.token
        return merged

    def request(
        self,
        method: str,
        endpoint: str,
        params: Optional[Dict[str, Any]] = None,
        data: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        """Make a request and return the decoded JSON body."""
        if not self.token:
            raise MissingCredential()

        retrying = Retrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_fixed(self.retry_delay),
            retry=retry_if_exception_type(RateLimitError),
            reraise=True,
        )
        return retrying(self._send, method, endpoint, params, data, headers)

    def _send(
        self,
        method: str,
        endpoint: str,
        params: Optional[Dict[str, Any]],
        data: Optional[Dict[str, Any]],
        headers: Optional[Dict[str, str]],
    ) -> Any:
        url = f"{self.base_url}/{endpoint.lstrip('/')}"
        merged_headers = self.headers
        if headers:
            merged_headers.update(headers)

        try:
            response = self.client.request(
                method,
                url,
                params=self._params(params),
                data=data,
                headers=merged_headers,
                timeout=self.timeout,
            )
        except httpx.HTTPError as e:
            logger.error(f"[{self.name}] Request failed: {e}")
            raise TransportError(f"{method} {endpoint} failed: {e}") from e

        status = response.status_code
        if status == 429:
            logger.warning(f"[{self.name}] Rate limit hit (429) on {endpoint}")
            raise RateLimitError(f"{method} {endpoint} was rate limited")

        if not response.content.strip():
            if status >= 400:
                raise TransportError("Empty response", status)
            return {}

        try:
            payload = response.json()
        except ValueError as e:
            if status >= 400:
                raise TransportError(response.text[:200], status) from e
            raise DecodeError(f"Invalid JSON from {endpoint}: {e}", status) from e

        if self.error_parser is not None:
            error = self.error_parser(payload, status)
            if error is not None:
                error.provider = error.provider or self.name
                error.status_code = status
                logger.error(f"[{self.name}] API error on {endpoint}: {error}")
                raise error

        if status >= 400:
            logger.error(f"[{self.name}] API error: {status} - {response.text[:200]}")
            raise TransportError(response.text[:200] or response.reason_phrase, status)

        return payload

    def close(self):
        """Close HTTP client"""
        self.client.close()
