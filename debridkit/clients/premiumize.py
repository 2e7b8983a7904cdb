"""
Premiumize Client
Cache checks and direct links on Premiumize.
The token travels as an access_token query parameter.
"""
from typing import Any, List, Optional

from debridkit.clients.base import DebridClient
from debridkit.exceptions import AuthenticationError, NotCached, ProviderError
from debridkit.mappers import premiumize as mapper
from debridkit.models import DebridFile, DebridProvider, RemoteItem
from debridkit.transport import AuthPlacement

AUTH_HINTS = ("not logged in", "auth", "token", "apikey")


class PremiumizeClient(DebridClient):
    """Premiumize debrid service client."""

    provider = DebridProvider.PREMIUMIZE
    BASE_URL = "https://www.premiumize.me/api"
    AUTH = AuthPlacement.query("access_token")

    @property
    def name(self) -> str:
        return "Premiumize"

    @staticmethod
    def _parse_error(payload: Any, status_code: int) -> Optional[ProviderError]:
        # {"status": "error", "message": "..."}
        if not isinstance(payload, dict) or payload.get("status") != "error":
            return None
        message = str(payload.get("message") or "Unknown API error")
        if any(hint in message.lower() for hint in AUTH_HINTS):
            return AuthenticationError(f"Authentication failed: {message}", "error")
        return ProviderError(message, "error")

    def is_magnet_cached(self, magnet: str) -> bool:
        result = self._request("GET", "/cache/check", params={"items[]": magnet})
        response = result.get("response") if isinstance(result, dict) else None
        return bool(response[0]) if isinstance(response, list) and response else False

    def _lookup_files(self, magnet: str, info_hash: str) -> List[DebridFile]:
        # Explicit cache check first so uncached magnets never create transfers
        if not self.is_magnet_cached(magnet):
            raise NotCached("Magnet is not cached on Premiumize")
        return mapper.map_files(self._request("POST", "/transfer/directdl", data={"src": magnet}))

    def _resolve_link(self, magnet: str, info_hash: str, file: DebridFile) -> Optional[str]:
        return file.provider_data.get("link") or file.provider_data.get("stream_link")

    def _list_items(self) -> List[RemoteItem]:
        return mapper.map_transfers(self._request("GET", "/transfer/list"))

    def _create(self, magnet: str, info_hash: str) -> str:
        result = self._request("POST", "/transfer/create", data={"src": magnet})
        transfer_id = result.get("id") if isinstance(result, dict) else None
        if not transfer_id:
            raise ProviderError("Magnet cannot be added", provider=self.name)
        return str(transfer_id)
