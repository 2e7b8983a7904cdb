"""
AllDebrid Client
Magnet upload, status polling and link unlocking on AllDebrid.
Authentication goes in the query string (apikey + agent), not a bearer header.
"""
from typing import Any, Dict, List, Optional

import httpx

from debridkit.clients.base import DebridClient
from debridkit.exceptions import (
    AuthenticationError,
    NotCached,
    NotReady,
    ProviderError,
    RemoteItemError,
)
from debridkit.mappers import alldebrid as mapper
from debridkit.models import DebridFile, DebridProvider, RemoteItem, RemoteStatus
from debridkit.transport import AuthPlacement

DEFAULT_AGENT = "debridkit"

NOT_READY_ERRORS = {"MAGNET_NO_SERVER", "MAGNET_PROCESSING"}


class AllDebridClient(DebridClient):
    """AllDebrid debrid service client."""

    provider = DebridProvider.ALL_DEBRID
    BASE_URL = "https://api.alldebrid.com"
    AUTH = AuthPlacement.query("apikey")

    def __init__(self, token: Optional[str] = None, http: Optional[httpx.Client] = None,
                 agent: str = DEFAULT_AGENT, **kwargs):
        self.agent = agent or DEFAULT_AGENT
        super().__init__(token, http, **kwargs)

    @property
    def name(self) -> str:
        return "AllDebrid"

    def _default_params(self) -> Dict[str, Any]:
        return {"agent": self.agent}

    @staticmethod
    def _parse_error(payload: Any, status_code: int) -> Optional[ProviderError]:
        # {"status": "error", "error": {"code": "AUTH_BAD_APIKEY", "message": "..."}}
        if not isinstance(payload, dict) or "status" not in payload:
            return ProviderError("Invalid response format: missing status field", "INVALID_RESPONSE")
        if payload["status"] != "error":
            return None

        error = payload.get("error")
        error = error if isinstance(error, dict) else {}
        code = error.get("code", "UNKNOWN")
        message = error.get("message", "Unknown error")
        if isinstance(code, str) and code.startswith("AUTH_"):
            return AuthenticationError(f"Authentication failed: {message}", code)
        return ProviderError(message, code)

    def get_magnet_status(self, magnet_id: str) -> Optional[RemoteItem]:
        return mapper.map_status_response(
            self._request("GET", "/v4.1/magnet/status", params={"id": magnet_id})
        )

    def _list_items(self) -> List[RemoteItem]:
        return mapper.map_magnets(self._request("GET", "/v4.1/magnet/status"))

    def _lookup_files(self, magnet: str, info_hash: str) -> List[DebridFile]:
        existing = self.find_existing(info_hash)
        if existing is None:
            raise NotCached("Magnet is not added. Please add it first using add_magnet().")

        try:
            item = self.get_magnet_status(existing.id)
        except ProviderError as e:
            if isinstance(e.code, str) and e.code in NOT_READY_ERRORS:
                raise NotReady(f"Torrent not ready ({e.code}): {e.message}", str(e.code)) from e
            raise

        if item is None:
            raise NotCached(f"Magnet {existing.id} has no status")
        if item.status == RemoteStatus.ERROR:
            raise RemoteItemError(f"Magnet failed with status: {item.raw_status}", item.raw_status, self.name)
        if item.status != RemoteStatus.READY:
            raise NotReady(f"Magnet is not ready. Current status: {item.raw_status}", item.raw_status)
        return item.files

    def _resolve_link(self, magnet: str, info_hash: str, file: DebridFile) -> Optional[str]:
        link = file.provider_data.get("l")
        if not link:
            return None
        result = self._request("POST", "/v4/link/unlock", data={"link": link})
        data = result.get("data") if isinstance(result, dict) else None
        return data.get("link") if isinstance(data, dict) else None

    def _create(self, magnet: str, info_hash: str) -> str:
        # Form-encoded, not JSON
        result = self._request("POST", "/v4/magnet/upload", data={"magnets[]": magnet})
        data = result.get("data") if isinstance(result, dict) else None
        magnets = data.get("magnets") if isinstance(data, dict) else None
        uploaded = magnets[0] if isinstance(magnets, list) and magnets else None
        if not isinstance(uploaded, dict):
            raise ProviderError("Failed to upload magnet: No magnet ID returned", provider=self.name)

        error = uploaded.get("error")
        if isinstance(error, dict):
            raise ProviderError(error.get("message", "Unknown error"), error.get("code"), self.name)
        if uploaded.get("id") is None:
            raise ProviderError("Failed to upload magnet: No magnet ID returned", provider=self.name)
        return str(uploaded["id"])
