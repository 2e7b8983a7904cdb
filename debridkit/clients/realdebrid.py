"""
Real-Debrid Client
Handles torrent lookup, registration and link unrestricting on Real-Debrid.

Real-Debrid disabled its instant availability endpoint in 2024, so a magnet
only counts as cached once it has been added and reports "downloaded".
"""
from typing import Any, List, Optional

from loguru import logger

from debridkit.clients.base import DebridClient
from debridkit.exceptions import (
    AuthenticationError,
    NotCached,
    NotReady,
    ProviderError,
    RemoteItemError,
)
from debridkit.mappers import realdebrid as mapper
from debridkit.models import DebridFile, DebridProvider, RemoteItem, RemoteStatus

AUTH_ERRORS = {"bad_token", "badToken", "permission_denied", "account_locked"}
AUTH_ERROR_CODES = {8, 9, 14}

# Largest page GET /torrents accepts
PAGE_SIZE = 5000


class RealDebridClient(DebridClient):
    """Real-Debrid debrid service client."""

    provider = DebridProvider.REAL_DEBRID
    BASE_URL = "https://api.real-debrid.com/rest/1.0"

    @property
    def name(self) -> str:
        return "RealDebrid"

    @staticmethod
    def _parse_error(payload: Any, status_code: int) -> Optional[ProviderError]:
        # {"error": "bad_token", "error_code": 8}
        if not isinstance(payload, dict) or "error" not in payload:
            return None
        error = str(payload.get("error") or "Unknown error")
        code = payload.get("error_code", error)
        if (
            error in AUTH_ERRORS
            or (isinstance(code, int) and code in AUTH_ERROR_CODES)
            or "Bad token" in error
            or "Unauthorized" in error
        ):
            return AuthenticationError(f"Authentication failed: {error}", code)
        return ProviderError(error, code)

    def get_torrent_info(self, torrent_id: str) -> Optional[RemoteItem]:
        """Get torrent info including files"""
        return mapper.map_torrent(self._request("GET", f"/torrents/info/{torrent_id}"))

    def _list_items(self) -> List[RemoteItem]:
        items: List[RemoteItem] = []
        page = 1
        while True:
            result = self._request("GET", "/torrents", params={"limit": PAGE_SIZE, "page": page})
            # Past the last page Real-Debrid answers 204 with an empty body
            if not isinstance(result, list):
                break
            items.extend(mapper.map_torrents(result))
            if len(result) < PAGE_SIZE:
                break
            page += 1
        return items

    def _lookup_files(self, magnet: str, info_hash: str) -> List[DebridFile]:
        existing = self.find_existing(info_hash)
        if existing is None:
            raise NotCached("Torrent is not added. Please add it first using add_magnet().")

        torrent = self.get_torrent_info(existing.id)
        if torrent is None:
            raise ProviderError(f"Invalid torrent info for {existing.id}", provider=self.name)
        if torrent.status == RemoteStatus.ERROR:
            raise RemoteItemError(
                f"Torrent failed with status: {torrent.raw_status}",
                torrent.raw_status,
                self.name,
            )
        if torrent.status != RemoteStatus.READY:
            raise NotReady(f"Torrent is not ready. Current status: {torrent.raw_status}", torrent.raw_status)
        return torrent.files

    def _resolve_link(self, magnet: str, info_hash: str, file: DebridFile) -> Optional[str]:
        restricted_link = file.provider_data.get("link")
        if not restricted_link:
            return None
        result = self._request("POST", "/unrestrict/link", data={"link": restricted_link})
        return result.get("download") if isinstance(result, dict) else None

    def _create(self, magnet: str, info_hash: str) -> str:
        # Step 1: Add magnet
        result = self._request("POST", "/torrents/addMagnet", data={"magnet": magnet})
        torrent_id = result.get("id") if isinstance(result, dict) else None
        if not torrent_id:
            raise ProviderError("Failed to add magnet: No torrent ID returned", provider=self.name)

        # Step 2: Select all files
        self._select_all_files(str(torrent_id))
        return str(torrent_id)

    def _on_existing(self, item: RemoteItem):
        # A failed selectFiles leaves the torrent parked here; finish the registration
        if item.raw_status == "waiting_files_selection":
            logger.info(f"[RealDebrid] Selecting files of waiting torrent {item.id}")
            self._select_all_files(item.id)

    def _select_all_files(self, torrent_id: str):
        # Replies 204 with an empty body
        self._request("POST", f"/torrents/selectFiles/{torrent_id}", data={"files": "all"})
