"""
Debrid-Link Client
Seedbox cache checks and download URLs on Debrid-Link (API v2).
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
from debridkit.mappers import debridlink as mapper
from debridkit.mappers.common import first_match
from debridkit.models import DebridFile, DebridProvider, RemoteItem, RemoteStatus

AUTH_ERRORS = {"badToken", "hidedToken", "notDebrid", "notAddonAuth", "authorization_pending"}


def _value(result: Any) -> Any:
    return result.get("value") if isinstance(result, dict) else None


class DebridLinkClient(DebridClient):
    """Debrid-Link debrid service client."""

    provider = DebridProvider.DEBRID_LINK
    BASE_URL = "https://debrid-link.com/api/v2"

    @property
    def name(self) -> str:
        return "DebridLink"

    @staticmethod
    def _parse_error(payload: Any, status_code: int) -> Optional[ProviderError]:
        # {"success": false, "error": "badToken", "error_description": "..."}
        if not isinstance(payload, dict) or payload.get("success", True) is not False:
            return None
        code = payload.get("error") or "unknownError"
        message = str(payload.get("error_description") or code)
        if isinstance(code, str) and code in AUTH_ERRORS:
            return AuthenticationError(f"Authentication failed: {message}", code)
        return ProviderError(message, code)

    def _lookup_files(self, magnet: str, info_hash: str) -> List[DebridFile]:
        result = self._request("GET", "/seedbox/cached", params={"url": info_hash})
        files = mapper.map_cached(_value(result), info_hash)
        if files is None:
            raise NotCached("Torrent is not cached on Debrid-Link")
        return files

    def get_torrent_info(self, torrent_id: str) -> Optional[RemoteItem]:
        result = self._request("GET", "/seedbox/list", params={"ids": torrent_id})
        torrents = mapper.map_torrents(_value(result) or [])
        return torrents[0] if torrents else None

    def _list_items(self) -> List[RemoteItem]:
        result = self._request("GET", "/seedbox/list")
        return mapper.map_torrents(_value(result) or [])

    def _create(self, magnet: str, info_hash: str) -> str:
        result = self._request("POST", "/seedbox/add", data={"url": magnet, "async": True})
        value = _value(result)
        torrent_id = value.get("id") if isinstance(value, dict) else None
        if not torrent_id:
            raise ProviderError("Magnet cannot be added", provider=self.name)
        return str(torrent_id)

    def _resolve_link(self, magnet: str, info_hash: str, file: DebridFile) -> Optional[str]:
        existing = self.find_existing(info_hash)
        if existing is not None:
            torrent_id = existing.id
        else:
            torrent_id = self._create(magnet, info_hash)
            logger.info(f"[DebridLink] Registered cached torrent {info_hash[:8]}... -> ID: {torrent_id}")

        torrent = self.get_torrent_info(torrent_id)
        if torrent is None:
            raise ProviderError(f"Torrent {torrent_id} not found in seedbox", provider=self.name)
        if torrent.status == RemoteStatus.ERROR:
            raise RemoteItemError(f"Torrent failed with status: {torrent.raw_status}", torrent.raw_status, self.name)
        if torrent.status != RemoteStatus.READY:
            raise NotReady(f"Torrent is not ready. Progress: {torrent.raw_status}", torrent.raw_status)

        remote_file = first_match(torrent.files, lambda f: f.path == file.path)
        if remote_file is None:
            return None
        return remote_file.provider_data.get("downloadUrl") or None
