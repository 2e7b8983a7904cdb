"""
TorBox Client
Cache checking, torrent creation and download links on TorBox.
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
from debridkit.mappers import torbox as mapper
from debridkit.mappers.common import first_match
from debridkit.models import DebridFile, DebridProvider, RemoteItem, RemoteStatus

AUTH_ERRORS = {"AUTH_ERROR", "BAD_TOKEN", "NO_AUTH"}


def _data(result: Any) -> Any:
    return result.get("data") if isinstance(result, dict) else None


class TorBoxClient(DebridClient):
    """TorBox debrid service client."""

    provider = DebridProvider.TORBOX
    BASE_URL = "https://api.torbox.app"

    @property
    def name(self) -> str:
        return "TorBox"

    @staticmethod
    def _parse_error(payload: Any, status_code: int) -> Optional[ProviderError]:
        # TorBox returns {"success": bool, "error": code, "detail": message, "data": ...}
        if not isinstance(payload, dict) or payload.get("success", False) is not False:
            return None
        code = payload.get("error") or "UNKNOWN_ERROR"
        message = str(payload.get("detail") or code)
        if isinstance(code, str) and code in AUTH_ERRORS:
            return AuthenticationError(f"Authentication failed: {message}", code)
        return ProviderError(message, code)

    def check_cached(self, info_hash: str) -> Optional[List[DebridFile]]:
        result = self._request(
            "GET",
            "/v1/api/torrents/checkcached",
            params={"hash": info_hash, "format": "list", "list_files": True},
        )
        return mapper.map_cached(_data(result), info_hash)

    def get_torrent_info(self, torrent_id: str) -> Optional[RemoteItem]:
        """Get torrent info including files"""
        result = self._request(
            "GET",
            "/v1/api/torrents/mylist",
            params={"id": torrent_id, "bypass_cache": True},
        )
        return mapper.map_torrent(_data(result))

    def _lookup_files(self, magnet: str, info_hash: str) -> List[DebridFile]:
        files = self.check_cached(info_hash)
        if files is None:
            raise NotCached("Torrent is not cached on TorBox")
        return files

    def _list_items(self) -> List[RemoteItem]:
        result = self._request("GET", "/v1/api/torrents/mylist", params={"bypass_cache": True})
        return mapper.map_torrents(_data(result) or [])

    def _create_torrent(self, magnet: str, only_if_cached: bool) -> str:
        result = self._request(
            "POST",
            "/v1/api/torrents/createtorrent",
            data={
                "magnet": magnet,
                "allow_zip": False,
                "add_only_if_cached": only_if_cached,
            },
        )
        data = _data(result)
        torrent_id = data.get("torrent_id") if isinstance(data, dict) else None
        if not torrent_id:
            raise ProviderError("Failed to create torrent, maybe torrent is not cached?", provider=self.name)
        return str(torrent_id)

    def _create(self, magnet: str, info_hash: str) -> str:
        return self._create_torrent(magnet, only_if_cached=False)

    def _resolve_link(self, magnet: str, info_hash: str, file: DebridFile) -> Optional[str]:
        # Cached torrents still need a record on the account before requestdl works
        existing = self.find_existing(info_hash)
        if existing is not None:
            torrent_id = existing.id
        else:
            torrent_id = self._create_torrent(magnet, only_if_cached=True)
            logger.info(f"[TorBox] Registered cached torrent {info_hash[:8]}... -> ID: {torrent_id}")

        torrent = self.get_torrent_info(torrent_id)
        if torrent is None:
            raise ProviderError(f"Torrent {torrent_id} not found in list", provider=self.name)
        if torrent.status == RemoteStatus.ERROR:
            raise RemoteItemError(f"Torrent failed with state: {torrent.raw_status}", torrent.raw_status, self.name)
        if torrent.status != RemoteStatus.READY:
            raise NotReady(f"Torrent is not ready. Current state: {torrent.raw_status}", torrent.raw_status)

        remote_file = first_match(torrent.files, lambda f: f.path == file.path)
        if remote_file is None:
            return None

        result = self._request(
            "GET",
            "/v1/api/torrents/requestdl",
            params={
                "token": self.transport.token,
                "torrent_id": torrent_id,
                "file_id": remote_file.provider_data.get("id", 0),
                "zip_link": False,
                "redirect": False,
            },
        )
        link = _data(result)
        return link if isinstance(link, str) else None
