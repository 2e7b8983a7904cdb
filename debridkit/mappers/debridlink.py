"""
Debrid-Link Mapper
Maps /seedbox/cached and /seedbox/list payloads.
"""
from typing import Any, List, Optional

from debridkit.mappers.common import (
    RawModel,
    Records,
    Size,
    Text,
    map_records,
    normalize_path,
    parse_record,
)
from debridkit.models import DebridFile, RemoteItem, RemoteStatus

ERROR_STATUSES = {"error", "dead", "expired"}


class DebridLinkFile(RawModel):
    id: Text = ""
    name: Text = ""
    size: Size = 0
    downloadUrl: Text = ""


class DebridLinkTorrent(RawModel):
    id: Text = ""
    name: Text = ""
    hashString: Text = ""
    downloadPercent: Size = 0
    status: Text = ""
    errorId: Size = 0
    files: Records = []


def map_status(torrent: DebridLinkTorrent) -> RemoteStatus:
    if torrent.errorId or torrent.status.lower() in ERROR_STATUSES:
        return RemoteStatus.ERROR
    if torrent.downloadPercent >= 100:
        return RemoteStatus.READY
    return RemoteStatus.PENDING


def _raw_status(torrent: DebridLinkTorrent) -> str:
    if torrent.errorId:
        return f"error {torrent.errorId}"
    if torrent.status.lower() in ERROR_STATUSES:
        return torrent.status
    return f"{torrent.downloadPercent}%"


def map_file(file_data: Any) -> Optional[DebridFile]:
    record = parse_record(DebridLinkFile, file_data)
    if record is None:
        return None
    return DebridFile(
        path=normalize_path(record.name),
        size=record.size,
        provider_data=dict(file_data),
    )


def map_files(torrent_data: Any) -> List[DebridFile]:
    torrent = parse_record(DebridLinkTorrent, torrent_data)
    if torrent is None:
        return []
    return map_records(torrent.files, map_file)


def map_cached(value: Any, info_hash: str) -> Optional[List[DebridFile]]:
    """Files of a cache hit keyed by hash, or None when the hash is not cached."""
    if not isinstance(value, dict):
        return None
    for key, entry in value.items():
        if str(key).lower() == info_hash:
            return map_files(entry)
    return None


def map_torrent(torrent_data: Any) -> Optional[RemoteItem]:
    torrent = parse_record(DebridLinkTorrent, torrent_data)
    if torrent is None:
        return None
    return RemoteItem(
        id=torrent.id,
        hash=torrent.hashString.lower(),
        name=torrent.name,
        status=map_status(torrent),
        raw_status=_raw_status(torrent),
        files=map_records(torrent.files, map_file),
    )


def map_torrents(value: Any) -> List[RemoteItem]:
    items = []
    for raw in value if isinstance(value, list) else [value]:
        item = map_torrent(raw)
        if item is not None:
            items.append(item)
    return items
