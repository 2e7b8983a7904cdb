"""
TorBox Mapper
Maps /torrents/checkcached and /torrents/mylist payloads.

File names carry the torrent folder: {"id": 0, "name": "Torrent/file.mkv", "size": 1024}
"""
from typing import Any, List, Optional

from debridkit.mappers.common import (
    Flag,
    RawModel,
    Records,
    Size,
    Text,
    map_records,
    parse_record,
    strip_root_folder,
)
from debridkit.models import DebridFile, RemoteItem, RemoteStatus

ERROR_STATES = {"error", "failed"}


class TorBoxFile(RawModel):
    id: Size = 0
    name: Text = ""
    size: Size = 0


class TorBoxTorrent(RawModel):
    id: Text = ""
    hash: Text = ""
    name: Text = ""
    size: Size = 0
    download_state: Text = ""
    download_finished: Flag = False
    download_present: Flag = False
    files: Records = []


def map_status(torrent: TorBoxTorrent) -> RemoteStatus:
    if torrent.download_present or torrent.download_finished:
        return RemoteStatus.READY
    state = torrent.download_state.lower()
    if state in ERROR_STATES or state.startswith("error"):
        return RemoteStatus.ERROR
    return RemoteStatus.PENDING


def map_file(file_data: Any) -> Optional[DebridFile]:
    record = parse_record(TorBoxFile, file_data)
    if record is None:
        return None
    return DebridFile(
        path=strip_root_folder(record.name),
        size=record.size,
        provider_data=dict(file_data),
    )


def map_files(torrent_data: Any) -> List[DebridFile]:
    torrent = parse_record(TorBoxTorrent, torrent_data)
    if torrent is None:
        return []
    return map_records(torrent.files, map_file)


def map_cached(data: Any, info_hash: str) -> Optional[List[DebridFile]]:
    """
    Files of a cache-check hit, or None when the hash is not cached.
    Handles both format=list and format=object payloads.
    """
    if isinstance(data, dict):
        entries = [data.get(info_hash)] if info_hash in data else []
    elif isinstance(data, list):
        entries = [e for e in data if isinstance(e, dict) and str(e.get("hash", "")).lower() == info_hash]
    else:
        entries = []
    if not entries or entries[0] is None:
        return None
    return map_files(entries[0])


def map_torrent(torrent_data: Any) -> Optional[RemoteItem]:
    torrent = parse_record(TorBoxTorrent, torrent_data)
    if torrent is None:
        return None
    return RemoteItem(
        id=torrent.id,
        hash=torrent.hash.lower(),
        name=torrent.name,
        status=map_status(torrent),
        raw_status=torrent.download_state,
        files=map_records(torrent.files, map_file),
    )


def map_torrents(data: Any) -> List[RemoteItem]:
    items = []
    for raw in data if isinstance(data, list) else [data]:
        item = map_torrent(raw)
        if item is not None:
            items.append(item)
    return items
