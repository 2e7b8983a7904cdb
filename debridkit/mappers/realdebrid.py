"""
Real-Debrid Mapper
Maps /torrents and /torrents/info payloads.

File format: {"id": 1, "path": "/Folder/file.mkv", "bytes": 1024, "selected": 1}
Restricted links in "links" follow the order of the selected files.
"""
from typing import Any, List, Optional

from debridkit.mappers.common import (
    RawModel,
    Records,
    Size,
    Text,
    normalize_path,
    parse_record,
)
from debridkit.models import DebridFile, RemoteItem, RemoteStatus

READY_STATUSES = {"downloaded"}
ERROR_STATUSES = {"magnet_error", "error", "virus", "dead"}


class RealDebridFile(RawModel):
    id: Size = 0
    path: Text = ""
    bytes: Size = 0
    selected: Size = 1


class RealDebridTorrent(RawModel):
    id: Text = ""
    hash: Text = ""
    filename: Text = ""
    status: Text = ""
    bytes: Size = 0
    files: Records = []
    links: Records = []


def map_status(status: str) -> RemoteStatus:
    if status in READY_STATUSES:
        return RemoteStatus.READY
    if status in ERROR_STATUSES:
        return RemoteStatus.ERROR
    return RemoteStatus.PENDING


def map_file(file_data: Any) -> Optional[DebridFile]:
    record = parse_record(RealDebridFile, file_data)
    if record is None:
        return None
    return DebridFile(
        path=normalize_path(record.path),
        size=record.bytes,
        provider_data=dict(file_data),
    )


def map_files(response: Any) -> List[DebridFile]:
    """Map a /torrents/info payload, attaching each selected file's restricted link."""
    torrent = parse_record(RealDebridTorrent, response)
    if torrent is None:
        return []

    links = [link for link in torrent.links if isinstance(link, str)]
    files = []
    link_index = 0
    for raw in torrent.files:
        record = parse_record(RealDebridFile, raw)
        if record is None:
            continue
        file = DebridFile(normalize_path(record.path), record.bytes, dict(raw))
        if record.selected:
            if link_index < len(links):
                file.provider_data["link"] = links[link_index]
            link_index += 1
        files.append(file)
    return files


def map_torrent(response: Any) -> Optional[RemoteItem]:
    torrent = parse_record(RealDebridTorrent, response)
    if torrent is None:
        return None
    return RemoteItem(
        id=torrent.id,
        hash=torrent.hash.lower(),
        name=torrent.filename,
        status=map_status(torrent.status),
        raw_status=torrent.status,
        files=map_files(response),
    )


def map_torrents(response: Any) -> List[RemoteItem]:
    """Map the /torrents listing. Files are not part of the listing."""
    if not isinstance(response, list):
        return []
    items = []
    for raw in response:
        torrent = parse_record(RealDebridTorrent, raw)
        if torrent is None:
            continue
        items.append(RemoteItem(
            id=torrent.id,
            hash=torrent.hash.lower(),
            name=torrent.filename,
            status=map_status(torrent.status),
            raw_status=torrent.status,
        ))
    return items
