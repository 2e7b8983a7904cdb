"""
AllDebrid Mapper
Maps /v4.1/magnet/status payloads.

File format: {"n": "file.mkv", "s": 1024, "l": "https://alldebrid.com/f/..."}
Folders are groups {"n": "Folder", "e": [...]} that may nest further.
"""
from typing import Any, List, Optional

from debridkit.mappers.common import (
    RawModel,
    Records,
    Size,
    Text,
    as_list,
    normalize_path,
    parse_record,
)
from debridkit.models import DebridFile, RemoteItem, RemoteStatus

READY_STATUS_CODE = 4


class AllDebridEntry(RawModel):
    n: Text = ""
    s: Size = 0
    l: Text = ""  # noqa: E741


class AllDebridMagnet(RawModel):
    id: Text = ""
    hash: Text = ""
    filename: Text = ""
    status: Text = ""
    statusCode: Size = 0
    files: Records = []


def map_status(status_code: int) -> RemoteStatus:
    # 0-3 queued/downloading/compressing/uploading, 4 ready, 5+ failures
    if status_code == READY_STATUS_CODE:
        return RemoteStatus.READY
    if status_code > READY_STATUS_CODE:
        return RemoteStatus.ERROR
    return RemoteStatus.PENDING


def map_file(file_data: Any, folder: str = "") -> Optional[DebridFile]:
    entry = parse_record(AllDebridEntry, file_data)
    if entry is None:
        return None
    path = f"{folder}/{entry.n}" if folder else entry.n
    return DebridFile(
        path=normalize_path(path),
        size=entry.s,
        provider_data=dict(file_data),
    )


def _is_group(entry: Any) -> bool:
    return isinstance(entry, dict) and isinstance(entry.get("e"), list)


def _flatten(entries: Any, folder: str, files: List[DebridFile]):
    for entry in as_list(entries):
        if _is_group(entry):
            name = str(entry.get("n") or "")
            _flatten(entry["e"], f"{folder}/{name}" if folder else name, files)
            continue
        file = map_file(entry, folder)
        if file is not None:
            files.append(file)


def map_file_groups(groups: Any) -> List[DebridFile]:
    """
    Flatten nested groups depth-first, keeping encounter order.
    A lone top-level folder is the torrent folder and is left out of the paths.
    """
    groups = as_list(groups)
    files: List[DebridFile] = []
    if len(groups) == 1 and _is_group(groups[0]):
        _flatten(groups[0]["e"], "", files)
    else:
        _flatten(groups, "", files)
    return files


def _magnet_record(response: Any) -> Any:
    if not isinstance(response, dict):
        return None
    data = response.get("data")
    if not isinstance(data, dict):
        return None
    magnets = data.get("magnets")
    if isinstance(magnets, list):
        return magnets[0] if magnets else None
    return magnets


def map_files(response: Any) -> List[DebridFile]:
    """Map a single-magnet status payload into a flat file list."""
    magnet = parse_record(AllDebridMagnet, _magnet_record(response))
    if magnet is None:
        return []
    return map_file_groups(magnet.files)


def map_magnet(magnet_data: Any) -> Optional[RemoteItem]:
    magnet = parse_record(AllDebridMagnet, magnet_data)
    if magnet is None:
        return None
    return RemoteItem(
        id=magnet.id,
        hash=magnet.hash.lower(),
        name=magnet.filename,
        status=map_status(magnet.statusCode),
        raw_status=magnet.status or str(magnet.statusCode),
        files=map_file_groups(magnet.files),
    )


def map_status_response(response: Any) -> Optional[RemoteItem]:
    return map_magnet(_magnet_record(response))


def map_magnets(response: Any) -> List[RemoteItem]:
    """Map the magnet listing returned by /v4.1/magnet/status without an id."""
    if not isinstance(response, dict) or not isinstance(response.get("data"), dict):
        return []
    items = []
    for raw in as_list(response["data"].get("magnets")):
        item = map_magnet(raw)
        if item is not None:
            items.append(item)
    return items
