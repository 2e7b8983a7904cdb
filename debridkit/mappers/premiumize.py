"""
Premiumize Mapper
Maps /transfer/directdl and /transfer/list payloads.

File format: {"path": "Torrent/file.mkv", "size": 1024, "link": "...", "stream_link": "..."}
"""
import re
from typing import Any, List, Optional

from debridkit.mappers.common import (
    RawModel,
    Size,
    Text,
    map_records,
    parse_record,
    strip_root_folder,
)
from debridkit.models import DebridFile, RemoteItem, RemoteStatus

READY_STATUSES = {"finished", "seeding"}
ERROR_STATUSES = {"error", "timeout", "deleted", "banned"}

_SRC_HASH_RE = re.compile(r"urn:btih:([0-9a-f]{40})", re.IGNORECASE)


class PremiumizeFile(RawModel):
    path: Text = ""
    size: Size = 0
    link: Text = ""
    stream_link: Text = ""


class PremiumizeTransfer(RawModel):
    id: Text = ""
    name: Text = ""
    status: Text = ""
    message: Text = ""
    src: Text = ""


def map_status(status: str) -> RemoteStatus:
    if status in READY_STATUSES:
        return RemoteStatus.READY
    if status in ERROR_STATUSES:
        return RemoteStatus.ERROR
    return RemoteStatus.PENDING


def map_file(file_data: Any) -> Optional[DebridFile]:
    record = parse_record(PremiumizeFile, file_data)
    if record is None:
        return None
    return DebridFile(
        path=strip_root_folder(record.path),
        size=record.size,
        provider_data=dict(file_data),
    )


def map_files(response: Any) -> List[DebridFile]:
    if not isinstance(response, dict) or response.get("status") != "success":
        return []
    return map_records(response.get("content"), map_file)


def map_transfer(transfer_data: Any) -> Optional[RemoteItem]:
    transfer = parse_record(PremiumizeTransfer, transfer_data)
    if transfer is None:
        return None
    # Transfers carry no hash field; the magnet source does
    match = _SRC_HASH_RE.search(transfer.src)
    return RemoteItem(
        id=transfer.id,
        hash=match.group(1).lower() if match else "",
        name=transfer.name,
        status=map_status(transfer.status),
        raw_status=transfer.status,
    )


def map_transfers(response: Any) -> List[RemoteItem]:
    if not isinstance(response, dict) or not isinstance(response.get("transfers"), list):
        return []
    items = []
    for raw in response["transfers"]:
        item = map_transfer(raw)
        if item is not None:
            items.append(item)
    return items
