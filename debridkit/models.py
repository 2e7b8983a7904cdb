"""
Debrid Models
Canonical file and remote-item records shared by all providers.
"""
import posixpath
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List


class DebridProvider(str, Enum):
    """Supported debrid providers"""
    REAL_DEBRID = "real_debrid"
    ALL_DEBRID = "all_debrid"
    PREMIUMIZE = "premiumize"
    TORBOX = "torbox"
    DEBRID_LINK = "debrid_link"


class RemoteStatus(str, Enum):
    """Shared classification of a provider's status vocabulary"""
    PENDING = "pending"
    READY = "ready"
    ERROR = "error"


@dataclass
class DebridFile:
    """
    A file inside a cached torrent.

    provider_data keeps the raw provider fields (ids, restricted links, ...)
    that the owning client needs to resolve a download link later.
    """
    path: str
    size: int = 0
    provider_data: Dict[str, Any] = field(default_factory=dict)

    @property
    def filename(self) -> str:
        return posixpath.basename(self.path)

    @property
    def extension(self) -> str:
        _, ext = posixpath.splitext(self.filename)
        return ext[1:]

    @property
    def formatted_size(self) -> str:
        """Human readable size, e.g. '1.5 MB'"""
        units = ["B", "KB", "MB", "GB", "TB"]
        size = float(self.size)
        i = 0
        while size >= 1024 and i < len(units) - 1:
            size /= 1024
            i += 1
        return f"{round(size, 2):g} {units[i]}"


@dataclass
class RemoteItem:
    """A provider's tracking record for a magnet (transfer, magnet or torrent)."""
    id: str
    hash: str
    status: RemoteStatus = RemoteStatus.PENDING
    raw_status: str = ""
    name: str = ""
    files: List[DebridFile] = field(default_factory=list)

    @property
    def is_ready(self) -> bool:
        return self.status == RemoteStatus.READY

    def __repr__(self):
        return f"<RemoteItem(id={self.id}, hash={self.hash[:8]}..., status={self.raw_status or self.status.value})>"
