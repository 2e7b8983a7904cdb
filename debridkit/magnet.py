"""
Magnet Links
Info-hash extraction used by every client before touching the network.
"""
import re
from dataclasses import dataclass
from typing import Optional
from urllib.parse import parse_qs, quote, urlsplit

from debridkit.exceptions import InvalidMagnet

# xt=urn:btih:HASH, exactly 40 hex characters
_BTIH_RE = re.compile(r"urn:btih:([0-9a-f]{40})(?![0-9a-z])", re.IGNORECASE)


def extract_info_hash(magnet_link: str) -> str:
    """Return the lowercase info hash of a magnet link or raise InvalidMagnet."""
    if not magnet_link:
        raise InvalidMagnet(magnet_link or "")
    match = _BTIH_RE.search(magnet_link)
    if not match:
        raise InvalidMagnet(magnet_link)
    return match.group(1).lower()


@dataclass(frozen=True)
class Magnet:
    """A caller-supplied magnet URI with its normalized info hash."""
    uri: str
    info_hash: str
    display_name: Optional[str] = None

    @classmethod
    def parse(cls, uri: str) -> "Magnet":
        info_hash = extract_info_hash(uri)
        names = parse_qs(urlsplit(uri).query).get("dn")
        return cls(uri=uri, info_hash=info_hash, display_name=names[0] if names else None)

    @classmethod
    def from_hash(cls, info_hash: str, name: Optional[str] = None) -> "Magnet":
        uri = f"magnet:?xt=urn:btih:{info_hash}"
        if name:
            uri += f"&dn={quote(name)}"
        return cls.parse(uri)

    def __str__(self) -> str:
        return self.uri
