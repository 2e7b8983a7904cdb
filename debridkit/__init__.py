"""
debridkit - one interface over Real-Debrid, AllDebrid, Premiumize, TorBox and Debrid-Link
"""
from loguru import logger

from debridkit.client import Client
from debridkit.clients import (
    AllDebridClient,
    DebridClient,
    DebridLinkClient,
    PremiumizeClient,
    RealDebridClient,
    TorBoxClient,
    get_debrid_client,
)
from debridkit.exceptions import (
    AuthenticationError,
    DebridError,
    DecodeError,
    FileNotFound,
    InvalidConfiguration,
    InvalidCredential,
    InvalidMagnet,
    LinkUnavailable,
    MissingCredential,
    NotCached,
    NotReady,
    ProviderError,
    RateLimitError,
    RemoteItemError,
    TransportError,
)
from debridkit.magnet import Magnet, extract_info_hash
from debridkit.models import DebridFile, DebridProvider, RemoteItem, RemoteStatus

# Libraries stay quiet unless the application opts in (see debridkit.log)
logger.disable("debridkit")

__version__ = "1.0.0"

__all__ = [
    "Client",
    "DebridClient",
    "RealDebridClient",
    "AllDebridClient",
    "PremiumizeClient",
    "TorBoxClient",
    "DebridLinkClient",
    "get_debrid_client",
    "DebridFile",
    "DebridProvider",
    "RemoteItem",
    "RemoteStatus",
    "Magnet",
    "extract_info_hash",
    "DebridError",
    "InvalidMagnet",
    "MissingCredential",
    "InvalidCredential",
    "TransportError",
    "DecodeError",
    "RateLimitError",
    "ProviderError",
    "AuthenticationError",
    "RemoteItemError",
    "NotCached",
    "NotReady",
    "FileNotFound",
    "LinkUnavailable",
    "InvalidConfiguration",
]
