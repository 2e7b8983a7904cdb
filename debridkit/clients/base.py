"""
Abstract Debrid Client Interface
Provides a unified interface for different debrid services (Real-Debrid, AllDebrid,
Premiumize, TorBox, Debrid-Link).

Subclasses implement the provider protocol through four hooks:
    _lookup_files  check-cache / status lookup, raising NotCached or NotReady
    _resolve_link  turn a matched file into a final download URL
    _list_items    the provider's existing records, for hash lookups
    _create        register a new magnet and return its remote id
"""
import threading
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

import httpx
from loguru import logger

from debridkit.exceptions import (
    FileNotFound,
    InvalidCredential,
    LinkUnavailable,
    NotCached,
    NotReady,
    ProviderError,
)
from debridkit.magnet import extract_info_hash
from debridkit.mappers.common import first_match, normalize_path
from debridkit.models import DebridFile, DebridProvider, RemoteItem
from debridkit.transport import (
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_RETRY_DELAY,
    DEFAULT_TIMEOUT,
    AuthPlacement,
    Transport,
)


class DebridClient(ABC):
    """
    Abstract base class for debrid service clients.

    File lists of ready torrents are memoized per instance, keyed by info hash,
    and dropped whenever add_magnet is called for that hash. The memo is guarded
    by a lock; requests themselves are not serialized.
    """

    provider: DebridProvider
    BASE_URL: str = ""
    AUTH: AuthPlacement = AuthPlacement.bearer()

    def __init__(
        self,
        token: Optional[str] = None,
        http: Optional[httpx.Client] = None,
        timeout: float = DEFAULT_TIMEOUT,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        retry_delay: float = DEFAULT_RETRY_DELAY,
    ):
        self.transport = Transport(
            name=self.name,
            base_url=self.BASE_URL,
            auth=self.AUTH,
            error_parser=self._parse_error,
            default_params=self._default_params(),
            http=http,
            timeout=timeout,
            max_attempts=max_attempts,
            retry_delay=retry_delay,
        )
        self._files_cache: Dict[str, List[DebridFile]] = {}
        self._cache_lock = threading.Lock()
        if token is not None:
            self.set_token(token)

    @property
    @abstractmethod
    def name(self) -> str:
        """Name of the debrid service."""
        pass

    def _default_params(self) -> Dict[str, Any]:
        return {}

    @staticmethod
    def _parse_error(payload: Any, status_code: int) -> Optional[ProviderError]:
        return None

    def set_token(self, token: str):
        if not token or not token.strip():
            raise InvalidCredential()
        self.transport.token = token

    @property
    def is_configured(self) -> bool:
        return bool(self.transport.token)

    def _request(self, method: str, endpoint: str, **kwargs) -> Any:
        return self.transport.request(method, endpoint, **kwargs)

    # -------------------------
    # Strategy contract
    # -------------------------

    def get_cached_files(self, magnet: str) -> List[DebridFile]:
        """
        Files of the magnet if the provider holds it ready to serve.
        Returns an empty list when it is not cached or still processing.
        """
        info_hash = extract_info_hash(magnet)
        try:
            return list(self._files(magnet, info_hash))
        except (NotCached, NotReady) as e:
            logger.debug(f"[{self.name}] {info_hash[:8]}... not available: {e}")
            return []

    def is_file_cached(self, magnet: str, path: str) -> bool:
        target = normalize_path(path)
        return any(file.path == target for file in self.get_cached_files(magnet))

    def get_link(self, magnet: str, path: str) -> str:
        """Direct download URL for the file at path."""
        info_hash = extract_info_hash(magnet)
        target = normalize_path(path)

        file = first_match(self._files(magnet, info_hash), lambda f: f.path == target)
        if file is None:
            raise FileNotFound(path)

        link = self._resolve_link(magnet, info_hash, file)
        if not link:
            raise LinkUnavailable(path)
        logger.info(f"[{self.name}] Resolved link for {info_hash[:8]}... {target}")
        return link

    def add_magnet(self, magnet: str) -> str:
        """Register the magnet, reusing an existing record with the same hash."""
        info_hash = extract_info_hash(magnet)
        self.invalidate(info_hash)

        existing = self.find_existing(info_hash)
        if existing is not None:
            logger.debug(f"[{self.name}] {info_hash[:8]}... already added -> ID: {existing.id}")
            self._on_existing(existing)
            return existing.id

        remote_id = self._create(magnet, info_hash)
        logger.info(f"[{self.name}] Added torrent {info_hash[:8]}... -> ID: {remote_id}")
        return remote_id

    # -------------------------
    # Shared helpers
    # -------------------------

    def find_existing(self, info_hash: str) -> Optional[RemoteItem]:
        info_hash = info_hash.lower()
        return first_match(self._list_items(), lambda item: item.hash.lower() == info_hash)

    def invalidate(self, info_hash: Optional[str] = None):
        """Drop memoized file lists for one hash, or all of them."""
        with self._cache_lock:
            if info_hash is None:
                self._files_cache.clear()
            else:
                self._files_cache.pop(info_hash, None)

    def _files(self, magnet: str, info_hash: str) -> List[DebridFile]:
        with self._cache_lock:
            cached = self._files_cache.get(info_hash)
        if cached is not None:
            return cached

        files = self._lookup_files(magnet, info_hash)
        with self._cache_lock:
            self._files_cache[info_hash] = files
        return files

    def close(self):
        self.transport.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    # -------------------------
    # Provider hooks
    # -------------------------

    @abstractmethod
    def _lookup_files(self, magnet: str, info_hash: str) -> List[DebridFile]:
        """Ready files for the hash. Raises NotCached, NotReady or a ProviderError."""
        pass

    @abstractmethod
    def _resolve_link(self, magnet: str, info_hash: str, file: DebridFile) -> Optional[str]:
        """Final URL for a matched file, or None when the provider has none."""
        pass

    @abstractmethod
    def _list_items(self) -> List[RemoteItem]:
        pass

    @abstractmethod
    def _create(self, magnet: str, info_hash: str) -> str:
        pass

    def _on_existing(self, item: RemoteItem):
        """Called when add_magnet finds the hash already registered."""
        pass
