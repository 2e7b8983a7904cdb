"""
debridkit Client
Facade that holds one provider client and a token and forwards calls to it.

    client = Client().use_real_debrid("token")
    for file in client.get_cached_files(magnet):
        print(file.path, file.formatted_size)
"""
from typing import List, Optional, Union

from debridkit.clients import get_debrid_client
from debridkit.clients.base import DebridClient
from debridkit.config import Settings
from debridkit.exceptions import InvalidConfiguration
from debridkit.models import DebridFile, DebridProvider


class Client:
    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings
        self.client: Optional[DebridClient] = None
        self.token: Optional[str] = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "Client":
        """Facade configured with the provider and token found in settings."""
        client = cls(settings)
        client.use(settings.provider, settings.token or None)
        return client

    def use(self, provider: Union[str, DebridProvider], token: Optional[str] = None) -> "Client":
        if token:
            self.set_token(token)
        self.client = get_debrid_client(provider, self.token or None, settings=self.settings)
        return self

    def use_real_debrid(self, token: Optional[str] = None) -> "Client":
        return self.use(DebridProvider.REAL_DEBRID, token)

    def use_all_debrid(self, token: Optional[str] = None) -> "Client":
        return self.use(DebridProvider.ALL_DEBRID, token)

    def use_premiumize(self, token: Optional[str] = None) -> "Client":
        return self.use(DebridProvider.PREMIUMIZE, token)

    def use_torbox(self, token: Optional[str] = None) -> "Client":
        return self.use(DebridProvider.TORBOX, token)

    def use_debrid_link(self, token: Optional[str] = None) -> "Client":
        return self.use(DebridProvider.DEBRID_LINK, token)

    def set_token(self, token: str) -> "Client":
        if self.client is not None:
            self.client.set_token(token)
        self.token = token
        return self

    def _validate(self) -> DebridClient:
        if self.client is None:
            raise InvalidConfiguration("No client provided")
        if not self.token:
            raise InvalidConfiguration("No token provided")
        return self.client

    def get_cached_files(self, magnet: str) -> List[DebridFile]:
        return self._validate().get_cached_files(magnet)

    def is_file_cached(self, magnet: str, path: str) -> bool:
        return self._validate().is_file_cached(magnet, path)

    def get_link(self, magnet: str, path: str) -> str:
        return self._validate().get_link(magnet, path)

    def add_magnet(self, magnet: str) -> str:
        return self._validate().add_magnet(magnet)
