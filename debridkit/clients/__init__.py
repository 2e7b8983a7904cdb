"""
Debrid Client Factory
Returns the appropriate debrid client for a provider name.
"""
from typing import Dict, Optional, Type, Union

import httpx
from loguru import logger

from debridkit.clients.alldebrid import AllDebridClient
from debridkit.clients.base import DebridClient
from debridkit.clients.debridlink import DebridLinkClient
from debridkit.clients.premiumize import PremiumizeClient
from debridkit.clients.realdebrid import RealDebridClient
from debridkit.clients.torbox import TorBoxClient
from debridkit.config import Settings, get_settings
from debridkit.exceptions import InvalidConfiguration
from debridkit.models import DebridProvider

CLIENTS: Dict[DebridProvider, Type[DebridClient]] = {
    DebridProvider.REAL_DEBRID: RealDebridClient,
    DebridProvider.ALL_DEBRID: AllDebridClient,
    DebridProvider.PREMIUMIZE: PremiumizeClient,
    DebridProvider.TORBOX: TorBoxClient,
    DebridProvider.DEBRID_LINK: DebridLinkClient,
}

# Accept the spellings people actually type
_ALIASES = {
    "realdebrid": DebridProvider.REAL_DEBRID,
    "rd": DebridProvider.REAL_DEBRID,
    "alldebrid": DebridProvider.ALL_DEBRID,
    "ad": DebridProvider.ALL_DEBRID,
    "pm": DebridProvider.PREMIUMIZE,
    "tb": DebridProvider.TORBOX,
    "debridlink": DebridProvider.DEBRID_LINK,
    "dl": DebridProvider.DEBRID_LINK,
}


def resolve_provider(provider: Union[str, DebridProvider]) -> DebridProvider:
    if isinstance(provider, DebridProvider):
        return provider
    key = provider.strip().lower().replace("-", "_")
    try:
        return DebridProvider(key)
    except ValueError:
        pass
    alias = _ALIASES.get(key.replace("_", ""))
    if alias is None:
        raise InvalidConfiguration(f"Unknown debrid provider: {provider}")
    return alias


def get_debrid_client(
    provider: Union[str, DebridProvider],
    token: Optional[str] = None,
    settings: Optional[Settings] = None,
    http: Optional[httpx.Client] = None,
) -> DebridClient:
    """
    Factory function to get a debrid client.

    Args:
        provider: Provider name or DebridProvider
        token: API token, may be set later with set_token()
        settings: Tunables, defaults to get_settings()
        http: Shared httpx client, mostly for tests

    Returns:
        DebridClient instance for the provider
    """
    settings = settings or get_settings()
    provider = resolve_provider(provider)
    client_class = CLIENTS[provider]

    kwargs = dict(
        timeout=settings.timeout,
        max_attempts=settings.max_attempts,
        retry_delay=settings.retry_delay,
    )
    if client_class is AllDebridClient:
        kwargs["agent"] = settings.alldebrid_agent

    logger.debug(f"[Debrid] Using {client_class.__name__}")
    return client_class(token, http, **kwargs)


__all__ = [
    "CLIENTS",
    "DebridClient",
    "RealDebridClient",
    "AllDebridClient",
    "PremiumizeClient",
    "TorBoxClient",
    "DebridLinkClient",
    "get_debrid_client",
    "resolve_provider",
]
