"""
debridkit Configuration Management
Tunables for the client factory and facade. The clients themselves never
read the environment; tokens are passed in by the caller.
"""
from functools import lru_cache
from pathlib import Path
from typing import Optional, Union

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from debridkit.transport import DEFAULT_MAX_ATTEMPTS, DEFAULT_RETRY_DELAY, DEFAULT_TIMEOUT


class Settings(BaseSettings):
    """Settings loaded from DEBRID_* environment variables, a .env file or YAML"""

    model_config = SettingsConfigDict(
        env_prefix="DEBRID_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    # Default provider for the facade: real_debrid, all_debrid, premiumize, torbox, debrid_link
    provider: str = Field(default="real_debrid")
    token: str = Field(default="")

    # HTTP
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)
    max_attempts: int = Field(default=DEFAULT_MAX_ATTEMPTS, ge=1)  # on HTTP 429
    retry_delay: float = Field(default=DEFAULT_RETRY_DELAY, ge=0)  # seconds

    # AllDebrid requires an agent name on every call
    alldebrid_agent: str = Field(default="debridkit")

    log_level: str = Field(default="INFO")

    @property
    def has_token(self) -> bool:
        return bool(self.token)

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "Settings":
        """Environment defaults overlaid with the values of a YAML file."""
        path = Path(path)
        if not path.exists():
            return cls()
        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}
        # init kwargs take priority over the environment
        return cls(**data)


@lru_cache()
def get_settings(config_path: Optional[str] = None) -> Settings:
    if config_path:
        return Settings.from_yaml(config_path)
    return Settings()
