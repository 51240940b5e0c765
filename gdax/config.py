"""Client configuration and API credentials."""

import os
from dataclasses import dataclass, field
from typing import Optional

from gdax.version import __version__

PRODUCTION_URL = "https://api.gdax.com"
SANDBOX_URL = "https://api-public.sandbox.gdax.com"
MOCK_URL = "https://mock-api.gdax.com"

DEFAULT_USER_AGENT = f"gdax-client/{__version__}"

# Environment variable names used by Credentials.from_env()
ENV_API_SECRET = "GDAX_API_SECRET"
ENV_API_KEY = "GDAX_API_KEY"
ENV_API_PASSPHRASE = "GDAX_API_PASSPHRASE"


@dataclass(frozen=True)
class Credentials:
    """API key material. An empty secret means requests go out unsigned."""
    secret: str = field(default="", repr=False)
    key: str = ""
    passphrase: str = field(default="", repr=False)

    @property
    def is_authenticated(self) -> bool:
        return bool(self.secret)

    @classmethod
    def from_env(cls) -> "Credentials":
        """Read credentials from GDAX_API_SECRET / GDAX_API_KEY / GDAX_API_PASSPHRASE."""
        return cls(
            secret=os.getenv(ENV_API_SECRET, ""),
            key=os.getenv(ENV_API_KEY, ""),
            passphrase=os.getenv(ENV_API_PASSPHRASE, ""),
        )


@dataclass(frozen=True)
class ClientConfig:
    """Configuration for GdaxClient."""

    # API endpoint
    base_url: str = PRODUCTION_URL

    credentials: Credentials = field(default_factory=Credentials)

    # Transport
    user_agent: str = DEFAULT_USER_AGENT
    request_timeout: float = 10.0

    @classmethod
    def production(cls, credentials: Optional[Credentials] = None) -> "ClientConfig":
        return cls(base_url=PRODUCTION_URL, credentials=credentials or Credentials())

    @classmethod
    def sandbox(cls, credentials: Optional[Credentials] = None) -> "ClientConfig":
        return cls(base_url=SANDBOX_URL, credentials=credentials or Credentials())

    @classmethod
    def mock(cls) -> "ClientConfig":
        """Config pointing at a fake host, with throwaway credentials, for tests."""
        return cls(
            base_url=MOCK_URL,
            credentials=Credentials(
                secret="c3VwZXItc2VjcmV0LXBhc3N3b3Jk",   # super-secret-password
                key="YW1hemluZy1zdXBlci1zZWNyZXQta2V5",  # amazing-super-secret-key
                passphrase="YW1hemluZy1zdXBlci1wYXNzcGhyYXNl",
            ),
        )

    @classmethod
    def for_environment(cls, environment: str, credentials: Optional[Credentials] = None) -> "ClientConfig":
        """Build a config for "production" or "sandbox"."""
        if environment == "production":
            return cls.production(credentials)
        if environment == "sandbox":
            return cls.sandbox(credentials)
        raise ValueError(f"Unknown environment: {environment}")
