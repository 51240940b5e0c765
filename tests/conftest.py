import pytest
import sys
from pathlib import Path

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from gdax.config import ClientConfig, Credentials
from gdax.connectors.client import GdaxClient

# Import test fixtures and mocks
from tests.mocks.mock_session import MockSession
from tests.fixtures.gdax_payloads import (
    HISTORIC_RATES,
    ORDER_BOOK_LEVEL1,
    ORDER_BOOK_LEVEL3,
    generate_level2_book,
)

FIXED_TIMESTAMP = 1500130020


# ========== Environment Setup ==========
@pytest.fixture
def mock_env_setup(monkeypatch):
    """Sets up mock credential environment variables for testing."""
    monkeypatch.setenv("GDAX_API_SECRET", "c3VwZXItc2VjcmV0LXBhc3N3b3Jk")
    monkeypatch.setenv("GDAX_API_KEY", "test_key")
    monkeypatch.setenv("GDAX_API_PASSPHRASE", "test_passphrase")


@pytest.fixture
def clean_env(monkeypatch):
    """Removes credential environment variables."""
    for name in ("GDAX_API_SECRET", "GDAX_API_KEY", "GDAX_API_PASSPHRASE"):
        monkeypatch.delenv(name, raising=False)


# ========== Clients ==========
@pytest.fixture
def mock_session():
    """Recording session with no queued responses."""
    return MockSession()


@pytest.fixture
def mock_config():
    """Config with throwaway credentials pointing at the mock host."""
    return ClientConfig.mock()


@pytest.fixture
def client(mock_config, mock_session):
    """Authenticated client on a mock session with a frozen clock."""
    return GdaxClient(mock_config, session=mock_session, clock=lambda: FIXED_TIMESTAMP + 0.75)


@pytest.fixture
def public_client(mock_session):
    """Unauthenticated client on a mock session with a frozen clock."""
    config = ClientConfig(base_url="https://mock-api.gdax.com", credentials=Credentials())
    return GdaxClient(config, session=mock_session, clock=lambda: FIXED_TIMESTAMP)


# ========== Market Data Fixtures ==========
@pytest.fixture
def level1_payload():
    return {k: list(v) if isinstance(v, list) else v for k, v in ORDER_BOOK_LEVEL1.items()}


@pytest.fixture
def level3_payload():
    return {k: list(v) if isinstance(v, list) else v for k, v in ORDER_BOOK_LEVEL3.items()}


@pytest.fixture
def candle_rows():
    return [list(row) for row in HISTORIC_RATES]


@pytest.fixture
def level2_book_factory():
    """Factory function to generate level 2 books."""
    return generate_level2_book
