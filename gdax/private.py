"""Authenticated account endpoints. The client must carry credentials."""

from typing import List

from gdax.connectors.client import GdaxClient
from gdax.connectors.decoders import decode_account_report_status, decode_account_trailing_volume
from gdax.models import AccountReportStatus, AccountTrailingVolume


def get_account_report_status(client: GdaxClient, report_id: str) -> AccountReportStatus:
    """Fetch the status of a previously requested report."""
    return client.get(f"/reports/{report_id}", decoder=decode_account_report_status)


def get_account_trailing_volume(client: GdaxClient) -> List[AccountTrailingVolume]:
    """Fetch 30-day trailing volume per product for the authenticated user."""
    return client.get("/users/self/trailing-volume", decoder=decode_account_trailing_volume)
