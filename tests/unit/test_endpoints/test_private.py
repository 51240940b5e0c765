"""Tests for authenticated account endpoints."""

from datetime import datetime, timezone

import pytest

from gdax.connectors.http_mixin import ApiError
from gdax.private import get_account_report_status, get_account_trailing_volume
from tests.fixtures.gdax_payloads import ACCOUNT_REPORT_STATUS, ACCOUNT_TRAILING_VOLUME

REPORT_ID = "0428b97b-bec1-429e-a94c-59232926778d"


class TestAccountReportStatus:

    def test_get_account_report_status(self, client, mock_session):
        mock_session.queue_response(200, ACCOUNT_REPORT_STATUS)

        report = get_account_report_status(client, REPORT_ID)

        sent = mock_session.last_request
        assert sent["url"] == f"https://mock-api.gdax.com/reports/{REPORT_ID}"
        assert "CB-ACCESS-SIGN" in sent["headers"]

        assert report.id == REPORT_ID
        assert report.type == "fills"
        assert report.status == "creating"
        assert report.created_at == datetime(2015, 1, 6, 10, 34, 47, tzinfo=timezone.utc)
        assert report.expires_at == datetime(2015, 1, 13, 10, 35, 47, tzinfo=timezone.utc)
        assert report.completed_at is None
        assert report.file_url == ""
        assert report.params["start_date"] == "2014-11-01T00:00:00.000Z"

    def test_unauthorized(self, public_client, mock_session):
        mock_session.queue_response(401, '{"message": "invalid signature"}')

        with pytest.raises(ApiError) as exc_info:
            get_account_report_status(public_client, REPORT_ID)

        assert exc_info.value.status_code == 401
        assert str(exc_info.value) == "invalid signature"


class TestAccountTrailingVolume:

    def test_get_account_trailing_volume(self, client, mock_session):
        mock_session.queue_response(200, ACCOUNT_TRAILING_VOLUME)

        volumes = get_account_trailing_volume(client)

        assert mock_session.last_request["url"] == "https://mock-api.gdax.com/users/self/trailing-volume"
        assert len(volumes) == 2
        first = volumes[0]
        assert first.product_id == "BTC-USD"
        assert first.exchange_volume == 11800.0
        assert first.volume == 100.0
        assert first.recorded_at == datetime(1973, 11, 29, 0, 5, 1, 123456, tzinfo=timezone.utc)
        assert volumes[1].product_id == "LTC-USD"
