from __future__ import annotations

import json
import logging
from datetime import datetime, timedelta, timezone

import pytest

from common.logger import JsonFormatter
from common.mongo.config import load_mongo_config
from common.schemas.pagination import PageResponse, normalize_page
from common.types.fields import serialize_datetime_to_utc_iso8601


def test_mongo_config_requires_uri(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("MONGO_URI", raising=False)

    with pytest.raises(RuntimeError):
        load_mongo_config()


def test_mongo_config_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MONGO_URI", "mongodb://localhost:27017/social")
    monkeypatch.setenv("MONGO_DB_NAME", " ")
    monkeypatch.setenv("MONGO_SERVER_SELECTION_TIMEOUT_MS", "1500")

    config = load_mongo_config()

    assert config.uri == "mongodb://localhost:27017/social"
    assert config.db_name is None
    assert config.server_selection_timeout_ms == 1500


def test_json_formatter_includes_request_extras() -> None:
    record = logging.LogRecord(
        name="social_service.app.main",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="request rejected: %s",
        args=("user not found",),
        exc_info=None,
    )
    record.request_id = "req-1"
    record.status = 404
    record.error_code = "not_found"

    payload = json.loads(JsonFormatter().format(record))

    assert payload["message"] == "request rejected: user not found"
    assert payload["level"] == "INFO"
    assert payload["request_id"] == "req-1"
    assert (payload["status"], payload["error_code"]) == (404, "not_found")
    assert "span_id" not in payload


@pytest.mark.parametrize(
    ("page", "limit", "expected"),
    [(0, 0, (1, 10)), (3, 25, (3, 25)), (-1, 1000, (1, 100)), (2, 100, (2, 100))],
)
def test_normalize_page(page: int, limit: int, expected: tuple[int, int]) -> None:
    assert normalize_page(page, limit) == expected


def test_page_response_total_pages() -> None:
    page = PageResponse[int].build([1, 2], total=5, page=1, limit=2)

    assert page.total_pages == 3


def test_datetimes_serialize_as_utc() -> None:
    kst = timezone(timedelta(hours=9))

    assert (
        serialize_datetime_to_utc_iso8601(datetime(2024, 3, 1, 9, 0, tzinfo=kst))
        == "2024-03-01T00:00:00+00:00"
    )
    assert (
        serialize_datetime_to_utc_iso8601(datetime(2024, 3, 1, 9, 0))
        == "2024-03-01T09:00:00+00:00"
    )
