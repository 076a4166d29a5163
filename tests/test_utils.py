from __future__ import annotations

from datetime import UTC, date, datetime
from decimal import Decimal
from uuid import UUID

import pytest
from sqlalchemy.exc import OperationalError

from core.exceptions import (
    BadRequestException,
    NotFoundException,
    SourceException,
    classify_exception,
)
from core.environment import ODBCConfig
from core.utils import is_sql_identifier, to_json_value, utc_now


@pytest.mark.parametrize(
    "name",
    ["items", "Items_2", "_tmp", "dba.items"],
)
def test_accepts_plain_identifiers(name: str) -> None:
    assert is_sql_identifier(name)


@pytest.mark.parametrize(
    "name",
    ["", "2items", "items;", "items name", "a.b.c", "items--", "\"items\""],
)
def test_rejects_unsafe_identifiers(name: str) -> None:
    assert not is_sql_identifier(name)


def test_to_json_value_normalizes_driver_types() -> None:
    row = {
        "amount": Decimal("12.00"),
        "rate": Decimal("0.125"),
        "at": datetime(2024, 5, 1, 8, 30),
        "day": date(2024, 5, 1),
        "blob": b"\x00\x01",
        "uid": UUID("12345678-1234-5678-1234-567812345678"),
        "flag": True,
        "missing": None,
    }

    assert to_json_value(row) == {
        "amount": 12,
        "rate": 0.125,
        "at": "2024-05-01T08:30:00",
        "day": "2024-05-01",
        "blob": "AAE=",
        "uid": "12345678-1234-5678-1234-567812345678",
        "flag": True,
        "missing": None,
    }


def test_classify_exception_keeps_http_errors() -> None:
    assert classify_exception(NotFoundException("gone")).status_code == 404
    assert classify_exception(BadRequestException()).status_code == 400


def test_classify_exception_maps_backend_errors_to_500() -> None:
    source_error = classify_exception(SourceException("offline", "login failed"))
    assert source_error.status_code == 500
    assert source_error.detail == "login failed"

    db_error = classify_exception(OperationalError("SELECT 1", {}, Exception("db down")))
    assert db_error.status_code == 500
    assert "db down" in db_error.detail


def test_to_json_value_drops_non_finite_numbers() -> None:
    row = {
        "nan": float("nan"),
        "inf": float("inf"),
        "neg_inf": float("-inf"),
        "dec_nan": Decimal("NaN"),
        "dec_inf": Decimal("Infinity"),
        "ratio": 0.5,
    }

    assert to_json_value(row) == {
        "nan": None,
        "inf": None,
        "neg_inf": None,
        "dec_nan": None,
        "dec_inf": None,
        "ratio": 0.5,
    }


def test_utc_now_is_timezone_aware() -> None:
    assert utc_now().tzinfo is UTC


def test_connection_string() -> None:
    config = ODBCConfig(name="online", dsn="remote", username="dba", password="sql")

    assert config.connection_string == "DSN=remote;UID=dba;PWD=sql"
