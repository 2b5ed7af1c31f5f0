"""
Unit tests for forecast/load.py.

Uses mock SQLAlchemy engine — no real database connection needed.
"""

from unittest.mock import patch, MagicMock

import pytest

from forecast.load import upsert_hourly, load
from forecast.transform import parse_forecast, to_dataframe

from conftest import MOCK_FORECAST

SAMPLE_DF = to_dataframe(parse_forecast(MOCK_FORECAST))


# ── helpers ──────────────────────────────────────────────────────────────────

def _make_begin_conn(rowcount=3):
    """Mock connection for engine.begin() context manager."""
    mock_result = MagicMock()
    mock_result.rowcount = rowcount
    mock_conn = MagicMock()
    mock_conn.execute.return_value = mock_result
    mock_conn.__enter__ = MagicMock(return_value=mock_conn)
    mock_conn.__exit__ = MagicMock(return_value=False)
    return mock_conn


def _make_connect_conn(scalar_value=5):
    """Mock connection for engine.connect() context manager."""
    mock_conn = MagicMock()
    mock_conn.__enter__ = MagicMock(return_value=mock_conn)
    mock_conn.__exit__ = MagicMock(return_value=False)
    mock_conn.execute.return_value.scalar.return_value = scalar_value
    return mock_conn


# ── upsert_hourly ────────────────────────────────────────────────────────────

def test_upsert_hourly_returns_rowcount():
    mock_engine = MagicMock()
    mock_engine.begin.return_value = _make_begin_conn(rowcount=3)

    with patch("forecast.load.MetaData") as mock_meta_cls, \
         patch("forecast.load.pg_insert"):
        mock_meta_cls.return_value.tables = {"hourly_forecast": MagicMock()}
        result = upsert_hourly(mock_engine, SAMPLE_DF)

    assert result == 3


def test_upsert_hourly_uses_on_conflict_do_nothing():
    mock_engine = MagicMock()
    mock_engine.begin.return_value = _make_begin_conn(rowcount=1)

    with patch("forecast.load.MetaData") as mock_meta_cls, \
         patch("forecast.load.pg_insert") as mock_insert:
        mock_meta_cls.return_value.tables = {"hourly_forecast": MagicMock()}

        mock_stmt = MagicMock()
        mock_insert.return_value.values.return_value = mock_stmt
        mock_stmt.on_conflict_do_nothing.return_value = mock_stmt

        upsert_hourly(mock_engine, SAMPLE_DF)

    mock_stmt.on_conflict_do_nothing.assert_called_once_with(
        index_elements=["latitude", "longitude", "epoch"]
    )


def test_upsert_hourly_passes_one_record_per_row():
    mock_engine = MagicMock()
    mock_engine.begin.return_value = _make_begin_conn()

    with patch("forecast.load.MetaData") as mock_meta_cls, \
         patch("forecast.load.pg_insert") as mock_insert:
        mock_meta_cls.return_value.tables = {"hourly_forecast": MagicMock()}
        upsert_hourly(mock_engine, SAMPLE_DF)

    records = mock_insert.return_value.values.call_args[0][0]
    assert len(records) == 3
    assert records[0]["epoch"] == 1704088800
    assert records[0]["temperature"] == -5.0


def test_upsert_hourly_skips_empty_frame():
    mock_engine = MagicMock()
    assert upsert_hourly(mock_engine, SAMPLE_DF.iloc[0:0]) == 0
    mock_engine.begin.assert_not_called()


# ── load ─────────────────────────────────────────────────────────────────────

def test_load_raises_if_table_empty():
    mock_engine = MagicMock()
    mock_engine.connect.return_value = _make_connect_conn(scalar_value=0)

    with patch("forecast.load.get_engine", return_value=mock_engine), \
         patch("forecast.load.upsert_hourly", return_value=0):
        with pytest.raises(RuntimeError, match="Data quality gate FAILED"):
            load(SAMPLE_DF)


def test_load_succeeds_when_rows_exist():
    mock_engine = MagicMock()
    mock_engine.connect.return_value = _make_connect_conn(scalar_value=5)

    with patch("forecast.load.get_engine", return_value=mock_engine), \
         patch("forecast.load.upsert_hourly", return_value=2):
        load(SAMPLE_DF)  # should not raise


def test_get_engine_reads_connection_string(monkeypatch):
    monkeypatch.setenv("WEATHER_DB_CONN", "sqlite://")
    with patch("forecast.load.create_engine") as mock_create:
        from forecast.load import get_engine
        get_engine()
    mock_create.assert_called_once_with("sqlite://")
