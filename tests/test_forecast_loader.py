from __future__ import annotations

import io
from datetime import datetime, timezone

import pytest

from services.forecast_loader import load_forecast, parse_timestamp, read_forecast


def test_read_forecast_success() -> None:
    body = (
        "timestamp,uv_index,temperature,cloud_cover\n"
        "2024-07-01T10:00:00Z,4.5,24.0,0.2\n"
        "2024-07-01T11:00:00+00:00,6,,45\n"
    )

    result = read_forecast(io.StringIO(body))

    assert result.errors == []
    assert len(result.samples) == 2
    first, second = result.samples
    assert first.timestamp == datetime(2024, 7, 1, 10, 0, tzinfo=timezone.utc)
    assert first.temperature == 24.0
    assert first.cloud_cover == 0.2
    assert second.temperature is None
    assert second.cloud_cover == pytest.approx(0.45)


def test_read_forecast_collects_row_errors() -> None:
    body = (
        "Timestamp,UV_Index\n"
        "2024-07-01T10:00:00Z,3\n"
        ",4\n"
        "not-a-date,4\n"
        "2024-07-01T12:00:00Z,\n"
        "2024-07-01T13:00:00Z,high\n"
        "2024-07-01T14:00:00Z,-1\n"
    )

    result = read_forecast(io.StringIO(body))

    assert len(result.samples) == 1
    reasons = [error.reason for error in result.errors]
    assert reasons == [
        "missing timestamp",
        "invalid timestamp",
        "missing uv_index",
        "invalid uv_index",
        "negative uv_index",
    ]
    assert [error.row_number for error in result.errors] == [3, 4, 5, 6, 7]


def test_read_forecast_rejects_bad_optional_columns() -> None:
    body = (
        "timestamp,uv_index,temperature,cloud_cover\n"
        "2024-07-01T10:00:00Z,3,warm,\n"
        "2024-07-01T11:00:00Z,3,20,150\n"
    )

    result = read_forecast(io.StringIO(body))

    assert result.samples == []
    assert [error.reason for error in result.errors] == ["invalid numeric value", "invalid cloud_cover"]


def test_read_forecast_missing_columns() -> None:
    with pytest.raises(ValueError, match="missing required columns: uv_index"):
        read_forecast(io.StringIO("timestamp,uv\n2024-07-01T10:00:00Z,3\n"))


def test_read_forecast_empty_file() -> None:
    with pytest.raises(ValueError, match="header"):
        read_forecast(io.StringIO(""))


def test_naive_timestamps_are_treated_as_utc() -> None:
    assert parse_timestamp("2024-07-01T10:00:00") == datetime(2024, 7, 1, 10, 0, tzinfo=timezone.utc)


def test_offsets_are_preserved() -> None:
    parsed = parse_timestamp("2024-07-01T10:00:00+02:00")

    assert parsed.utcoffset().total_seconds() == 7200


def test_load_forecast_from_disk(tmp_path) -> None:
    path = tmp_path / "forecast.csv"
    path.write_text("timestamp,uv_index\n2024-07-01T10:00:00Z,3\n2024-07-01T11:00:00Z,5\n")

    result = load_forecast(path)

    assert [sample.uv_index for sample in result.samples] == [3.0, 5.0]


@pytest.mark.parametrize("raw", ["nan", "NaN", "inf", "-inf", "Infinity"])
def test_read_forecast_rejects_non_finite_uv_index(raw: str) -> None:
    body = (
        "timestamp,uv_index\n"
        f"2024-07-01T10:00:00Z,{raw}\n"
        "2024-07-01T11:00:00Z,9\n"
    )

    result = read_forecast(io.StringIO(body))

    assert [sample.uv_index for sample in result.samples] == [9.0]
    assert [(error.row_number, error.reason) for error in result.errors] == [(2, "invalid uv_index")]


def test_read_forecast_rejects_non_finite_optional_columns() -> None:
    body = (
        "timestamp,uv_index,temperature,cloud_cover\n"
        "2024-07-01T10:00:00Z,3,nan,\n"
        "2024-07-01T11:00:00Z,3,20,inf\n"
        "2024-07-01T12:00:00Z,3,20,nan\n"
    )

    result = read_forecast(io.StringIO(body))

    assert result.samples == []
    assert [error.reason for error in result.errors] == ["invalid numeric value"] * 3
