"""Parsing of hourly UV forecasts exported as CSV."""

from __future__ import annotations

import csv
import logging
import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, TextIO

from models.records import ForecastSample
from models.schemas import RowError

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = {"timestamp", "uv_index"}


@dataclass
class ForecastLoadResult:
    """Samples parsed from a forecast file plus the rows that were skipped."""

    samples: List[ForecastSample] = field(default_factory=list)
    errors: List[RowError] = field(default_factory=list)


def parse_timestamp(value: str) -> datetime:
    candidate = value.strip()
    if not candidate:
        raise ValueError("Timestamp is empty.")

    if candidate.endswith("Z"):
        candidate = candidate[:-1] + "+00:00"

    try:
        parsed = datetime.fromisoformat(candidate)
    except ValueError as exc:
        raise ValueError("Invalid timestamp format") from exc

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)

    return parsed


def _parse_optional_float(value: str) -> Optional[float]:
    candidate = value.strip()
    if not candidate:
        return None
    parsed = float(candidate)
    if not math.isfinite(parsed):
        raise ValueError(f"Non-finite value: {candidate}")
    return parsed


def read_forecast(stream: TextIO) -> ForecastLoadResult:
    """Parse ``timestamp,uv_index[,temperature][,cloud_cover]`` rows.

    Rows are kept in file order. Cloud cover may be a fraction or a percentage.
    """
    reader = csv.DictReader(stream)
    if not reader.fieldnames:
        raise ValueError("Forecast file is missing a header row.")

    normalized = {name.lower().strip(): name for name in reader.fieldnames}
    missing = sorted(REQUIRED_COLUMNS - normalized.keys())
    if missing:
        raise ValueError(f"Forecast missing required columns: {', '.join(missing)}")

    timestamp_col = normalized["timestamp"]
    uv_col = normalized["uv_index"]
    temperature_col = normalized.get("temperature")
    cloud_col = normalized.get("cloud_cover")

    result = ForecastLoadResult()
    for row_number, row in enumerate(reader, start=2):
        timestamp_raw = (row.get(timestamp_col) or "").strip()
        uv_raw = (row.get(uv_col) or "").strip()

        if not timestamp_raw:
            result.errors.append(RowError(row_number=row_number, reason="missing timestamp"))
            continue
        try:
            timestamp = parse_timestamp(timestamp_raw)
        except ValueError:
            result.errors.append(RowError(row_number=row_number, reason="invalid timestamp"))
            continue

        if not uv_raw:
            result.errors.append(RowError(row_number=row_number, reason="missing uv_index"))
            continue
        try:
            uv_index = float(uv_raw)
        except ValueError:
            result.errors.append(RowError(row_number=row_number, reason="invalid uv_index"))
            continue
        if not math.isfinite(uv_index):
            result.errors.append(RowError(row_number=row_number, reason="invalid uv_index"))
            continue
        if uv_index < 0:
            result.errors.append(RowError(row_number=row_number, reason="negative uv_index"))
            continue

        try:
            temperature = (
                _parse_optional_float(row.get(temperature_col) or "") if temperature_col else None
            )
            cloud_cover = _parse_optional_float(row.get(cloud_col) or "") if cloud_col else None
        except ValueError:
            result.errors.append(RowError(row_number=row_number, reason="invalid numeric value"))
            continue

        if cloud_cover is not None and cloud_cover > 1.0:
            cloud_cover = cloud_cover / 100.0
        if cloud_cover is not None and not 0.0 <= cloud_cover <= 1.0:
            result.errors.append(RowError(row_number=row_number, reason="invalid cloud_cover"))
            continue

        result.samples.append(
            ForecastSample(
                timestamp=timestamp,
                uv_index=uv_index,
                temperature=temperature,
                cloud_cover=cloud_cover,
            )
        )

    for error in result.errors:
        logger.warning(
            "Skipped forecast row",
            extra={"row_number": error.row_number, "reason": error.reason},
        )
    return result


def load_forecast(path: Path) -> ForecastLoadResult:
    with path.open("r", encoding="utf-8", newline="") as handle:
        result = read_forecast(handle)
    logger.info(
        "Loaded forecast",
        extra={
            "path": str(path),
            "row_count": len(result.samples),
            "error_count": len(result.errors),
        },
    )
    return result
