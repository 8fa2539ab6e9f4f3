"""Protection and peak windows over an hourly UV forecast."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, time, timedelta
from typing import List, Optional, Sequence

from models.records import ForecastSample

DEFAULT_THRESHOLD = 3.0
HIGH_UV_THRESHOLD = 6.0
PEAK_MARGIN = 0.5
SAMPLE_SPAN = timedelta(hours=1)


@dataclass(frozen=True)
class ProtectionWindow:
    start: Optional[datetime] = None
    end: Optional[datetime] = None

    @property
    def is_empty(self) -> bool:
        return self.start is None


@dataclass(frozen=True)
class PeakWindow:
    start: Optional[datetime] = None
    end: Optional[datetime] = None
    max_uv: float = 0.0

    @property
    def is_empty(self) -> bool:
        return self.start is None


def _end_of_day(moment: datetime) -> datetime:
    return datetime.combine(moment.date(), time(23, 59, 59), tzinfo=moment.tzinfo)


def _start_of_day(moment: datetime) -> datetime:
    return datetime.combine(moment.date(), time.min, tzinfo=moment.tzinfo)


class ForecastWindowAnalyzer:
    """Reduces an ordered forecast to the windows the dashboard shows.

    Samples must already be ordered by timestamp; nothing here sorts.
    """

    def __init__(self, threshold: float = DEFAULT_THRESHOLD) -> None:
        self.threshold = threshold

    def protection_window(
        self,
        samples: Sequence[ForecastSample],
        threshold: Optional[float] = None,
        now: Optional[datetime] = None,
        today_only: bool = False,
    ) -> ProtectionWindow:
        """First contiguous run of samples at or above ``threshold``.

        The window ends one hour after the last sample of the run. Any later
        run is ignored, even after a short dip below the threshold.
        """
        limit = self.threshold if threshold is None else threshold
        end_of_today = _end_of_day(now) if now is not None and today_only else None

        start: Optional[datetime] = None
        end: Optional[datetime] = None
        for sample in samples:
            if now is not None and sample.timestamp < now:
                continue
            if end_of_today is not None and sample.timestamp > end_of_today:
                break
            if sample.uv_index >= limit:
                if start is None:
                    start = sample.timestamp
                end = sample.timestamp + SAMPLE_SPAN
            elif start is not None:
                break
        return ProtectionWindow(start=start, end=end)

    def peak_window(self, samples: Sequence[ForecastSample]) -> PeakWindow:
        if not samples:
            return PeakWindow()
        max_uv = max(sample.uv_index for sample in samples)
        if max_uv <= 0:
            return PeakWindow()

        start: Optional[datetime] = None
        end: Optional[datetime] = None
        for sample in samples:
            if abs(sample.uv_index - max_uv) < PEAK_MARGIN:
                if start is None:
                    start = sample.timestamp
                end = sample.timestamp
        return PeakWindow(start=start, end=end, max_uv=max_uv)

    @staticmethod
    def next_high_uv(
        samples: Sequence[ForecastSample],
        now: datetime,
        threshold: float = HIGH_UV_THRESHOLD,
    ) -> Optional[datetime]:
        for sample in samples:
            if sample.timestamp > now and sample.uv_index >= threshold:
                return sample.timestamp
        return None

    @staticmethod
    def today(samples: Sequence[ForecastSample], now: datetime) -> List[ForecastSample]:
        start, end = _start_of_day(now), _end_of_day(now)
        return [sample for sample in samples if start <= sample.timestamp <= end]

    @staticmethod
    def tomorrow(samples: Sequence[ForecastSample], now: datetime) -> List[ForecastSample]:
        tomorrow = now + timedelta(days=1)
        start, end = _start_of_day(tomorrow), _end_of_day(tomorrow)
        return [sample for sample in samples if start <= sample.timestamp <= end]
