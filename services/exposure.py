"""Wires the profile store and the calculators into consumer-facing summaries."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from functools import lru_cache
from typing import Optional, Sequence, Tuple

from datastore.profile_store import ProfileStore, build_default_store
from models.records import ForecastSample, UVLevel
from models.schemas import (
    ExposurePayload,
    SamplePayload,
    SummaryPayload,
    WindowPayload,
)
from services.forecast import ForecastWindowAnalyzer, PeakWindow, ProtectionWindow
from services.projector import BurnTimeProjector, ExposureResult
from services.protection import needs_reapplication, reapply_at
from settings import get_settings

logger = logging.getLogger(__name__)

REMINDER_UV_THRESHOLD = 3.0
SUMMARY_HOURS = 24


@dataclass(frozen=True)
class ReminderPlan:
    """Times a notification scheduler should act on."""

    reapply_at: Optional[datetime] = None
    reapply_overdue: bool = False
    protection_reminder_at: Optional[datetime] = None


def exposure_payload(result: ExposureResult) -> ExposurePayload:
    return ExposurePayload(
        burn_time_minutes=result.burn_time_minutes,
        display_text=result.display_text,
        warning_level=result.warning_level.value,
        effective_spf=result.effective_spf,
        reapply_at=result.reapply_at,
    )


def window_payload(protection: ProtectionWindow, peak: PeakWindow) -> WindowPayload:
    return WindowPayload(
        protection_start=protection.start,
        protection_end=protection.end,
        peak_start=peak.start,
        peak_end=peak.end,
        peak_uv=peak.max_uv,
    )


class ExposureService:
    """Answers exposure questions for whoever is in the profile store."""

    def __init__(
        self,
        store: ProfileStore,
        projector: BurnTimeProjector,
        analyzer: ForecastWindowAnalyzer,
    ) -> None:
        self.store = store
        self.projector = projector
        self.analyzer = analyzer

    def current_exposure(
        self,
        uv_index: float,
        now: datetime,
        cloud_cover: Optional[float] = None,
    ) -> ExposureResult:
        return self.projector.project(
            self.store.get_profile(),
            uv_index,
            at=now,
            application=self.store.get_application(),
            cloud_cover=cloud_cover,
        )

    def windows(
        self,
        samples: Sequence[ForecastSample],
        now: Optional[datetime] = None,
        today_only: bool = False,
        threshold: Optional[float] = None,
    ) -> Tuple[ProtectionWindow, PeakWindow]:
        protection = self.analyzer.protection_window(
            samples, threshold=threshold, now=now, today_only=today_only
        )
        return protection, self.analyzer.peak_window(samples)

    def reminders(
        self,
        current: ForecastSample,
        samples: Sequence[ForecastSample],
        now: datetime,
    ) -> ReminderPlan:
        reapply: Optional[datetime] = None
        overdue = False
        application = self.store.get_application()
        if application is not None:
            overdue = needs_reapplication(application, now)
            reapply = None if overdue else reapply_at(application)

        reminder_at: Optional[datetime] = None
        if current.uv_index >= REMINDER_UV_THRESHOLD:
            window = self.analyzer.protection_window(samples, now=now, today_only=True)
            reminder_at = window.start
        return ReminderPlan(
            reapply_at=reapply,
            reapply_overdue=overdue,
            protection_reminder_at=reminder_at,
        )

    def summary(
        self,
        current: ForecastSample,
        samples: Sequence[ForecastSample],
        now: datetime,
    ) -> SummaryPayload:
        profile = self.store.get_profile()
        application = self.store.get_application()

        exposure: Optional[ExposurePayload] = None
        if profile is not None:
            result = self.projector.project_sample(profile, current, at=now, application=application)
            exposure = exposure_payload(result)

        protection, peak = self.windows(samples, now=now)
        logger.debug("Built exposure summary", extra={"uv_index": current.uv_index})
        return SummaryPayload(
            uv_index=current.uv_index,
            uv_level=UVLevel.from_index(current.uv_index),
            exposure=exposure,
            protectant_active=application is not None and not needs_reapplication(application, now),
            protectant_spf=application.spf if application is not None else None,
            protectant_applied_at=application.applied_at if application is not None else None,
            next_high_uv_at=self.analyzer.next_high_uv(samples, now),
            windows=window_payload(protection, peak),
            hourly=[SamplePayload.from_domain(sample) for sample in samples[:SUMMARY_HOURS]],
            generated_at=now,
        )


@lru_cache
def build_default_service() -> ExposureService:
    """Factory that wires the service with the configured store and constants."""
    settings = get_settings()
    return ExposureService(
        store=build_default_store(),
        projector=BurnTimeProjector(calibration_constant=settings.calibration_constant),
        analyzer=ForecastWindowAnalyzer(threshold=settings.protection_threshold),
    )
