"""Burn-time projection for a single exposure hour."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Iterable, List, Optional, Tuple

from models.records import ForecastSample, ProtectantApplication, SensitivityProfile
from services.attenuation import attenuate_uv
from services.protection import effective_spf, reapply_at
from services.sensitivity import baseline_tolerance, resolve_skin_type

logger = logging.getLogger(__name__)

MIN_BURN_MINUTES = 5
MAX_BURN_MINUTES = 240
MIN_UV_DIVISOR = 0.1


class WarningLevel(str, Enum):
    safe = "safe"
    caution = "caution"
    warning = "warning"
    danger = "danger"

    @classmethod
    def for_minutes(cls, minutes: int) -> "WarningLevel":
        if minutes >= 60:
            return cls.safe
        if minutes >= 30:
            return cls.caution
        if minutes >= 15:
            return cls.warning
        return cls.danger

    @property
    def message(self) -> str:
        return _WARNING_MESSAGES[self]

    @property
    def color(self) -> str:
        return _WARNING_COLORS[self]


_WARNING_MESSAGES = {
    WarningLevel.safe: "Safe exposure time",
    WarningLevel.caution: "Take precautions",
    WarningLevel.warning: "Limit exposure",
    WarningLevel.danger: "Seek shade immediately",
}

_WARNING_COLORS = {
    WarningLevel.safe: "green",
    WarningLevel.caution: "yellow",
    WarningLevel.warning: "orange",
    WarningLevel.danger: "red",
}


def format_burn_time(minutes: int) -> str:
    """Render a burn time the way the dashboard and widget show it."""
    if minutes >= MAX_BURN_MINUTES:
        return "Safe without sunscreen"
    if minutes >= 60:
        hours, remainder = divmod(minutes, 60)
        if remainder == 0:
            return f"{hours}h"
        if remainder <= 30:
            return f"{hours}h 30m"
        return f"{hours + 1}h"
    rounded = ((minutes + 4) // 5) * 5
    return f"{rounded} minutes"


def format_burn_time_short(minutes: int) -> str:
    if minutes >= MAX_BURN_MINUTES:
        return "4h+"
    if minutes >= 60:
        return f"{minutes // 60}h"
    return f"{minutes}m"


@dataclass(frozen=True)
class ExposureResult:
    """Burn-time estimate for one hour of exposure."""

    burn_time_minutes: int
    warning_level: WarningLevel
    effective_spf: float
    reapply_at: Optional[datetime] = None

    @property
    def display_text(self) -> str:
        return format_burn_time(self.burn_time_minutes)

    @property
    def short_display_text(self) -> str:
        return format_burn_time_short(self.burn_time_minutes)


class BurnTimeProjector:
    """Combines skin sensitivity, sunscreen and UV into minutes-to-burn.

    ``calibration_constant`` scales the whole estimate. It is kept at 1.0 by
    default, which puts a Type I profile at UV 10 on 20 minutes.
    """

    def __init__(self, calibration_constant: float = 1.0) -> None:
        self.calibration_constant = calibration_constant

    def project(
        self,
        profile: Optional[SensitivityProfile],
        uv_index: float,
        at: datetime,
        application: Optional[ProtectantApplication] = None,
        cloud_cover: Optional[float] = None,
    ) -> ExposureResult:
        skin_type = resolve_skin_type(profile)
        baseline = baseline_tolerance(skin_type)
        spf = effective_spf(application, at)
        adjusted_uv = attenuate_uv(uv_index, cloud_cover)

        raw = self.calibration_constant * baseline * spf / max(MIN_UV_DIVISOR, adjusted_uv)
        minutes = int(max(MIN_BURN_MINUTES, min(MAX_BURN_MINUTES, raw)))
        level = WarningLevel.for_minutes(minutes)

        logger.debug(
            "Projected burn time",
            extra={
                "skin_type": int(skin_type),
                "uv_index": adjusted_uv,
                "effective_spf": spf,
                "burn_minutes": minutes,
                "warning_level": level.value,
            },
        )
        return ExposureResult(
            burn_time_minutes=minutes,
            warning_level=level,
            effective_spf=spf,
            reapply_at=reapply_at(application) if application is not None else None,
        )

    def project_sample(
        self,
        profile: Optional[SensitivityProfile],
        sample: ForecastSample,
        at: datetime,
        application: Optional[ProtectantApplication] = None,
    ) -> ExposureResult:
        return self.project(
            profile,
            sample.uv_index,
            at=at,
            application=application,
            cloud_cover=sample.cloud_cover,
        )

    def project_hourly(
        self,
        profile: Optional[SensitivityProfile],
        samples: Iterable[ForecastSample],
        now: datetime,
        application: Optional[ProtectantApplication] = None,
    ) -> List[Tuple[ForecastSample, ExposureResult]]:
        """Project every forecast hour, aging the sunscreen to that hour."""
        results: List[Tuple[ForecastSample, ExposureResult]] = []
        for sample in samples:
            at = sample.timestamp if sample.timestamp > now else now
            results.append((sample, self.project_sample(profile, sample, at, application)))
        return results
