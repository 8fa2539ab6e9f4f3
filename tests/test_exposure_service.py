from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from datastore.profile_store import ProfileStore
from models.records import (
    ActivityLevel,
    ApplicationQuantity,
    ForecastSample,
    ProtectantApplication,
    SensitivityProfile,
    UVLevel,
)
from services.exposure import ExposureService
from services.forecast import ForecastWindowAnalyzer
from services.projector import BurnTimeProjector

NOW = datetime(2024, 7, 1, 10, 0, tzinfo=timezone.utc)


@pytest.fixture()
def service() -> ExposureService:
    return ExposureService(
        store=ProfileStore(),
        projector=BurnTimeProjector(calibration_constant=1.0),
        analyzer=ForecastWindowAnalyzer(threshold=3.0),
    )


def _forecast(values: list[float], start: datetime = NOW - timedelta(hours=2)) -> list[ForecastSample]:
    return [
        ForecastSample(timestamp=start + timedelta(hours=offset), uv_index=value)
        for offset, value in enumerate(values)
    ]


def _application(applied_at: datetime = NOW) -> ProtectantApplication:
    return ProtectantApplication(
        spf=30,
        quantity=ApplicationQuantity.medium,
        applied_at=applied_at,
        activity=ActivityLevel.normal,
    )


def test_current_exposure_uses_stored_records(service: ExposureService) -> None:
    service.store.put_profile(SensitivityProfile(skin_type=1))
    service.store.put_application(_application())

    result = service.current_exposure(10.0, now=NOW)

    assert result.effective_spf == pytest.approx(30 ** 0.5)
    assert result.reapply_at == NOW + timedelta(hours=2)


def test_removing_application_restores_unprotected_result(service: ExposureService) -> None:
    service.store.put_profile(SensitivityProfile(skin_type=1))
    before = service.current_exposure(10.0, now=NOW)

    service.store.put_application(_application())
    service.store.clear_application()

    assert service.current_exposure(10.0, now=NOW) == before


def test_windows_skip_past_hours(service: ExposureService) -> None:
    samples = _forecast([5, 5, 2, 4, 6, 1])

    protection, peak = service.windows(samples, now=NOW)

    assert protection.start == samples[3].timestamp
    assert protection.end == samples[4].timestamp + timedelta(hours=1)
    assert peak.start == samples[4].timestamp


def test_reminders_with_active_application(service: ExposureService) -> None:
    service.store.put_application(_application(applied_at=NOW - timedelta(minutes=30)))
    samples = _forecast([1, 2, 4, 5, 2])

    plan = service.reminders(samples[2], samples, now=NOW)

    assert plan.reapply_at == NOW + timedelta(minutes=90)
    assert plan.reapply_overdue is False
    assert plan.protection_reminder_at == samples[2].timestamp


def test_reminders_flag_overdue_application(service: ExposureService) -> None:
    service.store.put_application(_application(applied_at=NOW - timedelta(hours=3)))
    samples = _forecast([1, 1, 1])

    plan = service.reminders(samples[2], samples, now=NOW)

    assert plan.reapply_at is None
    assert plan.reapply_overdue is True


def test_no_protection_reminder_when_current_uv_low(service: ExposureService) -> None:
    samples = _forecast([1, 2, 2.5, 5, 6])

    plan = service.reminders(samples[2], samples, now=NOW)

    assert plan.protection_reminder_at is None
    assert plan.reapply_at is None


def test_summary_without_profile_omits_burn_time(service: ExposureService) -> None:
    samples = _forecast([1, 2, 4, 7, 5])

    summary = service.summary(samples[2], samples, now=NOW)

    assert summary.exposure is None
    assert summary.uv_level is UVLevel.moderate
    assert summary.protectant_active is False
    assert summary.next_high_uv_at == samples[3].timestamp
    assert summary.windows.protection_start == samples[2].timestamp
    assert summary.windows.peak_uv == 7
    assert len(summary.hourly) == 5


def test_summary_with_profile_and_sunscreen(service: ExposureService) -> None:
    service.store.put_profile(SensitivityProfile(skin_type=2))
    service.store.put_application(_application(applied_at=NOW - timedelta(hours=1)))
    samples = _forecast([0] * 30)

    summary = service.summary(samples[2], samples, now=NOW)

    assert summary.exposure is not None
    assert summary.exposure.burn_time_minutes == 240
    assert summary.exposure.display_text == "Safe without sunscreen"
    assert summary.protectant_active is True
    assert summary.protectant_spf == 30
    assert summary.windows.peak_start is None
    assert len(summary.hourly) == 24
