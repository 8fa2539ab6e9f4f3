"""Effective sunscreen protection as it decays with time and activity."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Optional

from models.records import ActivityLevel, ApplicationQuantity, ProtectantApplication

REAPPLY_INTERVAL = timedelta(hours=2)
WATER_LAPSE = timedelta(hours=2)

# Decay per two-hour period for each activity level.
DECAY_RATES = {
    ActivityLevel.indoors: 0.10,
    ActivityLevel.normal: 0.20,
    ActivityLevel.active: 0.35,
    ActivityLevel.water: 0.35,
}

_INDOOR_GRACE_HOURS = 2.0


def dose_for(quantity: ApplicationQuantity) -> float:
    return quantity.dose_mg_per_cm2


def base_factor(spf: int, dose: float) -> float:
    """SPF achieved by ``dose`` mg/cm²; 2.0 mg/cm² reproduces the label."""
    return float(spf) ** (dose / 2.0)


def _hours_between(start: datetime, end: datetime) -> float:
    return max(0.0, (end - start).total_seconds() / 3600.0)


def decay_fraction(application: ProtectantApplication, at: datetime) -> float:
    """Fraction of protection lost between application and ``at``, in [0, 1]."""
    hours = _hours_between(application.applied_at, at)
    periods = hours / 2.0
    rate = DECAY_RATES[application.activity]

    if application.activity is ActivityLevel.indoors:
        if hours <= _INDOOR_GRACE_HOURS:
            return 0.0
        decay = rate * (periods - 1)
    elif application.activity is ActivityLevel.water:
        last_water = application.last_water_exposure
        if last_water is not None and at - last_water >= WATER_LAPSE:
            return 1.0
        decay = rate * periods
    else:
        decay = rate * periods

    return min(1.0, max(0.0, decay))


def effective_spf(application: Optional[ProtectantApplication], at: datetime) -> float:
    """Protection factor in force at ``at``, clamped into [1, labelled SPF]."""
    if application is None:
        return 1.0
    base = base_factor(application.spf, dose_for(application.quantity))
    effective = base * (1.0 - decay_fraction(application, at))
    return max(1.0, min(float(application.spf), effective))


def reapply_at(application: ProtectantApplication) -> datetime:
    if application.activity is ActivityLevel.water and application.last_water_exposure is not None:
        return application.last_water_exposure + WATER_LAPSE
    return application.applied_at + REAPPLY_INTERVAL


def needs_reapplication(application: ProtectantApplication, at: datetime) -> bool:
    last_water = application.last_water_exposure
    if application.activity is ActivityLevel.water and last_water is not None:
        if at - last_water >= WATER_LAPSE:
            return True
    return at - application.applied_at >= REAPPLY_INTERVAL


def status_description(application: ProtectantApplication, at: datetime) -> str:
    if needs_reapplication(application, at):
        return "Needs reapplication"
    return f"Reapply by {reapply_at(application).strftime('%H:%M')}"
