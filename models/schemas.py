"""Pydantic schemas for the JSON boundary (store file and CLI output)."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from models.records import (
    ActivityLevel,
    ApplicationQuantity,
    EyeColor,
    ForecastSample,
    HairColor,
    ProtectantApplication,
    SensitivityProfile,
    TanningResponse,
    UVLevel,
)


class ProfileRecord(BaseModel):
    """Persisted sensitivity profile."""

    skin_type: int = Field(..., ge=1, le=6)
    eye_color: Optional[EyeColor] = None
    hair_color: Optional[HairColor] = None
    tanning_response: Optional[TanningResponse] = None
    has_freckles: bool = False
    updated_at: Optional[datetime] = None

    def to_domain(self) -> SensitivityProfile:
        return SensitivityProfile(
            skin_type=self.skin_type,
            eye_color=self.eye_color,
            hair_color=self.hair_color,
            tanning_response=self.tanning_response,
            has_freckles=self.has_freckles,
        )

    @classmethod
    def from_domain(
        cls, profile: SensitivityProfile, updated_at: Optional[datetime] = None
    ) -> "ProfileRecord":
        return cls(
            skin_type=profile.skin_type,
            eye_color=profile.eye_color,
            hair_color=profile.hair_color,
            tanning_response=profile.tanning_response,
            has_freckles=profile.has_freckles,
            updated_at=updated_at,
        )


class ApplicationRecord(BaseModel):
    """Persisted sunscreen application."""

    spf: int = Field(..., ge=1)
    quantity: ApplicationQuantity = ApplicationQuantity.medium
    applied_at: datetime
    activity: ActivityLevel = ActivityLevel.normal
    last_water_exposure: Optional[datetime] = None

    def to_domain(self) -> ProtectantApplication:
        return ProtectantApplication(
            spf=self.spf,
            quantity=self.quantity,
            applied_at=self.applied_at,
            activity=self.activity,
            last_water_exposure=self.last_water_exposure,
        )

    @classmethod
    def from_domain(cls, application: ProtectantApplication) -> "ApplicationRecord":
        return cls(
            spf=application.spf,
            quantity=application.quantity,
            applied_at=application.applied_at,
            activity=application.activity,
            last_water_exposure=application.last_water_exposure,
        )


class StoreSnapshot(BaseModel):
    """Everything the profile store keeps: at most one of each record."""

    profile: Optional[ProfileRecord] = None
    application: Optional[ApplicationRecord] = None


class SamplePayload(BaseModel):
    timestamp: datetime
    uv_index: float = Field(..., ge=0)
    temperature: Optional[float] = None
    cloud_cover: Optional[float] = Field(default=None, ge=0, le=1)

    @classmethod
    def from_domain(cls, sample: ForecastSample) -> "SamplePayload":
        return cls(
            timestamp=sample.timestamp,
            uv_index=sample.uv_index,
            temperature=sample.temperature,
            cloud_cover=sample.cloud_cover,
        )


class ExposurePayload(BaseModel):
    burn_time_minutes: int = Field(..., ge=5, le=240)
    display_text: str
    warning_level: str
    effective_spf: float = Field(..., ge=1)
    reapply_at: Optional[datetime] = None


class WindowPayload(BaseModel):
    protection_start: Optional[datetime] = None
    protection_end: Optional[datetime] = None
    peak_start: Optional[datetime] = None
    peak_end: Optional[datetime] = None
    peak_uv: float = 0.0


class SummaryPayload(BaseModel):
    """Snapshot handed to widget-style renderers."""

    uv_index: float
    uv_level: UVLevel
    exposure: Optional[ExposurePayload] = None
    protectant_active: bool = False
    protectant_spf: Optional[int] = None
    protectant_applied_at: Optional[datetime] = None
    next_high_uv_at: Optional[datetime] = None
    windows: WindowPayload = Field(default_factory=WindowPayload)
    hourly: List[SamplePayload] = Field(default_factory=list)
    generated_at: datetime


class RowError(BaseModel):
    """Details about a forecast row that failed validation or parsing."""

    row_number: int = Field(..., ge=1)
    reason: str
