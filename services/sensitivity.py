"""Skin sensitivity lookups and profile refinement."""

from __future__ import annotations

import math
from typing import Optional

from models.records import (
    EyeColor,
    HairColor,
    SensitivityProfile,
    SkinType,
    TanningResponse,
)

DEFAULT_SKIN_TYPE = SkinType.TYPE_II

# Minimal erythema dose baseline per skin type.
MED_BASELINES = {
    SkinType.TYPE_I: 200,
    SkinType.TYPE_II: 250,
    SkinType.TYPE_III: 300,
    SkinType.TYPE_IV: 450,
    SkinType.TYPE_V: 600,
    SkinType.TYPE_VI: 1000,
}

EYE_COLOR_SCORES = {
    EyeColor.light_blue: 0,
    EyeColor.light_gray: 0,
    EyeColor.light_green: 0,
    EyeColor.blue: 1,
    EyeColor.gray: 1,
    EyeColor.green: 1,
    EyeColor.hazel: 2,
    EyeColor.light_brown: 3,
    EyeColor.dark_brown: 4,
    EyeColor.black: 4,
}

HAIR_COLOR_SCORES = {
    HairColor.red: 0,
    HairColor.light_blonde: 0,
    HairColor.blonde: 1,
    HairColor.dark_blonde: 2,
    HairColor.light_brown: 2,
    HairColor.brown: 3,
    HairColor.dark_brown: 4,
    HairColor.black: 4,
    HairColor.gray: 2,
    HairColor.white: 2,
}

TANNING_RESPONSE_SCORES = {
    TanningResponse.always_burns: 0,
    TanningResponse.usually_burns: 1,
    TanningResponse.sometimes_burns: 2,
    TanningResponse.rarely_burns: 3,
    TanningResponse.never_burns: 4,
}

FRECKLE_PENALTY = 1
_NEUTRAL_SCORE = 2.0


def coerce_skin_type(value: int) -> SkinType:
    """Return ``value`` as a SkinType, substituting the default when out of range."""
    try:
        return SkinType(value)
    except ValueError:
        return DEFAULT_SKIN_TYPE


def baseline_tolerance(skin_type: int) -> int:
    return MED_BASELINES[coerce_skin_type(skin_type)]


def _round_half_away(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def refined_skin_type(profile: SensitivityProfile) -> SkinType:
    """Adjust the primary skin type using the optional physical attributes.

    Each present attribute scores 0-4 towards "more tolerant"; freckles take one
    point off the total. The average over the present attributes, centred on 2,
    shifts the primary type, and the result is clamped back into I-VI.
    """
    score = 0
    present = 0
    if profile.eye_color is not None:
        score += EYE_COLOR_SCORES[profile.eye_color]
        present += 1
    if profile.hair_color is not None:
        score += HAIR_COLOR_SCORES[profile.hair_color]
        present += 1
    if profile.tanning_response is not None:
        score += TANNING_RESPONSE_SCORES[profile.tanning_response]
        present += 1
    if profile.has_freckles:
        score -= FRECKLE_PENALTY

    average = score / present if present else _NEUTRAL_SCORE
    adjustment = _round_half_away(average - _NEUTRAL_SCORE)
    base = coerce_skin_type(profile.skin_type)
    return SkinType(min(max(int(base) + adjustment, SkinType.TYPE_I), SkinType.TYPE_VI))


def resolve_skin_type(profile: Optional[SensitivityProfile]) -> SkinType:
    if profile is None:
        return DEFAULT_SKIN_TYPE
    return refined_skin_type(profile)
