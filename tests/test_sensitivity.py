"""Unit tests for skin sensitivity lookups."""

from __future__ import annotations

import pytest

from models.records import EyeColor, HairColor, SensitivityProfile, SkinType, TanningResponse
from services.sensitivity import baseline_tolerance, refined_skin_type, resolve_skin_type


@pytest.mark.parametrize(
    ("skin_type", "expected"),
    [(1, 200), (2, 250), (3, 300), (4, 450), (5, 600), (6, 1000)],
)
def test_baseline_tolerance_per_type(skin_type: int, expected: int) -> None:
    assert baseline_tolerance(skin_type) == expected


@pytest.mark.parametrize("skin_type", [0, 7, -3, 42])
def test_out_of_range_type_falls_back_to_type_two(skin_type: int) -> None:
    assert baseline_tolerance(skin_type) == 250


def test_missing_profile_resolves_to_type_two() -> None:
    assert resolve_skin_type(None) is SkinType.TYPE_II


def test_profile_without_attributes_keeps_primary_type() -> None:
    assert refined_skin_type(SensitivityProfile(skin_type=4)) is SkinType.TYPE_IV


def test_dark_attributes_raise_type() -> None:
    profile = SensitivityProfile(
        skin_type=3,
        eye_color=EyeColor.dark_brown,
        hair_color=HairColor.black,
        tanning_response=TanningResponse.never_burns,
    )

    # average 4, minus 2 => +2
    assert refined_skin_type(profile) is SkinType.TYPE_V


def test_light_attributes_lower_type_and_clamp() -> None:
    profile = SensitivityProfile(
        skin_type=1,
        eye_color=EyeColor.light_blue,
        hair_color=HairColor.red,
        tanning_response=TanningResponse.always_burns,
        has_freckles=True,
    )

    assert refined_skin_type(profile) is SkinType.TYPE_I


def test_upper_clamp() -> None:
    profile = SensitivityProfile(skin_type=6, eye_color=EyeColor.black)

    assert refined_skin_type(profile) is SkinType.TYPE_VI


def test_absent_attributes_are_excluded_from_average() -> None:
    # Only hair present: brown scores 3, so the average is 3 and the shift is +1.
    profile = SensitivityProfile(skin_type=2, hair_color=HairColor.brown)

    assert refined_skin_type(profile) is SkinType.TYPE_III


def test_freckles_pull_average_down() -> None:
    # (hazel 2 + light brown hair 2 - 1) / 2 = 1.5 -> -0.5 rounds away from zero to -1.
    profile = SensitivityProfile(
        skin_type=3,
        eye_color=EyeColor.hazel,
        hair_color=HairColor.light_brown,
        has_freckles=True,
    )

    assert refined_skin_type(profile) is SkinType.TYPE_II


def test_half_scores_round_away_from_zero() -> None:
    # (blue 1 + brown 3 + rarely 3) / 3 = 2.33 -> 0; (2 + 3) / 2 = 2.5 -> +1.
    neutral = SensitivityProfile(
        skin_type=3,
        eye_color=EyeColor.blue,
        hair_color=HairColor.brown,
        tanning_response=TanningResponse.rarely_burns,
    )
    upward = SensitivityProfile(
        skin_type=3,
        eye_color=EyeColor.hazel,
        tanning_response=TanningResponse.rarely_burns,
    )

    assert refined_skin_type(neutral) is SkinType.TYPE_III
    assert refined_skin_type(upward) is SkinType.TYPE_IV


def test_invalid_primary_type_is_substituted_before_refinement() -> None:
    profile = SensitivityProfile(skin_type=9, tanning_response=TanningResponse.never_burns)

    assert refined_skin_type(profile) is SkinType.TYPE_IV
