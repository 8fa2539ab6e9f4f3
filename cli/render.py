from __future__ import annotations

from datetime import datetime
from typing import Any, Iterable, Optional, Sequence

import typer

from models.records import ProtectantApplication, SensitivityProfile, SkinType
from models.schemas import RowError, SummaryPayload
from services.forecast import PeakWindow, ProtectionWindow
from services.projector import ExposureResult

_LEVEL_COLORS = {
    "safe": typer.colors.GREEN,
    "caution": typer.colors.YELLOW,
    "warning": typer.colors.BRIGHT_RED,
    "danger": typer.colors.RED,
}


def echo_heading(text: str) -> None:
    typer.secho(text, bold=True)


def echo_key_values(pairs: Iterable[tuple[str, Any]]) -> None:
    for key, value in pairs:
        typer.echo(f"{key}: {value}")


def _fmt_time(value: Optional[datetime]) -> str:
    return value.isoformat() if value is not None else "-"


def render_profile(profile: Optional[SensitivityProfile]) -> None:
    echo_heading("Skin Profile")
    if profile is None:
        typer.echo("No profile stored; Type II is assumed.")
        return
    skin_type = SkinType(profile.skin_type)
    echo_key_values(
        [
            ("skin_type", f"{skin_type.display_name} ({skin_type.description})"),
            ("eye_color", profile.eye_color.value if profile.eye_color else "-"),
            ("hair_color", profile.hair_color.value if profile.hair_color else "-"),
            ("tanning_response", profile.tanning_response.value if profile.tanning_response else "-"),
            ("has_freckles", profile.has_freckles),
        ]
    )


def render_application(application: Optional[ProtectantApplication], status: str = "") -> None:
    echo_heading("Sunscreen")
    if application is None:
        typer.echo("No sunscreen applied.")
        return
    echo_key_values(
        [
            ("spf", application.spf),
            ("quantity", application.quantity.value),
            ("activity", application.activity.value),
            ("applied_at", _fmt_time(application.applied_at)),
            ("last_water_exposure", _fmt_time(application.last_water_exposure)),
        ]
    )
    if status:
        typer.echo(f"status: {status}")


def render_exposure(result: ExposureResult) -> None:
    echo_heading("Burn Time")
    typer.secho(
        f"{result.display_text} ({result.warning_level.message})",
        fg=_LEVEL_COLORS[result.warning_level.value],
    )
    echo_key_values(
        [
            ("burn_time_minutes", result.burn_time_minutes),
            ("warning_level", result.warning_level.value),
            ("effective_spf", f"{result.effective_spf:.2f}"),
            ("reapply_at", _fmt_time(result.reapply_at)),
        ]
    )


def render_windows(protection: ProtectionWindow, peak: PeakWindow) -> None:
    echo_heading("Protection Window")
    if protection.is_empty:
        typer.echo("No protection needed.")
    else:
        echo_key_values([("start", _fmt_time(protection.start)), ("end", _fmt_time(protection.end))])

    typer.echo()
    echo_heading("Peak UV")
    if peak.is_empty:
        typer.echo("No UV peak in forecast.")
    else:
        echo_key_values(
            [
                ("start", _fmt_time(peak.start)),
                ("end", _fmt_time(peak.end)),
                ("max_uv", f"{peak.max_uv:.1f}"),
            ]
        )


def render_row_errors(errors: Sequence[RowError]) -> None:
    if not errors:
        return
    typer.secho(f"Skipped {len(errors)} forecast row(s):", fg=typer.colors.YELLOW, err=True)
    for error in errors:
        typer.echo(f"  - row {error.row_number}: {error.reason}", err=True)


def render_summary(summary: SummaryPayload) -> None:
    echo_heading("UV Summary")
    echo_key_values(
        [
            ("uv_index", f"{summary.uv_index:.1f}"),
            ("uv_level", summary.uv_level.description),
            ("recommendation", summary.uv_level.recommendation),
            ("next_high_uv_at", _fmt_time(summary.next_high_uv_at)),
        ]
    )
    typer.echo()
    echo_heading("Burn Time")
    if summary.exposure is None:
        typer.echo("Set up a skin profile to see burn time.")
    else:
        echo_key_values(
            [
                ("burn_time", summary.exposure.display_text),
                ("warning_level", summary.exposure.warning_level),
            ]
        )
    typer.echo()
    echo_heading("Sunscreen")
    if summary.protectant_active:
        typer.echo(f"SPF {summary.protectant_spf} applied at {_fmt_time(summary.protectant_applied_at)}")
    else:
        typer.echo("No active sunscreen.")
    typer.echo()
    windows = summary.windows
    render_windows(
        ProtectionWindow(start=windows.protection_start, end=windows.protection_end),
        PeakWindow(start=windows.peak_start, end=windows.peak_end, max_uv=windows.peak_uv),
    )
