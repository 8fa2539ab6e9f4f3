from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import List, Optional

import typer
from pydantic import ValidationError

from logging_config import configure_logging
from models.records import (
    ActivityLevel,
    ApplicationQuantity,
    EyeColor,
    ForecastSample,
    HairColor,
    SensitivityProfile,
    TanningResponse,
)
from models.schemas import ApplicationRecord
from services.exposure import ExposureService, build_default_service, exposure_payload, window_payload
from services.forecast_loader import ForecastLoadResult, load_forecast, parse_timestamp
from services.protection import status_description
from cli.render import (
    render_application,
    render_exposure,
    render_profile,
    render_row_errors,
    render_summary,
    render_windows,
)


app = typer.Typer(
    help="Personal UV burn-time and sunscreen tracking.",
    context_settings={"help_option_names": ["-h", "--help"]},
)
profile_app = typer.Typer(help="Show or replace the stored skin profile.")
app.add_typer(profile_app, name="profile")


def _get_service(ctx: typer.Context) -> ExposureService:
    service = ctx.obj
    if not isinstance(service, ExposureService):
        raise typer.Exit(code=1)
    return service


def _resolve_time(value: Optional[str]) -> datetime:
    if value is None:
        return datetime.now().astimezone()
    try:
        return parse_timestamp(value)
    except ValueError as exc:
        raise typer.BadParameter(f"{value!r} is not an ISO 8601 timestamp.") from exc


def _load(path: Path) -> ForecastLoadResult:
    try:
        result = load_forecast(path)
    except ValueError as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc
    render_row_errors(result.errors)
    return result


def _current_sample(samples: List[ForecastSample], now: datetime) -> Optional[ForecastSample]:
    current: Optional[ForecastSample] = None
    for sample in samples:
        if sample.timestamp > now:
            break
        current = sample
    if current is None and samples:
        current = samples[0]
    return current


@app.callback()
def main(ctx: typer.Context) -> None:
    """Entry point for the CLI."""
    configure_logging()
    ctx.obj = build_default_service()


@profile_app.command("show")
def profile_show(ctx: typer.Context) -> None:
    """Display the stored skin profile."""
    service = _get_service(ctx)
    render_profile(service.store.get_profile())


@profile_app.command("set")
def profile_set(
    ctx: typer.Context,
    skin_type: int = typer.Option(..., "--skin-type", "-s", min=1, max=6, help="Fitzpatrick type 1-6."),
    eye_color: Optional[EyeColor] = typer.Option(None, "--eye-color"),
    hair_color: Optional[HairColor] = typer.Option(None, "--hair-color"),
    tanning: Optional[TanningResponse] = typer.Option(None, "--tanning"),
    freckles: bool = typer.Option(False, "--freckles/--no-freckles"),
) -> None:
    """Replace the stored skin profile."""
    service = _get_service(ctx)
    profile = SensitivityProfile(
        skin_type=skin_type,
        eye_color=eye_color,
        hair_color=hair_color,
        tanning_response=tanning,
        has_freckles=freckles,
    )
    service.store.put_profile(profile, updated_at=datetime.now().astimezone())
    typer.secho("Profile saved.", fg=typer.colors.GREEN)
    render_profile(profile)


@app.command("apply")
def apply_command(
    ctx: typer.Context,
    spf: int = typer.Option(..., "--spf", help="SPF printed on the product."),
    quantity: ApplicationQuantity = typer.Option(ApplicationQuantity.medium, "--quantity", "-q"),
    activity: ActivityLevel = typer.Option(ActivityLevel.normal, "--activity", "-a"),
    at: Optional[str] = typer.Option(None, "--at", help="Application time (defaults to now)."),
) -> None:
    """Log a sunscreen application, replacing the previous one."""
    service = _get_service(ctx)
    applied_at = _resolve_time(at)
    try:
        record = ApplicationRecord(
            spf=spf,
            quantity=quantity,
            applied_at=applied_at,
            activity=activity,
            last_water_exposure=applied_at if activity is ActivityLevel.water else None,
        )
    except ValidationError as exc:
        raise typer.BadParameter(str(exc)) from exc
    application = record.to_domain()
    service.store.put_application(application)
    typer.secho("Sunscreen logged.", fg=typer.colors.GREEN)
    render_application(application, status_description(application, applied_at))


@app.command("water")
def water_command(
    ctx: typer.Context,
    at: Optional[str] = typer.Option(None, "--at", help="Time of water contact (defaults to now)."),
) -> None:
    """Record water contact for the current application."""
    service = _get_service(ctx)
    moment = _resolve_time(at)
    try:
        application = service.store.record_water_exposure(moment)
    except KeyError as exc:
        typer.secho("No sunscreen application to update.", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc
    render_application(application, status_description(application, moment))


@app.command("remove")
def remove_command(ctx: typer.Context) -> None:
    """Discard the current sunscreen application."""
    service = _get_service(ctx)
    if service.store.clear_application():
        typer.echo("Sunscreen application removed.")
    else:
        typer.echo("No sunscreen application to remove.")


@app.command("burn-time")
def burn_time_command(
    ctx: typer.Context,
    uv: float = typer.Option(..., "--uv", min=0.0, help="Current UV index."),
    cloud_cover: Optional[float] = typer.Option(None, "--cloud-cover", min=0.0, max=1.0),
    at: Optional[str] = typer.Option(None, "--at", help="Evaluation time (defaults to now)."),
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of text."),
) -> None:
    """Estimate minutes until sunburn at the given UV index."""
    service = _get_service(ctx)
    result = service.current_exposure(uv, now=_resolve_time(at), cloud_cover=cloud_cover)
    if as_json:
        typer.echo(exposure_payload(result).model_dump_json(indent=2))
        return
    render_exposure(result)


@app.command("windows")
def windows_command(
    ctx: typer.Context,
    forecast: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True, help="Forecast CSV."),
    threshold: Optional[float] = typer.Option(None, "--threshold", min=0.0),
    now: Optional[str] = typer.Option(None, "--now", help="Ignore hours before this time."),
    today_only: bool = typer.Option(False, "--today-only", help="Only consider the rest of today."),
    as_json: bool = typer.Option(False, "--json"),
) -> None:
    """Find when protection is needed and when UV peaks."""
    service = _get_service(ctx)
    result = _load(forecast)
    reference = _resolve_time(now) if now is not None or today_only else None
    protection, peak = service.windows(
        result.samples, now=reference, today_only=today_only, threshold=threshold
    )
    if as_json:
        typer.echo(window_payload(protection, peak).model_dump_json(indent=2))
        return
    render_windows(protection, peak)


@app.command("summary")
def summary_command(
    ctx: typer.Context,
    forecast: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True, help="Forecast CSV."),
    now: Optional[str] = typer.Option(None, "--now", help="Evaluation time (defaults to now)."),
    as_json: bool = typer.Option(False, "--json"),
) -> None:
    """Summarize current exposure and the day's forecast."""
    service = _get_service(ctx)
    result = _load(forecast)
    moment = _resolve_time(now)
    current = _current_sample(result.samples, moment)
    if current is None:
        typer.secho("Forecast contains no usable rows.", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    summary = service.summary(current, result.samples, now=moment)
    if as_json:
        typer.echo(summary.model_dump_json(indent=2))
        return
    render_summary(summary)
