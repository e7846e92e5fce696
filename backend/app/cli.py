"""
CLI interface for the track store.

Usage:
    python -m app.cli import-gpx morning_run.gpx
    python -m app.cli list
    python -m app.cli export <track_id> --format kml --output-dir ./out
"""

import sys
from pathlib import Path

import click

from app.config import settings
from app.db.session import SessionLocal, init_db
from app.features.export import TrackExporter, get_writer
from app.features.tracks import GPXImportService, TrackRepository
from app.shared.constants import TrackFormat
from app.shared.formatters import format_distance_km, format_duration
from app.shared.logging_config import configure_logging


@click.group()
@click.option("--log-level", default=None, help="Override LOG_LEVEL")
def cli(log_level):
    """Track store and export tools."""
    configure_logging(log_level or settings.log_level)
    init_db()


@cli.command("import-gpx")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def import_gpx(path: Path):
    """Import a GPX file as a new track."""
    with SessionLocal() as db:
        try:
            track = GPXImportService(TrackRepository(db)).import_gpx(
                path.read_bytes(), filename=path.name
            )
        except ValueError as e:
            raise click.ClickException(str(e))
        click.echo(f"Imported {track.name!r} as {track.id}")


@cli.command("list")
@click.option("--limit", default=50, type=int, help="Maximum number of tracks")
def list_tracks(limit: int):
    """List stored tracks."""
    with SessionLocal() as db:
        tracks = TrackRepository(db).list_tracks(limit=limit)
        if not tracks:
            click.echo("No tracks stored.")
            return
        for track in tracks:
            click.echo(
                f"{track.id}  {track.name}  "
                f"{format_distance_km(track.distance_km)}  {format_duration(track.duration_s)}"
            )


@cli.command("export")
@click.argument("track_id")
@click.option(
    "--format",
    "track_format",
    default=None,
    type=click.Choice([f.value for f in TrackFormat]),
    help="Document format (default: DEFAULT_EXPORT_FORMAT)",
)
@click.option(
    "--output-dir",
    default=None,
    type=click.Path(file_okay=False, path_type=Path),
    help="Target directory (default: <EXPORT_ROOT>/<format>)",
)
def export(track_id: str, track_format, output_dir):
    """Export a track to a document."""
    track_format = TrackFormat(track_format or settings.default_export_format)
    with SessionLocal() as db:
        repo = TrackRepository(db)
        exporter = TrackExporter(
            repo.get_by_id(track_id),
            get_writer(track_format),
            source=repo,
            directory=output_dir,
        )
        outcome = exporter.export()

    if not outcome.success:
        click.echo(f"Export failed: {outcome.message} ({outcome.error_code.value})", err=True)
        sys.exit(1)
    click.echo(f"Exported to {exporter.output_path}")


if __name__ == "__main__":
    cli()
