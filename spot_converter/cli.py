"""
Command-line interface for spot-converter.

This module implements the CLI using Click; rich-click is used for the
help colors.

Commands:
    spot-convert --url <playlist_url>       Convert a Spotify playlist
    spot-convert --tracks <file.json>       Convert a request body saved as JSON
    spot-convert --history                  Show recent conversions

Options:
    --output <file.json>                    Write the conversion result as JSON
    --threads N                             Tracks matched concurrently

Usage:
    # Convert a public playlist (needs spotify credentials in config.yaml)
    spot-convert --url "https://open.spotify.com/playlist/..."

    # Convert a hand-written track list, save the result
    spot-convert --tracks tracks.json --output result.json

Configuration:
    The CLI requires a config.yaml file in the current directory.
    The spotify section is only needed for --url.

Exit Codes:
    0 success, 1 configuration error, 2 database error, 3 Spotify error,
    4 any other conversion error, 130 interrupted.
"""

import json
import sys
from pathlib import Path
from typing import Optional

import rich_click as click

click.rich_click.USE_RICH_MARKUP = True
click.rich_click.STYLE_ERRORS_SUGGESTION = "magenta italic"
click.rich_click.ERRORS_SUGGESTION = ""
click.rich_click.MAX_WIDTH = 100
click.rich_click.OPTION_GROUPS = {
    "cli": [
        {
            "name": "Input Sources",
            "options": ["--url", "--tracks"],
        },
        {
            "name": "Conversion Options",
            "options": ["--output", "--threads"],
        },
        {
            "name": "Info",
            "options": ["--history", "--version", "--help"],
        },
    ],
}

from spot_converter import __version__
from spot_converter.core import (
    Config,
    ConfigError,
    Database,
    DatabaseError,
    SpotConverterError,
    SpotifyError,
    get_logger,
    load_config,
    setup_logging,
    shutdown_logging,
)
from spot_converter.core.progress import MatchingProgressBar
from spot_converter.matching import ConversionReport
from spot_converter.service import ConversionService, parse_request
from spot_converter.spotify import SpotifyClient, SourceTrack, fetch_playlist
from spot_converter.utils import ensure_directory

logger = get_logger(__name__)


@click.command()
@click.option(
    "--url",
    type=str,
    default=None,
    metavar="<spotify-url>",
    help="Spotify playlist URL"
)
@click.option(
    "--tracks", "tracks_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    metavar="<file.json>",
    help="JSON file with {\"tracks\": [{\"name\", \"artists\"}]}"
)
@click.option(
    "--output", "output_file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    metavar="<file.json>",
    help="Write the conversion result to a JSON file"
)
@click.option(
    "--threads",
    type=click.IntRange(min=1),
    default=None,
    help="Tracks matched concurrently (overrides config.yaml)"
)
@click.option(
    "--history",
    is_flag=True,
    help="Show recent conversions and exit."
)
@click.option(
    "--version",
    is_flag=True,
    help="Show version and exit."
)
@click.pass_context
def cli(
    ctx: click.Context,
    url: Optional[str],
    tracks_file: Optional[Path],
    output_file: Optional[Path],
    threads: Optional[int],
    history: bool,
    version: bool
) -> None:
    """
    spot-converter: Find Spotify playlist tracks on YouTube Music.

    Every track is searched on YouTube Music and matched to its best
    scoring result; tracks without a good enough result are left
    unmatched.

    \b
    BASIC USAGE:
        spot-convert --url "https://open.spotify.com/playlist/..."
        spot-convert --tracks tracks.json --output result.json
        spot-convert --history
    """
    if version:
        click.echo(f"spot-converter {__version__}")
        ctx.exit(0)

    if not url and not tracks_file and not history:
        click.echo(ctx.get_help())
        ctx.exit(0)

    if url and tracks_file:
        raise click.UsageError("Cannot use both --url and --tracks")

    if history and (url or tracks_file):
        raise click.UsageError("--history cannot be combined with a conversion")

    _run(url, tracks_file, output_file, threads, history)


def _run(
    url: str | None,
    tracks_file: Path | None,
    output_file: Path | None,
    threads: int | None,
    history: bool
) -> None:
    """
    Execute the CLI workflow and map failures to exit codes.

    Raises:
        SystemExit: On fatal errors (with appropriate exit code).
    """
    database: Database | None = None

    try:
        config = load_config()

        ensure_directory(config.output.directory)
        setup_logging(config.output.directory)
        logger.info("spot-converter starting")

        if history:
            database = Database(config.output.database_path)
            _print_history(database)
            return

        database = _open_history_database(config)

        if url:
            tracks, playlist_name, spotify_url = _load_from_spotify(config, url)
        else:
            tracks, playlist_name, spotify_url = _load_from_file(tracks_file)

        service = ConversionService.from_config(config, database=database, threads=threads)

        logger.info(
            f"Matching {len(tracks)} tracks using "
            f"{service.orchestrator.max_workers} threads"
        )
        with MatchingProgressBar(total=len(tracks)) as progress_bar:
            report = service.convert(
                tracks,
                playlist_name=playlist_name,
                spotify_url=spotify_url,
                progress_bar=progress_bar,
            )

        _print_final_stats(report)

        if output_file is not None:
            _write_report(report, output_file)

        logger.info("spot-converter completed successfully")

    except ConfigError as e:
        click.echo(f"Configuration error: {e.message}", err=True)
        sys.exit(1)

    except DatabaseError as e:
        click.echo(f"Database error: {e.message}", err=True)
        logger.error(f"Database error: {e.message}", exc_info=True)
        sys.exit(2)

    except SpotifyError as e:
        click.echo(f"Spotify error: {e.message}", err=True)
        if e.is_auth_error:
            click.echo("Check your client_id and client_secret in config.yaml", err=True)
        logger.error(f"Spotify error: {e.message}", exc_info=True)
        sys.exit(3)

    except SpotConverterError as e:
        click.echo(f"Error: {e.message}", err=True)
        logger.error(f"Error: {e.message}", exc_info=True)
        sys.exit(4)

    except KeyboardInterrupt:
        click.echo("\nInterrupted by user", err=True)
        logger.info("Interrupted by user")
        sys.exit(130)

    except Exception as e:
        click.echo(f"Unexpected error: {e}", err=True)
        logger.exception("Unexpected error")
        sys.exit(4)

    finally:
        if database is not None:
            database.close()
        shutdown_logging()


def _open_history_database(config: Config) -> Database | None:
    """
    Open the conversion history for recording.

    Returns:
        The Database, or None if it cannot be opened. The conversion
        then runs without recording history.
    """
    try:
        return Database(config.output.database_path)
    except DatabaseError as e:
        logger.error(f"Conversion history unavailable, not recording: {e.message}")
        return None


def _load_from_spotify(
    config: Config,
    url: str
) -> tuple[list[SourceTrack], str | None, str | None]:
    """
    Fetch a playlist's tracks from Spotify.

    Raises:
        ConfigError: If config.yaml has no spotify section.
        SpotifyError: If the playlist cannot be fetched.
    """
    if config.spotify is None:
        raise ConfigError(
            "Missing 'spotify' section in config.yaml (required for --url)",
            details={"section": "spotify"}
        )

    if not SpotifyClient.is_initialized():
        SpotifyClient.init(
            client_id=config.spotify.client_id,
            client_secret=config.spotify.client_secret
        )

    playlist = fetch_playlist(url)
    return list(playlist.tracks), playlist.name, playlist.url


def _load_from_file(tracks_file: Path) -> tuple[list[SourceTrack], str | None, str | None]:
    """
    Read a request body from a JSON file.

    Raises:
        InvalidInputError: If the file is not a valid request body.
    """
    logger.info(f"Reading tracks from {tracks_file}")
    return parse_request(tracks_file.read_bytes())


def _write_report(report: ConversionReport, output_file: Path) -> None:
    output_file.parent.mkdir(parents=True, exist_ok=True)
    with open(output_file, "w", encoding="utf-8") as f:
        json.dump(report.to_dict(), f, indent=2, ensure_ascii=False)
    logger.info(f"Result written to {output_file}")


def _print_final_stats(report: ConversionReport) -> None:
    """Log the conversion summary."""
    summary = report.summary

    logger.info("=" * 60)
    logger.info("FINAL STATISTICS")
    logger.info("=" * 60)
    logger.info(f"Total tracks:      {summary.total_tracks}")
    logger.info(f"Found:             {summary.successful_conversions}")
    logger.info(f"Not found:         {summary.total_tracks - summary.successful_conversions}")
    logger.info(f"Success rate:      {summary.success_rate:.0%}")
    if report.playlist_url:
        logger.info(f"YouTube Music:     {report.playlist_url}")
    logger.info("=" * 60)


def _print_history(database: Database) -> None:
    """Log recent conversions and the all-time totals."""
    conversions = database.get_recent_conversions(limit=20)
    stats = database.get_global_stats()

    logger.info("=" * 60)
    logger.info("CONVERSION HISTORY")
    logger.info("=" * 60)
    if not conversions:
        logger.info("No conversions yet")
    for row in conversions:
        name = row["spotify_playlist_name"] or row["spotify_playlist_url"] or "Track list"
        logger.info(
            f"{row['created_at']}  {name}: "
            f"{row['successful_conversions']}/{row['track_count']} found"
        )
    logger.info("-" * 60)
    logger.info(f"Conversions:       {stats['conversions']}")
    logger.info(f"Tracks:            {stats['total_tracks']}")
    logger.info(f"Success rate:      {stats['success_rate']:.0%}")
    logger.info("=" * 60)


def main() -> None:
    """
    Entry point for the CLI.

    This function is called when running `spot-convert` from the command line.
    """
    cli()


if __name__ == "__main__":
    main()
