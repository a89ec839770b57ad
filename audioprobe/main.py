import time
import typer
from pathlib import Path
from typing import List, Optional
from pydantic import ValidationError

from audioprobe.config.loader import load_config
from audioprobe.config.models import AppConfig
from audioprobe.infrastructure.logging import setup_logging
from audioprobe.infrastructure.event_bus import EventBus
from audioprobe.infrastructure.file_scanner import FileScanner
from audioprobe.infrastructure.ffprobe import FFprobeAdapter
from audioprobe.pipeline.admission import AdmissionGate
from audioprobe.pipeline.resolver import MetadataResolver
from audioprobe.pipeline.scheduler import BatchScheduler
from audioprobe.pipeline.summary import summarize
from audioprobe.reporting.report import render_json, render_text
from audioprobe.ui.progress import ProgressDisplay
from audioprobe.domain.events import DiscoveryFinished

VERSION = "0.2.0"

app = typer.Typer(help="Audio Probe - concurrent audio file metadata inspector")


def _version_callback(value: bool):
    if value:
        typer.echo(f"audioprobe {VERSION}")
        raise typer.Exit()


@app.command()
def probe(
    paths: Optional[List[Path]] = typer.Argument(
        None,
        help="Audio files or directories to analyze"
    ),
    max_concurrent: Optional[int] = typer.Option(
        None, "--max-concurrent", "-j", min=1, help="Maximum concurrent analyses (default: 50)"
    ),
    json_output: bool = typer.Option(False, "--json", help="Write the report as JSON"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose debug logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only show errors"),
    recursive: bool = typer.Option(False, "--recursive", "-r", help="Descend into subdirectories"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write the report to a file instead of stdout"),
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to YAML config"),
    log_path: Optional[Path] = typer.Option(None, "--log-path", help="Also write logs to this file"),
    no_ffprobe: bool = typer.Option(False, "--no-ffprobe", help="Skip ffprobe and estimate from extensions"),
    ffprobe_path: Optional[str] = typer.Option(None, "--ffprobe-path", help="ffprobe executable to use"),
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Show version and exit"
    ),
):
    """Analyze audio files and report duration, bit-rate, codec and tags."""
    if not paths:
        typer.secho(
            "Error: Specify at least one file or directory path.",
            fg=typer.colors.RED,
            err=True
        )
        raise typer.Exit(code=1)

    try:
        config = load_config(config_path) if config_path else AppConfig()
        # Apply CLI overrides
        if max_concurrent is not None: config.general.max_concurrent = max_concurrent
        if recursive: config.general.recursive = True
        if verbose: config.general.debug = True
        if no_ffprobe: config.general.use_ffprobe = False
        if ffprobe_path is not None: config.general.ffprobe_path = ffprobe_path
        if log_path is not None: config.general.log_path = str(log_path)
        if json_output: config.output.json_output = True
    except (FileNotFoundError, ValidationError, ValueError) as exc:
        typer.secho(f"Error: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    try:
        log_path_value = Path(config.general.log_path) if config.general.log_path else None
        logger = setup_logging(verbose=config.general.debug, quiet=quiet, log_path=log_path_value)

        ffprobe = FFprobeAdapter(binary=config.general.ffprobe_path)
        use_ffprobe = config.general.use_ffprobe and ffprobe.is_available()
        resolver = MetadataResolver(ffprobe, use_ffprobe=use_ffprobe)

        if not quiet:
            typer.secho(f"Audio Probe v{VERSION}", err=True)
            if use_ffprobe:
                typer.secho("Using FFprobe for audio file analysis", err=True)
            else:
                typer.secho(
                    "Warning: FFprobe not available, estimating from file extensions. "
                    "Install FFmpeg for accurate results.",
                    fg=typer.colors.YELLOW,
                    err=True
                )
        logger.info(
            f"Config: max_concurrent={config.general.max_concurrent}, recursive={config.general.recursive}, "
            f"ffprobe={use_ffprobe}, json={config.output.json_output}"
        )

        bus = EventBus()
        ProgressDisplay(bus, enabled=not quiet)

        scanner = FileScanner(extensions=config.general.extensions)
        discovery = scanner.collect(paths, recursive=config.general.recursive)
        bus.publish(DiscoveryFinished(
            files_found=len(discovery.targets),
            missing_paths=discovery.missing_paths,
            failed_roots=discovery.failed_roots,
        ))

        if not discovery.targets:
            typer.secho("Warning: No audio files found to process", fg=typer.colors.YELLOW, err=True)
            return

        logger.info(f"Found {len(discovery.targets)} audio files to process")

        scheduler = BatchScheduler(
            resolver=resolver,
            gate=AdmissionGate(config.general.max_concurrent),
            event_bus=bus,
        )
        start_time = time.monotonic()
        outcome = scheduler.run(discovery.targets)
        elapsed = time.monotonic() - start_time

        summary = summarize(outcome, elapsed)
        stats = summary.statistics
        logger.info(f"Processing completed in {elapsed:.2f}s")
        logger.info(f"Successfully processed: {stats.successful}")
        if stats.failed:
            logger.warning(f"Failed to process: {stats.failed}")

        if config.output.json_output:
            content = render_json(summary, indent=config.output.indent)
        else:
            content = render_text(summary)

        if output is not None:
            output.parent.mkdir(parents=True, exist_ok=True)
            output.write_text(content, encoding="utf-8")
            logger.info(f"Report written to {output}")
        else:
            typer.echo(content, nl=False)

    except KeyboardInterrupt:
        typer.secho("\nAnalysis stopped by user (Ctrl+C)", fg=typer.colors.YELLOW, err=True)
        raise typer.Exit(code=130)

    except typer.Exit:
        raise

    except Exception as e:
        typer.secho(f"Fatal Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

if __name__ == "__main__":
    app()
