import logging
import typer
from pathlib import Path
from typing import Optional, List
from pydantic import ValidationError
from rich.console import Console

from vidgal.config.loader import load_config
from vidgal.config.models import AppConfig
from vidgal.infrastructure.logging import setup_logging
from vidgal.infrastructure.event_bus import EventBus
from vidgal.infrastructure.http_fetcher import HttpFetcher
from vidgal.infrastructure.directory_listing import media_label
from vidgal.pipeline.discovery import DiscoveryPipeline
from vidgal.domain.classifier import Classifier
from vidgal.domain.errors import DiscoveryError, ErrorKind
from vidgal.domain.events import ManifestSkipped
from vidgal.ui.catalog import LOADING_MESSAGE, build_catalog_table, catalog_to_json, nothing_found_message

app = typer.Typer(help="vidgal - discover the videos published in a web gallery directory")

def apply_overrides(config: AppConfig, **overrides) -> AppConfig:
    """Returns a re-validated copy of config with CLI overrides applied (None = keep)."""
    data = config.model_dump()
    section_of = {
        "base_url": "source",
        "videos_dir": "source",
        "manifest_name": "source",
        "timeout_s": "source",
        "extensions": "general",
        "log_path": "general",
        "debug": "general",
    }
    for key, value in overrides.items():
        if value is None:
            continue
        data[section_of[key]][key] = value
    return AppConfig(**data)

@app.command()
def scan(
    base_url: Optional[str] = typer.Argument(
        None,
        help="Gallery root URL, e.g. http://localhost:8000/ (optional if set in config)"
    ),
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to YAML config"),
    videos_dir: Optional[str] = typer.Option(None, "--videos-dir", help="Videos directory under the base URL"),
    manifest_name: Optional[str] = typer.Option(None, "--manifest", help="Manifest file name inside the videos directory"),
    extensions: Optional[List[str]] = typer.Option(None, "--extension", "-e", help="Media extension to accept (repeatable)"),
    timeout_s: Optional[float] = typer.Option(None, "--timeout", help="HTTP timeout in seconds"),
    json_output: bool = typer.Option(False, "--json", help="Print the catalog as JSON"),
    reveal_sensitive: bool = typer.Option(False, "--reveal-sensitive", help="Show links of sensitive entries"),
    log_path: Optional[Path] = typer.Option(None, "--log-path", help="Path to log file (overrides config)"),
    debug: Optional[bool] = typer.Option(None, "--debug/--no-debug", help="Enable verbose debug logging (default: from config)"),
):
    """Discover videos (manifest first, directory listing as fallback) and list them."""
    try:
        config = load_config(config_path) if config_path else AppConfig()
        config = apply_overrides(
            config,
            base_url=base_url,
            videos_dir=videos_dir,
            manifest_name=manifest_name,
            extensions=extensions or None,
            timeout_s=timeout_s,
            log_path=str(log_path) if log_path else None,
            debug=debug,
        )
    except (FileNotFoundError, ValidationError) as exc:
        typer.secho(f"Error: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    logger = setup_logging(Path(config.general.log_path), debug=config.general.debug)
    logger.info(
        f"Config: base_url={config.source.base_url}, videos_dir={config.source.videos_dir}, "
        f"manifest={config.source.manifest_name}, extensions={config.general.extensions}"
    )

    status = Console(stderr=True)
    bus = EventBus()

    @bus.subscribe(ManifestSkipped)
    def on_manifest_skipped(event: ManifestSkipped):
        # A missing manifest is the normal case for plain directory listings
        if event.kind is not None and event.kind is not ErrorKind.NOT_FOUND:
            typer.secho(f"Manifest lookup skipped: {event.reason}", fg=typer.colors.YELLOW, err=True)

    try:
        status.print(f"[dim]{LOADING_MESSAGE}[/]")
        with HttpFetcher(config.source.base_url, timeout_s=config.source.timeout_s) as fetcher:
            pipeline = DiscoveryPipeline.from_config(config, fetcher, event_bus=bus)
            entries = pipeline.discover()
    except DiscoveryError as exc:
        typer.secho(exc.message, fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    except Exception as e:
        logging.getLogger(__name__).exception("Unexpected failure during discovery")
        typer.secho(f"Fatal Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    items = Classifier(config.general.sensitive_pattern).annotate(entries)
    if not items:
        typer.secho(nothing_found_message(media_label(config.general.extensions)), fg=typer.colors.YELLOW, err=True)
        return

    sensitive = sum(1 for item in items if item.sensitive)
    logger.info(f"Catalog ready: entries={len(items)}, sensitive={sensitive}")

    if json_output:
        typer.echo(catalog_to_json(items))
    else:
        Console().print(build_catalog_table(items, reveal_sensitive=reveal_sensitive))

if __name__ == "__main__":
    app()
