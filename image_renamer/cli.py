"""Command-line interface for the image rename tools."""

import os
from pathlib import Path
import shlex

import click
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape

from . import __version__
from .constants import (
    DEFAULT_CONFIG_FILE,
    DEFAULT_DAYS,
    ENV_CONFIG_FILE,
    ENV_OPENAI_API_KEY,
    ENV_OPENAI_MODEL,
)
from .core import (
    Config,
    RenameOutcome,
    RenameStatus,
    RenamerError,
    extract_error_message,
)
from .naming import OpenAINamingEngine
from .renamer import ImageRenamer, ScreenshotRenamer

# Load environment variables from .env file
load_dotenv()

console = Console(highlight=False)


def load_config(config_path: str, base: Config) -> Config:
    """Overlay a YAML config file on ``base`` if it exists."""
    if not Path(config_path).is_file():
        return base
    try:
        return Config.from_file(config_path, base)
    except Exception as e:
        console.print(
            f"[yellow]Warning: Could not load config from {config_path}: "
            f"{escape(str(e))}[/yellow]"
        )
        return base


def setup_naming_engine(config: Config, verbose: bool) -> OpenAINamingEngine:
    """Setup naming engine."""
    api_key = os.getenv(ENV_OPENAI_API_KEY)
    if not api_key:
        raise click.ClickException(
            f"{ENV_OPENAI_API_KEY} environment variable is required"
        )

    model = os.getenv(ENV_OPENAI_MODEL) or config.model
    return OpenAINamingEngine(api_key, model, config.max_tokens, verbose)


def describe_outcome(outcome: RenameOutcome) -> str:
    """Render a per-file outcome as a console line."""
    target_name = escape(outcome.target.name) if outcome.target else ""
    message = escape(outcome.message or "")
    if outcome.status == RenameStatus.RENAMED:
        return f"   [green]✅ Renamed to: {target_name}[/green]"
    if outcome.status == RenameStatus.DRY_RUN:
        return f"   [cyan]→ Would rename to: {target_name}[/cyan]"
    if outcome.status == RenameStatus.ALREADY_NAMED:
        return "   [green]✓ Already has a good name[/green]"
    if outcome.status == RenameStatus.SKIPPED:
        return f"   [yellow]⚠️  {message}, skipping[/yellow]"
    return f"   [red]❌ Error: {message}[/red]"


def announce_image(image_path: Path) -> None:
    """Print the single-image progress line before the API call."""
    console.print(f"🖼️  Processing: {escape(image_path.name)}")


def announce_screenshot(image_path: Path) -> None:
    """Print the batch progress line before the API call."""
    console.print(f"📷 Processing: {escape(image_path.name)}")


def print_outcome(outcome: RenameOutcome) -> None:
    """Print a batch outcome under its progress line."""
    console.print(describe_outcome(outcome) + "\n")


config_option = click.option(
    "--config",
    default=lambda: os.getenv(ENV_CONFIG_FILE, DEFAULT_CONFIG_FILE),
    show_default=DEFAULT_CONFIG_FILE,
    help="Configuration file path",
)
dry_run_option = click.option(
    "--dry-run", "-n", is_flag=True, help="Show what would be renamed without changes"
)
verbose_option = click.option(
    "--verbose", is_flag=True, help="Show the prompt and response exchanged with OpenAI"
)


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("image", type=click.Path(path_type=Path))
@dry_run_option
@verbose_option
@config_option
@click.version_option(__version__, "--version", "-v", prog_name="image-renamer")
def image_renamer(image, dry_run, verbose, config):
    """Give an image a descriptive name using OpenAI vision.

    Supported formats: .png, .jpg, .jpeg, .gif, .webp
    """
    settings = load_config(config, Config.for_images())

    try:
        engine = setup_naming_engine(settings, verbose)
        console.print(
            f"🔍 DRY RUN MODE v{__version__} - file will not be renamed\n"
            if dry_run
            else f"🚀 Starting image renamer v{__version__}...\n"
        )
        renamer = ImageRenamer(
            settings, engine, dry_run=dry_run, on_start=announce_image
        )
        outcome = renamer.process(image)

        if outcome.status == RenameStatus.SKIPPED:
            raise click.ClickException(outcome.message or "No usable suggestion")

        console.print(describe_outcome(outcome))
        if outcome.status == RenameStatus.DRY_RUN:
            console.print(
                f"\nmv {shlex.quote(str(outcome.source))} "
                f"{shlex.quote(str(outcome.target))}",
                markup=False,
                soft_wrap=True,
            )

    except click.ClickException:
        # Re-raise click exceptions without modification
        raise
    except RenamerError as e:
        raise click.ClickException(str(e)) from e
    except Exception as e:
        raise click.ClickException(extract_error_message(e)) from e


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument(
    "directory",
    default=".",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
)
@dry_run_option
@click.option(
    "--days",
    "-d",
    type=click.IntRange(min=1),
    default=None,
    help=f"Only process screenshots created in the last N days [default: {DEFAULT_DAYS}]",
)
@verbose_option
@config_option
@click.version_option(__version__, "--version", "-v", prog_name="screenshot-renamer")
def screenshot_renamer(directory, dry_run, days, verbose, config):
    """Give recent macOS screenshots in DIRECTORY descriptive names.

    New names keep the screenshot's date and time as a prefix, for example
    2024-12-10-03-45-slack-conversation-about-deployment.png
    """
    settings = load_config(config, Config.for_screenshots())
    if days is not None:
        settings.days = days

    try:
        engine = setup_naming_engine(settings, verbose)
        console.print(
            "🔍 DRY RUN MODE - no files will be renamed\n"
            if dry_run
            else "🚀 Starting screenshot renamer...\n"
        )
        console.print(f"📁 Target directory: {directory}\n")

        renamer = ScreenshotRenamer(
            settings,
            engine,
            dry_run=dry_run,
            reporter=print_outcome,
            on_start=announce_screenshot,
        )
        candidates = renamer.find_candidates(directory)
        if not candidates:
            console.print(f"No images found in {directory}")
            return

        console.print(f"Found {len(candidates)} image(s) to process...\n")
        result = renamer.process_directory(directory, candidates)

        done = len(result.renamed)
        verb = "would be renamed" if dry_run else "renamed"
        console.print(
            f"[bold]{done} {verb}, {result.count(RenameStatus.ALREADY_NAMED)} "
            f"already named, {len(result.skipped)} skipped, "
            f"{len(result.errors)} failed[/bold]"
        )

    except click.ClickException:
        raise
    except RenamerError as e:
        raise click.ClickException(str(e)) from e
    except Exception as e:
        raise click.ClickException(extract_error_message(e)) from e
