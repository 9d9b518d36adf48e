"""Rename orchestration for single images and screenshot directories."""

from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Callable

from .core import (
    BatchResult,
    Config,
    NamingEngine,
    RenameError,
    RenameOutcome,
    RenameStatus,
    extract_error_message,
)
from .detectors import extract_datetime_prefix, get_image_media_type, is_screenshot_name
from .naming import sanitize_filename
from .safety import FileSafetyChecker, RenameHistory

Reporter = Callable[[RenameOutcome], None]
StartHook = Callable[[Path], None]

NO_SUGGESTION = "Could not get suggestion from API"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class BaseRenamer:
    """Shared suggestion, collision and rename/log steps."""

    def __init__(
        self,
        config: Config,
        engine: NamingEngine,
        dry_run: bool = False,
        reporter: Reporter | None = None,
        on_start: StartHook | None = None,
    ):
        self.config = config
        self.engine = engine
        self.dry_run = dry_run
        self.reporter = reporter
        self.on_start = on_start
        self.safety_checker = FileSafetyChecker(config.supported_extensions)
        self.history = RenameHistory(config.history_file)

    def suggest_name(self, image_path: Path) -> str:
        """Ask the engine for a name and sanitize it; "" means no suggestion."""
        image_data = image_path.read_bytes()
        media_type = get_image_media_type(image_path.suffix)
        suggestion = self.engine.describe_image(image_data, media_type, self.config.prompt)
        if suggestion is None:
            return ""
        return sanitize_filename(suggestion, self.config.max_filename_length)

    def build_stem(self, source: Path, suggested_name: str) -> str:
        """Base name of the target, without extension."""
        return suggested_name

    def target_extension(self, source: Path) -> str:
        """Extension of the target, including the dot."""
        return source.suffix

    def rename_to_suggestion(self, source: Path, suggested_name: str) -> RenameOutcome:
        """Resolve a free target for the suggestion, then rename or report."""
        extension = self.target_extension(source)
        stem = self.build_stem(source, suggested_name)

        if f"{stem}{extension}" == source.name:
            return RenameOutcome(
                source, RenameStatus.ALREADY_NAMED, target=source, dry_run=self.dry_run
            )

        target = self.safety_checker.resolve_available_path(source, stem, extension)
        if target == source:
            return RenameOutcome(
                source, RenameStatus.ALREADY_NAMED, target=source, dry_run=self.dry_run
            )

        if self.dry_run:
            return RenameOutcome(source, RenameStatus.DRY_RUN, target=target, dry_run=True)

        source.rename(target)
        self.history.record(source, target)
        return RenameOutcome(source, RenameStatus.RENAMED, target=target)

    def _announce(self, image_path: Path) -> None:
        """Tell the start hook a file is about to be sent to the engine."""
        if self.on_start is not None:
            self.on_start(image_path)

    def _report(self, outcome: RenameOutcome) -> RenameOutcome:
        """Hand a finished outcome to the reporter and pass it through."""
        if self.reporter is not None:
            self.reporter(outcome)
        return outcome


class ImageRenamer(BaseRenamer):
    """Renames one image file after its content."""

    def target_extension(self, source: Path) -> str:
        """Lowercased extension of the source."""
        return source.suffix.lower()

    def process(self, image_path: str | Path) -> RenameOutcome:
        """Rename a single image.

        Raises RenameError for an unsupported or missing file. Engine errors
        propagate to the caller. An empty suggestion gives a SKIPPED outcome.
        """
        image_path = Path(image_path)
        safety_result = self.safety_checker.check_source(image_path)
        if not safety_result["safe"]:
            raise RenameError(safety_result["errors"][0])

        self._announce(image_path)
        suggested_name = self.suggest_name(image_path)
        if not suggested_name:
            return self._report(
                RenameOutcome(
                    image_path,
                    RenameStatus.SKIPPED,
                    message=NO_SUGGESTION,
                    dry_run=self.dry_run,
                )
            )
        return self._report(self.rename_to_suggestion(image_path, suggested_name))


class ScreenshotRenamer(BaseRenamer):
    """Renames recent macOS screenshots in a directory, keeping their timestamp."""

    def __init__(
        self,
        config: Config,
        engine: NamingEngine,
        dry_run: bool = False,
        reporter: Reporter | None = None,
        on_start: StartHook | None = None,
        now: Callable[[], datetime] = _utc_now,
    ):
        super().__init__(
            config, engine, dry_run=dry_run, reporter=reporter, on_start=on_start
        )
        self.now = now

    def build_stem(self, source: Path, suggested_name: str) -> str:
        """Prefix the suggestion with the screenshot's date and time."""
        return f"{extract_datetime_prefix(source.name)}-{suggested_name}"

    def is_recent(self, path: Path, now: datetime) -> bool:
        """Check whether a file was created within the configured day window."""
        stat = path.stat()
        created = getattr(stat, "st_birthtime", None) or stat.st_ctime
        created_at = datetime.fromtimestamp(created, tz=timezone.utc)
        return now - created_at <= timedelta(days=self.config.days)

    def find_candidates(self, directory: str | Path) -> list[Path]:
        """List recent screenshots in ``directory``, sorted by name."""
        directory = Path(directory)
        if not directory.is_dir():
            raise RenameError(f"Directory not found: {directory}")

        now = self.now()
        candidates = []
        for path in sorted(directory.iterdir()):
            if not path.is_file():
                continue
            if not self.safety_checker.is_supported(path):
                continue
            if not is_screenshot_name(path.name):
                continue
            if self.is_recent(path, now):
                candidates.append(path)
        return candidates

    def process_file(self, image_path: Path) -> RenameOutcome:
        """Rename one screenshot; failures become an ERROR outcome."""
        try:
            suggested_name = self.suggest_name(image_path)
            if not suggested_name:
                return RenameOutcome(
                    image_path,
                    RenameStatus.SKIPPED,
                    message=NO_SUGGESTION,
                    dry_run=self.dry_run,
                )
            return self.rename_to_suggestion(image_path, suggested_name)
        except Exception as e:
            return RenameOutcome(
                image_path,
                RenameStatus.ERROR,
                message=extract_error_message(e),
                dry_run=self.dry_run,
            )

    def process_directory(
        self, directory: str | Path, candidates: list[Path] | None = None
    ) -> BatchResult:
        """Process every candidate screenshot, one at a time, in name order.

        ``candidates`` defaults to ``find_candidates(directory)``.
        """
        if candidates is None:
            candidates = self.find_candidates(directory)
        result = BatchResult(directory=Path(directory))
        for image_path in candidates:
            self._announce(image_path)
            result.outcomes.append(self._report(self.process_file(image_path)))
        return result
