"""
Safety checks and file operation safeguards.
"""

from datetime import datetime, timezone
from pathlib import Path
from typing import Any


class FileSafetyChecker:
    """Validation and collision checks for rename operations."""

    def __init__(self, supported_extensions: tuple[str, ...]):
        self.supported_extensions = tuple(ext.lower() for ext in supported_extensions)

    def is_supported(self, path: Path) -> bool:
        """Check the extension against the supported list, ignoring case."""
        return path.suffix.lower() in self.supported_extensions

    def check_source(self, source: Path) -> dict[str, Any]:
        """Check that a file can be handed to the naming engine."""
        result: dict[str, Any] = {"safe": True, "errors": []}

        # Check extension first so the message names the real problem
        if not self.is_supported(source):
            result["safe"] = False
            result["errors"].append(
                f"Unsupported file type: {source.suffix or '(none)'} "
                f"(supported: {', '.join(self.supported_extensions)})"
            )
            return result

        # Check if source exists
        if not source.is_file():
            result["safe"] = False
            result["errors"].append(f"File not found: {source}")
            return result

        return result

    def resolve_available_path(self, source: Path, stem: str, extension: str) -> Path:
        """Find a target next to ``source`` that does not clobber another file.

        Tries ``stem + extension``, then ``stem-1``, ``stem-2`` and so on. The
        filesystem is checked on every step. Landing on ``source`` itself
        stops the search, since renaming a file onto itself is harmless.
        """
        parent = source.parent
        candidate = parent / f"{stem}{extension}"
        counter = 1
        while candidate.exists() and candidate != source:
            candidate = parent / f"{stem}-{counter}{extension}"
            counter += 1
        return candidate


class RenameHistory:
    """Append-only, tab-separated audit trail of performed renames."""

    def __init__(self, history_file: Path):
        self.history_file = Path(history_file)

    def record(self, old_path: Path, new_path: Path) -> None:
        """Append ``timestamp<TAB>old<TAB>new`` to the history file."""
        timestamp = (
            datetime.now(timezone.utc)
            .isoformat(timespec="milliseconds")
            .replace("+00:00", "Z")
        )
        self.history_file.parent.mkdir(parents=True, exist_ok=True)
        with open(self.history_file, "a", encoding="utf-8") as f:
            f.write(f"{timestamp}\t{old_path}\t{new_path}\n")
