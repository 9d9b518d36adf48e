"""
Core interfaces and base classes for the image rename tools.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field, fields, replace
from enum import Enum
import json
from pathlib import Path
import re
from typing import Any

import yaml

from .constants import (
    DEFAULT_DAYS,
    DEFAULT_MAX_TOKENS,
    DEFAULT_MODEL,
    IMAGE_HISTORY_FILE,
    IMAGE_PROMPT,
    MAX_FILENAME_LENGTH,
    SCREENSHOT_EXTENSIONS,
    SCREENSHOT_HISTORY_FILE,
    SCREENSHOT_PROMPT,
    SUPPORTED_EXTENSIONS,
)


class RenamerError(Exception):
    """Base class for errors raised by the rename tools."""


class RenameError(RenamerError):
    """A file cannot be renamed (unsupported, missing, no usable name)."""


class NamingError(RenamerError):
    """The naming engine failed to describe an image."""


class NotAScreenshotError(RenamerError, ValueError):
    """A filename does not follow the macOS screenshot convention."""


class RenameStatus(Enum):
    """Outcome of processing a single file."""

    RENAMED = "renamed"
    DRY_RUN = "dry_run"
    ALREADY_NAMED = "already_named"
    SKIPPED = "skipped"
    ERROR = "error"


@dataclass
class RenameOutcome:
    """Result of running one file through a renamer."""

    source: Path
    status: RenameStatus
    target: Path | None = None
    message: str | None = None
    dry_run: bool = False


@dataclass
class BatchResult:
    """Ordered outcomes of a directory run."""

    directory: Path
    outcomes: list[RenameOutcome] = field(default_factory=list)

    def count(self, status: RenameStatus) -> int:
        """Number of outcomes with the given status."""
        return sum(1 for outcome in self.outcomes if outcome.status == status)

    @property
    def renamed(self) -> list[RenameOutcome]:
        """Outcomes renamed, or that would be in a dry run."""
        return [
            o
            for o in self.outcomes
            if o.status in (RenameStatus.RENAMED, RenameStatus.DRY_RUN)
        ]

    @property
    def skipped(self) -> list[RenameOutcome]:
        """Outcomes without a usable suggestion."""
        return [o for o in self.outcomes if o.status == RenameStatus.SKIPPED]

    @property
    def errors(self) -> list[RenameOutcome]:
        """Outcomes that failed with an error."""
        return [o for o in self.outcomes if o.status == RenameStatus.ERROR]


@dataclass
class Config:
    """Configuration for one of the rename tools."""

    supported_extensions: tuple[str, ...]
    history_file: Path
    prompt: str
    model: str = DEFAULT_MODEL
    max_tokens: int = DEFAULT_MAX_TOKENS
    days: int = DEFAULT_DAYS
    max_filename_length: int = MAX_FILENAME_LENGTH

    @classmethod
    def for_images(cls) -> "Config":
        """Defaults for the single-file image renamer."""
        return cls(
            supported_extensions=SUPPORTED_EXTENSIONS,
            history_file=IMAGE_HISTORY_FILE,
            prompt=IMAGE_PROMPT,
        )

    @classmethod
    def for_screenshots(cls) -> "Config":
        """Defaults for the screenshot directory renamer."""
        return cls(
            supported_extensions=SCREENSHOT_EXTENSIONS,
            history_file=SCREENSHOT_HISTORY_FILE,
            prompt=SCREENSHOT_PROMPT,
        )

    @classmethod
    def from_file(cls, config_path: str | Path, base: "Config") -> "Config":
        """Load configuration from YAML file, on top of ``base``."""
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Config file must contain a mapping: {config_path}")

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown config keys: {', '.join(unknown)}")

        overrides: dict[str, Any] = dict(data)
        if "supported_extensions" in overrides:
            overrides["supported_extensions"] = cls._parse_extensions(
                overrides["supported_extensions"]
            )
        if "history_file" in overrides:
            overrides["history_file"] = Path(overrides["history_file"]).expanduser()
        for key in ("days", "max_tokens"):
            if key in overrides:
                cls._check_int(key, overrides[key], 1)
        if "max_filename_length" in overrides:
            cls._check_int(
                "max_filename_length",
                overrides["max_filename_length"],
                1,
                MAX_FILENAME_LENGTH,
            )
        return replace(base, **overrides)

    @staticmethod
    def _parse_extensions(value: Any) -> tuple[str, ...]:
        """Normalize a YAML extension list; a bare string counts as one item."""
        if isinstance(value, str):
            value = [value]
        if not isinstance(value, list) or not value:
            raise ValueError("supported_extensions must be a non-empty list")
        extensions = []
        for ext in value:
            if not isinstance(ext, str) or not ext.strip("."):
                raise ValueError(f"Invalid extension in supported_extensions: {ext!r}")
            ext = ext.lower()
            extensions.append(ext if ext.startswith(".") else f".{ext}")
        return tuple(extensions)

    @staticmethod
    def _check_int(
        key: str, value: Any, minimum: int, maximum: int | None = None
    ) -> None:
        """Reject non-integers and values outside ``minimum``..``maximum``."""
        # YAML true/false load as bool, an int subclass
        if not isinstance(value, int) or isinstance(value, bool):
            raise ValueError(f"{key} must be an integer, got {value!r}")
        if value < minimum or (maximum is not None and value > maximum):
            upper = f" and at most {maximum}" if maximum is not None else ""
            raise ValueError(f"{key} must be at least {minimum}{upper}, got {value}")


class NamingEngine(ABC):
    """Base class for naming engines."""

    @abstractmethod
    def describe_image(
        self, image_data: bytes, media_type: str, prompt: str
    ) -> str | None:
        """Describe an image; return free text or None."""
        pass


# A JSON object (or Python dict repr) carrying a quoted "message" value
_MESSAGE_PATTERN = re.compile(
    r"""\{.*?(?P<kq>["'])message(?P=kq)\s*:\s*"""
    r"""(?P<vq>["'])(?P<message>(?:\\.|(?!(?P=vq)).)*)(?P=vq)""",
    re.DOTALL,
)


def extract_error_message(error: Any) -> str:
    """Pull the most readable message out of an API error."""
    message = getattr(error, "message", None)
    if not isinstance(message, str):
        message = "null" if error is None else str(error)

    match = _MESSAGE_PATTERN.search(message)
    if not match:
        return message

    extracted = match.group("message")
    if match.group("vq") == '"':
        try:
            extracted = json.loads(f'"{extracted}"')
        except json.JSONDecodeError:
            pass
    # Fall back to the raw text when the message is blank
    return extracted if extracted.strip() else message
