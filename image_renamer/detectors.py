"""Screenshot name and image type detection."""

import re

from .constants import IMAGE_MEDIA_TYPES
from .core import NotAScreenshotError

# "Screenshot 2024-12-10 at 3.45.22 PM.png"; seconds are matched but unused
MACOS_SCREENSHOT_PATTERN = re.compile(
    r"^Screenshot (?P<date>\d{4}-\d{2}-\d{2}) at "
    r"(?P<hour>\d{1,2})\.(?P<minute>\d{2})\.\d{2}"
)


def is_screenshot_name(filename: str) -> bool:
    """Check if a filename follows the macOS screenshot convention."""
    return MACOS_SCREENSHOT_PATTERN.match(filename) is not None


def extract_datetime_prefix(filename: str) -> str:
    """Return ``YYYY-MM-DD-HH-MM`` from a macOS screenshot filename.

    The hour is copied from the 12-hour clock field and only zero-padded;
    AM and PM are not distinguished, so 3 AM and 3 PM both give ``03``.
    """
    match = MACOS_SCREENSHOT_PATTERN.match(filename)
    if not match:
        raise NotAScreenshotError(f"Not a macOS screenshot: {filename}")
    hour = match.group("hour").zfill(2)
    return f"{match.group('date')}-{hour}-{match.group('minute')}"


def get_image_media_type(extension: str) -> str:
    """Map a file extension to the media type sent with the image."""
    default = next(iter(IMAGE_MEDIA_TYPES.values()))
    return IMAGE_MEDIA_TYPES.get(extension.lower(), default)
