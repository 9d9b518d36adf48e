"""ImageRenamer - Descriptive filenames for images and screenshots via LLM vision."""

__version__ = "1.0.0"
__author__ = "nisc"
__description__ = "LLM vision-powered image and screenshot renaming tools"

from .core import extract_error_message
from .detectors import extract_datetime_prefix, is_screenshot_name
from .naming import sanitize_filename
