#!/usr/bin/env python3
"""ScreenshotRenamer - Give recent macOS screenshots descriptive filenames."""

from dotenv import load_dotenv

from image_renamer.cli import screenshot_renamer

# Load environment variables from .env file
load_dotenv()

if __name__ == "__main__":
    screenshot_renamer()
