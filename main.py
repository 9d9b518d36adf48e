#!/usr/bin/env python3
"""ImageRenamer - Give an image a descriptive filename using LLM vision."""

from image_renamer.cli import image_renamer

if __name__ == "__main__":
    image_renamer()
