"""Shared fixtures for the image renamer tests."""

from pathlib import Path

import pytest

from image_renamer.core import Config, NamingEngine


class FakeNamingEngine(NamingEngine):
    """Naming engine returning canned replies instead of calling OpenAI."""

    def __init__(self, replies=None, default="orange cat on couch"):
        self.replies = dict(replies or {})
        self.default = default
        self.calls = []

    def describe_image(self, image_data, media_type, prompt):
        self.calls.append((image_data, media_type, prompt))
        reply = self.replies.get(image_data, self.default)
        if isinstance(reply, Exception):
            raise reply
        return reply


@pytest.fixture
def fake_engine():
    return FakeNamingEngine()


@pytest.fixture
def image_config(tmp_path: Path) -> Config:
    config = Config.for_images()
    config.history_file = tmp_path / "state" / "image-renamer" / "history.txt"
    return config


@pytest.fixture
def screenshot_config(tmp_path: Path) -> Config:
    config = Config.for_screenshots()
    config.history_file = tmp_path / "state" / "screenshot-renamer" / "history.txt"
    return config


@pytest.fixture
def work_dir(tmp_path: Path) -> Path:
    directory = tmp_path / "images"
    directory.mkdir()
    return directory


@pytest.fixture
def engine_factory():
    return FakeNamingEngine
