#!/usr/bin/env python3
"""
Basic tests for the pure helpers: sanitizing, screenshot names, API errors.
"""

import re

import pytest

from image_renamer.core import NotAScreenshotError, extract_error_message
from image_renamer.detectors import (
    extract_datetime_prefix,
    get_image_media_type,
    is_screenshot_name,
)
from image_renamer.naming import sanitize_filename

SLUG = re.compile(r"^[a-z0-9]([a-z0-9-]*[a-z0-9])?$")

SAMPLE_NAMES = [
    "Hello World",
    "file@name#test!",
    "  ---Leading and trailing---  ",
    "Café crème brûlée",
    "日本語のスクリーンショット",
    "slack_conversation.about.deployment",
    "a" * 49 + " tail",
    "word " * 30,
    "\t\n",
    "!!!",
    "",
    "already-a-slug-123",
    "MiXeD CaSe -- with -- dashes",
]


def test_sanitize_filename_examples():
    """Test the documented sanitizer examples."""
    assert sanitize_filename("Hello World") == "hello-world"
    assert sanitize_filename("file@name#test!") == "file-name-test"
    assert sanitize_filename("file---name") == "file-name"
    assert sanitize_filename("-hello-world-") == "hello-world"
    assert len(sanitize_filename("a" * 60)) == 50


def test_sanitize_filename_special_characters():
    assert sanitize_filename("hello_world") == "hello-world"
    assert sanitize_filename("hello.world") == "hello-world"
    assert sanitize_filename("hello   world") == "hello-world"
    assert sanitize_filename("a--b--c") == "a-b-c"
    assert sanitize_filename("---hello---") == "hello"
    assert sanitize_filename("  hello  ") == "hello"
    assert sanitize_filename("ALLCAPS") == "allcaps"


def test_sanitize_filename_keeps_numbers():
    assert sanitize_filename("version-2-release") == "version-2-release"
    assert sanitize_filename("2024-12-10") == "2024-12-10"


def test_sanitize_filename_empty_results():
    """Nothing usable left means an empty string, never an error."""
    assert sanitize_filename("") == ""
    assert sanitize_filename("   ") == ""
    assert sanitize_filename("@#$%^&*") == ""


def test_sanitize_filename_truncation():
    assert sanitize_filename("a" * 100) == "a" * 50
    # The cut lands right after a separator; no trailing hyphen survives
    assert sanitize_filename("a" * 49 + " bcd") == "a" * 49
    assert sanitize_filename("abc def", max_length=4) == "abc"


@pytest.mark.parametrize("name", SAMPLE_NAMES)
def test_sanitize_filename_invariants(name):
    """Output is a bounded slug and sanitizing twice changes nothing."""
    slug = sanitize_filename(name)
    assert len(slug) <= 50
    assert "--" not in slug
    assert slug == "" or SLUG.match(slug)
    assert sanitize_filename(slug) == slug


def test_is_screenshot_name():
    """Test macOS screenshot name recognition."""
    assert is_screenshot_name("Screenshot 2024-12-10 at 3.45.22 PM.png")
    assert is_screenshot_name("Screenshot 2024-01-01 at 12.00.00 AM.png")
    assert is_screenshot_name("Screenshot 2024-12-10 at 10.05.33 AM.png")
    assert is_screenshot_name("Screenshot 2024-12-10 at 10.05.33 AM (2).png")

    assert not is_screenshot_name("my-file.png")
    assert not is_screenshot_name("screenshot.png")
    assert not is_screenshot_name("Screenshot.png")
    assert not is_screenshot_name("Screenshot 2024-12-10.png")
    assert not is_screenshot_name("Screenshot 24-12-10 at 3.45.22 PM.png")
    assert not is_screenshot_name("Screenshot 2024-1-10 at 3.45.22 PM.png")
    assert not is_screenshot_name("Old Screenshot 2024-12-10 at 3.45.22 PM.png")


def test_extract_datetime_prefix():
    """Hours are zero-padded and taken from the 12-hour clock as is."""
    name = "Screenshot 2024-12-10 at 3.45.22 PM.png"
    assert extract_datetime_prefix(name) == "2024-12-10-03-45"
    name = "Screenshot 2024-01-05 at 9.05.00 AM.png"
    assert extract_datetime_prefix(name) == "2024-01-05-09-05"
    name = "Screenshot 2024-12-10 at 12.30.00 PM.png"
    assert extract_datetime_prefix(name) == "2024-12-10-12-30"
    name = "Screenshot 2024-12-10 at 10.15.45 AM.png"
    assert extract_datetime_prefix(name) == "2024-12-10-10-15"

    am = extract_datetime_prefix("Screenshot 2024-12-10 at 3.00.00 AM.png")
    pm = extract_datetime_prefix("Screenshot 2024-12-10 at 3.00.00 PM.png")
    assert am == pm == "2024-12-10-03-00"


def test_extract_datetime_prefix_rejects_other_names():
    with pytest.raises(NotAScreenshotError, match="Not a macOS screenshot"):
        extract_datetime_prefix("my-file.png")
    with pytest.raises(ValueError, match="Not a macOS screenshot"):
        extract_datetime_prefix("random.png")


def test_get_image_media_type():
    assert get_image_media_type(".png") == "image/png"
    assert get_image_media_type(".JPG") == "image/jpeg"
    assert get_image_media_type(".jpeg") == "image/jpeg"
    assert get_image_media_type(".gif") == "image/gif"
    assert get_image_media_type(".webp") == "image/webp"
    assert get_image_media_type(".bmp") == "image/png"
    assert get_image_media_type("") == "image/png"


def test_extract_error_message_from_json_payload():
    api_error = (
        '400 {"type":"error","error":{"type":"invalid_request_error",'
        '"message":"image exceeds 5 MB maximum: 6091236 bytes > 5242880 bytes"},'
        '"request_id":"req_011CW8NDq2wpQ8iSooRPCrfD"}'
    )
    assert (
        extract_error_message(Exception(api_error))
        == "image exceeds 5 MB maximum: 6091236 bytes > 5242880 bytes"
    )
    other = '{"error": {"message": "Rate limit exceeded"}}'
    assert extract_error_message(Exception(other)) == "Rate limit exceeded"


def test_extract_error_message_from_python_repr():
    """The openai SDK embeds the response body as a Python dict repr."""
    error = Exception(
        "Error code: 401 - {'error': {'message': 'Incorrect API key provided', "
        "'type': 'invalid_request_error', 'code': 'invalid_api_key'}}"
    )
    assert extract_error_message(error) == "Incorrect API key provided"


def test_extract_error_message_prefers_message_attribute():
    class APIError(Exception):
        def __init__(self, message):
            super().__init__("wrapped")
            self.message = message

    error = APIError('{"error": {"message": "Overloaded"}}')
    assert extract_error_message(error) == "Overloaded"
    assert extract_error_message(APIError("Server busy")) == "Server busy"


def test_extract_error_message_plain_values():
    assert extract_error_message(Exception("Network timeout")) == "Network timeout"
    assert extract_error_message(Exception("File not found")) == "File not found"
    assert extract_error_message("string error") == "string error"
    assert extract_error_message(42) == "42"
    assert extract_error_message(None) == "null"


def test_extract_error_message_malformed_json():
    """Broken payloads fall back to the raw text."""
    assert extract_error_message("500 {not json") == "500 {not json"
    assert extract_error_message('{"message": 12}') == '{"message": 12}'
    assert extract_error_message('{"message": "a \\"quoted\\" word"}') == (
        'a "quoted" word'
    )


def test_extract_error_message_blank_message_keeps_raw_text():
    """A blank extracted message is useless; the raw text is kept instead."""
    raw = '500 {"error": {"message": ""}}'
    assert extract_error_message(Exception(raw)) == raw
    raw = "{'message': '   '}"
    assert extract_error_message(raw) == raw
