"""Naming engine and filename sanitization."""

import base64
import re

import openai

from .constants import DEFAULT_MAX_TOKENS, DEFAULT_MODEL, MAX_FILENAME_LENGTH
from .core import NamingEngine, NamingError, extract_error_message

_INVALID_CHARS = re.compile(r"[^a-z0-9-]")
_HYPHEN_RUNS = re.compile(r"-{2,}")


def sanitize_filename(name: str, max_length: int = MAX_FILENAME_LENGTH) -> str:
    """Turn arbitrary text into a lowercase kebab-case filename fragment.

    Never raises. Returns an empty string when nothing usable is left, which
    callers must treat as "no suggestion".
    """
    slug = name.strip().lower()
    slug = _INVALID_CHARS.sub("-", slug)
    slug = _HYPHEN_RUNS.sub("-", slug)
    slug = slug.removeprefix("-").removesuffix("-")
    # Cutting may expose a hyphen at the end again
    return slug[:max_length].removesuffix("-")


class OpenAINamingEngine(NamingEngine):
    """OpenAI vision-based naming engine."""

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODEL,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        verbose: bool = False,
    ):
        # No retry policy: a failed request surfaces immediately
        self.client = openai.OpenAI(api_key=api_key, max_retries=0)
        self.model = model
        self.max_tokens = max_tokens
        self.verbose = verbose

    def describe_image(
        self, image_data: bytes, media_type: str, prompt: str
    ) -> str | None:
        """Ask the model to describe an image; return its text reply or None."""
        encoded = base64.b64encode(image_data).decode("utf-8")
        messages = self._create_messages(encoded, media_type, prompt)

        # Output prompt if verbose mode is enabled
        if self.verbose:
            print("\n" + "=" * 80)
            print(f"PROMPT SENT TO OPENAI ({self.model}, {media_type}):")
            print("=" * 80)
            print(prompt)
            print("=" * 80 + "\n")

        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=messages,
                max_tokens=self.max_tokens,
            )
        except openai.OpenAIError as e:
            raise NamingError(extract_error_message(e)) from e

        response_content = self._first_text(response)

        if self.verbose:
            print("OPENAI RESPONSE:")
            print("=" * 80)
            print(response_content)
            print("=" * 80 + "\n")

        return response_content

    def _create_messages(
        self, encoded_image: str, media_type: str, prompt: str
    ) -> list[dict]:
        """Build a single user message with the image and the prompt."""
        return [
            {
                "role": "user",
                "content": [
                    {
                        "type": "image_url",
                        "image_url": {
                            "url": f"data:{media_type};base64,{encoded_image}"
                        },
                    },
                    {"type": "text", "text": prompt},
                ],
            }
        ]

    def _first_text(self, response) -> str | None:
        """Return the first non-empty text among the response choices."""
        for choice in response.choices:
            content = choice.message.content
            if content:
                return content
        return None
