"""Constants used throughout the application."""

from pathlib import Path

# OpenAI vision-capable models
OPENAI_MODELS = {
    "GPT_4O_MINI": "gpt-4o-mini",
    "GPT_4_1_NANO": "gpt-4.1-nano",
    "GPT_4_1_MINI": "gpt-4.1-mini",
    "GPT_4O": "gpt-4o",
}

# Default model
DEFAULT_MODEL = OPENAI_MODELS["GPT_4O_MINI"]
DEFAULT_MAX_TOKENS = 100

# Environment variable names
ENV_OPENAI_API_KEY = "OPENAI_API_KEY"
ENV_OPENAI_MODEL = "OPENAI_MODEL"
ENV_CONFIG_FILE = "CONFIG_FILE"

# Default values
DEFAULT_CONFIG_FILE = "config.yaml"
DEFAULT_DAYS = 7

# File type limits
MAX_FILENAME_LENGTH = 50

# Supported image formats; the first media type is the fallback
IMAGE_MEDIA_TYPES = {
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".gif": "image/gif",
    ".webp": "image/webp",
}
SUPPORTED_EXTENSIONS = (".png", ".jpg", ".jpeg", ".gif", ".webp")
SCREENSHOT_EXTENSIONS = (".png",)

# Append-only rename history, one file per tool
CONFIG_DIR = Path.home() / ".config"
IMAGE_HISTORY_FILE = CONFIG_DIR / "image-renamer" / "history.txt"
SCREENSHOT_HISTORY_FILE = CONFIG_DIR / "screenshot-renamer" / "history.txt"

IMAGE_PROMPT = """Suggest a short, descriptive filename for this image (without extension).
The name should be:
- Lowercase with hyphens (e.g., "orange-cat-on-couch", "sunset-over-mountains")
- Max 50 characters, aim for 2-5 words
- Descriptive of the main subject/content
- No generic names like "image" or "photo"

Reply with ONLY the suggested filename, nothing else."""

SCREENSHOT_PROMPT = """Analyze this screenshot and suggest a short, descriptive filename (without extension).
The name should be:
- Lowercase with hyphens (e.g., "slack-conversation-about-deployment")
- Max 50 characters
- Descriptive of what's shown (app name, content type, key details)
- No generic names like "screenshot" or "image"

Reply with ONLY the suggested filename, nothing else."""
