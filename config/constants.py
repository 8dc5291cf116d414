from pathlib import Path

VERSION = "0.0.1"
SCRIPT_NAME = "ai-code-review"
TOOL_TITLE = "AI Code Review Tool"
PROJECT_URL = "https://github.com/taigroddy/ai-code-review"

INSTALL_DIR = Path.home() / ".local" / "bin"
ALIASES = ("cr", "code-review", "review")

ENV_PROJECT_ID = "GOOGLE_CLOUD_PROJECT"
ENV_GEMINI_BIN = "AI_CODE_REVIEW_GEMINI_BIN"
ENV_LOG_LEVEL = "AI_CODE_REVIEW_LOG_LEVEL"
ENV_LOG_FORMAT = "AI_CODE_REVIEW_LOG_FORMAT"


__all__ = [
    "VERSION",
    "SCRIPT_NAME",
    "TOOL_TITLE",
    "PROJECT_URL",
    "INSTALL_DIR",
    "ALIASES",
    "ENV_PROJECT_ID",
    "ENV_GEMINI_BIN",
    "ENV_LOG_LEVEL",
    "ENV_LOG_FORMAT",
]
