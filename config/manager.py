import os
from dataclasses import dataclass
from pathlib import Path

from config.constants import (
    ENV_GEMINI_BIN,
    ENV_LOG_FORMAT,
    ENV_LOG_LEVEL,
    ENV_PROJECT_ID,
)
from workflow.errors import ConfigurationMissing


@dataclass(frozen=True)
class ReviewConfig:
    project_id: str
    gemini_command: str = "gemini"
    remote_name: str = "origin"
    log_level: str = "WARNING"
    log_format: str = "console"

    @classmethod
    def from_dict(cls, data):
        return cls(
            project_id=data.get(ENV_PROJECT_ID, "").strip(),
            gemini_command=data.get(ENV_GEMINI_BIN, "").strip() or "gemini",
            log_level=data.get(ENV_LOG_LEVEL, "").strip().upper() or "WARNING",
            log_format=data.get(ENV_LOG_FORMAT, "").strip().lower() or "console",
        )

    def to_env(self):
        return {ENV_PROJECT_ID: self.project_id}

    def validate(self):
        if not self.project_id:
            raise ConfigurationMissing(
                f"{ENV_PROJECT_ID} environment variable is not set",
                hints=(
                    f'Set it by running: export {ENV_PROJECT_ID}="your-project-id"',
                    f'Example: export {ENV_PROJECT_ID}="vn-codeassist"',
                ),
            )
        return self


def load_config(environ=None):
    if environ is None:
        environ = os.environ
    return ReviewConfig.from_dict(environ)


def shell_profile_path(shell=None, home=None):
    shell = shell if shell is not None else os.environ.get("SHELL", "")
    home = Path(home) if home is not None else Path.home()
    if shell.endswith("zsh"):
        return home / ".zshrc"
    if shell.endswith("fish"):
        return home / ".config" / "fish" / "config.fish"
    return home / ".bashrc"


def save_project_id(project_id, profile=None):
    """Append the project export to the shell profile and return its path."""
    profile = Path(profile) if profile is not None else shell_profile_path()
    if profile.name == "config.fish":
        line = f'set -gx {ENV_PROJECT_ID} "{project_id}"'
    else:
        line = f'export {ENV_PROJECT_ID}="{project_id}"'
    profile.parent.mkdir(parents=True, exist_ok=True)
    with profile.open("a", encoding="utf-8") as handle:
        handle.write(f"\n{line}\n")
    return profile


__all__ = ["ReviewConfig", "load_config", "shell_profile_path", "save_project_id"]
