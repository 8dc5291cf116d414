import os
import subprocess
import textwrap
from pathlib import Path

import pytest

from config.manager import ReviewConfig
from observability.logger_factory import configure_logging

FAKE_REVIEW = textwrap.dedent(
    """\
    [ERROR] [IDEClient] Failed to connect to IDE companion extension
    Loaded cached credentials.
    **1. Changes:**
    - Commits:
      - abc123 Add users endpoint
    - Files:
      - `gw/modules/users/handler.go`

    1. Changes:
    - Summary:
      - Scope: small
    2. Impact:
    - API Endpoints:
      - POST /users - Creates a user
    3. Clean code:
    ```go
    router.Post("/users", createUser)
    ```
    4. Performance:
    - None
    5. Other:
    - Security: validate input
    """
)

FAKE_GEMINI = """#!/bin/sh
if [ "$2" = "test" ]; then
    exit "${FAKE_GEMINI_AUTH_EXIT:-0}"
fi
printf '%s' "$2" > "$FAKE_GEMINI_PROMPT"
cat "$FAKE_GEMINI_OUTPUT"
"""


def git(repo, *args):
    result = subprocess.run(
        ["git", *args],
        cwd=repo,
        check=True,
        capture_output=True,
        text=True,
    )
    return result.stdout.strip()


def commit_file(repo, relative_path, content, message):
    path = Path(repo) / relative_path
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    git(repo, "add", relative_path)
    git(repo, "commit", "-q", "-m", message)
    return git(repo, "rev-parse", "HEAD")


@pytest.fixture(autouse=True)
def quiet_logging():
    configure_logging("WARNING")


@pytest.fixture
def git_env(monkeypatch, tmp_path):
    monkeypatch.setenv("GIT_AUTHOR_NAME", "Ada Reviewer")
    monkeypatch.setenv("GIT_AUTHOR_EMAIL", "ada@example.com")
    monkeypatch.setenv("GIT_COMMITTER_NAME", "Ada Reviewer")
    monkeypatch.setenv("GIT_COMMITTER_EMAIL", "ada@example.com")
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    (tmp_path / "home").mkdir(exist_ok=True)


@pytest.fixture
def git_repo(tmp_path, git_env):
    """A repository with ``main`` and a ``feature`` branch checked out."""
    repo = tmp_path / "sample-service"
    repo.mkdir()
    git(repo, "init", "-q")
    git(repo, "symbolic-ref", "HEAD", "refs/heads/main")
    commit_file(repo, "README.md", "# sample\n", "Initial commit")
    git(repo, "checkout", "-q", "-b", "feature")
    return repo


@pytest.fixture
def fake_gemini(tmp_path, monkeypatch):
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    script = bin_dir / "gemini"
    script.write_text(FAKE_GEMINI, encoding="utf-8")
    script.chmod(0o755)

    output = tmp_path / "gemini-output.txt"
    output.write_text(FAKE_REVIEW, encoding="utf-8")
    prompt = tmp_path / "gemini-prompt.txt"

    monkeypatch.setenv("PATH", f"{bin_dir}{os.pathsep}{os.environ.get('PATH', '')}")
    monkeypatch.setenv("FAKE_GEMINI_OUTPUT", str(output))
    monkeypatch.setenv("FAKE_GEMINI_PROMPT", str(prompt))
    return prompt


@pytest.fixture
def config():
    return ReviewConfig(project_id="test-project")
