import shutil
from pathlib import Path

from git_utils import repo
from workflow.errors import (
    AuthenticationFailed,
    MissingDependency,
    NotAGitRepository,
    UncommittedChanges,
)

GEMINI_INSTALL_HINT = "Install Gemini CLI from: https://github.com/google-gemini/gemini-cli"


def check_git_repo(repo_path=None):
    if not repo.is_git_repository(repo_path=repo_path):
        raise NotAGitRepository()


def check_dependencies(config):
    missing = []
    hints = []
    if shutil.which("git") is None:
        missing.append("git")
    if shutil.which(config.gemini_command) is None:
        missing.append(Path(config.gemini_command).name)
        hints.append(GEMINI_INSTALL_HINT)
    if missing:
        raise MissingDependency(missing, hints=hints)


def check_authentication(config, advisor):
    config.validate()
    if not advisor.check_authentication():
        raise AuthenticationFailed(Path(config.gemini_command).name)


def check_clean_worktree(repo_path=None):
    if repo.has_uncommitted_changes(repo_path=repo_path):
        raise UncommittedChanges(repo.working_tree_status(repo_path=repo_path))


__all__ = [
    "check_git_repo",
    "check_dependencies",
    "check_authentication",
    "check_clean_worktree",
]
