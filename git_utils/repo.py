import subprocess
from pathlib import Path

from git_utils.models import ChangeSet, HeadCommit, TargetRefs
from observability.logger_factory import get_logger
from workflow.errors import BranchNotFound, MissingDependency

logger = get_logger("git_utils.repo")

NOT_AVAILABLE = "N/A"
GIT_INSTALL_HINT = "Install Git first: https://git-scm.com/downloads"


def _git(args, repo_path=None, **kwargs):
    try:
        return subprocess.run(["git", *args], cwd=repo_path, **kwargs)
    except FileNotFoundError as exc:
        raise MissingDependency(["git"], hints=(GIT_INSTALL_HINT,)) from exc


def _run_git(args, repo_path=None, check=True):
    logger.debug("git_command", args=args)
    result = _git(
        args,
        repo_path=repo_path,
        check=check,
        capture_output=True,
        text=True,
        encoding="utf-8",
        errors="replace",
    )
    return result.stdout or ""


def _git_succeeds(args, repo_path=None):
    result = _git(
        args,
        repo_path=repo_path,
        stdout=subprocess.DEVNULL,
        stderr=subprocess.DEVNULL,
    )
    return result.returncode == 0


def _git_or_default(args, repo_path=None, default=NOT_AVAILABLE):
    try:
        output = _run_git(args, repo_path=repo_path).strip()
    except subprocess.CalledProcessError:
        return default
    return output or default


def is_git_repository(repo_path=None):
    return _git_succeeds(["rev-parse", "--git-dir"], repo_path=repo_path)


def has_uncommitted_changes(repo_path=None):
    return not _git_succeeds(["diff-index", "--quiet", "HEAD", "--"], repo_path=repo_path)


def working_tree_status(repo_path=None):
    output = _run_git(["status", "--porcelain"], repo_path=repo_path, check=False)
    return [line for line in output.splitlines() if line.strip()]


def current_branch(repo_path=None):
    return _run_git(["branch", "--show-current"], repo_path=repo_path, check=False).strip()


def list_branches(repo_path=None):
    output = _run_git(["branch", "-a"], repo_path=repo_path, check=False)
    return [line.rstrip() for line in output.splitlines() if line.strip()]


def find_target_refs(branch, repo_path=None, remote="origin"):
    local_ref = None
    remote_ref = None
    if _git_succeeds(
        ["show-ref", "--verify", "--quiet", f"refs/heads/{branch}"], repo_path=repo_path
    ):
        local_ref = branch
    if _git_succeeds(
        ["show-ref", "--verify", "--quiet", f"refs/remotes/{remote}/{branch}"],
        repo_path=repo_path,
    ):
        remote_ref = f"{remote}/{branch}"
    return TargetRefs(branch=branch, local_ref=local_ref, remote_ref=remote_ref)


def require_target_refs(branch, repo_path=None, remote="origin"):
    refs = find_target_refs(branch, repo_path=repo_path, remote=remote)
    if not refs.found:
        raise BranchNotFound(branch, available=list_branches(repo_path=repo_path))
    return refs


def merge_base(ref, repo_path=None):
    """Return the merge base of HEAD and ``ref``, or None when git finds none."""
    try:
        output = _run_git(["merge-base", "HEAD", ref], repo_path=repo_path).strip()
    except subprocess.CalledProcessError:
        return None
    return output or None


def _compare(base, symmetric=True, log=False):
    # Without a merge base git rejects "base...HEAD"; compare the two tips instead.
    if symmetric:
        return [f"{base}...HEAD"]
    if log:
        return [f"{base}..HEAD"]
    return [base, "HEAD"]


def changed_files(base, repo_path=None, symmetric=True):
    output = _run_git(
        ["diff", "--name-only", *_compare(base, symmetric)],
        repo_path=repo_path,
        check=False,
    )
    return [line for line in output.splitlines() if line.strip()]


def diff_text(base, paths=None, repo_path=None, symmetric=True):
    args = ["diff", "--no-color", *_compare(base, symmetric)]
    if paths:
        args += ["--", *paths]
    return _run_git(args, repo_path=repo_path, check=False)


def diff_stat(base, repo_path=None, symmetric=True):
    return _run_git(
        ["diff", "--stat", *_compare(base, symmetric)], repo_path=repo_path, check=False
    )


def commit_list(base, repo_path=None, symmetric=True):
    try:
        output = _run_git(
            ["log", "--oneline", *_compare(base, symmetric, log=True)],
            repo_path=repo_path,
        )
    except subprocess.CalledProcessError:
        return "No commits found"
    return output.strip() or "No commits found"


def resolve_change_set(branch, repo_path=None, remote="origin", refs=None):
    if refs is None:
        refs = require_target_refs(branch, repo_path=repo_path, remote=remote)
    primary = refs.primary

    base = merge_base(primary, repo_path=repo_path)
    symmetric = base is not None
    if not symmetric:
        logger.info("merge_base_missing", primary=primary)
        base = primary

    files = changed_files(base, repo_path=repo_path, symmetric=symmetric)
    if files:
        full_diff = diff_text(base, repo_path=repo_path, symmetric=symmetric)
        stat = diff_stat(base, repo_path=repo_path, symmetric=symmetric)
    else:
        full_diff = ""
        stat = ""

    logger.debug(
        "change_set_resolved",
        primary=primary,
        merge_base=base,
        files=len(files),
    )
    return ChangeSet(
        current_branch=current_branch(repo_path=repo_path),
        target_branch=branch,
        primary_ref=primary,
        merge_base=base,
        changed_files=tuple(files),
        diff_text=full_diff,
        diff_stat=stat,
    )


def head_commit(repo_path=None):
    return HeadCommit(
        short_hash=_git_or_default(["rev-parse", "--short", "HEAD"], repo_path=repo_path),
        message=_git_or_default(["log", "-1", "--pretty=format:%s"], repo_path=repo_path),
        author=_git_or_default(["log", "-1", "--pretty=format:%an"], repo_path=repo_path),
    )


def project_name(repo_path=None):
    toplevel = _git_or_default(["rev-parse", "--show-toplevel"], repo_path=repo_path)
    if toplevel == NOT_AVAILABLE:
        return Path(repo_path or Path.cwd()).resolve().name
    return Path(toplevel).name


__all__ = [
    "is_git_repository",
    "has_uncommitted_changes",
    "working_tree_status",
    "current_branch",
    "list_branches",
    "find_target_refs",
    "require_target_refs",
    "merge_base",
    "changed_files",
    "diff_text",
    "diff_stat",
    "commit_list",
    "resolve_change_set",
    "head_commit",
    "project_name",
]
