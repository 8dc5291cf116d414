import pytest

from git_utils import repo as git_repo_utils
from workflow.errors import BranchNotFound, MissingDependency

from tests.conftest import commit_file, git


def test_detects_repository(git_repo, tmp_path):
    outside = tmp_path / "plain"
    outside.mkdir()

    assert git_repo_utils.is_git_repository(git_repo)
    assert not git_repo_utils.is_git_repository(outside)


def test_uncommitted_changes(git_repo):
    assert not git_repo_utils.has_uncommitted_changes(git_repo)

    (git_repo / "README.md").write_text("# changed\n", encoding="utf-8")

    assert git_repo_utils.has_uncommitted_changes(git_repo)
    assert git_repo_utils.working_tree_status(git_repo) == [" M README.md"]


def test_untracked_files_are_not_uncommitted_changes(git_repo):
    (git_repo / "notes.txt").write_text("scratch\n", encoding="utf-8")

    assert not git_repo_utils.has_uncommitted_changes(git_repo)


def test_find_target_refs_local_only(git_repo):
    refs = git_repo_utils.find_target_refs("main", repo_path=git_repo)

    assert refs.found
    assert refs.local_ref == "main"
    assert refs.remote_ref is None
    assert refs.primary == "main"


def test_remote_ref_is_preferred(git_repo):
    initial = git(git_repo, "rev-parse", "main")
    git(git_repo, "update-ref", "refs/remotes/origin/main", initial)
    git(git_repo, "checkout", "-q", "main")
    commit_file(git_repo, "CHANGELOG.md", "- local only\n", "Local main commit")
    git(git_repo, "checkout", "-q", "feature")
    commit_file(git_repo, "app.py", "print('hi')\n", "Feature work")

    refs = git_repo_utils.find_target_refs("main", repo_path=git_repo)
    change_set = git_repo_utils.resolve_change_set("main", repo_path=git_repo, refs=refs)

    assert refs.primary == "origin/main"
    assert change_set.primary_ref == "origin/main"
    assert change_set.merge_base == initial
    assert change_set.merge_base_found
    assert change_set.changed_files == ("app.py",)


def test_missing_branch_lists_available(git_repo):
    with pytest.raises(BranchNotFound) as exc_info:
        git_repo_utils.require_target_refs("develop", repo_path=git_repo)

    error = exc_info.value
    assert error.message == "Branch 'develop' not found locally or remotely"
    assert error.hints[0] == "Available branches:"
    assert any("feature" in line for line in error.hints[1:])
    assert any("main" in line for line in error.hints[1:])


def test_resolve_change_set_with_changes(git_repo):
    commit_file(git_repo, "src/app.py", "print('a')\nprint('b')\n", "Add app")

    change_set = git_repo_utils.resolve_change_set("main", repo_path=git_repo)

    assert change_set.current_branch == "feature"
    assert change_set.target_branch == "main"
    assert change_set.changed_files == ("src/app.py",)
    assert "+print('a')" in change_set.diff_text
    assert "1 file changed, 2 insertions(+)" in change_set.diff_stat
    assert not change_set.is_empty


def test_resolve_change_set_without_changes(git_repo):
    change_set = git_repo_utils.resolve_change_set("main", repo_path=git_repo)

    assert change_set.is_empty
    assert change_set.diff_text == ""


def test_changes_on_target_only_are_ignored(git_repo):
    git(git_repo, "checkout", "-q", "main")
    commit_file(git_repo, "main-only.txt", "x\n", "Main only")
    git(git_repo, "checkout", "-q", "feature")

    change_set = git_repo_utils.resolve_change_set("main", repo_path=git_repo)

    assert change_set.is_empty


def test_commit_list(git_repo):
    base = git(git_repo, "rev-parse", "main")
    assert git_repo_utils.commit_list(base, repo_path=git_repo) == "No commits found"

    sha = commit_file(git_repo, "a.txt", "a\n", "Add a")

    listing = git_repo_utils.commit_list(base, repo_path=git_repo)
    assert listing.endswith("Add a")
    assert sha.startswith(listing.split()[0])


def test_head_commit_and_project_name(git_repo):
    commit_file(git_repo, "a.txt", "a\n", "Add a")

    head = git_repo_utils.head_commit(git_repo)

    assert head.message == "Add a"
    assert head.author == "Ada Reviewer"
    assert head.short_hash == git(git_repo, "rev-parse", "--short", "HEAD")
    assert git_repo_utils.project_name(git_repo) == "sample-service"


def test_head_commit_outside_repository(tmp_path):
    head = git_repo_utils.head_commit(tmp_path)
    assert head.short_hash == "N/A"
    assert head.author == "N/A"


def _start_unrelated_history(repo):
    git(repo, "checkout", "-q", "--orphan", "other")
    git(repo, "rm", "-rf", "-q", ".")
    commit_file(repo, "service.py", "print('other')\n", "Unrelated start")


def test_unrelated_history_compares_branch_tips(git_repo):
    _start_unrelated_history(git_repo)

    change_set = git_repo_utils.resolve_change_set("main", repo_path=git_repo)

    assert change_set.merge_base == "main"
    assert not change_set.merge_base_found
    assert change_set.changed_files == ("README.md", "service.py")
    assert "+print('other')" in change_set.diff_text
    assert "-# sample" in change_set.diff_text
    assert "2 files changed" in change_set.diff_stat
    assert git_repo_utils.commit_list(
        "main", repo_path=git_repo, symmetric=False
    ).endswith("Unrelated start")


def test_missing_git_binary(git_repo, tmp_path, monkeypatch):
    empty_bin = tmp_path / "empty-bin"
    empty_bin.mkdir()
    monkeypatch.setenv("PATH", str(empty_bin))

    with pytest.raises(MissingDependency) as exc_info:
        git_repo_utils.is_git_repository(git_repo)

    assert exc_info.value.names == ("git",)
    assert exc_info.value.message == "Missing dependencies: git"
