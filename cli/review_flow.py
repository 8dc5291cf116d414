from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional

from advisor.gemini_client import GeminiAdvisor
from advisor.prompt_builder import build_review_prompt, validate_language
from analyzer.diff_summary import SummarizedDiff, summarize_diff
from analyzer.endpoints import (
    MODULES_PATHSPEC,
    EndpointEvidence,
    extract_endpoint_evidence,
)
from cli.console import print_header, print_info, print_success, print_warning
from git_utils import repo
from git_utils.models import ChangeSet
from observability.logger_factory import get_logger
from report.formatter import clean_for_report, clean_for_terminal
from report.terminal import banner, format_review_lines
from report.writer import ReviewReport, default_report_filename, write_report
from workflow.preconditions import (
    check_authentication,
    check_clean_worktree,
    check_dependencies,
    check_git_repo,
)

logger = get_logger("cli.review_flow")


@dataclass(frozen=True)
class ReviewRequest:
    target_branch: str
    save_to: Optional[str] = None
    no_save: bool = False
    convention_file: Optional[str] = None
    language: Optional[str] = None
    repo_path: Optional[str] = None


@dataclass(frozen=True)
class ReviewOutcome:
    status: str
    change_set: Optional[ChangeSet] = None
    review_output: str = ""
    report_path: Optional[Path] = None


def read_convention(path):
    if not path:
        return None
    convention_path = Path(path)
    if not convention_path.is_file():
        print_warning(f"Convention file not found: {path}")
        return None
    print_info(f"Reading team convention from: {path}")
    try:
        return convention_path.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        print_warning(f"Convention file could not be read: {path} ({exc.strerror or exc})")
        return None


def announce_target(refs):
    if refs.local_ref:
        print_info(f"Found local branch: {refs.local_ref}")
    if refs.remote_ref:
        print_info(f"Found remote branch: {refs.remote_ref}")

    if refs.local_ref and refs.remote_ref:
        print_success(
            f"Both local and remote branches available - using {refs.remote_ref} as primary"
        )
    elif refs.remote_ref:
        print_success(f"Using remote branch: {refs.remote_ref}")
    else:
        print_success(f"Using local branch: {refs.local_ref}")


def collect_endpoint_evidence(change_set, repo_path=None):
    base = change_set.merge_base
    symmetric = change_set.merge_base_found
    modules_diff = repo.diff_text(
        base, paths=[MODULES_PATHSPEC], repo_path=repo_path, symmetric=symmetric
    )
    if not modules_diff.strip():
        return EndpointEvidence()

    def load_file_diff(path):
        return repo.diff_text(
            base, paths=[f":(literal){path}"], repo_path=repo_path, symmetric=symmetric
        )

    evidence = extract_endpoint_evidence(modules_diff, load_file_diff=load_file_diff)
    logger.info(
        "endpoint_evidence",
        found=evidence.found,
        sections=[section.heading for section in evidence.sections],
    )
    return evidence


def show_review(review_output):
    print("")
    for line in banner("📋 CODE REVIEW REPORT"):
        print(line)
    print("")
    for line in format_review_lines(clean_for_terminal(review_output)):
        print(line)
    print("")
    for line in banner("✅ REVIEW COMPLETED"):
        print(line)
    print("")


def save_review(change_set, review_output, path, created_at, repo_path=None):
    commit = repo.head_commit(repo_path=repo_path)
    report = ReviewReport(
        project_name=repo.project_name(repo_path=repo_path),
        current_branch=change_set.current_branch,
        target_branch=change_set.target_branch,
        commit_hash=commit.short_hash,
        commit_message=commit.message,
        author=commit.author,
        created_at=created_at,
        changed_files=change_set.changed_files,
        analysis=clean_for_report(review_output),
    )
    return write_report(report, path)


def run_review(config, request, advisor=None, now=None):
    """Run one review from precondition checks to the saved report.

    Any failed step raises a ``ReviewError`` and nothing after it runs.
    """
    print_header(f"Starting AI Code Review against '{request.target_branch}'")
    validate_language(request.language)
    advisor = advisor or GeminiAdvisor(config)
    repo_path = request.repo_path

    check_git_repo(repo_path)
    check_dependencies(config)
    print_info("Testing Gemini authentication...")
    check_authentication(config, advisor)
    print_success("Authentication verified")

    convention = read_convention(request.convention_file)

    print_info("Checking git status...")
    check_clean_worktree(repo_path)
    print_success("All changes are committed")

    refs = repo.require_target_refs(
        request.target_branch, repo_path=repo_path, remote=config.remote_name
    )
    announce_target(refs)

    print_info("Getting list of changed files...")
    change_set = repo.resolve_change_set(
        request.target_branch,
        repo_path=repo_path,
        remote=config.remote_name,
        refs=refs,
    )
    print_info(f"Comparing {change_set.current_branch} with: {change_set.primary_ref}...")
    if change_set.is_empty:
        print_warning(
            f"No changes found between current branch and '{request.target_branch}'"
        )
        return ReviewOutcome(status="no_changes", change_set=change_set)

    print_success("Found changes in the following files:")
    for path in change_set.changed_files:
        print(f"  {path}")
    print("")

    print_info("Getting detailed changes...")
    presentation = summarize_diff(
        change_set.diff_text, change_set.diff_stat, change_set.changed_files
    )
    if isinstance(presentation, SummarizedDiff):
        print_warning(
            f"Large changeset detected ({presentation.stats.files_changed} files, "
            f"{presentation.stats.lines_changed}+ lines)"
        )
        print_info("Providing summary instead of full diff to avoid command line limits")

    print_info("Analyzing API changes...")
    evidence = collect_endpoint_evidence(change_set, repo_path=repo_path)

    prompt = build_review_prompt(
        current_branch=change_set.current_branch,
        target_branch=change_set.target_branch,
        commit_list=repo.commit_list(
            change_set.merge_base,
            repo_path=repo_path,
            symmetric=change_set.merge_base_found,
        ),
        changed_files=change_set.changed_files,
        diff_presentation=presentation,
        convention=convention,
        endpoint_evidence=evidence,
        language=request.language,
    )

    print_header("Running AI Code Review...")
    print("")
    review_output = advisor.generate_review(prompt)
    show_review(review_output)

    report_path = None
    if not request.no_save:
        created_at = now or datetime.now()
        target = request.save_to or default_report_filename(created_at)
        print_info(f"Saving review to: {target}")
        report_path = save_review(
            change_set, review_output, target, created_at, repo_path=repo_path
        )
        print_success(f"Review saved to: {report_path}")

    print_success("Code review completed!")
    return ReviewOutcome(
        status="completed",
        change_set=change_set,
        review_output=review_output,
        report_path=report_path,
    )


__all__ = [
    "ReviewRequest",
    "ReviewOutcome",
    "read_convention",
    "collect_endpoint_evidence",
    "show_review",
    "save_review",
    "run_review",
]
