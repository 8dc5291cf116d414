import re
from dataclasses import dataclass
from typing import Tuple, Union

FILES_THRESHOLD = 50
LINES_THRESHOLD = 2000
SAMPLE_FILE_LIMIT = 10
SAMPLE_LINE_LIMIT = 50

_FILES_CHANGED = re.compile(r"(\d+) files? changed")
# First of insertions/deletions only, not their sum.
_LINES_CHANGED = re.compile(r"(\d+) (?:insertions|deletions)")
_DIFF_HEADER = re.compile(r'^diff --git "?a/(.*?)"? "?b/(.*?)"?$')


@dataclass(frozen=True)
class DiffStats:
    files_changed: int
    lines_changed: int

    @property
    def exceeds_limits(self):
        return self.files_changed > FILES_THRESHOLD or self.lines_changed > LINES_THRESHOLD


@dataclass(frozen=True)
class FullDiff:
    text: str

    def render(self):
        return self.text


@dataclass(frozen=True)
class SummarizedDiff:
    stats: DiffStats
    stats_text: str
    samples: Tuple[Tuple[str, str], ...]

    def render(self):
        lines = ["=== DIFF SUMMARY ===", self.stats_text.rstrip("\n"), ""]
        lines.append(f"=== SAMPLE DIFF (First {SAMPLE_FILE_LIMIT} files) ===")
        for path, excerpt in self.samples:
            lines.append(f"--- Changes in {path} ---")
            if excerpt:
                lines.append(excerpt)
            lines.append("")
        lines.append("=== END SAMPLE DIFF ===")
        return "\n".join(lines)


DiffPresentation = Union[FullDiff, SummarizedDiff]


def parse_diff_stats(stat_text):
    summary_lines = [line for line in stat_text.splitlines() if line.strip()]
    summary = summary_lines[-1] if summary_lines else ""

    files_match = _FILES_CHANGED.search(summary)
    lines_match = _LINES_CHANGED.search(summary)
    return DiffStats(
        files_changed=int(files_match.group(1)) if files_match else 0,
        lines_changed=int(lines_match.group(1)) if lines_match else 0,
    )


def split_diff_by_file(diff_text):
    diffs = {}
    current_path = None
    current_lines = []

    def flush():
        if current_path is None:
            return
        diffs[current_path] = "\n".join(current_lines).strip("\n")

    for line in diff_text.splitlines():
        if line.startswith("diff --git "):
            flush()
            current_lines = [line]
            match = _DIFF_HEADER.match(line)
            current_path = match.group(2) if match else None
            continue
        if current_path is not None:
            current_lines.append(line)

    flush()
    return diffs


def truncate_lines(text, limit=SAMPLE_LINE_LIMIT):
    return "\n".join(text.splitlines()[:limit])


def summarize_diff(diff_text, stat_text, changed_files):
    stats = parse_diff_stats(stat_text)
    if not stats.exceeds_limits:
        return FullDiff(diff_text)

    per_file = split_diff_by_file(diff_text)
    samples = tuple(
        (path, truncate_lines(per_file.get(path, "")))
        for path in list(changed_files)[:SAMPLE_FILE_LIMIT]
    )
    return SummarizedDiff(stats=stats, stats_text=stat_text, samples=samples)


__all__ = [
    "FILES_THRESHOLD",
    "LINES_THRESHOLD",
    "SAMPLE_FILE_LIMIT",
    "SAMPLE_LINE_LIMIT",
    "DiffStats",
    "FullDiff",
    "SummarizedDiff",
    "DiffPresentation",
    "parse_diff_stats",
    "split_diff_by_file",
    "truncate_lines",
    "summarize_diff",
]
