import re
from dataclasses import dataclass
from typing import Tuple

from analyzer.diff_summary import split_diff_by_file
from analyzer.registry import list_rules, register_rule

MODULES_PATHSPEC = "*/modules/*.go"
NO_API_CHANGES = "No API changes detected in modules folder"

ROUTE_CALL_PATTERN = re.compile(r"^\+.*\.(Get|Post|Put|Delete|Patch)\(")
HANDLER_PATTERN = re.compile(r"^\+.*func.*\(.*\*fiber\.Ctx\)")
ROUTES_FILE_PATTERN = re.compile(r"^\+\+\+ b/.*routes\.go")

CONTEXT_BEFORE = 2
CONTEXT_AFTER = 10


@dataclass(frozen=True)
class EvidenceSection:
    heading: str
    lines: Tuple[str, ...]
    counts_as_evidence: bool


@dataclass(frozen=True)
class EndpointEvidence:
    sections: Tuple[EvidenceSection, ...] = ()

    @property
    def found(self):
        return any(section.counts_as_evidence for section in self.sections)

    def render(self):
        if not self.found:
            return NO_API_CHANGES
        lines = ["=== API ENDPOINT CHANGES ===", ""]
        for section in self.sections:
            lines.append(f"{section.heading}:")
            lines.extend(section.lines)
            lines.append("")
        lines.append("=== END API CHANGES ===")
        return "\n".join(lines)


def _added_content(line):
    return line[1:].strip()


def context_window(lines, pattern, before=CONTEXT_BEFORE, after=CONTEXT_AFTER):
    """Lines around each match, with ``--`` between separate groups (grep -B/-A)."""
    groups = []
    for index, line in enumerate(lines):
        if not pattern.match(line):
            continue
        start = max(0, index - before)
        end = min(len(lines), index + after + 1)
        if groups and start <= groups[-1][1]:
            groups[-1][1] = max(groups[-1][1], end)
        else:
            groups.append([start, end])

    window = []
    for position, (start, end) in enumerate(groups):
        if position:
            window.append("--")
        window.extend(lines[start:end])
    return window


@register_rule("New/Modified Route Definitions")
def route_definitions(diff_lines, load_file_diff):
    return [
        f"  • {_added_content(line)}"
        for line in diff_lines
        if ROUTE_CALL_PATTERN.match(line)
    ]


@register_rule("New/Modified Handler Functions", counts_as_evidence=False)
def handler_functions(diff_lines, load_file_diff):
    return [
        f"  • {_added_content(line)}"
        for line in diff_lines
        if HANDLER_PATTERN.match(line)
    ]


@register_rule("Routes Files Changed")
def routes_files(diff_lines, load_file_diff):
    output = []
    for line in diff_lines:
        if not ROUTES_FILE_PATTERN.match(line):
            continue
        path = line[len("+++ b/"):]
        output.append(f"  📁 {path}")
        file_lines = load_file_diff(path).splitlines()
        output.extend(
            f"    {context}" for context in context_window(file_lines, ROUTE_CALL_PATTERN)
        )
        output.append("")
    if output and output[-1] == "":
        output.pop()
    return output


def extract_endpoint_evidence(modules_diff, load_file_diff=None):
    """Run every registered rule over ``modules_diff``.

    ``load_file_diff(path)`` returns the diff of a single file; by default
    it is cut out of ``modules_diff`` itself.
    """
    if load_file_diff is None:
        per_file = split_diff_by_file(modules_diff)

        def load_file_diff(path):
            return per_file.get(path, "")

    diff_lines = modules_diff.splitlines()
    sections = []
    for rule in list_rules():
        lines = rule(diff_lines, load_file_diff)
        if lines:
            sections.append(
                EvidenceSection(
                    heading=rule.heading,
                    lines=tuple(lines),
                    counts_as_evidence=rule.counts_as_evidence,
                )
            )
    return EndpointEvidence(sections=tuple(sections))


__all__ = [
    "MODULES_PATHSPEC",
    "NO_API_CHANGES",
    "ROUTE_CALL_PATTERN",
    "HANDLER_PATTERN",
    "ROUTES_FILE_PATTERN",
    "EvidenceSection",
    "EndpointEvidence",
    "context_window",
    "route_definitions",
    "handler_functions",
    "routes_files",
    "extract_endpoint_evidence",
]
