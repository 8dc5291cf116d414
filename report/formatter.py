import re

TERMINAL_NOISE = (
    re.compile(r"\[ERROR\] \[IDEClient\]"),
    re.compile(r"Loaded cached credentials"),
)

REPORT_NOISE = (
    re.compile(r"\[ERROR\].*IDEClient"),
    re.compile(r"Failed to connect to IDE companion extension"),
    re.compile(r"Please ensure the extension is running"),
    re.compile(r"To install the extension, run /ide install"),
    re.compile(r"Loaded cached credentials"),
)

_BOLD = re.compile(r"\*\*([^*]*)\*\*")
_INLINE_CODE = re.compile(r"`([^`]*)`")
_FENCE = re.compile(r"^\s*```")


def drop_noise(lines, patterns):
    return [line for line in lines if not any(p.search(line) for p in patterns)]


def soften_markdown(line):
    """Strip bold markers and inline code; a code fence becomes an empty line."""
    if _FENCE.match(line):
        return ""
    line = _BOLD.sub(r"\1", line)
    return _INLINE_CODE.sub(r"\1", line)


def collapse_blank_lines(lines):
    """Drop leading blank lines and keep at most one blank line in a row."""
    collapsed = []
    previous_blank = True
    for line in lines:
        if not line.strip():
            if not previous_blank:
                collapsed.append("")
            previous_blank = True
            continue
        collapsed.append(line)
        previous_blank = False
    return collapsed


def clean_for_terminal(raw_output):
    lines = drop_noise(raw_output.splitlines(), TERMINAL_NOISE)
    lines = [line for line in lines if line != ""]
    return [soften_markdown(line) for line in lines]


def clean_for_report(raw_output):
    lines = drop_noise(raw_output.splitlines(), REPORT_NOISE)
    lines = [soften_markdown(line) for line in lines]
    return "\n".join(collapse_blank_lines(lines)).rstrip("\n")


__all__ = [
    "TERMINAL_NOISE",
    "REPORT_NOISE",
    "drop_noise",
    "soften_markdown",
    "collapse_blank_lines",
    "clean_for_terminal",
    "clean_for_report",
]
