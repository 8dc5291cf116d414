import re

from advisor.prompt_builder import REVIEW_SECTIONS

RESET = "\033[0m"
RULE = "─" * 64

REVIEW_FIRST_SECTION = REVIEW_SECTIONS[0]

SECTION_STYLES = (
    ("\033[1;34m", "🔄 1. CHANGES"),
    ("\033[1;31m", "⚡ 2. IMPACT"),
    ("\033[1;32m", "✨ 3. CLEAN CODE"),
    ("\033[1;33m", "⚡ 4. PERFORMANCE"),
    ("\033[1;35m", "📝 5. OTHER"),
)

SECTION_HEADERS = dict(zip(REVIEW_SECTIONS, SECTION_STYLES))

LABEL_PREFIXES = (
    ("- Commits:", "📝"),
    ("- Files:", "📁"),
)

KEYWORD_MARKERS = (
    ("Security:", "🔐"),
    ("Testing:", "🧪"),
    ("Deployment:", "🚀"),
    ("Global Singleton:", "⚠️ "),
    ("Brittle File Paths:", "⚠️ "),
    ("Configuration:", "⚙️ "),
    ("Database Migration Lock:", "⚠️ "),
    ("Potential N+1 Queries:", "⚠️ "),
    ("Branching Strategy:", "🌿"),
)

LABEL_COLOR = "\033[0;36m"
BULLET_COLOR = "\033[0;90m"
TEXT_COLOR = "\033[0;37m"

_BULLET = re.compile(r"^\s*-\s")
_KEYWORDS = [
    (re.compile(r"\b" + re.escape(label)), f"{marker} {label}")
    for label, marker in KEYWORD_MARKERS
]

BANNER_WIDTH = 65


def banner(title):
    return [
        "╭" + "─" * BANNER_WIDTH + "╮",
        "│" + title.center(BANNER_WIDTH) + "│",
        "╰" + "─" * BANNER_WIDTH + "╯",
    ]


def highlight_keywords(line):
    for pattern, replacement in _KEYWORDS:
        line = pattern.sub(lambda _match, text=replacement: text, line)
    return line


def format_line(line):
    header = SECTION_HEADERS.get(line)
    if header is not None:
        color, title = header
        lines = [] if line == REVIEW_FIRST_SECTION else [""]
        return lines + [f"{color}{title}{RESET}", RULE]

    for prefix, marker in LABEL_PREFIXES:
        if line.startswith(prefix):
            return [f"{LABEL_COLOR}  {marker} {line}{RESET}"]

    if _BULLET.match(line):
        return [f"{BULLET_COLOR}    {highlight_keywords(line)}{RESET}"]
    return [f"{TEXT_COLOR}  {line}{RESET}"]


def format_review_lines(lines):
    """Colorize cleaned review lines for the terminal, keeping their order."""
    formatted = []
    for line in lines:
        formatted.extend(format_line(line))
    return formatted


__all__ = [
    "SECTION_HEADERS",
    "KEYWORD_MARKERS",
    "banner",
    "highlight_keywords",
    "format_line",
    "format_review_lines",
]
