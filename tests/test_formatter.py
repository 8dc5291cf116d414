from advisor.prompt_builder import REVIEW_SECTIONS
from report.formatter import (
    clean_for_report,
    clean_for_terminal,
    collapse_blank_lines,
    soften_markdown,
)
from report.terminal import (
    RULE,
    SECTION_HEADERS,
    format_line,
    format_review_lines,
    highlight_keywords,
)

NOISY = """\
[ERROR] [IDEClient] Failed to connect to IDE companion extension
Failed to connect to IDE companion extension in VS Code.
Please ensure the extension is running
To install the extension, run /ide install
Loaded cached credentials.


1. Changes:
- **Commits:** `abc123` add route


```go
fmt.Println("x")
```
2. Impact:
"""


def test_soften_markdown():
    assert soften_markdown("**Bold** and `code`") == "Bold and code"
    assert soften_markdown("```go") == ""
    assert soften_markdown("   ```") == ""
    assert soften_markdown("plain") == "plain"


def test_clean_for_report_removes_noise_and_collapses_blanks():
    cleaned = clean_for_report(NOISY)

    assert "IDEClient" not in cleaned
    assert "IDE companion" not in cleaned
    assert "/ide install" not in cleaned
    assert "cached credentials" not in cleaned
    assert "**" not in cleaned
    assert "`" not in cleaned
    assert cleaned.startswith("1. Changes:")
    assert "\n\n\n" not in cleaned
    assert cleaned.splitlines() == [
        "1. Changes:",
        "- Commits: abc123 add route",
        "",
        'fmt.Println("x")',
        "",
        "2. Impact:",
    ]


def test_clean_for_terminal_only_drops_known_noise():
    lines = clean_for_terminal(NOISY)

    assert lines[0] == "Failed to connect to IDE companion extension in VS Code."
    assert "Loaded cached credentials." not in lines
    assert "1. Changes:" in lines
    assert "- Commits: abc123 add route" in lines


def test_collapse_blank_lines():
    assert collapse_blank_lines(["", "  ", "a", "", "", "b", " "]) == ["a", "", "b", ""]


def test_section_headers_are_colored_with_rule():
    changes = format_line("1. Changes:")
    assert len(changes) == 2
    assert "🔄 1. CHANGES" in changes[0]
    assert changes[1] == RULE

    impact = format_line("2. Impact:")
    assert impact[0] == ""
    assert "⚡ 2. IMPACT" in impact[1]


def test_labels_bullets_and_text():
    assert "📝 - Commits:" in format_line("- Commits:")[0]
    assert "📁 - Files:" in format_line("- Files:")[0]
    assert format_line("  - item")[0].startswith("\033[0;90m      - item")
    assert format_line("plain text")[0].startswith("\033[0;37m  plain text")


def test_keyword_markers():
    assert highlight_keywords("- Security: check input") == "- 🔐 Security: check input"
    assert highlight_keywords("- Potential N+1 Queries: loop") == "- ⚠️  Potential N+1 Queries: loop"
    assert highlight_keywords("- Insecurity: none") == "- Insecurity: none"


def test_format_review_lines_preserves_order():
    formatted = format_review_lines(["1. Changes:", "text", "5. Other:", "- Testing: add"])
    joined = "\n".join(formatted)
    assert joined.index("1. CHANGES") < joined.index("text") < joined.index("5. OTHER")
    assert "🧪 Testing: add" in formatted[-1]


def test_terminal_headers_follow_prompt_sections():
    assert list(SECTION_HEADERS) == list(REVIEW_SECTIONS)
