from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Tuple

from config.constants import PROJECT_URL, TOOL_TITLE, VERSION
from observability.logger_factory import get_logger
from workflow.errors import ReportWriteFailed

logger = get_logger("report.writer")

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


@dataclass(frozen=True)
class ReviewReport:
    project_name: str
    current_branch: str
    target_branch: str
    commit_hash: str
    commit_message: str
    author: str
    created_at: datetime
    changed_files: Tuple[str, ...]
    analysis: str
    tool_version: str = VERSION

    @property
    def changed_file_count(self):
        return len(self.changed_files)

    @property
    def timestamp(self):
        return self.created_at.strftime(TIMESTAMP_FORMAT)


def default_report_filename(now=None):
    now = now or datetime.now()
    return f"code-review-{now:%Y%m%d-%H%M%S}.md"


def render_report(report):
    changed = "\n".join(report.changed_files)
    return f"""# 🔍 AI Code Review Report

## 📋 Review Information
- **Project:** {report.project_name}
- **Branch:** `{report.current_branch}`
- **Target:** `{report.target_branch}`
- **Commit:** `{report.commit_hash}` - {report.commit_message}
- **Author:** {report.author}
- **Date:** {report.timestamp}
- **Files Changed:** {report.changed_file_count}
- **Tool:** {TOOL_TITLE} v{report.tool_version}

---

## 📁 Changed Files
```
{changed}
```

---

## 🤖 AI Analysis

{report.analysis}

---
*Generated by [{TOOL_TITLE}]({PROJECT_URL}) on {report.timestamp}*
"""


def write_report(report, path):
    path = Path(path)
    try:
        path.write_text(render_report(report), encoding="utf-8")
    except OSError as exc:
        raise ReportWriteFailed(str(path), reason=exc.strerror or str(exc)) from exc
    logger.info("report_written", path=str(path))
    return path


__all__ = [
    "ReviewReport",
    "default_report_filename",
    "render_report",
    "write_report",
]
