from analyzer.diff_summary import (
    FullDiff,
    SummarizedDiff,
    parse_diff_stats,
    summarize_diff,
)
from analyzer.endpoints import (
    NO_API_CHANGES,
    EndpointEvidence,
    extract_endpoint_evidence,
)
from analyzer.registry import list_rules, register_rule

__all__ = [
    "FullDiff",
    "SummarizedDiff",
    "parse_diff_stats",
    "summarize_diff",
    "NO_API_CHANGES",
    "EndpointEvidence",
    "extract_endpoint_evidence",
    "list_rules",
    "register_rule",
]
