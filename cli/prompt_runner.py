import sys

from advisor.gemini_client import GeminiAdvisor
from cli.console import print_error, report_failure
from config.manager import load_config
from workflow.errors import ReviewError

USAGE = 'Usage: gemini-prompt "your prompt here"'
EXAMPLE = 'Example: gemini-prompt "What is the weather today?"'


def main(argv=None):
    args = sys.argv[1:] if argv is None else argv
    config = load_config()
    try:
        config.validate()
    except ReviewError as exc:
        report_failure(exc)
        return 1

    if len(args) != 1:
        print(USAGE)
        print(EXAMPLE)
        return 1

    try:
        return GeminiAdvisor(config).run_prompt(args[0])
    except FileNotFoundError:
        print_error(f"Missing dependencies: {config.gemini_command}")
        return 1


__all__ = ["main"]
