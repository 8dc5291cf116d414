import argparse

from advisor.prompt_builder import SUPPORTED_LANGUAGES, validate_language
from cli.app import run as run_cli
from cli.console import print_error, report_failure
from config.constants import SCRIPT_NAME, TOOL_TITLE, VERSION
from config.manager import load_config
from observability.logger_factory import configure_logging
from workflow.errors import UnsupportedLanguage

EPILOG = f"""examples:
  {SCRIPT_NAME} --target main
  {SCRIPT_NAME} --target develop --no-save
  {SCRIPT_NAME} --target main --save-to review.md
  {SCRIPT_NAME} --target main --convention team-convention.md
  {SCRIPT_NAME} --target main --language vi
  {SCRIPT_NAME} --setup
  {SCRIPT_NAME} --repair

requirements:
  1. Git repository with commits
  2. Gemini CLI installed (gemini-cli)
  3. GOOGLE_CLOUD_PROJECT environment variable set
  4. Authenticated with Gemini CLI (gemini)

supported languages:
  {", ".join(f"{code} ({name})" for code, name in SUPPORTED_LANGUAGES.items())}

Review results are saved to markdown files in the current directory.
Default filename format: code-review-YYYYMMDD-HHMMSS.md
"""


class ReviewArgumentParser(argparse.ArgumentParser):
    def error(self, message):
        print_error(message)
        print("")
        self.print_help()
        self.exit(1)


def build_parser():
    parser = ReviewArgumentParser(
        prog=SCRIPT_NAME,
        description=f"{TOOL_TITLE} v{VERSION}",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"{SCRIPT_NAME} version {VERSION}",
    )
    parser.add_argument(
        "--target",
        metavar="BRANCH",
        help="Target branch to compare against (e.g., main, develop).",
    )
    parser.add_argument(
        "--save-to",
        metavar="FILE",
        help="Save review results to FILE (default: code-review-YYYYMMDD-HHMMSS.md).",
    )
    parser.add_argument(
        "--no-save",
        action="store_true",
        help="Don't save review results to file (output only to console).",
    )
    parser.add_argument(
        "--convention",
        metavar="FILE",
        help="Include team convention file as context for review.",
    )
    parser.add_argument(
        "--language",
        metavar="LANG",
        help="Add translation after each section: "
        + ", ".join(SUPPORTED_LANGUAGES),
    )
    parser.add_argument(
        "--setup",
        action="store_true",
        help="Setup authentication and dependencies.",
    )
    parser.add_argument(
        "--repair",
        action="store_true",
        help="Run troubleshooting and repair tool.",
    )
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        validate_language(args.language)
    except UnsupportedLanguage as exc:
        report_failure(exc)
        return 1

    config = load_config()
    configure_logging(config.log_level, config.log_format)

    if not (args.setup or args.repair or args.target):
        print_error("Target branch is required")
        print("")
        parser.print_help()
        return 1

    return run_cli(args, config)


if __name__ == "__main__":
    raise SystemExit(main())
