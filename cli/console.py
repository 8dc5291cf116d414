import sys

RED = "\033[0;31m"
GREEN = "\033[0;32m"
YELLOW = "\033[1;33m"
BLUE = "\033[0;34m"
PURPLE = "\033[0;35m"
NC = "\033[0m"


def print_error(message):
    print(f"{RED}❌ Error: {message}{NC}", file=sys.stderr)


def print_success(message):
    print(f"{GREEN}✅ {message}{NC}")


def print_warning(message):
    print(f"{YELLOW}⚠️  {message}{NC}")


def print_info(message):
    print(f"{BLUE}ℹ️  {message}{NC}")


def print_header(message):
    print(f"{PURPLE}🔍 {message}{NC}")


def report_failure(error):
    print_error(error.message)
    for hint in error.hints:
        print_info(hint)


__all__ = [
    "print_error",
    "print_success",
    "print_warning",
    "print_info",
    "print_header",
    "report_failure",
]
