class ReviewError(Exception):
    def __init__(self, message, hints=()):
        super().__init__(message)
        self.message = message
        self.hints = tuple(hints)


class PreconditionFailure(ReviewError):
    pass


class InputValidationFailure(ReviewError):
    pass


class ExecutionFailure(ReviewError):
    pass


class NotAGitRepository(PreconditionFailure):
    def __init__(self):
        super().__init__(
            "Not a git repository. Please run this command in a git repository."
        )


class MissingDependency(PreconditionFailure):
    def __init__(self, names, hints=()):
        self.names = tuple(names)
        super().__init__(f"Missing dependencies: {' '.join(self.names)}", hints)


class ConfigurationMissing(PreconditionFailure):
    pass


class AuthenticationFailed(PreconditionFailure):
    def __init__(self, command="gemini"):
        super().__init__(
            "Gemini authentication failed",
            hints=(f"Authorize Gemini CLI by running: {command}",),
        )


class UncommittedChanges(PreconditionFailure):
    def __init__(self, status_lines=()):
        self.status_lines = tuple(status_lines)
        super().__init__(
            "You have uncommitted changes. "
            "Please commit your changes before running code review.",
            hints=(
                "Uncommitted files:",
                *self.status_lines,
                "Commit your changes with:",
                "  git add .",
                '  git commit -m "Your commit message"',
            ),
        )


class BranchNotFound(PreconditionFailure):
    def __init__(self, branch, available=()):
        self.branch = branch
        self.available = tuple(available)
        super().__init__(
            f"Branch '{branch}' not found locally or remotely",
            hints=("Available branches:", *self.available),
        )


class UnsupportedLanguage(InputValidationFailure):
    def __init__(self, code, supported):
        self.code = code
        listing = ", ".join(f"{key} ({name})" for key, name in supported.items())
        super().__init__(
            f"Unsupported language: {code}",
            hints=(f"Supported languages: {listing}",),
        )


class ReportWriteFailed(ExecutionFailure):
    def __init__(self, path, reason=""):
        self.path = path
        message = f"Failed to save review to file: {path}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


__all__ = [
    "ReviewError",
    "PreconditionFailure",
    "InputValidationFailure",
    "ExecutionFailure",
    "NotAGitRepository",
    "MissingDependency",
    "ConfigurationMissing",
    "AuthenticationFailed",
    "UncommittedChanges",
    "BranchNotFound",
    "UnsupportedLanguage",
    "ReportWriteFailed",
]
