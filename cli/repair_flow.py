import os
import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path

from advisor.gemini_client import GeminiAdvisor
from cli.console import print_header, print_info, print_success, print_warning
from config.constants import ALIASES, ENV_PROJECT_ID, INSTALL_DIR, PROJECT_URL, SCRIPT_NAME
from config.manager import load_config, shell_profile_path
from observability.logger_factory import configure_logging

INSTALLER_COMMAND = (
    'bash -c "$(curl -fsSL https://raw.githubusercontent.com/taigroddy/ai-code-review/main/install.sh)"'
)


@dataclass(frozen=True)
class DiagnosticResult:
    name: str
    ok: bool
    detail: str
    fix: str = ""


def locate_command(environ=None):
    environ = os.environ if environ is None else environ
    found = shutil.which(SCRIPT_NAME, path=environ.get("PATH", ""))
    return Path(found) if found else INSTALL_DIR / SCRIPT_NAME


def _profile_mentions(profile, text):
    if not profile.is_file():
        return False
    return text in profile.read_text(encoding="utf-8", errors="replace")


def check_binary(command_path):
    if not command_path.is_file():
        return DiagnosticResult(
            "binary", False, f"Binary not found at: {command_path}",
            fix=f"Re-run the installer: {INSTALLER_COMMAND}",
        )
    if not os.access(command_path, os.X_OK):
        return DiagnosticResult(
            "binary", False, f"Binary exists but is not executable: {command_path}",
            fix=f"chmod +x {command_path}",
        )
    return DiagnosticResult("binary", True, f"Binary found at: {command_path}")


def check_path(command_path, environ, profile):
    directory = str(command_path.parent)
    entries = environ.get("PATH", "").split(os.pathsep)
    if directory in entries:
        return DiagnosticResult("path", True, "Install directory is in PATH")
    if _profile_mentions(profile, directory):
        return DiagnosticResult(
            "path", False, "PATH entry exists in config but not active",
            fix=f"source {profile}",
        )
    return DiagnosticResult(
        "path", False, "Install directory NOT in PATH",
        fix=f"echo 'export PATH=\"$PATH:{directory}\"' >> {profile}",
    )


def check_command(command_path):
    try:
        result = subprocess.run(
            [str(command_path), "--version"],
            capture_output=True,
            text=True,
        )
    except OSError as exc:
        return DiagnosticResult(
            "command", False, f"Command '{SCRIPT_NAME}' not accessible ({exc.strerror})",
            fix="Check the PATH and binary checks above",
        )
    output = (result.stdout or result.stderr).strip()
    if result.returncode != 0:
        return DiagnosticResult(
            "command", False, f"Command found but execution failed: {output}",
        )
    return DiagnosticResult("command", True, f"Command executes successfully: {output}")


def check_aliases(profile):
    results = []
    for alias in ALIASES:
        present = _profile_mentions(profile, f"alias {alias}=")
        detail = f"Alias '{alias}' is defined" if present else f"Alias '{alias}' not found"
        fix = "" if present else f"echo \"alias {alias}='{SCRIPT_NAME}'\" >> {profile}"
        results.append(DiagnosticResult(f"alias:{alias}", present, detail, fix=fix))
    return results


def check_dependencies(config, advisor=None):
    results = []
    gemini_found = shutil.which(config.gemini_command) is not None
    if not gemini_found:
        results.append(
            DiagnosticResult(
                "gemini", False, "Gemini CLI not found",
                fix="Install from: https://github.com/google-gemini/gemini-cli",
            )
        )
    else:
        results.append(DiagnosticResult("gemini", True, "Gemini CLI found"))
        if not config.project_id:
            results.append(
                DiagnosticResult(
                    "project", False, f"{ENV_PROJECT_ID} not set",
                    fix=f'export {ENV_PROJECT_ID}="your-project-id"',
                )
            )
        else:
            results.append(
                DiagnosticResult("project", True, f"{ENV_PROJECT_ID} is set: {config.project_id}")
            )
            advisor = advisor or GeminiAdvisor(config)
            if advisor.check_authentication():
                results.append(DiagnosticResult("auth", True, "Gemini authentication works"))
            else:
                results.append(
                    DiagnosticResult("auth", False, "Gemini authentication failed", fix="gemini")
                )

    if shutil.which("git") is None:
        results.append(DiagnosticResult("git", False, "Git not found", fix="Install Git first"))
    else:
        results.append(DiagnosticResult("git", True, "Git found"))
    return results


def run_diagnostics(config, environ=None, profile=None, advisor=None):
    environ = os.environ if environ is None else environ
    profile = Path(profile) if profile is not None else shell_profile_path(environ.get("SHELL", ""))
    command_path = locate_command(environ)

    results = [check_binary(command_path), check_path(command_path, environ, profile)]
    if command_path.is_file():
        results.append(check_command(command_path))
    results.extend(check_aliases(profile))
    results.extend(check_dependencies(config, advisor=advisor))
    return results


def installation_healthy(results):
    by_name = {result.name: result for result in results}
    command_ok = by_name.get("command") is not None and by_name["command"].ok
    any_alias = any(result.ok for result in results if result.name.startswith("alias:"))
    return command_ok and any_alias


def print_diagnostics(results, profile):
    for result in results:
        if result.ok:
            print_success(result.detail)
        else:
            print_warning(result.detail)
            if result.fix:
                print_info(f"Fix: {result.fix}")

    print("")
    print_header("🎯 Summary & Recommendations")
    print("")
    if installation_healthy(results):
        print_success("Everything looks good! Your installation is working.")
        print_info("Try: cr --target main")
    else:
        print_warning("Issues detected. Quick fixes:")
        print("")
        print_info("Quick fix (run these commands):")
        print(f'export PATH="$PATH:{INSTALL_DIR}"')
        for alias in ALIASES:
            print(f"alias {alias}='{SCRIPT_NAME}'")
        print("")
        print_info("Permanent fix:")
        print(f"source {profile}")
        print("")
        print_info("If still not working, re-run installer:")
        print(INSTALLER_COMMAND)

    print("")
    print_info(f"For more help, visit: {PROJECT_URL}")


def run_repair(config, environ=None, profile=None, advisor=None):
    environ = os.environ if environ is None else environ
    profile = Path(profile) if profile is not None else shell_profile_path(environ.get("SHELL", ""))
    print_header("AI Code Review Tool Troubleshooting")
    print("")
    results = run_diagnostics(config, environ=environ, profile=profile, advisor=advisor)
    print_diagnostics(results, profile)
    return results


def main():
    config = load_config()
    configure_logging(config.log_level, config.log_format)
    run_repair(config)
    return 0


__all__ = [
    "DiagnosticResult",
    "locate_command",
    "check_binary",
    "check_path",
    "check_command",
    "check_aliases",
    "check_dependencies",
    "run_diagnostics",
    "installation_healthy",
    "print_diagnostics",
    "run_repair",
    "main",
]
