import os
import subprocess
import time

from observability.logger_factory import get_logger
from workflow.errors import MissingDependency

logger = get_logger("advisor.gemini_client")

AUTH_PROBE_PROMPT = "test"


class GeminiAdvisor:
    """Runs the ``gemini`` CLI as a blocking child process."""

    def __init__(self, config):
        self.config = config

    def _command(self, prompt):
        return [self.config.gemini_command, "-p", prompt]

    def _environment(self):
        env = dict(os.environ)
        env.update(self.config.to_env())
        return env

    def generate_review(self, prompt):
        """Return stdout and stderr of the CLI as one text, whatever its exit status."""
        started = time.monotonic()
        try:
            result = subprocess.run(
                self._command(prompt),
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                encoding="utf-8",
                errors="replace",
                env=self._environment(),
            )
        except FileNotFoundError as exc:
            raise MissingDependency(
                [self.config.gemini_command],
                hints=("Install Gemini CLI from: https://github.com/google-gemini/gemini-cli",),
            ) from exc

        output = result.stdout or ""
        logger.info(
            "gemini_review_finished",
            returncode=result.returncode,
            seconds=round(time.monotonic() - started, 2),
            output_chars=len(output),
        )
        return output

    def check_authentication(self):
        try:
            result = subprocess.run(
                self._command(AUTH_PROBE_PROMPT),
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                env=self._environment(),
            )
        except FileNotFoundError:
            return False
        logger.debug("gemini_auth_probe", returncode=result.returncode)
        return result.returncode == 0

    def run_prompt(self, prompt):
        """Run a free-form prompt, streaming output to the terminal; returns the exit code."""
        result = subprocess.run(self._command(prompt), env=self._environment())
        return result.returncode


__all__ = ["GeminiAdvisor", "AUTH_PROBE_PROMPT"]
