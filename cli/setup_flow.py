from dataclasses import replace

from advisor.gemini_client import GeminiAdvisor
from cli.console import print_header, print_info, print_success
from cli.prompts import ask
from config.constants import SCRIPT_NAME
from config.manager import save_project_id
from workflow.errors import ConfigurationMissing, NotAGitRepository
from workflow.preconditions import check_authentication, check_dependencies, check_git_repo


def prompt_project_id(config, prompt=ask):
    project_id = prompt("Enter your Google Cloud Project ID: ")
    if not project_id:
        raise ConfigurationMissing("Project ID is required")
    profile = save_project_id(project_id)
    print_success(f"Project ID saved to shell profile: {profile}")
    return replace(config, project_id=project_id)


def run_setup(config, prompt=ask, advisor_factory=GeminiAdvisor):
    print_header("Setting up AI Code Review Tool")

    try:
        check_git_repo()
    except NotAGitRepository as exc:
        exc.hints += ("Please run this setup in a git repository",)
        raise
    check_dependencies(config)

    if not config.project_id:
        print("")
        config = prompt_project_id(config, prompt=prompt)

    print_info("Testing Gemini authentication...")
    check_authentication(config, advisor_factory(config))
    print_success("Authentication verified")

    print_success("Setup completed successfully!")
    print("")
    print_info(f"You can now run: {SCRIPT_NAME} --target main")
    return config


__all__ = ["prompt_project_id", "run_setup"]
