"""Interactive prompts for deploy parameters."""

import getpass
import os
import sys

from hostdeploy.deploy.params import DEFAULT_APP_PORT, DEFAULT_BRANCH, DEFAULT_SSH_KEY, DeployParams
from hostdeploy.redact import register_secret

TOKEN_ENV_VARS = ("GIT_TOKEN", "GITHUB_TOKEN")


class PromptAborted(Exception):
    """The user closed stdin or pressed Ctrl-C at a prompt."""


def _read(text, secret=False):
    try:
        if secret and sys.stdin.isatty():
            return getpass.getpass(text)
        return input(text)
    except (EOFError, KeyboardInterrupt):
        print()
        raise PromptAborted() from None


def prompt(msg, default="", secret=False):
    """Ask for a value; an empty answer returns *default*."""
    if default:
        suffix = " [hidden]" if secret else f" [{default}]"
    else:
        suffix = ""
    value = _read(f"{msg}{suffix}: ", secret=secret).strip()
    return value if value else default


def prompt_required(msg, default=""):
    """Ask until a non-empty value is given."""
    while True:
        value = prompt(msg, default)
        if value:
            return value
        print("A value is required.")


def prompt_port(msg, default, min_val=1, max_val=65535):
    """Ask until an integer port in range is given."""
    while True:
        raw = prompt(msg, str(default))
        try:
            value = int(raw)
            if min_val <= value <= max_val:
                return value
        except ValueError:
            pass
        print(f"Please enter a number between {min_val} and {max_val}.")


def _token_default():
    for var in TOKEN_ENV_VARS:
        value = os.environ.get(var, "")
        if value:
            return value
    return ""


def collect_deploy_params(defaults=None, dry_run=False):
    """Prompt for everything a deployment needs, in the documented order."""
    defaults = defaults or {}
    repo_url = prompt_required("Enter your Git repository URL", defaults.get("repo_url", ""))
    token = prompt("Enter your Personal Access Token (PAT)", _token_default(), secret=True)
    register_secret(token)
    branch = prompt("Enter branch name", defaults.get("branch", DEFAULT_BRANCH))
    ssh_user = prompt_required("Enter SSH username", defaults.get("ssh_user", ""))
    server_ip = prompt_required("Enter server IP address", defaults.get("server_ip", ""))
    ssh_key = prompt("Enter SSH key path", defaults.get("ssh_key", DEFAULT_SSH_KEY))
    app_port = prompt_port("Enter internal application port", defaults.get("app_port", DEFAULT_APP_PORT))

    return DeployParams(
        repo_url=repo_url,
        token=token,
        branch=branch,
        ssh_user=ssh_user,
        server_ip=server_ip,
        ssh_key=ssh_key,
        app_port=app_port,
        ssh_port=defaults.get("ssh_port", 22),
        dry_run=dry_run,
    )


def collect_cleanup_params(defaults=None, dry_run=False):
    """Prompt for the values needed to locate a previous deployment."""
    defaults = defaults or {}
    repo_url = prompt_required("Enter your Git repository URL", defaults.get("repo_url", ""))
    ssh_user = prompt_required("Enter SSH username", defaults.get("ssh_user", ""))
    server_ip = prompt_required("Enter server IP address", defaults.get("server_ip", ""))
    ssh_key = prompt("Enter SSH key path", defaults.get("ssh_key", DEFAULT_SSH_KEY))

    return DeployParams(
        repo_url=repo_url,
        ssh_user=ssh_user,
        server_ip=server_ip,
        ssh_key=ssh_key,
        app_port=defaults.get("app_port", DEFAULT_APP_PORT),
        ssh_port=defaults.get("ssh_port", 22),
        dry_run=dry_run,
    )
