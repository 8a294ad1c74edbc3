"""Local repository handling: clone or pull, then detect the Docker setup."""

import logging
import os
from dataclasses import dataclass

from hostdeploy.provisioning.shell import run_shell_cmd

logger = logging.getLogger(__name__)

COMPOSE_FILES = ("docker-compose.yml", "docker-compose.yaml")
DOCKERFILE = "Dockerfile"


@dataclass
class DockerSetup:
    """How the application is started on the remote host."""

    mode: str  # "compose" or "dockerfile"
    filename: str

    @property
    def is_compose(self) -> bool:
        return self.mode == "compose"


async def sync_repository(params, workdir):
    """Clone the repository into *workdir*, or pull if it is already there.

    The PAT is only passed on the command line; after a fresh clone the
    origin remote is reset to the plain URL so the token does not stay in
    .git/config (which is copied to the server later).

    Returns:
        Local repository path, or None on failure.
    """
    repo_dir = os.path.join(os.path.abspath(workdir), params.repo_name)

    if os.path.isdir(repo_dir):
        logger.info("Repository exists. Pulling latest changes...")
        rc, _, _ = await run_shell_cmd(
            ["git", "-C", repo_dir, "pull", params.auth_url, params.branch],
            dry_run=params.dry_run,
            log_output=True,
        )
        if rc != 0:
            logger.error(f"[ERROR] git pull failed for branch '{params.branch}'")
            return None
        return repo_dir

    logger.info("Cloning repository...")
    rc, _, _ = await run_shell_cmd(
        ["git", "clone", "-b", params.branch, params.auth_url, repo_dir],
        dry_run=params.dry_run,
        log_output=True,
    )
    if rc != 0:
        logger.error(f"[ERROR] git clone failed for {params.repo_url} (branch '{params.branch}')")
        return None

    if params.auth_url != params.repo_url:
        rc, _, _ = await run_shell_cmd(
            ["git", "-C", repo_dir, "remote", "set-url", "origin", params.repo_url],
            dry_run=params.dry_run,
        )
        if rc != 0:
            logger.error("[ERROR] Failed to reset origin URL after clone")
            return None
    return repo_dir


def detect_docker_setup(repo_dir):
    """Find the Docker configuration at the repository root.

    A compose file takes precedence over a Dockerfile.

    Returns:
        DockerSetup, or None when neither file exists.
    """
    for name in COMPOSE_FILES:
        if os.path.isfile(os.path.join(repo_dir, name)):
            return DockerSetup(mode="compose", filename=name)
    if os.path.isfile(os.path.join(repo_dir, DOCKERFILE)):
        return DockerSetup(mode="dockerfile", filename=DOCKERFILE)
    return None
