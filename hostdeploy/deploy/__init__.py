"""Deploy library: parameters, repository sync, nginx site generation, orchestration."""

from hostdeploy.deploy.defaults import load_defaults
from hostdeploy.deploy.nginx import generate_site_conf
from hostdeploy.deploy.orchestrate import (
    app_start_commands,
    cleanup,
    deploy,
    run_cleanup,
    run_deploy,
)
from hostdeploy.deploy.params import DeployParams
from hostdeploy.deploy.repo import DockerSetup, detect_docker_setup, sync_repository

__all__ = [
    "DeployParams",
    "DockerSetup",
    "load_defaults",
    "generate_site_conf",
    "detect_docker_setup",
    "sync_repository",
    "app_start_commands",
    "run_deploy",
    "run_cleanup",
    "deploy",
    "cleanup",
]
