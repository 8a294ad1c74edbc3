"""Deploy orchestration: run_deploy, run_cleanup, deploy, cleanup."""

import logging
import os

from hostdeploy.deploy.nginx import enable_site_cmd, generate_site_conf, remove_site_cmd, site_paths
from hostdeploy.deploy.params import DeployParams, validate_repo_name
from hostdeploy.deploy.repo import COMPOSE_FILES, DockerSetup, detect_docker_setup, sync_repository
from hostdeploy.provisioning.remote import provision_remote
from hostdeploy.provisioning.ssh import check_ssh
from hostdeploy.provisioning.ssh_transport import copy_directory, make_run_cmd, make_write_file
from hostdeploy.validate import probe_http, validate_remote

logger = logging.getLogger(__name__)


def app_start_commands(setup: DockerSetup, params: DeployParams):
    """Commands that (re)start the application from its project directory."""
    if setup.is_compose:
        compose = f"sudo docker-compose -f {setup.filename}"
        return [
            f"{compose} down || true",
            f"{compose} up -d --build",
        ]

    name = params.container_name
    port = params.app_port
    return [
        f"sudo docker build -t {name} .",
        f"sudo docker rm -f {name} || true",
        f"sudo docker run -d --name {name} --restart unless-stopped -p {port}:{port} {name}",
    ]


async def run_deploy(run_cmd, app_cmd, write_file, copy_dir, params: DeployParams, repo_dir, setup: DockerSetup):
    """Remote half of the deployment, once SSH is known to work.

    Args:
        run_cmd: async callable(command, timeout=None, log_output=True) -> (returncode, stdout, stderr)
        app_cmd: same as run_cmd, but runs from the remote project directory
        write_file: async callable(remote_path, content, sudo=False) -> bool
        copy_dir: async callable(local_dir) -> bool, copies into the remote home
        params: deploy parameters
        repo_dir: local repository path
        setup: detected Docker setup

    Returns:
        True on success; stops at the first failing step.
    """
    # Step 1: Provision
    if not await provision_remote(run_cmd):
        return False

    # Step 2: Copy project files
    logger.info("Copying project files to remote server...")
    if not await copy_dir(repo_dir):
        logger.error(f"[ERROR] Failed to copy {repo_dir} to {params.host.address}:{params.remote_dir}")
        return False

    # Step 3: Start the application
    if setup.is_compose:
        logger.info(f"Running docker-compose deployment ({setup.filename})...")
    else:
        logger.info("Running Docker build and run...")
    for command in app_start_commands(setup, params):
        rc, _, _ = await app_cmd(command)
        if rc != 0:
            logger.error(f"[ERROR] Application start failed: {command} (exit code {rc})")
            return False

    # Step 4: Configure nginx
    logger.info(f"Configuring Nginx reverse proxy (port 80 -> {params.app_port})...")
    available, _ = site_paths(params.repo_name)
    if not await write_file(available, generate_site_conf(params.repo_name, params.app_port), sudo=True):
        logger.error(f"[ERROR] Failed to write {available}")
        return False
    rc, _, _ = await run_cmd(enable_site_cmd(params.repo_name))
    if rc != 0:
        logger.error("[ERROR] Nginx configuration test or reload failed")
        return False

    # Step 5: Validate
    if not await validate_remote(run_cmd):
        return False
    await probe_http(f"http://{params.server_ip}/", dry_run=params.dry_run)
    return True


async def run_cleanup(run_cmd, params: DeployParams):
    """Stop the application, remove its nginx site and project directory."""
    try:
        validate_repo_name(params.repo_name, params.repo_url)
    except ValueError as e:
        logger.error(f"[ERROR] {e}")
        return False

    compose_test = " || ".join(f"[ -f {name} ]" for name in COMPOSE_FILES)
    steps = [
        (
            "Stopping application containers...",
            f"cd {params.remote_dir} && if {compose_test}; then sudo docker-compose down;"
            f" else sudo docker rm -f {params.container_name}; fi || true",
        ),
        ("Removing Nginx site...", remove_site_cmd(params.repo_name)),
        ("Removing project files...", f"rm -rf {params.remote_dir}"),
    ]
    for description, command in steps:
        logger.info(description)
        rc, _, _ = await run_cmd(command)
        if rc != 0:
            logger.error(f"[ERROR] Cleanup step failed: {command} (exit code {rc})")
            return False
    logger.info("Cleanup complete.")
    return True


async def deploy(params: DeployParams, workdir=".") -> bool:
    """Full deployment: repository, Docker check, SSH, then the remote steps."""
    repo_dir = await sync_repository(params, workdir)
    if repo_dir is None:
        return False

    if params.dry_run and not os.path.isdir(repo_dir):
        # Nothing was cloned in dry-run mode
        logger.info("[dry-run] Repository not on disk, assuming Dockerfile deployment")
        setup = DockerSetup(mode="dockerfile", filename="Dockerfile")
    else:
        setup = detect_docker_setup(repo_dir)
        if setup is None:
            logger.error("[ERROR] No Dockerfile or docker-compose.yml found in repository.")
            return False
        logger.info(f"[SUCCESS] Docker configuration found: {setup.filename}")

    host = params.host
    if not await check_ssh(host, dry_run=params.dry_run):
        return False

    run_cmd = make_run_cmd(host, dry_run=params.dry_run)
    app_cmd = make_run_cmd(host, workdir=params.remote_dir, dry_run=params.dry_run)
    write_file = make_write_file(host, dry_run=params.dry_run)

    async def copy_dir(local_dir):
        return await copy_directory(local_dir, host, dry_run=params.dry_run)

    return await run_deploy(run_cmd, app_cmd, write_file, copy_dir, params, repo_dir, setup)


async def cleanup(params: DeployParams) -> bool:
    """Remove a previous deployment from the server."""
    host = params.host
    if not await check_ssh(host, dry_run=params.dry_run):
        return False
    run_cmd = make_run_cmd(host, dry_run=params.dry_run)
    return await run_cleanup(run_cmd, params)
