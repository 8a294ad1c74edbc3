"""Remote server provisioning: system upgrade, Docker, docker-compose and Nginx."""

import logging

logger = logging.getLogger(__name__)

_APT = "sudo DEBIAN_FRONTEND=noninteractive apt-get"

# (description, command) pairs, run in this order
PROVISION_STEPS = [
    ("Updating package index...", f"{_APT} update -y"),
    ("Upgrading system packages...", f"{_APT} upgrade -y"),
    ("Installing Docker, docker-compose and Nginx...", f"{_APT} install -y docker.io docker-compose nginx"),
    ("Enabling Docker...", "sudo systemctl enable docker --now"),
    ("Enabling Nginx...", "sudo systemctl enable nginx --now"),
    ("Adding user to docker group...", "sudo usermod -aG docker $USER || true"),
    ("Checking Docker version...", "docker --version"),
    ("Checking Nginx version...", "nginx -v 2>&1"),
]


async def provision_remote(run_cmd):
    """Prepare the remote server for deployment.

    Args:
        run_cmd: async callable(command, timeout=None, log_output=True) -> (returncode, stdout, stderr)

    Returns:
        True when every step succeeded; stops at the first failing step.
    """
    for description, command in PROVISION_STEPS:
        logger.info(description)
        rc, _, _ = await run_cmd(command)
        if rc != 0:
            logger.error(f"[ERROR] Remote provisioning failed: {command} (exit code {rc})")
            return False
    logger.info("Remote environment ready.")
    return True
