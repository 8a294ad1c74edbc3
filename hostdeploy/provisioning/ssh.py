"""SSH connectivity check."""

import logging

from hostdeploy.provisioning.shell import run_shell_cmd
from hostdeploy.provisioning.ssh_transport import ssh_base_args

logger = logging.getLogger(__name__)


async def check_ssh(host, dry_run=False, connect_timeout=10):
    """Run a single SSH round trip to the host.

    Not retried: an unreachable host fails the run.

    Returns:
        True if SSH connected, False otherwise.
    """
    logger.info("Checking SSH connection...")
    args = ssh_base_args(host, connect_timeout=connect_timeout)
    args.append("echo 'SSH connection successful'")
    rc, stdout, stderr = await run_shell_cmd(args, dry_run=dry_run)
    if rc != 0:
        logger.error(f"[ERROR] Cannot connect to {host.address}:{host.ssh_port}: {stderr.strip()}")
        return False
    if stdout.strip():
        logger.info(stdout.strip())
    return True
