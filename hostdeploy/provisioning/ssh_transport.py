"""SSH transport: run commands, write files and copy directories via SSH/SCP."""

import logging
import os
import tempfile

from hostdeploy.provisioning.shell import run_shell_cmd

logger = logging.getLogger(__name__)

_COMMON_OPTS = [
    "-o", "StrictHostKeyChecking=no",
    "-o", "UserKnownHostsFile=/dev/null",
    "-o", "BatchMode=yes",
    "-o", "ServerAliveInterval=60",
    "-o", "ServerAliveCountMax=5",
]


def ssh_base_args(host, connect_timeout=None):
    """Build base SSH arguments for a RemoteHost."""
    args = ["ssh", *_COMMON_OPTS]
    if connect_timeout:
        args += ["-o", f"ConnectTimeout={connect_timeout}"]
    if host.ssh_key:
        args += ["-i", host.ssh_key]
    if host.ssh_port and host.ssh_port != 22:
        args += ["-p", str(host.ssh_port)]
    args.append(host.address)
    return args


def scp_base_args(host, recursive=False):
    """Build base SCP arguments (without source and destination)."""
    args = ["scp", *_COMMON_OPTS]
    if recursive:
        args.append("-r")
    if host.ssh_key:
        args += ["-i", host.ssh_key]
    if host.ssh_port and host.ssh_port != 22:
        args += ["-P", str(host.ssh_port)]
    return args


def make_run_cmd(host, workdir=None, dry_run=False):
    """Create a run_cmd callable for SSH execution.

    Commands run from *workdir* on the remote host when it is given.
    """

    async def run_cmd(command, timeout=None, log_output=True):
        full_cmd = f"cd {workdir} && {command}" if workdir else command
        if dry_run:
            logger.info(f"[dry-run] ssh {host.address}: {full_cmd}")
            return 0, "", ""

        ssh_args = ssh_base_args(host)
        ssh_args.append(full_cmd)
        return await run_shell_cmd(ssh_args, timeout=timeout, log_output=log_output)

    return run_cmd


async def scp_path(local_path, host, remote_path, recursive=False, timeout=None):
    """Copy a local file or directory to the remote server via SCP.

    Returns:
        (returncode, stderr) tuple
    """
    scp_args = scp_base_args(host, recursive=recursive)
    scp_args += [local_path, f"{host.address}:{remote_path}"]
    rc, _, stderr = await run_shell_cmd(scp_args, timeout=timeout)
    if rc != 0:
        logger.error(f"[ERROR] SCP failed: {local_path} -> {host.address}:{remote_path}: {stderr.strip()}")
    return rc, stderr


async def copy_directory(local_dir, host, dry_run=False, timeout=None):
    """Copy *local_dir* into the remote user's home directory.

    The directory keeps its basename, so ``./myapp`` lands in ``~/myapp``.
    """
    local_dir = os.path.normpath(local_dir)
    if dry_run:
        logger.info(f"[dry-run] scp -r {local_dir} -> {host.address}:~/{os.path.basename(local_dir)}")
        return True
    rc, _ = await scp_path(local_dir, host, "", recursive=True, timeout=timeout)
    return rc == 0


def make_write_file(host, dry_run=False):
    """Create a write_file callable that places files on the remote server.

    Files are SCPed to /tmp first; with ``sudo=True`` they are then moved
    into place with sudo so root-owned paths like /etc/nginx can be written.
    """

    async def write_file(remote_path, content, sudo=False):
        staging_path = f"/tmp/hostdeploy_{os.path.basename(remote_path)}"
        if dry_run:
            logger.info(f"[dry-run] scp {os.path.basename(remote_path)} -> {host.address}:{remote_path}")
            return True

        # Write to a temp file locally, then SCP
        with tempfile.NamedTemporaryFile(mode="w", suffix=f"_{os.path.basename(remote_path)}", delete=False) as f:
            f.write(content)
            tmp_path = f.name

        try:
            rc, _ = await scp_path(tmp_path, host, staging_path if sudo else remote_path)
        finally:
            os.unlink(tmp_path)
        if rc != 0:
            return False

        if sudo:
            args = ssh_base_args(host)
            args.append(f"sudo mv {staging_path} {remote_path} && sudo chown root:root {remote_path}")
            rc, _, stderr = await run_shell_cmd(args)
            if rc != 0:
                logger.error(f"[ERROR] Failed to move {staging_path} to {remote_path}: {stderr.strip()}")
                return False
        return True

    return write_file
