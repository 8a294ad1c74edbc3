"""Remote host access: types, SSH checks, shell helpers, provisioning."""

from hostdeploy.provisioning.remote import PROVISION_STEPS, provision_remote
from hostdeploy.provisioning.shell import run_shell_cmd
from hostdeploy.provisioning.ssh import check_ssh
from hostdeploy.provisioning.ssh_transport import (
    copy_directory,
    make_run_cmd,
    make_write_file,
    scp_path,
    ssh_base_args,
)
from hostdeploy.provisioning.types import RemoteHost

__all__ = [
    "RemoteHost",
    "check_ssh",
    "run_shell_cmd",
    "provision_remote",
    "PROVISION_STEPS",
    "ssh_base_args",
    "make_run_cmd",
    "make_write_file",
    "scp_path",
    "copy_directory",
]
