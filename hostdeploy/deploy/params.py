"""Deploy parameters collected from the prompts."""

import os
import re
from dataclasses import dataclass

from hostdeploy.provisioning.types import RemoteHost

DEFAULT_BRANCH = "main"
DEFAULT_SSH_KEY = "~/.ssh/id_rsa"
DEFAULT_APP_PORT = 3000


def repo_name_from_url(url):
    """Repository name from its URL, like ``basename -s .git``."""
    name = url.rstrip("/").rsplit("/", 1)[-1]
    # scp-style URLs: git@github.com:org/repo.git
    name = name.rsplit(":", 1)[-1]
    if name.endswith(".git"):
        name = name[: -len(".git")]
    return name


_REPO_NAME_RE = re.compile(r"^[A-Za-z0-9._-]+$")


def validate_repo_name(name, url):
    """Reject names that are not a single safe path segment.

    The name becomes ~/<name> on the host, which cleanup deletes with rm -rf.
    """
    if name in ("", ".", "..") or not _REPO_NAME_RE.match(name):
        raise ValueError(f"Cannot derive a repository name from URL '{url}' (got '{name}')")
    return name


def authenticated_url(url, token):
    """Embed a PAT into an HTTPS clone URL: https://<token>@host/path."""
    if not token or not url.startswith("https://"):
        return url
    rest = url[len("https://"):]
    # Drop any credentials already present in the URL
    if "@" in rest.split("/", 1)[0]:
        rest = rest.split("@", 1)[1]
    return f"https://{token}@{rest}"


def docker_name(repo_name):
    """Lower-cased repo name restricted to characters Docker accepts in names."""
    name = re.sub(r"[^a-z0-9_.-]+", "-", repo_name.lower()).strip("-._")
    return name or "app"


@dataclass
class DeployParams:
    """All parameters needed for a single deployment run."""

    repo_url: str
    server_ip: str
    ssh_user: str
    token: str = ""
    branch: str = DEFAULT_BRANCH
    ssh_key: str = DEFAULT_SSH_KEY
    app_port: int = DEFAULT_APP_PORT
    ssh_port: int = 22
    dry_run: bool = False

    def __post_init__(self):
        self.branch = self.branch or DEFAULT_BRANCH
        validate_repo_name(repo_name_from_url(self.repo_url), self.repo_url)
        self.ssh_key = os.path.expanduser(os.path.expandvars(self.ssh_key)) if self.ssh_key else ""

    @property
    def repo_name(self) -> str:
        return repo_name_from_url(self.repo_url)

    @property
    def auth_url(self) -> str:
        return authenticated_url(self.repo_url, self.token)

    @property
    def remote_dir(self) -> str:
        """Project directory on the remote host."""
        return f"~/{self.repo_name}"

    @property
    def container_name(self) -> str:
        return docker_name(self.repo_name)

    @property
    def host(self) -> RemoteHost:
        return RemoteHost(host=self.server_ip, username=self.ssh_user, ssh_key=self.ssh_key, ssh_port=self.ssh_port)
