"""Shared pytest fixtures for all test modules."""

import os
import subprocess
import sys

import pytest

import hostdeploy.redact as redact_module
from hostdeploy.deploy.params import DeployParams

PROJECT_ROOT = os.path.normpath(os.path.join(os.path.dirname(__file__), ".."))


@pytest.fixture(scope="session")
def project_root():
    """Absolute path to the project root directory."""
    return PROJECT_ROOT


@pytest.fixture(scope="session")
def run_cli(project_root):
    """Return a callable that invokes the hostdeploy CLI as a subprocess.

    Prompt answers are passed as a list of lines on stdin.
    """

    def _run(*args, answers=(), cwd=None):
        env = dict(os.environ)
        env["PYTHONPATH"] = os.pathsep.join(filter(None, [project_root, env.get("PYTHONPATH")]))
        for var in redact_module._SECRET_ENV_VARS:
            env.pop(var, None)
        result = subprocess.run(
            [sys.executable, "-m", "hostdeploy.hostdeploy", *args],
            input="".join(f"{a}\n" for a in answers),
            capture_output=True,
            text=True,
            cwd=cwd or project_root,
            env=env,
        )
        return result.returncode, result.stdout, result.stderr

    return _run


@pytest.fixture(autouse=True)
def reset_redaction():
    """Keep secrets registered by one test out of the next."""
    redact_module._registered.clear()
    redact_module._patterns = None
    yield
    redact_module._registered.clear()
    redact_module._patterns = None


# ── Unit-test fixtures ──────────────────────────────────────────────


class RecordingRemote:
    """Fake remote host: records commands, written files and copies.

    A command containing ``fail_on`` returns exit code 1.
    """

    def __init__(self, fail_on=None):
        self.fail_on = fail_on
        self.commands = []
        self.app_commands = []
        self.files = {}
        self.copied = []

    async def run_cmd(self, command, timeout=None, log_output=True):
        self.commands.append(command)
        return self._result(command)

    async def app_cmd(self, command, timeout=None, log_output=True):
        self.app_commands.append(command)
        return self._result(command)

    async def write_file(self, remote_path, content, sudo=False):
        self.files[remote_path] = (content, sudo)
        return True

    async def copy_dir(self, local_dir):
        self.copied.append(local_dir)
        return True

    def _result(self, command):
        if self.fail_on and self.fail_on in command:
            return 1, "", "boom"
        return 0, "", ""


@pytest.fixture
def remote():
    """Return a factory for RecordingRemote instances."""
    return RecordingRemote


@pytest.fixture
def sample_params():
    """Deploy parameters for a Dockerfile-based repo."""
    return DeployParams(
        repo_url="https://github.com/acme/hello-app.git",
        token="ghp_SampleToken1234567890",
        branch="main",
        ssh_user="ubuntu",
        server_ip="203.0.113.10",
        ssh_key="/keys/id_rsa",
        app_port=3000,
    )


@pytest.fixture
def app_repo(tmp_path):
    """Create a local checkout of hello-app containing a Dockerfile."""
    repo = tmp_path / "hello-app"
    repo.mkdir()
    (repo / "Dockerfile").write_text("FROM python:3.11-alpine\n")
    return repo
