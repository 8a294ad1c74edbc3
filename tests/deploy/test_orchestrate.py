"""Unit tests for the deploy and cleanup pipelines."""

import asyncio

import pytest

from hostdeploy.deploy import orchestrate as orchestrate_module
from hostdeploy.deploy.orchestrate import app_start_commands, deploy, run_cleanup, run_deploy
from hostdeploy.deploy.repo import DockerSetup
from hostdeploy.provisioning.remote import PROVISION_STEPS

DOCKERFILE = DockerSetup(mode="dockerfile", filename="Dockerfile")
COMPOSE = DockerSetup(mode="compose", filename="docker-compose.yml")


@pytest.fixture(autouse=True)
def no_external_probe(monkeypatch):
    """Keep the HTTP probe off the network."""

    async def fake_probe(url, timeout=10, dry_run=False):
        return None

    monkeypatch.setattr(orchestrate_module, "probe_http", fake_probe)


def _run_deploy(remote, params, setup=DOCKERFILE, repo_dir="/work/hello-app"):
    return asyncio.run(
        run_deploy(remote.run_cmd, remote.app_cmd, remote.write_file, remote.copy_dir, params, repo_dir, setup)
    )


# ── app_start_commands ──────────────────────────────────────────


def test_start_commands_dockerfile(sample_params):
    assert app_start_commands(DOCKERFILE, sample_params) == [
        "sudo docker build -t hello-app .",
        "sudo docker rm -f hello-app || true",
        "sudo docker run -d --name hello-app --restart unless-stopped -p 3000:3000 hello-app",
    ]


def test_start_commands_compose(sample_params):
    assert app_start_commands(COMPOSE, sample_params) == [
        "sudo docker-compose -f docker-compose.yml down || true",
        "sudo docker-compose -f docker-compose.yml up -d --build",
    ]


# ── run_deploy ──────────────────────────────────────────────────


def test_run_deploy_sequence(remote, sample_params):
    fake = remote()
    assert _run_deploy(fake, sample_params) is True

    provision = [cmd for _, cmd in PROVISION_STEPS]
    assert fake.commands[: len(provision)] == provision
    assert fake.copied == ["/work/hello-app"]
    assert fake.app_commands == app_start_commands(DOCKERFILE, sample_params)

    rest = fake.commands[len(provision):]
    assert rest[0].startswith("sudo ln -sf /etc/nginx/sites-available/hello-app")
    assert rest[1] == "curl -sS -I http://localhost"


def test_run_deploy_writes_nginx_site_with_sudo(remote, sample_params):
    sample_params.app_port = 5000
    fake = remote()
    _run_deploy(fake, sample_params)

    content, sudo = fake.files["/etc/nginx/sites-available/hello-app"]
    assert sudo is True
    assert "proxy_pass http://localhost:5000;" in content


def test_run_deploy_compose_mode(remote, sample_params):
    fake = remote()
    assert _run_deploy(fake, sample_params, setup=COMPOSE) is True
    assert fake.app_commands[-1] == "sudo docker-compose -f docker-compose.yml up -d --build"


def test_run_deploy_stops_on_provision_failure(remote, sample_params):
    fake = remote(fail_on="install -y docker.io")
    assert _run_deploy(fake, sample_params) is False

    assert "sudo systemctl enable docker --now" not in fake.commands
    assert fake.copied == []
    assert fake.app_commands == []
    assert fake.files == {}


def test_run_deploy_stops_on_build_failure(remote, sample_params):
    fake = remote(fail_on="docker build")
    assert _run_deploy(fake, sample_params) is False
    assert fake.app_commands == ["sudo docker build -t hello-app ."]
    assert fake.files == {}


def test_run_deploy_fails_on_nginx_test(remote, sample_params):
    fake = remote(fail_on="nginx -t")
    assert _run_deploy(fake, sample_params) is False
    assert "curl -sS -I http://localhost" not in fake.commands


def test_run_deploy_fails_when_copy_fails(remote, sample_params):
    fake = remote()

    async def failing_copy(local_dir):
        return False

    fake.copy_dir = failing_copy
    assert _run_deploy(fake, sample_params) is False
    assert fake.app_commands == []


def test_run_deploy_external_probe_does_not_fail_run(remote, sample_params, monkeypatch):
    probed = []

    async def fake_probe(url, timeout=10, dry_run=False):
        probed.append(url)
        return None

    monkeypatch.setattr(orchestrate_module, "probe_http", fake_probe)
    assert _run_deploy(remote(), sample_params) is True
    assert probed == ["http://203.0.113.10/"]


# ── deploy ──────────────────────────────────────────────────────


def test_deploy_aborts_without_docker_files(tmp_path, sample_params, monkeypatch):
    (tmp_path / "hello-app").mkdir()

    async def fake_sync(params, workdir):
        return str(tmp_path / "hello-app")

    async def unexpected_ssh(host, dry_run=False):
        raise AssertionError("SSH must not be attempted")

    monkeypatch.setattr(orchestrate_module, "sync_repository", fake_sync)
    monkeypatch.setattr(orchestrate_module, "check_ssh", unexpected_ssh)

    assert asyncio.run(deploy(sample_params, workdir=str(tmp_path))) is False


def test_deploy_stops_when_ssh_fails(tmp_path, app_repo, sample_params, monkeypatch):
    async def fake_sync(params, workdir):
        return str(app_repo)

    async def no_ssh(host, dry_run=False):
        return False

    async def unexpected_deploy(*args, **kwargs):
        raise AssertionError("remote steps must not run")

    monkeypatch.setattr(orchestrate_module, "sync_repository", fake_sync)
    monkeypatch.setattr(orchestrate_module, "check_ssh", no_ssh)
    monkeypatch.setattr(orchestrate_module, "run_deploy", unexpected_deploy)

    assert asyncio.run(deploy(sample_params, workdir=str(tmp_path))) is False


def test_deploy_dry_run_without_checkout(tmp_path, sample_params):
    sample_params.dry_run = True
    assert asyncio.run(deploy(sample_params, workdir=str(tmp_path))) is True


# ── run_cleanup ─────────────────────────────────────────────────


def test_run_cleanup_sequence(remote, sample_params):
    fake = remote()
    assert asyncio.run(run_cleanup(fake.run_cmd, sample_params)) is True

    assert len(fake.commands) == 3
    assert fake.commands[0].startswith("cd ~/hello-app && if [ -f docker-compose.yml ]")
    assert "sudo docker rm -f hello-app" in fake.commands[0]
    assert fake.commands[0].endswith("|| true")
    assert "/etc/nginx/sites-available/hello-app" in fake.commands[1]
    assert fake.commands[2] == "rm -rf ~/hello-app"


def test_run_cleanup_stops_on_failure(remote, sample_params):
    fake = remote(fail_on="nginx -t")
    assert asyncio.run(run_cleanup(fake.run_cmd, sample_params)) is False
    assert "rm -rf ~/hello-app" not in fake.commands


def test_run_cleanup_refuses_empty_repo_name(remote, sample_params):
    # Fields can be changed after construction, which skips __post_init__
    sample_params.repo_url = "https://example.com/.git"
    fake = remote()
    assert asyncio.run(run_cleanup(fake.run_cmd, sample_params)) is False
    assert fake.commands == []
