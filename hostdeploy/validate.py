"""Post-deploy validation: curl on the host, HTTP probe from this machine."""

import logging

import httpx

logger = logging.getLogger(__name__)

REMOTE_CHECK_CMD = "curl -sS -I http://localhost"


async def validate_remote(run_cmd):
    """Curl the reverse proxy from the remote host itself.

    Returns:
        True if curl got an HTTP response.
    """
    logger.info("Validating deployment on the server...")
    rc, _, _ = await run_cmd(REMOTE_CHECK_CMD)
    if rc != 0:
        logger.error(f"[ERROR] Remote validation failed: {REMOTE_CHECK_CMD} (exit code {rc})")
        return False
    return True


async def probe_http(url, timeout=10, dry_run=False):
    """Send a HEAD request to *url* from the operator's machine.

    Only warns on failure: the server's firewall may block port 80 from
    here even when the deployment works.

    Returns:
        HTTP status code, or None when the request failed or in dry-run mode.
    """
    if dry_run:
        logger.info(f"[dry-run] HEAD {url}")
        return None

    try:
        async with httpx.AsyncClient(follow_redirects=True) as client:
            resp = await client.request("HEAD", url, timeout=timeout)
    except httpx.HTTPError as e:
        logger.warning(f"[WARNING] Could not reach {url} from this machine: {e}")
        return None

    if resp.status_code >= 400:
        logger.warning(f"[WARNING] {url} answered with HTTP {resp.status_code}")
    else:
        logger.info(f"{url} answered with HTTP {resp.status_code}")
    return resp.status_code
