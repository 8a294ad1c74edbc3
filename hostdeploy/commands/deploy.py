"""deploy command: prompt, then clone, provision and deploy to a remote host."""

import asyncio
import logging
from datetime import datetime

from hostdeploy.commands import abort
from hostdeploy.commands.prompts import PromptAborted, collect_deploy_params
from hostdeploy.deploy.defaults import load_defaults
from hostdeploy.deploy.orchestrate import deploy

logger = logging.getLogger(__name__)


def handle_deploy(args):
    """Handle the deploy command."""
    log_file = getattr(args, "log_file", None)

    logger.info("=" * 40)
    logger.info(f"Deployment started at {datetime.now():%Y-%m-%d %H:%M:%S}")
    logger.info("=" * 40)

    try:
        defaults = load_defaults(args.config) if args.config else {}
        params = collect_deploy_params(defaults, dry_run=args.dry_run)
    except (FileNotFoundError, ValueError) as e:
        logger.error(f"[ERROR] {e}")
        abort(log_file)
    except PromptAborted:
        logger.error("[ERROR] Input aborted.")
        abort(log_file)

    logger.info(f"Deploying {params.repo_name} ({params.branch}) to {params.host.address}")
    if not asyncio.run(deploy(params, workdir=args.workdir)):
        abort(log_file)

    logger.info("")
    logger.info(f"Application URL: http://{params.server_ip}/")
    if params.dry_run:
        logger.info("Status: dry-run (not deployed)")
    else:
        logger.info("Deployment completed successfully!")


def register_deploy_command(subparsers):
    """Register the deploy command."""
    parser = subparsers.add_parser("deploy", help="Interactively deploy a Git repository to a remote host")
    parser.add_argument("--config", default=None, help="YAML file with prompt defaults")
    parser.add_argument("--workdir", default=".", help="Directory the repository is cloned into")
    parser.add_argument("--log-dir", default=".", help="Directory for the dated deploy log")
    parser.add_argument("--dry-run", action="store_true", help="Print commands without executing")
    parser.set_defaults(func=handle_deploy)
