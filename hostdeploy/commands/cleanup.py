"""cleanup command: remove a previous deployment from the remote host."""

import asyncio
import logging

from hostdeploy.commands import abort
from hostdeploy.commands.prompts import PromptAborted, collect_cleanup_params
from hostdeploy.deploy.defaults import load_defaults
from hostdeploy.deploy.orchestrate import cleanup

logger = logging.getLogger(__name__)


def handle_cleanup(args):
    """Handle the cleanup command."""
    log_file = getattr(args, "log_file", None)

    try:
        defaults = load_defaults(args.config) if args.config else {}
        params = collect_cleanup_params(defaults, dry_run=args.dry_run)
    except (FileNotFoundError, ValueError) as e:
        logger.error(f"[ERROR] {e}")
        abort(log_file)
    except PromptAborted:
        logger.error("[ERROR] Input aborted.")
        abort(log_file)

    logger.info(f"Removing {params.repo_name} from {params.host.address}")
    if not asyncio.run(cleanup(params)):
        abort(log_file)


def register_cleanup_command(subparsers):
    """Register the cleanup command."""
    parser = subparsers.add_parser("cleanup", help="Remove a deployment (containers, nginx site, files)")
    parser.add_argument("--config", default=None, help="YAML file with prompt defaults")
    parser.add_argument("--log-dir", default=".", help="Directory for the dated deploy log")
    parser.add_argument("--dry-run", action="store_true", help="Print commands without executing")
    parser.set_defaults(func=handle_cleanup)
