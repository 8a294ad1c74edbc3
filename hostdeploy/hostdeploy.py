#!/usr/bin/env python3
"""Single-run deployment helper: CLI entrypoint."""

import argparse

from hostdeploy.commands.cleanup import register_cleanup_command
from hostdeploy.commands.deploy import register_deploy_command
from hostdeploy.logging_setup import setup_cli_logging


def main():
    parser = argparse.ArgumentParser(description="Deploy a Dockerized Git repository to a remote host over SSH")
    subparsers = parser.add_subparsers(dest="command")

    register_deploy_command(subparsers)
    register_cleanup_command(subparsers)

    args = parser.parse_args()
    if args.command is None:
        # A bare invocation runs the interactive deploy
        args = parser.parse_args(["deploy"])
    args.log_file = setup_cli_logging(args.log_dir)
    args.func(args)


if __name__ == "__main__":
    main()
