#!/usr/bin/env python3
"""Single-run deployment helper: CLI entrypoint."""

from hostdeploy.hostdeploy import main

if __name__ == "__main__":
    main()
