"""Optional YAML file with prompt defaults."""

import os

import yaml

# Keys accepted in the defaults file. The PAT is deliberately absent.
DEFAULT_KEYS = ("repo_url", "branch", "ssh_user", "server_ip", "ssh_key", "app_port", "ssh_port")

_INT_KEYS = ("app_port", "ssh_port")


def load_defaults(path):
    """Load prompt defaults from a YAML mapping.

    Raises:
        FileNotFoundError: the file does not exist
        ValueError: the file is not valid YAML, not a mapping, or holds an
            unknown key or a non-integer port
    """
    path = os.path.expanduser(os.path.expandvars(path))
    if not os.path.isfile(path):
        raise FileNotFoundError(f"Defaults file not found: {path}")

    with open(path) as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Error parsing YAML defaults file {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Defaults file {path} must contain a mapping, got {type(data).__name__}")

    # YAML 1.1 turns keys like on: or 1: into bools and ints
    unknown = sorted((k for k in data if k not in DEFAULT_KEYS), key=str)
    if unknown:
        allowed = ", ".join(DEFAULT_KEYS)
        raise ValueError(f"Unknown key(s) in {path}: {', '.join(map(repr, unknown))}. Allowed: {allowed}")

    defaults = {}
    for key, value in data.items():
        if value is None:
            continue
        if key in _INT_KEYS:
            try:
                value = int(value)
            except (TypeError, ValueError):
                raise ValueError(f"'{key}' in {path} must be an integer, got {value!r}") from None
        else:
            value = str(value)
        defaults[key] = value
    return defaults
