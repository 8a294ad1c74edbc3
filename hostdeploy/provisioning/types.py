"""Shared data types for remote hosts."""

from dataclasses import dataclass


@dataclass
class RemoteHost:
    """Connection details for the server being deployed to."""

    host: str
    username: str
    ssh_key: str = ""
    ssh_port: int = 22

    @property
    def address(self) -> str:
        """SSH address string (user@host)."""
        return f"{self.username}@{self.host}" if self.username else self.host
