"""Value types shared by the resolver and the installer."""

from dataclasses import dataclass, field
from typing import Optional

from .exceptions import EmptyIdentity

AGENT_SOURCE = "agent"


@dataclass(frozen=True)
class Identity:
    """Public key material plus a label describing where it came from.

    Attributes:
        source: File path the key was read from, or ``"agent"``.
        content: Raw text holding one or more key lines.
    """

    source: str
    content: str

    def __post_init__(self) -> None:
        if not self.content.strip():
            raise EmptyIdentity(self.source)

    def key_lines(self) -> list[str]:
        """Non-blank lines of the content, stripped."""
        return [line.strip() for line in self.content.splitlines() if line.strip()]


@dataclass(frozen=True)
class Destination:
    """Where to install: an opaque ``user@host`` and an optional port."""

    host_spec: str
    port: Optional[str] = None


@dataclass(frozen=True)
class TransportConfig:
    """How the ssh child process is invoked.

    Attributes:
        ssh_command: Program used as the transport.
        ssh_options: Extra ``-o`` options, passed in order.
    """

    ssh_command: str = "ssh"
    ssh_options: tuple[str, ...] = ()


@dataclass(frozen=True)
class InstallResult:
    destination: Destination
    source: str
    keys_sent: int
    command: tuple[str, ...] = field(default_factory=tuple)
    dry_run: bool = False
