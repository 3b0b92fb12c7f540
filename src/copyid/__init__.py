"""copyid: install SSH public keys into a remote authorized_keys file."""

from .agent import query_agent
from .exceptions import (
    CopyIdError,
    EmptyIdentity,
    HomeDirUnavailable,
    IdentityNotFound,
    NoIdentityFound,
    ReadError,
    RemoteExecutionFailed,
    TransportSpawnFailed,
)
from .installer import REMOTE_SCRIPT, build_command, install, normalize_content
from .keycheck import describe_key, suspicious_lines
from .resolver import FILE_CANDIDATES, resolve
from .types import AGENT_SOURCE, Destination, Identity, InstallResult, TransportConfig

__all__ = [
    "resolve", "install", "query_agent", "build_command", "normalize_content",
    "suspicious_lines", "describe_key",
    "FILE_CANDIDATES", "REMOTE_SCRIPT", "AGENT_SOURCE",
    "Identity", "Destination", "InstallResult", "TransportConfig",
    "CopyIdError", "HomeDirUnavailable", "IdentityNotFound", "ReadError",
    "NoIdentityFound", "EmptyIdentity", "TransportSpawnFailed", "RemoteExecutionFailed",
]

__version__ = "0.1.0"
