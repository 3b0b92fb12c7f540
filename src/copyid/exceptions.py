"""Exception types for copyid."""

from pathlib import Path
from typing import Sequence


class CopyIdError(Exception):
    """Base exception for all copyid errors."""
    pass


class HomeDirUnavailable(CopyIdError):
    """The home directory could not be determined."""
    def __init__(self, message: str = "Could not determine home directory") -> None:
        super().__init__(message)


class IdentityNotFound(CopyIdError):
    """An explicit identity path (and its .pub variant) does not exist."""
    def __init__(self, path: str) -> None:
        super().__init__(f"Identity file not found: {path}")
        self.path = path


class ReadError(CopyIdError):
    """A resolved identity file exists but could not be read."""
    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Failed to read identity file {path}: {reason}")
        self.path = path


class NoIdentityFound(CopyIdError):
    """Auto-discovery found no key file and the agent held no keys."""
    def __init__(self) -> None:
        super().__init__(
            "No identity file found in default locations and the key agent "
            "has no identities"
        )


class EmptyIdentity(CopyIdError):
    """Resolved key content is empty after trimming."""
    def __init__(self, source: str) -> None:
        super().__init__(f"Identity from {source} is empty")
        self.source = source


class TransportSpawnFailed(CopyIdError):
    """The transport binary could not be launched."""
    def __init__(self, command: Sequence[str], reason: str) -> None:
        program = command[0] if command else "<none>"
        super().__init__(f"Failed to spawn {program!r}: {reason}")
        self.command = tuple(command)


class RemoteExecutionFailed(CopyIdError):
    """The transport ran but exited with a non-success status."""
    def __init__(self, exit_code: int | None) -> None:
        shown = "unknown" if exit_code is None else str(exit_code)
        super().__init__(f"ssh process exited with error code: {shown}")
        self.exit_code = exit_code
