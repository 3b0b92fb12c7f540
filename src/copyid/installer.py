"""Remote installation of key lines over ssh.

The key text travels on the ssh child's stdin and a fixed shell script
runs on the remote side to merge it into ``~/.ssh/authorized_keys``.
Nothing but the script is placed on the command line.
"""
import logging
import subprocess
from typing import Optional

from .exceptions import RemoteExecutionFailed, TransportSpawnFailed
from .types import Destination, Identity, InstallResult, TransportConfig

logger = logging.getLogger(__name__)

REMOTE_SCRIPT_VERSION = 1

# Runs under sh on the remote side.  Every stdin line is handled on its
# own: blank lines are skipped, exact whole-line matches are left alone,
# anything else is appended.  No single quotes allowed (see REMOTE_SCRIPT).
INSTALL_SCRIPT = (
    "umask 077; "
    "mkdir -p .ssh && chmod 700 .ssh || exit 1; "
    "if [ ! -f .ssh/authorized_keys ]; then "
    "touch .ssh/authorized_keys && chmod 600 .ssh/authorized_keys || exit 1; "
    "fi; "
    "while IFS= read -r key || [ -n \"$key\" ]; do "
    "case \"$key\" in *[![:space:]]*) ;; *) continue ;; esac; "
    "if ! grep -qxF -- \"$key\" .ssh/authorized_keys; then "
    "if [ -s .ssh/authorized_keys ] && [ -n \"$(tail -c 1 .ssh/authorized_keys)\" ]; then "
    "echo >> .ssh/authorized_keys || exit 1; "
    "fi; "
    "printf \"%s\\n\" \"$key\" >> .ssh/authorized_keys || exit 1; "
    "fi; "
    "done"
)

# The remote login shell may not be POSIX, so hand the work to sh.
REMOTE_SCRIPT = f"exec sh -c '{INSTALL_SCRIPT}'"


def normalize_content(content: str) -> str:
    """Trim surrounding whitespace and end with exactly one newline."""
    return content.strip() + "\n"


def build_command(
    destination: Destination, transport: Optional[TransportConfig] = None
) -> list[str]:
    """Build the ssh argv. The key payload is never part of it."""
    transport = transport or TransportConfig()
    command = [transport.ssh_command]
    for option in transport.ssh_options:
        command.extend(["-o", option])
    if destination.port:
        command.extend(["-p", destination.port])
    command.append(destination.host_spec)
    command.append(REMOTE_SCRIPT)
    return command


def _run_transport(command: list[str], payload: str) -> int:
    """Spawn ssh, feed it the payload, close stdin, wait for exit."""
    try:
        proc = subprocess.Popen(command, stdin=subprocess.PIPE)
    except OSError as e:
        raise TransportSpawnFailed(command, str(e)) from e

    try:
        proc.stdin.write(payload.encode("utf-8"))
    except BrokenPipeError:
        # ssh exited before reading; its exit status tells the story.
        logger.debug("ssh closed stdin before the payload was written")
    finally:
        try:
            proc.stdin.close()
        except BrokenPipeError:
            logger.debug("ssh closed stdin before the payload was flushed")

    return proc.wait()


def install(
    identity: Identity,
    destination: Destination,
    transport: Optional[TransportConfig] = None,
    *,
    dry_run: bool = False,
) -> InstallResult:
    """Install every key line of ``identity`` at ``destination``.

    Safe to repeat: lines already present remotely are not duplicated
    and permissions are left as they are.

    Args:
        identity: Resolved key material.
        destination: Remote host and optional port.
        transport: ssh program and extra options.
        dry_run: Build everything but do not start ssh.

    Returns:
        InstallResult describing what was sent.

    Raises:
        TransportSpawnFailed: ssh could not be started.
        RemoteExecutionFailed: ssh exited non-zero. ``exit_code`` is None
            when the process was killed by a signal.
    """
    payload = normalize_content(identity.content)
    command = build_command(destination, transport)
    result = InstallResult(
        destination=destination,
        source=identity.source,
        keys_sent=len(identity.key_lines()),
        command=tuple(command),
        dry_run=dry_run,
    )

    if dry_run:
        logger.info(
            "Dry run: would send %d key line(s) to %s",
            result.keys_sent, destination.host_spec,
        )
        return result

    logger.info(
        "Installing %d key line(s) on %s (script v%d)",
        result.keys_sent, destination.host_spec, REMOTE_SCRIPT_VERSION,
    )
    returncode = _run_transport(command, payload)
    if returncode != 0:
        raise RemoteExecutionFailed(returncode if returncode > 0 else None)

    logger.info("ssh exited successfully")
    return result
