"""Query a running ssh-agent for the public keys it holds.

Uses ``ssh-add -L``.  The command exits 1 when the agent holds no keys
and 2 when no agent is reachable; both are reported as "nothing found"
rather than errors, since the agent is only the last auto-discovery
fallback.
"""
import logging
import subprocess
from typing import Optional, Sequence

logger = logging.getLogger(__name__)

DEFAULT_AGENT_COMMAND = ("ssh-add", "-L")
NO_IDENTITIES = "The agent has no identities."


def query_agent(command: Sequence[str] = DEFAULT_AGENT_COMMAND) -> Optional[str]:
    """Return the agent's public keys as text, or None if it has none."""
    try:
        result = subprocess.run(
            list(command),
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError as e:
        logger.debug("Key agent query %s could not run: %s", command[0], e)
        return None

    if result.returncode != 0:
        logger.debug(
            "Key agent query exited %d: %s",
            result.returncode,
            result.stderr.strip() or result.stdout.strip(),
        )
        return None

    output = result.stdout.strip()
    if not output or output == NO_IDENTITIES:
        logger.debug("Key agent holds no identities")
        return None
    return result.stdout
