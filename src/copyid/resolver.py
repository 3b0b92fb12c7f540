"""Identity resolution: find the public key text to install.

Sources are tried in a fixed priority order.  An explicit path wins
outright; without one, the conventional files under ``~/.ssh`` are
probed and the running key agent is asked last.
"""
import logging
import os
from pathlib import Path
from typing import Callable, Iterable, Optional

from .agent import query_agent
from .exceptions import HomeDirUnavailable, IdentityNotFound, NoIdentityFound, ReadError
from .types import AGENT_SOURCE, Identity

logger = logging.getLogger(__name__)

PUBLIC_KEY_SUFFIX = ".pub"
SSH_DIR = ".ssh"

# Most preferred first.
FILE_CANDIDATES = (
    "id_rsa.pub",
    "id_ed25519.pub",
    "id_ecdsa.pub",
    "id_dsa.pub",
    "identity.pub",
)

Strategy = Callable[[], Optional[Identity]]
AgentQuery = Callable[[], Optional[str]]


def home_dir() -> Path:
    """Return the invoking user's home directory.

    Raises:
        HomeDirUnavailable: If neither $HOME nor the password database
            yields a directory.
    """
    try:
        return Path.home()
    except (RuntimeError, KeyError) as e:
        raise HomeDirUnavailable() from e


def expand_home(path_str: str, home: Optional[Path] = None) -> str:
    """Expand a leading ``~`` path segment. Other paths pass through."""
    if path_str != "~" and not path_str.startswith(("~/", "~" + os.sep)):
        return path_str
    base = home if home is not None else home_dir()
    return str(base) + path_str[1:]


def read_identity(path: Path, source: Optional[str] = None) -> Identity:
    """Read a key file in full. Raises ReadError on I/O failure.

    ``source`` labels the Identity; it defaults to ``str(path)``.
    """
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ReadError(path, str(e)) from e
    return Identity(source=source if source is not None else str(path), content=content)


def locate_explicit(path_str: str, home: Optional[Path] = None) -> str:
    """Map a user-supplied identity path to the file that should be read.

    A private key path is swapped for its ``.pub`` sibling when one
    exists, so the private key is never sent.  A missing path is retried
    with ``.pub`` appended.  The returned string keeps the caller's
    spelling (no pathlib normalization) apart from ``~`` expansion.
    """
    expanded = expand_home(path_str, home)
    pub_str = expanded + PUBLIC_KEY_SUFFIX

    if Path(expanded).exists():
        if expanded.endswith(PUBLIC_KEY_SUFFIX):
            return expanded
        if Path(pub_str).exists():
            logger.debug("Using public key %s instead of %s", pub_str, expanded)
            return pub_str
        # Unconventional naming: trust the caller.
        return expanded

    if Path(pub_str).exists():
        return pub_str
    raise IdentityNotFound(path_str)


def _file_strategy(path: Path) -> Strategy:
    def probe() -> Optional[Identity]:
        logger.debug("Probing %s", path)
        if not path.exists():
            return None
        return read_identity(path)

    return probe


def _agent_strategy(agent: AgentQuery) -> Strategy:
    def probe() -> Optional[Identity]:
        logger.debug("Querying key agent")
        output = agent()
        if output is None or not output.strip():
            return None
        return Identity(source=AGENT_SOURCE, content=output.strip())

    return probe


def _auto_strategies(home: Path, agent: AgentQuery) -> list[Strategy]:
    ssh_dir = home / SSH_DIR
    strategies = [_file_strategy(ssh_dir / name) for name in FILE_CANDIDATES]
    strategies.append(_agent_strategy(agent))
    return strategies


def _first_found(strategies: Iterable[Strategy]) -> Optional[Identity]:
    for strategy in strategies:
        identity = strategy()
        if identity is not None:
            return identity
    return None


def resolve(
    explicit_path: Optional[str] = None,
    *,
    home: Optional[Path] = None,
    agent: Optional[AgentQuery] = None,
) -> Identity:
    """Resolve exactly one Identity.

    Args:
        explicit_path: Path given with ``-i``, or None for auto-discovery.
        home: Home directory override; defaults to the current user's.
        agent: Callable returning the agent's key listing or None;
            defaults to :func:`query_agent`.

    Raises:
        HomeDirUnavailable: Home directory needed but undeterminable.
        IdentityNotFound: Explicit path and its ``.pub`` variant are missing.
        ReadError: The chosen file could not be read.
        NoIdentityFound: Auto-discovery found nothing.
        EmptyIdentity: The chosen source held only whitespace.
    """
    if explicit_path is not None:
        located = locate_explicit(explicit_path, home)
        identity = read_identity(Path(located), source=located)
    else:
        base = home if home is not None else home_dir()
        identity = _first_found(_auto_strategies(base, agent or query_agent))
        if identity is None:
            raise NoIdentityFound()

    logger.info("Resolved identity from %s", identity.source)
    return identity
