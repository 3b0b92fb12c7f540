"""Advisory checks on key text before it is sent.

Nothing here blocks installation; the remote side treats content as
opaque lines.  The CLI only warns about lines returned by
:func:`suspicious_lines`.
"""
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives.serialization import load_ssh_public_key

# OpenSSH algorithm prefixes, including ones cryptography cannot load
# (security keys, certificates).
KNOWN_PREFIXES = ("ssh-", "ecdsa-", "sk-")


def looks_like_public_key(line: str) -> bool:
    """Return True if ``line`` parses as an OpenSSH public key line."""
    fields = line.split()
    if len(fields) < 2:
        return False
    try:
        load_ssh_public_key(" ".join(fields[:2]).encode("ascii"))
    except UnsupportedAlgorithm:
        return fields[0].startswith(KNOWN_PREFIXES)
    except (ValueError, UnicodeEncodeError):
        # cryptography rejects certificate types with ValueError.
        return fields[0].startswith(KNOWN_PREFIXES) and "-cert-" in fields[0]
    return True


def suspicious_lines(content: str) -> list[str]:
    """Non-blank lines of ``content`` that do not look like public keys."""
    return [
        line.strip()
        for line in content.splitlines()
        if line.strip() and not looks_like_public_key(line.strip())
    ]


def describe_key(line: str) -> str:
    """Short label for a key line: algorithm plus comment, if any."""
    fields = line.split(maxsplit=2)
    if not fields:
        return ""
    if len(fields) < 3:
        return fields[0]
    return f"{fields[0]} {fields[2]}"
