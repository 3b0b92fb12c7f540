"""Pytest fixtures shared by copyid tests."""
import stat
from pathlib import Path

import pytest
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey
from cryptography.hazmat.primitives.serialization import Encoding, PublicFormat


def _openssh_line(comment: str) -> str:
    public_key = Ed25519PrivateKey.generate().public_key()
    raw = public_key.public_bytes(Encoding.OpenSSH, PublicFormat.OpenSSH)
    return f"{raw.decode('ascii')} {comment}"


@pytest.fixture
def key_line() -> str:
    """A real ssh-ed25519 public key line with a comment."""
    return _openssh_line("alice@laptop")


@pytest.fixture
def other_key_line() -> str:
    return _openssh_line("alice@desktop")


@pytest.fixture
def home(tmp_path: Path) -> Path:
    """An empty local home directory with ~/.ssh."""
    path = tmp_path / "home"
    (path / ".ssh").mkdir(parents=True)
    return path


@pytest.fixture
def remote_home(tmp_path: Path) -> Path:
    """Directory the fake ssh treats as the remote user's home."""
    path = tmp_path / "remote"
    path.mkdir()
    return path


@pytest.fixture
def fake_ssh(tmp_path: Path, remote_home: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """An executable standing in for ssh.

    Ignores every argument except the last, which it runs with sh inside
    ``remote_home``.  Arguments are recorded one per line in ``ssh.args``.
    """
    script = tmp_path / "fake-ssh"
    script.write_text(
        "#!/bin/sh\n"
        'printf "%s\\n" "$@" > "$FAKE_SSH_LOG"\n'
        'for last; do :; done\n'
        'cd "$FAKE_REMOTE_HOME" || exit 1\n'
        'exec sh -c "$last"\n'
    )
    script.chmod(script.stat().st_mode | stat.S_IXUSR)
    monkeypatch.setenv("FAKE_REMOTE_HOME", str(remote_home))
    monkeypatch.setenv("FAKE_SSH_LOG", str(tmp_path / "ssh.args"))
    return script


@pytest.fixture
def unreachable_ssh(tmp_path: Path) -> Path:
    """An ssh stand-in that fails like an unreachable host."""
    script = tmp_path / "unreachable-ssh"
    script.write_text("#!/bin/sh\necho 'ssh: connect to host: No route to host' >&2\nexit 255\n")
    script.chmod(script.stat().st_mode | stat.S_IXUSR)
    return script
