"""Copy public keys to a remote host's authorized_keys."""

import logging
import shlex
from functools import partial
from typing import NoReturn, Optional

import typer
from rich.console import Console
from rich.markup import escape

from src.cli.output import format_error, format_success, format_warning, json_output
from src.cli.utils import ConfigError, ConfigManager, validate_destination, validate_port
from src.copyid import (
    CopyIdError,
    Destination,
    IdentityNotFound,
    InstallResult,
    NoIdentityFound,
    TransportConfig,
    TransportSpawnFailed,
    build_command,
    describe_key,
    install,
    query_agent,
    resolve,
    suspicious_lines,
)

logger = logging.getLogger(__name__)

console = Console()
err_console = Console(stderr=True)


def _hint_for(error: CopyIdError) -> Optional[str]:
    if isinstance(error, (IdentityNotFound, NoIdentityFound)):
        return "Specify an identity file with -i"
    if isinstance(error, TransportSpawnFailed):
        return "Make sure 'ssh' is in your PATH"
    return None


def _fail(error: Exception, json_flag: bool, hint: Optional[str] = None, code: int = 1) -> NoReturn:
    if json_flag:
        json_output(console, {"status": "error", "error": str(error)})
    else:
        format_error(err_console, str(error), hint=hint)
    raise typer.Exit(code=code)


def _display_command(command: tuple[str, ...]) -> str:
    """Render argv for humans, with the remote script abbreviated."""
    return shlex.join(command[:-1]) + " <install-script>"


def _report(result: InstallResult, json_flag: bool) -> None:
    if json_flag:
        json_output(
            console,
            {
                "status": "dry_run" if result.dry_run else "installed",
                "source": result.source,
                "destination": result.destination.host_spec,
                "port": result.destination.port,
                "keys_sent": result.keys_sent,
            },
        )
        return

    if result.dry_run:
        format_success(
            console,
            f"Dry run: would have sent {result.keys_sent} key(s) to "
            f"{result.destination.host_spec}",
        )
        return

    console.print()
    console.print(f"Number of key(s) sent: {result.keys_sent}")
    console.print()
    console.print(
        "Now try logging into the machine, with:   "
        f"\"ssh '{escape(result.destination.host_spec)}'\""
    )
    console.print("and check to make sure that only the key(s) you wanted were added.")


def copy_id_command(
    destination: str,
    identity_file: Optional[str],
    port: Optional[str],
    options: list[str],
    dry_run: bool,
    json_flag: bool,
) -> None:
    """Resolve an identity and install it on the destination."""
    try:
        destination = validate_destination(destination)
        if port is not None:
            port = validate_port(port)
    except ValueError as e:
        _fail(e, json_flag, code=2)

    try:
        settings = ConfigManager().load()
        if port is None and settings.port is not None:
            port = validate_port(settings.port)
    except (ConfigError, ValueError) as e:
        _fail(e, json_flag, hint="Check ~/.copyid/config.yaml")

    if settings.source is not None:
        logger.debug("Loaded settings from %s", settings.source)
    transport = TransportConfig(
        ssh_command=settings.ssh_command,
        ssh_options=settings.ssh_options + tuple(options),
    )
    target = Destination(host_spec=destination, port=port)

    try:
        identity = resolve(
            identity_file, agent=partial(query_agent, settings.agent_command)
        )
    except CopyIdError as e:
        _fail(e, json_flag, hint=_hint_for(e))

    for line in suspicious_lines(identity.content):
        format_warning(
            err_console,
            f"'{describe_key(line)}' from {identity.source} does not look like a public key",
        )

    if not json_flag:
        console.print(f"Source: {escape(identity.source)}")
        console.print(f"Target: {escape(destination)}")
        command = tuple(build_command(target, transport))
        console.print(f"Executing: {escape(_display_command(command))}")

    try:
        result = install(identity, target, transport, dry_run=dry_run)
    except CopyIdError as e:
        _fail(e, json_flag, hint=_hint_for(e))

    _report(result, json_flag)
