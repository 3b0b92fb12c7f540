"""Input validation utilities for CLI commands."""


def validate_destination(destination: str) -> str:
    """Validate and return the destination. Raises ValueError if invalid.

    The value is otherwise opaque and handed to ssh unchanged.
    """
    if not destination or not destination.strip():
        raise ValueError("Destination cannot be empty")
    if destination.lstrip().startswith("-"):
        raise ValueError("Destination cannot start with '-'")
    return destination


def validate_port(port: str) -> str:
    """Validate a TCP port and return it as a string. Raises ValueError if invalid."""
    if port is None or not str(port).strip():
        raise ValueError("Port cannot be empty")
    try:
        value = int(str(port).strip())
    except ValueError as e:
        raise ValueError(f"Port must be a number: {port}") from e
    if not 1 <= value <= 65535:
        raise ValueError("Port must be between 1 and 65535")
    return str(value)
