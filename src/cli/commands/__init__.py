"""CLI commands."""

from . import copy_id

__all__ = ["copy_id"]
