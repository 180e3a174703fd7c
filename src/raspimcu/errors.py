"""Exception types raised by raspimcu operations."""

from __future__ import annotations


class RaspiMcuError(Exception):
    """Base class for raspimcu failures."""


class NotFoundError(RaspiMcuError, FileNotFoundError):
    """A file, directory or mount point does not exist."""


class ExecutableNotFoundError(NotFoundError):
    """An explicitly configured executable path does not exist."""


class InvalidPathError(RaspiMcuError, ValueError):
    """A path escapes its mount point or has the wrong extension."""


class ToolUnavailableError(RaspiMcuError, RuntimeError):
    """An external helper binary could not be launched."""
