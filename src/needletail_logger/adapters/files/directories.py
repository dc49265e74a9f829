"""Platform-specific writable base directory for log files.

Purpose
-------
Resolve where log directories live when the caller does not inject a base
directory provider.

Contents
--------
* :func:`default_base_directory` - OS-aware resolution.
* :func:`fixed_base_directory` - provider returning a caller-chosen path.

Standards
---------
- Windows: ``%LOCALAPPDATA%`` (falling back to ``%APPDATA%``)
- macOS: ``~/Library/Logs``
- Linux and others: ``$XDG_STATE_HOME`` or ``~/.local/state``
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from needletail_logger.application.ports.files import BaseDirectoryProvider


def default_base_directory() -> Path:
    """Return the standard per-user location for application logs."""

    if os.name == "nt":
        base = os.environ.get("LOCALAPPDATA") or os.environ.get("APPDATA")
        if base:
            return Path(base)
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Logs"
    state_home = os.environ.get("XDG_STATE_HOME")
    if state_home:
        return Path(state_home)
    return Path.home() / ".local" / "state"


def fixed_base_directory(path: str | os.PathLike[str]) -> BaseDirectoryProvider:
    """Return a provider that always answers ``path``.

    Examples
    --------
    >>> provider = fixed_base_directory("/tmp/app")
    >>> provider().as_posix()
    '/tmp/app'
    """

    resolved = Path(path).expanduser()

    def provider() -> Path:
        return resolved

    return provider


__all__ = ["default_base_directory", "fixed_base_directory"]
