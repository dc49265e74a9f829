"""Static package metadata surfaced by the CLI banner."""

from __future__ import annotations

from typing import Callable

name = "needletail_logger"
title = "Leveled logging facade with paginated formatting and line-count file rotation"
version = "0.1.0"
url = "https://github.com/needletail/needletail-logger"
author = "NeedleTail"
author_email = "maintainers@needletail.dev"
shell_command = "needletail-logger"


def print_info(writer: Callable[[str], None] = print) -> None:
    """Write the metadata banner line by line through ``writer``.

    Examples
    --------
    >>> lines = []
    >>> print_info(writer=lines.append)
    >>> lines[0]
    'Info for needletail_logger:\\n'
    """

    fields = [
        ("name", name),
        ("title", title),
        ("version", version),
        ("url", url),
        ("author", author),
        ("author_email", author_email),
        ("shell_command", shell_command),
    ]
    pad = max(len(label) for label, _ in fields)
    writer(f"Info for {name}:\n")
    writer("\n")
    for label, value in fields:
        writer(f"    {label:<{pad}} = {value}\n")
