"""Click command line interface.

Purpose
-------
Let operators exercise a logger from the shell: emit messages, run a demo of
every level, delete a label's log files, or stress the rotating sink from many
threads.

Contents
--------
* :func:`cli` - Click group (``needletail-logger``).
* :func:`main` - test-friendly runner returning an exit code.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Any, Callable, Sequence

import click

from . import __init__conf__
from .adapters.files.rotating import ROTATION_MARKER_PREFIX
from .application.use_cases.process_event import FAILURE_REASONS
from .config import BACKENDS, load_config
from .domain.levels import LogLevel
from .runtime import NeedleTailLogger, summary_info

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}
_LEVEL_CHOICE = click.Choice([level.severity for level in LogLevel], case_sensitive=False)


def _logger_options(command: Callable[..., Any]) -> Callable[..., Any]:
    """Attach the options shared by every command that builds a logger."""

    options = [
        click.option("--label", default=None, help="Logger label; also names the log directory."),
        click.option(
            "--directory",
            type=click.Path(file_okay=False, path_type=Path),
            default=None,
            help="Base directory for log folders (defaults to the platform location).",
        ),
        click.option("--max-lines", type=click.IntRange(min=1), default=None, help="Records per file before rotating."),
        click.option("--max-line-width", type=click.IntRange(min=1), default=None, help="Pagination width."),
        click.option("--backend", type=click.Choice(BACKENDS, case_sensitive=False), default=None, help="Console backend."),
    ]
    for option in reversed(options):
        command = option(command)
    return command


def _build_logger(
    *,
    label: str | None,
    directory: Path | None,
    max_lines: int | None,
    max_line_width: int | None,
    backend: str | None,
    **values: Any,
) -> NeedleTailLogger:
    config = load_config(
        label=label,
        base_directory=directory,
        max_lines=max_lines,
        max_line_width=max_line_width,
        backend=backend,
        **values,
    )
    return NeedleTailLogger(config)


@click.group(invoke_without_command=True, context_settings=CLICK_CONTEXT_SETTINGS)
@click.version_option(
    __init__conf__.version,
    "--version",
    "-V",
    prog_name=__init__conf__.shell_command,
    message="%(prog)s version %(version)s",
)
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Leveled logging with paginated output and rotating log files."""

    if ctx.invoked_subcommand is None:
        click.echo(summary_info(), nl=False)


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def info_command() -> None:
    """Print the package metadata banner."""

    click.echo(summary_info(), nl=False)


@cli.command("log", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("level", type=_LEVEL_CHOICE)
@click.argument("message", nargs=-1, required=True)
@_logger_options
@click.option("--write-to-file/--no-write-to-file", default=None, help="Also append the message to the log file.")
@click.option("--no-icons", is_flag=True, default=False, help="Omit the level icon.")
@click.pass_context
def log_command(
    ctx: click.Context,
    level: str,
    message: tuple[str, ...],
    no_icons: bool,
    **options: Any,
) -> None:
    """Log MESSAGE at LEVEL."""

    logger = _build_logger(level=LogLevel.TRACE, **options)
    result = logger.log(level, " ".join(message), display_icons=not no_icons)
    if not result["ok"] and result.get("reason") in FAILURE_REASONS:
        ctx.exit(1)


@cli.command("demo", context_settings=CLICK_CONTEXT_SETTINGS)
@_logger_options
@click.option("--write-to-file/--no-write-to-file", default=None, help="Also append the messages to the log file.")
def demo_command(**options: Any) -> None:
    """Emit one sample message per level."""

    logger = _build_logger(level=LogLevel.TRACE, **options)
    for level in LogLevel:
        logger.log(level, f"{level.severity} sample from {logger.label}", {"level": level.severity})


@cli.command("delete-logs", context_settings=CLICK_CONTEXT_SETTINGS)
@_logger_options
@click.pass_context
def delete_logs_command(ctx: click.Context, **options: Any) -> None:
    """Delete every file in the label's log directory."""

    logger = _build_logger(**options)
    report = logger.delete_all_log_files()
    click.echo(f"deleted={len(report.deleted)} failed={len(report.failed)}")
    if not report.ok:
        ctx.exit(1)


@cli.command("stress", context_settings=CLICK_CONTEXT_SETTINGS)
@_logger_options
@click.option("--threads", type=click.IntRange(min=1), default=8, show_default=True)
@click.option("--messages", type=click.IntRange(min=1), default=250, show_default=True, help="Messages per thread.")
@click.pass_context
def stress_command(ctx: click.Context, threads: int, messages: int, **options: Any) -> None:
    """Write from many threads at once and verify no line was lost."""

    if options.get("backend") is None:
        options["backend"] = "logging"
    logger = _build_logger(level=LogLevel.INFO, write_to_file=True, **options)
    logger.delete_all_log_files()

    def worker(index: int) -> None:
        for number in range(messages):
            logger.log(LogLevel.INFO, f"thread-{index} message-{number}", display_icons=False)

    with ThreadPoolExecutor(max_workers=threads) as pool:
        list(pool.map(worker, range(threads)))

    directory = logger.log_directory
    total = 0
    for path in sorted(directory.iterdir()) if directory is not None else []:
        lines = [line for line in path.read_text(encoding="utf-8").splitlines() if not line.startswith(ROTATION_MARKER_PREFIX)]
        total += len(lines)
        click.echo(f"{path.name}: {len(lines)}")
    expected = threads * messages
    click.echo(f"total={total} expected={expected}")
    if total != expected:
        ctx.exit(1)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the Click group in a test-friendly manner.

    Examples
    --------
    >>> main(["--version"])  # doctest: +ELLIPSIS
    needletail-logger version ...
    0
    """

    args = list(argv) if argv is not None else None
    try:
        result = cli.main(args=args, prog_name=__init__conf__.shell_command, standalone_mode=False)
    except click.ClickException as error:
        error.show()
        return error.exit_code
    except click.exceptions.Abort:
        click.echo("Aborted!", err=True)
        return 1
    return result if isinstance(result, int) else 0


__all__ = ["cli", "main"]
