from __future__ import annotations

import threading
from pathlib import Path

import pytest

from needletail_logger import LoggerConfig, LogLevel, LogMessage, NeedleTailLogger
from needletail_logger.adapters.files.rotating import ACTIVE_FILE_NAME
from needletail_logger.application.use_cases import DEBUG_DIVIDER


def test_messages_below_threshold_are_dropped(make_logger, recording_console) -> None:
    logger = make_logger(level="warning")

    assert logger.info("quiet") == {"ok": False, "reason": "below_threshold"}
    assert logger.warning("careful", display_icons=False)["ok"] is True
    assert recording_console.texts == ["careful"]


def test_facade_exposes_configuration(make_logger, tmp_path: Path) -> None:
    logger = make_logger(level="notice", write_to_file=True)

    assert logger.label == "tests"
    assert logger.level is LogLevel.NOTICE
    assert logger.write_to_file is True
    assert logger.log_directory == tmp_path / "tests"
    assert logger.current_log_file == tmp_path / "tests" / ACTIVE_FILE_NAME
    assert "level='notice'" in repr(logger)


def test_config_and_keyword_settings_combine() -> None:
    logger = NeedleTailLogger(LoggerConfig(label="base", max_lines=10), label="override", console=object())
    assert logger.config.label == "override"
    assert logger.config.max_lines == 10


def test_configure_changes_threshold_and_announces(make_logger, recording_console) -> None:
    logger = make_logger(level="trace")
    logger.configure("warning")
    logger.info("dropped")
    logger.configure(LogLevel.INFO)
    logger.info("kept", display_icons=False)

    assert recording_console.texts == ["ℹ Log level set to info", "kept"]
    assert logger.level is LogLevel.INFO


def test_configure_announcement_stays_out_of_the_file(make_logger, tmp_path: Path, records_of) -> None:
    logger = make_logger(write_to_file=True)
    logger.configure("debug")
    logger.info("recorded", display_icons=False)

    assert records_of(tmp_path / "tests" / ACTIVE_FILE_NAME) == ["recorded"]


def test_set_log_level_is_an_alias(make_logger) -> None:
    logger = make_logger()
    logger.set_log_level("critical")
    assert logger.level is LogLevel.CRITICAL


def test_error_and_critical_are_uppercased(make_logger, recording_console) -> None:
    logger = make_logger()
    logger.error("disk full")
    logger.critical("giving up", display_icons=False)
    assert recording_console.texts == ["✖ DISK FULL", "GIVING UP"]


def test_debug_is_wrapped_in_dividers(make_logger, recording_console) -> None:
    logger = make_logger()
    logger.debug("state dump", display_icons=False)
    assert recording_console.texts == [f"{DEBUG_DIVIDER}\nstate dump\n{DEBUG_DIVIDER}"]


def test_debug_is_suppressed_when_debug_output_is_disabled(make_logger, recording_console) -> None:
    logger = make_logger(debug_enabled=False, level="trace")

    assert logger.debug("hidden") == {"ok": False, "reason": "debug_disabled"}
    assert logger.trace("visible", display_icons=False)["ok"] is True
    assert recording_console.texts == ["visible"]


def test_long_messages_are_paginated(make_logger, recording_console) -> None:
    logger = make_logger(max_line_width=10)
    logger.info("one two three four five six", display_icons=False)
    assert recording_console.texts == ["one two\nthree four\nfive six"]


def test_metadata_reaches_console_but_not_file(make_logger, recording_console, tmp_path: Path, records_of) -> None:
    logger = make_logger(write_to_file=True)
    logger.notice("deployed", {"version": "1.2.3", "hosts": ["a", "b"]}, display_icons=False)

    _, _, metadata = recording_console.records[0]
    assert metadata["version"].render() == "1.2.3"
    assert metadata["hosts"].render() == "[a, b]"
    assert records_of(tmp_path / "tests" / ACTIVE_FILE_NAME) == ["deployed"]


def test_lazy_message_is_not_rendered_when_filtered(make_logger) -> None:
    calls: list[str] = []

    def expensive() -> str:
        calls.append("rendered")
        return "payload"

    logger = make_logger(level="error")
    logger.info(LogMessage.lazy(expensive))
    assert calls == []
    logger.error(LogMessage.lazy(expensive))
    assert calls == ["rendered"]


def test_file_writing_toggle_applies_to_later_calls(make_logger, tmp_path: Path, records_of) -> None:
    logger = make_logger()
    logger.info("console only", display_icons=False)
    assert logger.log_directory is None

    logger.set_file_writing_enabled(True)
    assert (tmp_path / "tests" / ACTIVE_FILE_NAME).exists()
    logger.info("on disk", display_icons=False)

    logger.set_file_writing_enabled(False)
    result = logger.info("console again", display_icons=False)

    assert result == {"ok": True, "level": "info", "file": False}
    assert records_of(tmp_path / "tests" / ACTIVE_FILE_NAME) == ["on disk"]


def test_twelve_messages_with_five_line_limit_make_three_files(
    make_logger,
    tmp_path: Path,
    records_of,
    fixed_clock,
) -> None:
    logger = make_logger(max_lines=5, write_to_file=True)
    for number in range(1, 13):
        assert logger.info(f"message {number}", display_icons=False)["ok"] is True

    directory = tmp_path / "tests"
    files = sorted(directory.iterdir())
    stamp = fixed_clock.now().isoformat(timespec="microseconds").replace(":", "-")
    assert [path.name for path in files] == [
        "logs.txt",
        f"logs_{stamp}.txt",
        f"logs_{stamp}_1.txt",
    ]
    assert records_of(directory / "logs.txt") == [f"message {n}" for n in range(1, 6)]
    assert records_of(directory / f"logs_{stamp}.txt") == [f"message {n}" for n in range(6, 11)]
    assert records_of(directory / f"logs_{stamp}_1.txt") == ["message 11", "message 12"]


def test_rotated_names_sort_chronologically(make_logger, tmp_path: Path, stepping_clock) -> None:
    logger = make_logger(max_lines=1, write_to_file=True, clock=stepping_clock)
    for number in range(4):
        logger.info(f"m{number}", display_icons=False)

    rotated = sorted(path.name for path in (tmp_path / "tests").iterdir() if path.name != ACTIVE_FILE_NAME)
    assert len(rotated) == 3
    contents = [(tmp_path / "tests" / name).read_text(encoding="utf-8").splitlines()[-1] for name in rotated]
    assert contents == ["m1", "m2", "m3"]


def test_concurrent_logging_keeps_every_line(make_logger, tmp_path: Path, records_of) -> None:
    logger = make_logger(max_lines=20, write_to_file=True, level="info")
    threads_count, per_thread = 6, 40

    def worker(index: int) -> None:
        for number in range(per_thread):
            logger.info(f"worker {index} line {number}", display_icons=False)

    threads = [threading.Thread(target=worker, args=(index,)) for index in range(threads_count)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    files = list((tmp_path / "tests").iterdir())
    counts = [len(records_of(path)) for path in files]
    assert sum(counts) == threads_count * per_thread
    assert max(counts) <= 20
    assert len(files) == threads_count * per_thread // 20


def test_delete_all_log_files_announces_and_recreates(make_logger, recording_console, tmp_path: Path, records_of) -> None:
    logger = make_logger(max_lines=2, write_to_file=True)
    for number in range(3):
        logger.info(f"m{number}", display_icons=False)
    recording_console.records.clear()

    report = logger.delete_all_log_files()

    assert report.ok
    assert len(report.deleted) == 2
    assert recording_console.texts[-1] == "ℹ All log files deleted successfully."
    assert "ℹ Deleted log file: logs.txt" in recording_console.texts
    assert list((tmp_path / "tests").iterdir()) == []

    logger.info("after", display_icons=False)
    assert records_of(tmp_path / "tests" / ACTIVE_FILE_NAME) == ["after"]


def test_delete_announcements_respect_threshold(make_logger, recording_console) -> None:
    logger = make_logger(level="error", write_to_file=True)
    logger.error("kept")
    recording_console.records.clear()

    report = logger.delete_all_log_files()

    assert report.ok
    assert recording_console.texts == []


def test_storage_faults_are_reported_on_console_and_never_raised(recording_console, fixed_clock) -> None:
    def broken() -> Path:
        raise PermissionError("read-only volume")

    logger = NeedleTailLogger(
        label="faulty",
        write_to_file=True,
        console=recording_console,
        clock=fixed_clock,
        directory_provider=broken,
    )
    result = logger.info("still visible", display_icons=False)

    assert result == {"ok": False, "reason": "file_error"}
    assert "still visible" in recording_console.texts
    errors = [(text, metadata) for level, text, metadata in recording_console.records if level is LogLevel.ERROR]
    assert errors
    text, metadata = errors[0]
    assert text == "log_directory_failed: read-only volume"
    assert metadata["event"].render() == "log_directory_failed"


def test_failing_console_backend_does_not_raise(tmp_path: Path, records_of) -> None:
    class Exploding:
        def emit(self, level, text, metadata) -> None:  # noqa: ANN001
            raise RuntimeError("terminal closed")

    logger = NeedleTailLogger(label="boom", write_to_file=True, console=Exploding(), directory_provider=lambda: tmp_path)

    assert logger.info("persisted", display_icons=False) == {"ok": False, "reason": "adapter_error"}
    assert records_of(tmp_path / "boom" / ACTIVE_FILE_NAME) == ["persisted"]


@pytest.mark.asyncio
async def test_log_async_runs_the_same_pipeline(make_logger, recording_console) -> None:
    logger = make_logger()
    result = await logger.log_async("notice", "from the loop", {"task": "sync"}, display_icons=False)

    assert result == {"ok": True, "level": "notice", "file": False}
    assert recording_console.texts == ["from the loop"]


def test_unknown_level_name_raises(make_logger) -> None:
    with pytest.raises(ValueError, match="Unknown log level"):
        make_logger().log("verbose", "nope")


def test_toggling_file_writing_keeps_the_partly_filled_file(make_logger, tmp_path: Path, records_of) -> None:
    logger = make_logger(max_lines=2, write_to_file=True)
    for number in range(3):
        logger.info(f"m{number}", display_icons=False)
    active_before = logger.current_log_file

    logger.set_file_writing_enabled(False)
    logger.set_file_writing_enabled(True)
    logger.info("m3", display_icons=False)

    files = sorted((tmp_path / "tests").iterdir())
    assert len(files) == 2
    assert logger.current_log_file == active_before
    assert records_of(tmp_path / "tests" / ACTIVE_FILE_NAME) == ["m0", "m1"]
    assert records_of(active_before) == ["m2", "m3"]


def test_new_log_files_are_announced_on_the_console(make_logger, recording_console, tmp_path: Path) -> None:
    logger = make_logger(max_lines=1, write_to_file=True)
    logger.info("first", display_icons=False)
    logger.info("second", display_icons=False)

    rotated = logger.current_log_file
    assert recording_console.texts == ["first", "second", f"ℹ Created new log file: {rotated.name}"]
    assert "Created new log file" not in rotated.read_text(encoding="utf-8")


def test_new_log_file_announcement_respects_threshold(make_logger, recording_console) -> None:
    logger = make_logger(level="warning", max_lines=1, write_to_file=True)
    logger.warning("first", display_icons=False)
    logger.warning("second", display_icons=False)

    assert recording_console.texts == ["first", "second"]
