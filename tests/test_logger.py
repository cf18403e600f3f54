import logging
import re

import pytest

from smartorganizer.logger import setup_logging

LINE = re.compile(r"^\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2} \[(\w+)\] (.*)$")


@pytest.fixture(autouse=True)
def restore_logger():
    logger = logging.getLogger("smartorganizer")
    saved_handlers, saved_level = list(logger.handlers), logger.level
    yield
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    for handler in saved_handlers:
        logger.addHandler(handler)
    logger.setLevel(saved_level)


def test_creates_parent_directory_and_writes_formatted_line(tmp_path):
    log_path = tmp_path / "nested" / "dir" / "organizer.log"
    setup_logging(log_path)
    logging.getLogger("smartorganizer.organizer").info("hello world")
    lines = log_path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 1
    match = LINE.match(lines[0])
    assert match is not None
    assert match.groups() == ("INFO", "hello world")


def test_debug_messages_are_filtered(tmp_path):
    log_path = tmp_path / "organizer.log"
    setup_logging(log_path)
    child = logging.getLogger("smartorganizer.organizer")
    child.debug("hidden")
    child.warning("shown")
    text = log_path.read_text(encoding="utf-8")
    assert "hidden" not in text
    assert "shown" in text


def test_messages_reach_stdout(tmp_path, capsys):
    setup_logging(tmp_path / "organizer.log")
    logging.getLogger("smartorganizer.organizer").info("to the console")
    out = capsys.readouterr().out.strip()
    assert LINE.match(out).group(2) == "to the console"


def test_repeated_setup_does_not_duplicate_output(tmp_path):
    log_path = tmp_path / "organizer.log"
    setup_logging(log_path)
    setup_logging(log_path)
    logging.getLogger("smartorganizer").info("once")
    lines = log_path.read_text(encoding="utf-8").splitlines()
    assert [LINE.match(line).group(2) for line in lines] == ["once"]


def test_appends_to_existing_log(tmp_path):
    log_path = tmp_path / "organizer.log"
    log_path.write_text("earlier line\n", encoding="utf-8")
    setup_logging(log_path)
    logging.getLogger("smartorganizer").info("later")
    lines = log_path.read_text(encoding="utf-8").splitlines()
    assert lines[0] == "earlier line"
    assert LINE.match(lines[1]).group(2) == "later"