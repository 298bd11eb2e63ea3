import re

from mosfetbot.logger import Logger, get_logger

LINE = re.compile(r"^\d{2}:\d{2}\.\d{3} : (.*) : (.*) - (.*)$")


def test_disabled_logger_writes_nothing(tmp_path):
    logger = Logger()
    assert logger.is_debug_enabled() is False
    logger.log("ignored")
    assert list(tmp_path.iterdir()) == []


def test_log_line_format_with_defaults(tmp_path):
    path = tmp_path / "agent.log"
    with Logger() as logger:
        logger.enable_logging(str(path))
        assert logger.is_debug_enabled() is True
        logger.log("hello")
    lines = path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 1
    match = LINE.match(lines[0])
    assert match is not None
    assert match.groups() == ("init", "Unknown", "hello")


def test_player_and_step_appear_in_lines(tmp_path):
    path = tmp_path / "agent.log"
    logger = Logger()
    logger.enable_logging(str(path))
    logger.set_player_name("player_1")
    logger.set_step_id("17")
    logger.log("first")
    logger.log("second")
    logger.close()
    parsed = [LINE.match(line).groups() for line in path.read_text(encoding="utf-8").splitlines()]
    assert parsed == [("17", "player_1", "first"), ("17", "player_1", "second")]


def test_logging_appends_to_existing_file(tmp_path):
    path = tmp_path / "agent.log"
    path.write_text("previous\n", encoding="utf-8")
    logger = Logger()
    logger.enable_logging(str(path))
    logger.log("added")
    logger.close()
    lines = path.read_text(encoding="utf-8").splitlines()
    assert lines[0] == "previous"
    assert lines[1].endswith(" - added")


def test_second_enable_keeps_first_file(tmp_path):
    first = tmp_path / "one.log"
    second = tmp_path / "two.log"
    logger = Logger()
    logger.enable_logging(str(first))
    logger.enable_logging(str(second))
    logger.log("message")
    logger.close()
    assert first.read_text(encoding="utf-8").endswith(" - message\n")
    assert not second.exists()


def test_close_disables_logging(tmp_path):
    logger = Logger()
    logger.enable_logging(str(tmp_path / "agent.log"))
    logger.close()
    assert logger.is_debug_enabled() is False


def test_get_logger_is_shared(tmp_path):
    path = tmp_path / "shared.log"
    first = get_logger()
    try:
        first.enable_logging(str(path))
        first.set_player_name("shared_player")
        first.set_step_id("5")
        second = get_logger()
        assert second.is_debug_enabled() is True
        second.log("via second")
    finally:
        get_logger().close()
    lines = path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 1
    assert LINE.match(lines[0]).groups() == ("5", "shared_player", "via second")
    assert first.is_debug_enabled() is False