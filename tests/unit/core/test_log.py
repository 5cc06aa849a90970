"""Tests for logger sinks, level filtering and cleanup."""

import pytest

from trivialmerge.core.log import (
    LEVELS,
    ConsoleSink,
    FileSink,
    Logger,
    LogfireSink,
    level_name,
    setup_logger,
)


@pytest.fixture
def file_logger(tmp_path):
    """Factory for a logger writing only to a file at a given level."""

    def _make(level):
        log_file = tmp_path / f"{level}.log"
        logger = setup_logger(
            log_root=tmp_path,
            run_name="test",
            console=ConsoleSink(enabled=False),
            file=FileSink(enabled=True, level=level, path=str(log_file)),
            logfire=LogfireSink(enabled=False),
        )
        return logger, log_file

    yield _make

    # Hand the global logger back to the session configuration
    setup_logger(
        log_root=tmp_path,
        run_name="test",
        console=ConsoleSink(level="debug"),
    )


def emit_all(logger):
    logger.spew("SPEW message")
    logger.trace("TRACE message")
    logger.debug("DEBUG message")
    logger.info("INFO message")
    logger.warn("WARN message")
    logger.error("ERROR message")


@pytest.mark.parametrize(
    "level, expected",
    [
        ("spew", {"SPEW", "TRACE", "DEBUG", "INFO", "WARN", "ERROR"}),
        ("debug", {"DEBUG", "INFO", "WARN", "ERROR"}),
        ("warn", {"WARN", "ERROR"}),
        ("error", {"ERROR"}),
    ],
)
def test_file_sink_filters_by_level(file_logger, level, expected):
    logger, log_file = file_logger(level)

    emit_all(logger)
    logger.close()

    content = log_file.read_text()
    for name in ["SPEW", "TRACE", "DEBUG", "INFO", "WARN", "ERROR"]:
        assert (f"{name} message" in content) == (name in expected)


def test_file_sink_appends_keyword_attributes(file_logger):
    logger, log_file = file_logger("info")

    logger.info("Staging file", path="a.txt")
    logger.close()

    line = log_file.read_text().splitlines()[0]
    assert "Staging file" in line
    assert "path='a.txt'" in line


def test_level_ordering():
    names = list(LEVELS)
    assert names == ["spew", "trace", "debug", "info", "warn", "error",
                     "fatal"]
    assert [LEVELS[n] for n in names] == sorted(LEVELS.values())


def test_level_name_lookup():
    assert level_name(LEVELS["info"]) == "info"
    assert level_name(LEVELS["info"] + 1) == "info"
    assert level_name(LEVELS["spew"]) == "spew"
    assert level_name(0) == "unknown"


def test_sinks_inherit_logger_level():
    logger = Logger(level="debug", file=FileSink(level="error"))

    assert logger.console.level == "debug"
    assert logger.file.level == "error"


def test_logger_closes_file_via_context_manager(tmp_path):
    logger = Logger(
        console=ConsoleSink(enabled=False),
        file=FileSink(enabled=True, path=str(tmp_path / "test.log")),
        logfire={"enabled": False},
    )
    logger.setup(log_root=tmp_path, run_name="test")

    assert not logger.file._file.closed

    with pytest.raises(ValueError), logger:
        logger.info("before exception")
        raise ValueError("test exception")

    assert logger.file._file.closed


def test_file_path_template(tmp_path):
    logger = Logger(
        console=ConsoleSink(enabled=False),
        file=FileSink(enabled=True),
        logfire={"enabled": False},
    )
    logger.setup(log_root=tmp_path, run_name="run1")
    logger.close()

    assert (tmp_path / "run1" / "trivialmerge.log").is_file()
