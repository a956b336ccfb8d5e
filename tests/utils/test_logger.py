import io

import pytest

from models.enums import LogCategory, LogLevel
from utils.logger import Logger, format_detail


@pytest.fixture
def stream():
    return io.StringIO()


@pytest.fixture
def logger(stream):
    return Logger(min_level=LogLevel.INFO, use_colors=False, stream=stream)


def test_record_with_detail_tree(logger, stream):
    logger.for_category(LogCategory.STATE).info("State step", state="hue_steps", aimed_index=3)

    lines = stream.getvalue().splitlines()
    assert len(lines) == 3
    assert lines[0].endswith("STATE      ✓ State step")
    assert lines[1].strip() == "├─ state: hue_steps"
    assert lines[2].strip() == "└─ aimed_index: 3"


def test_threshold_and_category_override(logger, stream):
    engine = logger.for_category(LogCategory.ENGINE)
    midi = logger.for_category(LogCategory.MIDI)

    engine.debug("hidden")
    assert stream.getvalue() == ""

    logger.category_levels[LogCategory.ENGINE] = LogLevel.DEBUG
    assert engine.is_enabled(LogLevel.DEBUG)
    assert not midi.is_enabled(LogLevel.DEBUG)

    engine.debug("shown")
    midi.debug("hidden")
    assert "shown" in stream.getvalue()
    assert "hidden" not in stream.getvalue()


def test_colors_can_be_disabled(stream):
    Logger(use_colors=True, stream=stream).error(LogCategory.API, "boom")
    assert "\033[" in stream.getvalue()


def test_exception_details():
    assert format_detail("exception", ValueError("bad")) == "exception: ValueError: bad"
    assert format_detail("count", 2) == "count: 2"


def test_with_category_keeps_base(logger, stream):
    api = logger.for_category(LogCategory.CONFIG).with_category(LogCategory.API)
    assert api.category == LogCategory.API
    api.warn("Rebound")
    assert "API" in stream.getvalue()
