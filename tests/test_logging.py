"""
Tests for structured logging.
"""

import io
import json

import pytest

from moodtrace.utils.logging import StructuredLogger


def read_lines(stream):
    return [line for line in stream.getvalue().splitlines() if line]


class TestStructuredLogger:
    """Test suite for StructuredLogger output."""

    def test_json_line(self):
        stream = io.StringIO()
        logger = StructuredLogger("moodtrace.test.json", stream=stream)
        logger.info("Sample submitted", track="Rainy Day Jazz", distance=0.36)
        record = json.loads(read_lines(stream)[0])
        assert record["level"] == "INFO"
        assert record["logger"] == "moodtrace.test.json"
        assert record["message"] == "Sample submitted"
        assert record["track"] == "Rainy Day Jazz"
        assert record["distance"] == 0.36

    def test_level_filters(self):
        stream = io.StringIO()
        logger = StructuredLogger("moodtrace.test.level", level="INFO", stream=stream)
        logger.debug("hidden")
        logger.metric("baseline_distance", 0.2)
        assert read_lines(stream) == []

    def test_metric_at_debug(self):
        stream = io.StringIO()
        logger = StructuredLogger("moodtrace.test.metric", level="DEBUG", stream=stream)
        logger.metric("baseline_distance", 0.2, tags={"state": "stable"})
        record = json.loads(read_lines(stream)[0])
        assert record["metric_name"] == "baseline_distance"
        assert record["tags"] == {"state": "stable"}

    def test_text_format(self):
        stream = io.StringIO()
        logger = StructuredLogger("moodtrace.test.text", format="text", stream=stream)
        logger.warning("Source unavailable", error="429")
        line = read_lines(stream)[0]
        assert "WARNING" in line
        assert "Source unavailable" in line
        assert "[error=429]" in line

    def test_operation_context_success(self):
        stream = io.StringIO()
        logger = StructuredLogger("moodtrace.test.op", stream=stream)
        with logger.operation_context("Replay", "run", input="log.csv") as log:
            log.info("working")
        records = [json.loads(line) for line in read_lines(stream)]
        assert [r["operation_status"] for r in (records[0], records[-1])] == ["started", "completed"]
        assert records[1]["context"]["component"] == "Replay"
        assert records[1]["context"]["metadata"] == {"input": "log.csv"}

    def test_operation_context_failure_reraises(self):
        stream = io.StringIO()
        logger = StructuredLogger("moodtrace.test.fail", stream=stream)
        with pytest.raises(ValueError):
            with logger.operation_context("Replay", "run"):
                raise ValueError("boom")
        failure = json.loads(read_lines(stream)[-1])
        assert failure["operation_status"] == "failed"
        assert failure["error_type"] == "ValueError"
        assert failure["exception"]["message"] == "boom"
