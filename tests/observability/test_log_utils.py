"""
Test suite for logging configuration and structured logging helpers.

System role: Verification of observability utilities
"""

import logging

import pytest

from studyrag.observability import (
    configure_logging,
    log_exception_with_context,
    log_with_context,
    safe_log_value,
)


@pytest.fixture
def restore_root_logger():
    """Restore root handlers and level after configure_logging()."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    for handler in root.handlers[:]:
        root.removeHandler(handler)
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


class TestSafeLogValue:
    """Test value rendering for log context."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (None, "None"),
            ("text", "text"),
            ([1, 2, 3], "list(3 items)"),
            (("a",), "tuple(1 items)"),
            ({"a": 1}, "dict(1 keys)"),
            (42, "42"),
        ],
    )
    def test_renders_values(self, value, expected: str) -> None:
        """Should summarize containers and stringify scalars."""
        assert safe_log_value(value) == expected

    def test_truncates_long_values(self) -> None:
        """Should cut values beyond max_length and note the total."""
        rendered = safe_log_value("x" * 20, max_length=5)

        assert rendered == "xxxxx... (truncated, 20 total)"

    def test_unrenderable_value(self) -> None:
        """Should not raise when str() fails."""

        class Broken:
            def __str__(self) -> str:
                raise RuntimeError("no")

        assert safe_log_value(Broken()) == "<unable to log: RuntimeError>"


class TestContextLogging:
    """Test extra= context helpers."""

    def test_log_with_context_attaches_extra(self, caplog: pytest.LogCaptureFixture) -> None:
        """Should attach rendered context as record attributes."""
        logger = logging.getLogger("studyrag.test")

        with caplog.at_level(logging.INFO, logger="studyrag.test"):
            log_with_context(logger, logging.INFO, "Processing", document_id="doc-1", chunks=[1, 2])

        record = caplog.records[-1]
        assert record.message == "Processing"
        assert record.document_id == "doc-1"
        assert record.chunks == "list(2 items)"

    def test_log_exception_with_context(self, caplog: pytest.LogCaptureFixture) -> None:
        """Should log at ERROR with exception type, message and traceback."""
        logger = logging.getLogger("studyrag.test")
        error = ValueError("bad page")

        with caplog.at_level(logging.ERROR, logger="studyrag.test"):
            log_exception_with_context(logger, "Extraction failed", error, document_id="doc-1")

        record = caplog.records[-1]
        assert record.levelno == logging.ERROR
        assert record.error_type == "ValueError"
        assert record.error_msg == "bad page"
        assert record.exc_info[1] is error


class TestConfigureLogging:
    """Test root logger configuration."""

    def test_installs_single_stdout_handler(self, restore_root_logger: logging.Logger) -> None:
        """Should replace existing handlers and set the level."""
        configure_logging("debug")
        configure_logging("debug")

        assert len(restore_root_logger.handlers) == 1
        assert restore_root_logger.level == logging.DEBUG
        assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING
