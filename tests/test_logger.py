"""
Tests for logger functionality.
"""

import pytest
from jobmatch.logger import StructuredLogger, get_logger, reset_logger


class TestStructuredLogger:
    """Test structured logging functionality."""

    def test_logger_creation(self, tmp_path):
        """Logger should be created with default settings."""
        logger = StructuredLogger(
            name="test",
            level="INFO",
            log_dir=tmp_path,
            enable_console=False,
        )

        assert logger.logger.name == "test"
        assert logger.metrics["lines_read"] == 0
        assert logger.metrics["matches_made"] == 0

    def test_log_methods(self, tmp_path):
        """All log level methods should work."""
        logger = StructuredLogger(
            name="test",
            log_dir=tmp_path,
            enable_console=False,
        )

        # Should not raise exceptions
        logger.debug("Debug message")
        logger.info("Info message")
        logger.warning("Warning message")
        logger.error("Error message")
        logger.critical("Critical message")

    def test_log_with_context(self, tmp_path):
        """Context is rendered into the message."""
        logger = StructuredLogger(
            name="test",
            log_dir=tmp_path,
            enable_console=False,
        )

        logger.info("Message with context", dataset="jobs", line=5)

        log_content = next(tmp_path.glob("*.log")).read_text()
        assert '"dataset": "jobs"' in log_content
        assert '"line": 5' in log_content

    def test_metrics_tracking(self, tmp_path):
        """Metrics should be tracked correctly."""
        logger = StructuredLogger(
            name="test",
            log_dir=tmp_path,
            enable_console=False,
        )

        logger.record_line("jobs")
        logger.record_loaded("jobs")
        logger.record_line("jobs")
        logger.record_skipped("jobs", "data format")

        logger.record_line("applications")
        logger.record_loaded("applications")
        logger.record_warning("characteristic")

        logger.record_match()

        metrics = logger.get_metrics()

        assert metrics["lines_read"] == 3
        assert metrics["records_loaded"] == 2
        assert metrics["lines_skipped"] == 1
        assert metrics["matches_made"] == 1
        assert metrics["warnings_by_category"] == {"data format": 1, "characteristic": 1}

        # Check dataset stats
        assert metrics["datasets"]["jobs"]["lines"] == 2
        assert metrics["datasets"]["jobs"]["skipped"] == 1
        assert metrics["datasets"]["applications"]["load_rate"] == 1.0

    def test_load_rate_calculation(self, tmp_path):
        """Load rate should be calculated correctly."""
        logger = StructuredLogger(
            name="test",
            log_dir=tmp_path,
            enable_console=False,
        )

        # 3 lines, 2 loaded = 66.7% load rate
        for _ in range(3):
            logger.record_line("applications")

        logger.record_loaded("applications")
        logger.record_loaded("applications")

        metrics = logger.get_metrics()
        load_rate = metrics["datasets"]["applications"]["load_rate"]

        assert load_rate == pytest.approx(0.667, rel=0.01)

    def test_reset_metrics(self, tmp_path):
        logger = StructuredLogger(name="test", log_dir=tmp_path, enable_console=False)
        logger.record_line("jobs")
        logger.record_match()

        logger.reset_metrics()

        assert logger.metrics["lines_read"] == 0
        assert logger.metrics["datasets"] == {}

    def test_metrics_summary(self, tmp_path):
        """The summary is written to the log."""
        logger = StructuredLogger(name="test", log_dir=tmp_path, enable_console=False)
        logger.record_line("jobs")
        logger.record_loaded("jobs")

        logger.log_metrics_summary()

        log_content = next(tmp_path.glob("*.log")).read_text()
        assert "Records: 1/1 (100.0% loaded)" in log_content
        assert "jobs: 1/1 (100.0%)" in log_content

    def test_set_level(self, tmp_path):
        logger = StructuredLogger(name="test", level="INFO", log_dir=tmp_path, enable_console=False)
        logger.set_level("debug")
        logger.debug("Now visible")

        log_content = next(tmp_path.glob("*.log")).read_text()
        assert "Now visible" in log_content

    def test_log_file_creation(self, tmp_path):
        """Log file should be created in specified directory."""
        logger = StructuredLogger(
            name="test",
            log_dir=tmp_path,
            enable_console=False,
        )

        logger.info("Test message")

        # Check that a log file was created
        log_files = list(tmp_path.glob("*.log"))
        assert len(log_files) == 1

        # Check that message was written
        log_content = log_files[0].read_text()
        assert "Test message" in log_content


class TestGlobalLogger:
    """Test global logger singleton."""

    def test_get_logger_singleton(self, tmp_path):
        """get_logger should return same instance."""
        reset_logger()  # Start fresh

        logger1 = get_logger(log_dir=tmp_path, enable_console=False)
        logger2 = get_logger()

        assert logger1 is logger2

    def test_reset_logger(self, tmp_path):
        """reset_logger should create new instance."""
        reset_logger()

        logger1 = get_logger(log_dir=tmp_path, enable_console=False)
        logger1.record_match()

        reset_logger()

        logger2 = get_logger(log_dir=tmp_path, enable_console=False)

        # Should be different instance with fresh metrics
        assert logger2 is not logger1
        assert logger2.metrics["matches_made"] == 0
