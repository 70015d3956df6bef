import json
import logging
import pytest

from core.logging_config import ColoredFormatter, LogContext, StructuredFormatter, get_logger


class RecordCollector(logging.Handler):
    def __init__(self):
        super().__init__()
        self.records = []

    def emit(self, record):
        self.records.append(record)


@pytest.fixture
def collected():
    collector = RecordCollector()
    logger = get_logger("tests.logging_config")
    logger.addHandler(collector)
    logger.setLevel(logging.DEBUG)
    yield logger, collector.records
    logger.removeHandler(collector)


@pytest.mark.unit
class TestLogContext:

    def test_context_is_attached_inside_the_block_only(self, collected):
        logger, records = collected

        with LogContext(embed_id=3, user_id=7):
            logger.info("inside")
        logger.info("outside")

        assert records[0].embed_id == 3
        assert records[0].log_context == {"embed_id": 3, "user_id": 7}
        assert not hasattr(records[1], "embed_id")

    def test_nested_contexts_merge(self, collected):
        logger, records = collected

        with LogContext(request_id="req-1", path="/api/v1/embeds"):
            with LogContext(embed_id=3, path="/api/v1/embed/3"):
                logger.info("nested")

        assert records[0].log_context == {"request_id": "req-1", "path": "/api/v1/embed/3", "embed_id": 3}

    def test_none_values_are_skipped(self, collected):
        logger, records = collected

        with LogContext(embed_id=None, user_id=1):
            logger.info("partial")

        assert records[0].log_context == {"user_id": 1}


@pytest.mark.unit
class TestFormatters:

    def test_structured_formatter_includes_context_and_fields(self, collected):
        logger, records = collected

        with LogContext(embed_id=3, user_id=7):
            logger.error_ctx("Failed to update embed", error="db down")

        data = json.loads(StructuredFormatter().format(records[0]))
        assert data["message"] == "Failed to update embed"
        assert data["level"] == "ERROR"
        assert data["embed_id"] == 3
        assert data["user_id"] == 7
        assert data["error"] == "db down"

    def test_colored_formatter_appends_embed_and_user(self, collected):
        logger, records = collected

        with LogContext(request_id="req-1", path="/x", embed_id=3, user_id=7):
            logger.info("Embed updated")

        line = ColoredFormatter(fmt="%(levelname)s %(message)s").format(records[0])
        assert line.endswith("Embed updated [request_id=req-1 embed_id=3 user_id=7]")
        assert "path=" not in line

    def test_colored_formatter_leaves_record_untouched(self, collected):
        logger, records = collected
        logger.warning("plain")

        ColoredFormatter(fmt="%(levelname)s %(message)s").format(records[0])

        assert records[0].levelname == "WARNING"
