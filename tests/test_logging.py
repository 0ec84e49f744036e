"""Tests for logging setup and context binding."""

import logging

import pytest
import structlog

from ad_producer.logging import HANDLER_NAME, phase_context, production_context, setup_logging


@pytest.fixture
def root_logger():
    root = logging.getLogger()
    level = root.level
    yield root
    setup_logging()
    root.setLevel(level)


def test_setup_is_idempotent(root_logger) -> None:
    """Test that repeated setup keeps a single handler."""
    setup_logging()
    setup_logging(level="debug", log_format="json")

    handlers = [h for h in root_logger.handlers if h.get_name() == HANDLER_NAME]
    assert len(handlers) == 1
    assert root_logger.level == logging.DEBUG


def test_production_context_binds_fields() -> None:
    """Test that production and phase ids are bound for the block only."""
    with production_context("prod_123", product="CBD Oil"):
        with phase_context("generate"):
            bound = structlog.contextvars.get_contextvars()
            assert bound == {"production_id": "prod_123", "product": "CBD Oil", "phase": "generate"}
        assert "phase" not in structlog.contextvars.get_contextvars()

    assert structlog.contextvars.get_contextvars() == {}
