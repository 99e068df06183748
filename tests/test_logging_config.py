import logging

import pytest

from flowlines import FlowField, sample_flow_field, setup_logging
from flowlines.flowfields import constant_field


@pytest.fixture
def package_logger():
    yield
    logger = logging.getLogger("flowlines")
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


def test_setup_is_idempotent(package_logger):
    setup_logging()
    logger = setup_logging(logging.DEBUG)
    assert logger.name == "flowlines"
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 1


def test_log_file(package_logger, tmp_path):
    path = tmp_path / "run.log"
    logger = setup_logging(log_file=str(path))
    assert len(logger.handlers) == 2
    logging.getLogger("flowlines.flowfields.sampling").info("hello from the sampler")
    assert "hello from the sampler" in path.read_text(encoding="utf-8")


def test_sampler_reports_summary(caplog):
    caplog.set_level(logging.INFO, logger="flowlines")
    ff = FlowField(constant_field(0.0)).initialize(100, 100, 10)
    sample_flow_field(ff, max_line_count=50, random_seed=0)
    messages = [r.getMessage() for r in caplog.records]
    assert any(m.startswith("Placed") and "no_seed" in m for m in messages)
    assert any(m.startswith("No free seed position") for m in messages)
