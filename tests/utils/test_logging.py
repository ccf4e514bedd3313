import logging

import pytest

from dataaccess.utils.logging import TRACE_MESSAGE, get_logger, null_logger, time_call


def test_get_logger_is_namespaced():
    logger = get_logger("tests.logging")
    assert logger.name == "dataaccess.tests.logging"
    assert logging.getLogger("dataaccess").handlers


def test_time_call_logs_trace_fields(caplog):
    logger = get_logger("tests.timer")
    caplog.set_level(logging.DEBUG, logger=logger.name)
    with time_call(logger) as timer:
        timer.sql = "SELECT 1"
        timer.params = {"a": 1}
    records = [record for record in caplog.records if record.name == logger.name]
    assert len(records) == 1
    record = records[0]
    assert record.getMessage() == TRACE_MESSAGE
    assert record.levelno == logging.DEBUG
    assert record.sql == "SELECT 1"
    assert record.params == {"a": 1}
    assert record.duration == timer.elapsed_ms


def test_time_call_escalates_slow_calls(caplog):
    logger = get_logger("tests.slow")
    caplog.set_level(logging.DEBUG, logger=logger.name)
    with time_call(logger, threshold_ms=0):
        pass
    assert [record.levelno for record in caplog.records if record.name == logger.name] == [
        logging.WARNING
    ]


def test_time_call_skips_failed_blocks(caplog):
    logger = get_logger("tests.failed")
    caplog.set_level(logging.DEBUG, logger=logger.name)
    with pytest.raises(RuntimeError):
        with time_call(logger):
            raise RuntimeError("boom")
    assert not [record for record in caplog.records if record.name == logger.name]


def test_null_logger_discards_records(caplog):
    caplog.set_level(logging.DEBUG)
    null_logger().debug(TRACE_MESSAGE, extra={"sql": "SELECT 1", "params": None, "duration": 0.1})
    assert not [record for record in caplog.records if record.name == "dataaccess.null"]
