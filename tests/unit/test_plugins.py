# tests/unit/test_plugins.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

import logging

import pytest

from environmentalist.core.events import FaultEvent
from environmentalist.core.handlers import HandlerChain
from environmentalist.interfaces.types import NOT_HANDLED
from environmentalist.plugins import LoggingHandler, SeverityFilter

# -----------------------------------------------------------------------------
# LOGGING HANDLER
# -----------------------------------------------------------------------------


def test_logging_handler_logs_and_declines(caplog, fault_event):
    handler = LoggingHandler()
    with caplog.at_level(logging.WARNING, logger="environmentalist.faults"):
        result = handler.handle(fault_event)

    assert result is NOT_HANDLED
    assert caplog.records[0].getMessage() == "UserWarning: something odd (script.py:12)"
    assert caplog.records[0].levelno == logging.WARNING


def test_logging_handler_can_claim(fault_event):
    assert LoggingHandler(claim=True).handle(fault_event) is True


def test_logging_handler_custom_logger_and_level(caplog, fault_event):
    logger = logging.getLogger("tests.faults")
    handler = LoggingHandler(logger=logger, level=logging.ERROR)
    with caplog.at_level(logging.ERROR, logger="tests.faults"):
        handler.handle(fault_event)

    assert [record.name for record in caplog.records] == ["tests.faults"]
    assert caplog.records[0].levelno == logging.ERROR


def test_logging_handler_non_class_severity(caplog):
    event = FaultEvent(severity="E_NOTICE", message="undefined index")
    with caplog.at_level(logging.WARNING, logger="environmentalist.faults"):
        LoggingHandler().handle(event)
    assert caplog.records[0].getMessage() == "E_NOTICE: undefined index (<unknown>)"


# -----------------------------------------------------------------------------
# SEVERITY FILTER
# -----------------------------------------------------------------------------


@pytest.mark.parametrize(
    "severity,silenced",
    [
        (DeprecationWarning, True),
        (PendingDeprecationWarning, False),
        (UserWarning, False),
        ("E_NOTICE", True),
        ("E_WARNING", False),
    ],
)
def test_severity_filter(severity, silenced):
    handler = SeverityFilter(DeprecationWarning, "E_NOTICE")
    result = handler.handle(FaultEvent(severity=severity, message="m"))
    assert (result is True) == silenced
    if not silenced:
        assert result is NOT_HANDLED


def test_severity_filter_matches_subclasses():
    handler = SeverityFilter(Warning)
    assert handler.matches(DeprecationWarning)
    assert handler.matches(Warning)
    assert not handler.matches("Warning")


def test_severity_filter_equality():
    assert SeverityFilter(UserWarning) == SeverityFilter(UserWarning)
    assert SeverityFilter(UserWarning) != SeverityFilter(DeprecationWarning)

    chain = HandlerChain([SeverityFilter(UserWarning), SeverityFilter(UserWarning)])
    assert len(chain) == 1


def test_filter_then_log(caplog):
    chain = HandlerChain([SeverityFilter(DeprecationWarning), LoggingHandler(claim=True)])
    with caplog.at_level(logging.WARNING, logger="environmentalist.faults"):
        assert chain.dispatch(FaultEvent(DeprecationWarning, "old api")) is True
        assert chain.dispatch(FaultEvent(UserWarning, "careful")) is True

    assert [record.getMessage() for record in caplog.records] == ["UserWarning: careful (<unknown>)"]


def test_logging_handler_equality():
    logger = logging.getLogger("tests.faults")
    assert LoggingHandler(logger) == LoggingHandler(logger)
    assert LoggingHandler(logger) != LoggingHandler(logger, claim=True)
    assert LoggingHandler(logger) != LoggingHandler(logger, level=logging.ERROR)

    chain = HandlerChain([LoggingHandler(logger), LoggingHandler(logger)])
    assert len(chain) == 1
