# environmentalist/plugins/handlers.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

import logging
from typing import Any, Optional

from environmentalist.core.events import FaultEvent
from environmentalist.interfaces.types import NOT_HANDLED


def _severity_name(severity: Any) -> str:
    return getattr(severity, "__name__", str(severity))


class LoggingHandler:
    """
    Logs every fault it sees. By default it declines the event afterwards so
    the rest of the chain still runs; pass ``claim=True`` to stop the chain.
    """

    def __init__(
        self, logger: Optional[logging.Logger] = None, level: int = logging.WARNING, claim: bool = False
    ) -> None:
        self.logger = logger or logging.getLogger("environmentalist.faults")
        self.level = level
        self.claim = claim

    def handle(self, event: FaultEvent) -> Any:
        self.logger.log(self.level, "%s: %s (%s)", _severity_name(event.severity), event.message, event.source_location)
        return True if self.claim else NOT_HANDLED

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LoggingHandler):
            return NotImplemented
        return (self.logger, self.level, self.claim) == (other.logger, other.level, other.claim)

    def __hash__(self) -> int:
        return hash((self.logger, self.level, self.claim))


class SeverityFilter:
    """
    Silences faults of the given severities. Class severities match their
    subclasses too, so ``SeverityFilter(Warning)`` silences every warning
    category. Anything else is declined.
    """

    def __init__(self, *severities: Any) -> None:
        self.severities = severities

    def matches(self, severity: Any) -> bool:
        for candidate in self.severities:
            if severity == candidate:
                return True
            if isinstance(severity, type) and isinstance(candidate, type) and issubclass(severity, candidate):
                return True
        return False

    def handle(self, event: FaultEvent) -> Any:
        if self.matches(event.severity):
            return True
        return NOT_HANDLED

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SeverityFilter):
            return NotImplemented
        return self.severities == other.severities

    def __hash__(self) -> int:
        return hash(self.severities)
