# environmentalist/core/events.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class SourceLocation:
    """Where in the host's source a fault was raised."""

    filename: Optional[str] = None
    lineno: Optional[int] = None

    def __str__(self) -> str:
        if self.filename is None:
            return "<unknown>"
        if self.lineno is None:
            return self.filename
        return f"{self.filename}:{self.lineno}"


@dataclass(frozen=True)
class FaultEvent:
    """
    A runtime fault reported by the host, passed unchanged to every handler
    in a HandlerChain.

    :param severity: The host's classification of the fault. For warnings this
        is the warning category class.
    :param message: Human readable description.
    :param source_location: File and line the fault originated from.
    :param context: Any extra data the host wants to pass along.
    """

    severity: Any
    message: str
    source_location: SourceLocation = field(default_factory=SourceLocation)
    context: Dict[str, Any] = field(default_factory=dict, compare=False)

    @property
    def filename(self) -> Optional[str]:
        return self.source_location.filename

    @property
    def lineno(self) -> Optional[int]:
        return self.source_location.lineno

    @classmethod
    def from_warning(
        cls, message: Any, category: Any, filename: str, lineno: int, file=None, line=None
    ) -> "FaultEvent":
        """
        Build an event from the arguments of ``warnings.showwarning``.

        The original warning object and the optional ``file``/``line``
        arguments are kept in ``context`` so the event can be replayed to a
        displaced ``showwarning``.
        """
        return cls(
            severity=category,
            message=str(message),
            source_location=SourceLocation(filename, lineno),
            context={"warning": message, "file": file, "line": line},
        )
