"""Ready-made fault handlers."""

from environmentalist.plugins.handlers import LoggingHandler, SeverityFilter

__all__ = ["LoggingHandler", "SeverityFilter"]
