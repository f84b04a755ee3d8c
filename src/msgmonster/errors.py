from __future__ import annotations


class MsgmonsterError(Exception):
    """Base class for errors that abort generation of one definition."""


class DefinitionParseError(MsgmonsterError):
    """Raised when a field line cannot be split into a type and a name."""


class TemplateError(MsgmonsterError):
    """Raised when a template fragment is missing or cannot be read."""


class DefinitionSourceError(MsgmonsterError):
    """Raised when the definition source fails to list or read definitions."""


class GenerationError(MsgmonsterError):
    """Raised when class generation steps are run out of order."""
