"""Error kinds raised by the search pipeline."""


class GrepError(Exception):
    """Base class for notegrep errors."""


class ExternalToolError(GrepError):
    """The external search tool is missing or failed to execute."""


class NoResultsError(GrepError):
    """The search ran but nothing matched."""


class MalformedSessionError(GrepError):
    """No stored query, or the stored query cannot be used."""


class PatternError(GrepError):
    """The search pattern is not a valid regular expression."""
