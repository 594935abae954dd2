class WordlebotError(Exception):
    """Base class for failures talking to the remote services."""


class OracleError(WordlebotError):
    """The feedback oracle could not be reached or returned an unusable body."""


class SuggestionError(WordlebotError):
    """The completion service failed or produced no usable word."""
