from .errors import WordlebotError, OracleError, SuggestionError
from .oracle import FeedbackOracleClient, parse_verdicts
from .suggestion import SuggestionClient, build_prompt

__all__ = [
    "WordlebotError", "OracleError", "SuggestionError",
    "FeedbackOracleClient", "parse_verdicts",
    "SuggestionClient", "build_prompt",
]
