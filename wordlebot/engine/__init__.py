from .scoring import LetterVerdict, SlotVerdict, score, pattern_string
from .constraints import AttemptRecord, ConstraintState
from .validation import validate_guess, extract_word

__all__ = [
    "LetterVerdict", "SlotVerdict", "score", "pattern_string",
    "AttemptRecord", "ConstraintState", "validate_guess", "extract_word",
]
