"""
Language-model guess suggestions.

The client turns a ConstraintState into a compact prompt, asks an
OpenAI-compatible chat-completions endpoint for a single word, and extracts
the first alphabetic run of the expected length from the reply.

Prompt layout (kept short; the model only gets a few output tokens):

    Wordle 6-letter. Next guess must be NEW and valid.

    History:
    1. "aaaaaa": ✗a ✓a ✗a ✗a ✗a ✗a
    Known:
    Pos2=a Present:n Absent:
    Tried:aaaaaa

    Rules: New word, respect above, 6 letters, English valid.
    Response: ONLY the word.

Any failure (no API key, transport error, timeout, HTTP status, malformed body,
no usable word) raises SuggestionError. The orchestrator makes at most one
call per round and falls back to its emergency generator on error.
"""

from __future__ import annotations

import logging
from typing import Optional

import requests

from wordlebot.config import DEFAULT_SUGGESTION_MODEL, DEFAULT_SUGGESTION_URL
from wordlebot.engine import ConstraintState, LetterVerdict, extract_word
from .errors import SuggestionError

logger = logging.getLogger(__name__)

_MARKS = {
    LetterVerdict.correct: "✓",
    LetterVerdict.present: "→",
    LetterVerdict.absent: "✗",
}


def build_prompt(state: ConstraintState) -> str:
    """Summarize everything known about the hidden word for the model."""
    N = state.N
    lines = [f"Wordle {N}-letter. Next guess must be NEW and valid.", "", "History:"]
    for i, rec in enumerate(state.history, start=1):
        marks = " ".join(f"{_MARKS[v.verdict]}{v.letter}" for v in rec.verdicts)
        lines.append(f'{i}. "{rec.guess}": {marks}')

    lines.append("")
    lines.append("Known:")
    known = [f"Pos{i + 1}={ch}" for i, ch in enumerate(state.known_slots) if ch]
    if state.present_letters:
        known.append("Present:" + "".join(sorted(state.present_letters)))
    if state.absent_letters:
        known.append("Absent:" + "".join(sorted(state.absent_letters)))
    lines.append(" ".join(known))

    tried = [rec.guess for rec in state.history]
    lines.append("Tried:" + ",".join(dict.fromkeys(tried)))

    lines.append("")
    lines.append(f"Rules: New word, respect above, {N} letters, English valid.")
    lines.append("Response: ONLY the word.")
    return "\n".join(lines)


class SuggestionClient:
    def __init__(self, *, api_key: Optional[str], url: str = DEFAULT_SUGGESTION_URL,
                 model: str = DEFAULT_SUGGESTION_MODEL, timeout: float = 10.0,
                 max_tokens: int = 5, temperature: float = 0.1,
                 session: Optional[requests.Session] = None):
        self.api_key = api_key
        self.url = url
        self.model = model
        self.timeout = timeout
        self.max_tokens = max_tokens
        self.temperature = temperature
        self.session = session or requests.Session()

    def suggest(self, state: ConstraintState) -> str:
        """
        Ask the model for the next guess.

        Returns:
          a lowercase word of length state.N (not checked against tried words;
          that is the caller's call).
        """
        if not self.api_key:
            raise SuggestionError("no API key configured for the suggestion service")

        prompt = build_prompt(state)
        logger.debug("suggestion prompt:\n%s", prompt)

        body = {
            "model": self.model,
            "messages": [{"role": "user", "content": prompt}],
            "max_tokens": self.max_tokens,
            "temperature": self.temperature,
        }
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        try:
            r = self.session.post(self.url, json=body, headers=headers, timeout=self.timeout)
            r.raise_for_status()
            text = r.json()["choices"][0]["message"]["content"]
        except requests.exceptions.Timeout as e:
            raise SuggestionError("suggestion service timed out") from e
        except requests.exceptions.RequestException as e:
            raise SuggestionError(f"suggestion request failed: {e}") from e
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise SuggestionError(f"malformed suggestion response: {e!r}") from e

        word = extract_word(text, state.N)
        if word is None:
            raise SuggestionError(f"no {state.N}-letter word in reply {text!r}")
        return word

    def close(self) -> None:
        self.session.close()
