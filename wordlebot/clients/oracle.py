"""
Client for the remote feedback oracle.

Request:   GET <url>?guess=<word>&size=<N>
Response:  JSON list, one entry per letter of the guess:
             [{"slot": 0, "guess": "p", "result": "correct"}, ...]
           result is one of "correct" | "present" | "absent".

Every failure (transport, timeout, HTTP status, malformed JSON, wrong number
of verdicts) surfaces as OracleError; callers decide whether to skip the
candidate or burn the round. The client never retries.
"""

from __future__ import annotations

import logging
import threading
from typing import List, Optional

import requests

from wordlebot.config import DEFAULT_ORACLE_URL
from wordlebot.engine import LetterVerdict, SlotVerdict, validate_guess
from .errors import OracleError

logger = logging.getLogger(__name__)


class FeedbackOracleClient:
    """
    `submit` may be called from several threads at once (the batch probe
    does). requests.Session is not documented as thread-safe, so without an
    injected session every calling thread gets its own, created lazily and
    closed together by `close()`. An injected session is used as-is by all
    threads.
    """

    def __init__(self, N: int, *, url: str = DEFAULT_ORACLE_URL, timeout: float = 10.0,
                 session: Optional[requests.Session] = None):
        self.N = int(N)
        self.url = url
        self.timeout = timeout
        self._shared = session
        self._local = threading.local()
        self._owned: List[requests.Session] = []
        self._lock = threading.Lock()

    @property
    def session(self) -> requests.Session:
        """The session for the calling thread."""
        if self._shared is not None:
            return self._shared
        s = getattr(self._local, "session", None)
        if s is None:
            s = requests.Session()
            self._local.session = s
            with self._lock:
                self._owned.append(s)
        return s

    def submit(self, guess: str) -> List[SlotVerdict]:
        """Send one guess; return its verdicts in slot order."""
        if not validate_guess(guess, self.N):
            raise ValueError(f"guess must be {self.N} letters a-z; got {guess!r}")
        guess = guess.strip().lower()

        try:
            r = self.session.get(self.url, params={"guess": guess, "size": self.N},
                                 timeout=self.timeout)
            r.raise_for_status()
            payload = r.json()
        except requests.exceptions.Timeout as e:
            raise OracleError(f"oracle timed out for {guess!r}") from e
        except requests.exceptions.RequestException as e:
            raise OracleError(f"oracle request failed for {guess!r}: {e}") from e
        except ValueError as e:
            raise OracleError(f"oracle returned non-JSON body for {guess!r}") from e

        verdicts = parse_verdicts(payload, self.N)
        logger.debug("oracle %s -> %s", guess, [v.verdict.value for v in verdicts])
        return verdicts

    def close(self) -> None:
        if self._shared is not None:
            self._shared.close()
        with self._lock:
            owned, self._owned = self._owned, []
        for s in owned:
            s.close()
        self._local = threading.local()


def parse_verdicts(payload, N: int) -> List[SlotVerdict]:
    """
    Convert the oracle's JSON list into SlotVerdicts (sorted by slot).

    Raises OracleError if the payload is not a list of N well-formed entries
    covering each slot exactly once.
    """
    if not isinstance(payload, list):
        raise OracleError(f"expected a list of verdicts; got {type(payload).__name__}")

    out: List[SlotVerdict] = []
    try:
        for item in payload:
            out.append(SlotVerdict(
                slot=int(item["slot"]),
                letter=str(item["guess"]).lower(),
                verdict=LetterVerdict(item["result"]),
            ))
    except (KeyError, TypeError, ValueError) as e:
        raise OracleError(f"malformed verdict entry: {e}") from e

    out.sort(key=lambda v: v.slot)
    if [v.slot for v in out] != list(range(N)):
        raise OracleError(f"expected one verdict per slot 0..{N - 1}; got slots "
                          f"{[v.slot for v in out]}")
    return out
