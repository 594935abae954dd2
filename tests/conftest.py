import pytest
from wordlebot.clients import OracleError, SuggestionError
from wordlebot.harness import LocalOracle


class RecordingOracle(LocalOracle):
    """LocalOracle that remembers every guess and can fail on chosen ones."""

    def __init__(self, answer, fail_on=()):
        super().__init__(answer)
        self.submitted = []
        self.fail_on = set(fail_on)

    def submit(self, guess):
        self.submitted.append(guess)
        if guess in self.fail_on:
            raise OracleError(f"simulated outage for {guess}")
        return super().submit(guess)


class ScriptedSuggester:
    """Returns queued words (or raises queued exceptions); repeats the last entry."""

    def __init__(self, *replies):
        self.replies = list(replies)
        self.calls = 0

    def suggest(self, state):
        self.calls += 1
        reply = self.replies[min(self.calls, len(self.replies)) - 1]
        if isinstance(reply, Exception):
            raise reply
        return reply


@pytest.fixture
def recording_oracle():
    return RecordingOracle


@pytest.fixture
def scripted_suggester():
    return ScriptedSuggester


@pytest.fixture
def suggestion_error():
    return SuggestionError("service down")
