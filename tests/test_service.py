import sys
import threading
from http.server import ThreadingHTTPServer

import pytest
import requests

import apps.cli.solve as solve_cli
import apps.server as server
import wordlebot.service as service
from wordlebot.clients import SuggestionError
from wordlebot.config import Settings
from wordlebot.harness import LocalOracle
from wordlebot.solvers import SolveOutcome, SolveStatus


class ClosingOracle(LocalOracle):
    """LocalOracle that takes the client's constructor arguments and tracks close()."""
    instances = []

    def __init__(self, N, *, url=None, timeout=None, answer="planet", fail=None):
        super().__init__(answer)
        self.N = N
        self.fail = fail
        self.closed = False
        ClosingOracle.instances.append(self)

    def submit(self, guess):
        if self.fail is not None:
            raise self.fail
        return super().submit(guess)

    def close(self):
        self.closed = True


class DownSuggester:
    instances = []

    def __init__(self, **kwargs):
        self.calls = 0
        self.closed = False
        DownSuggester.instances.append(self)

    def suggest(self, state):
        self.calls += 1
        raise SuggestionError("service down")

    def close(self):
        self.closed = True


@pytest.fixture(autouse=True)
def _fresh_instances():
    ClosingOracle.instances = []
    DownSuggester.instances = []


def _patch_clients(monkeypatch, **oracle_kwargs):
    def make_oracle(N, **kwargs):
        return ClosingOracle(N, **kwargs, **oracle_kwargs)
    monkeypatch.setattr(service, "FeedbackOracleClient", make_oracle)
    monkeypatch.setattr(service, "SuggestionClient", DownSuggester)


# --- service ---

def test_play_daily_solves_and_closes_clients(monkeypatch):
    _patch_clients(monkeypatch)
    outcome = service.play_daily(Settings(word_size=6), seed=1)

    assert outcome.status is SolveStatus.solved
    assert outcome.message.endswith("planet")
    assert ClosingOracle.instances[0].closed
    assert DownSuggester.instances[0].closed
    assert DownSuggester.instances[0].calls > 0


def test_play_daily_closes_clients_when_solving_raises(monkeypatch):
    _patch_clients(monkeypatch, fail=RuntimeError("boom"))
    with pytest.raises(RuntimeError):
        service.play_daily(Settings(word_size=6), seed=1)
    assert ClosingOracle.instances[0].closed
    assert DownSuggester.instances[0].closed


def test_play_daily_batch_reconstructs_and_closes(monkeypatch):
    _patch_clients(monkeypatch, answer="crane")
    outcome = service.play_daily_batch(Settings(word_size=5, batch_workers=2))

    assert outcome.message == "crane"
    assert outcome.status is SolveStatus.solved
    assert ClosingOracle.instances[0].closed
    assert DownSuggester.instances == []


# --- HTTP front ---

@pytest.fixture
def base_url(monkeypatch):
    def fake_loop(settings):
        return SolveOutcome(status=SolveStatus.solved, word="planet", attempts=3,
                            message="Solved in 3 attempts: planet")

    def fake_batch(settings):
        return SolveOutcome(status=SolveStatus.solved, word="planet", attempts=12,
                            message="planet")

    monkeypatch.setattr(server, "play_daily", fake_loop)
    monkeypatch.setattr(server, "play_daily_batch", fake_batch)

    httpd = ThreadingHTTPServer(("127.0.0.1", 0), server.SolverHandler)
    t = threading.Thread(target=httpd.serve_forever, daemon=True)
    t.start()
    yield f"http://127.0.0.1:{httpd.server_address[1]}"
    httpd.shutdown()
    httpd.server_close()


@pytest.mark.parametrize("path,body", [
    ("/", "Hello World!"),
    ("/play/daily", "Solved in 3 attempts: planet"),
    ("/smart/play/daily", "planet"),
    ("/play/daily/", "Solved in 3 attempts: planet"),
])
def test_server_routes(base_url, path, body):
    r = requests.get(base_url + path, timeout=5)
    assert r.status_code == 200
    assert r.headers["Content-Type"] == "application/json"
    assert r.json() == body


def test_server_unknown_route_is_json_404(base_url):
    r = requests.get(base_url + "/play/weekly", timeout=5)
    assert r.status_code == 404
    assert "/play/weekly" in r.json()["error"]


# --- solve CLI ---

def test_solve_cli_offline_closes_suggester(monkeypatch, capsys):
    monkeypatch.setattr(solve_cli, "SuggestionClient", DownSuggester)
    monkeypatch.setenv("DEEPSEEK_API_KEY", "sk-test")
    monkeypatch.setattr(sys, "argv", ["solve", "--answer", "crane", "--seed", "42",
                                      "--log-level", "WARNING"])
    solve_cli.main()

    out = capsys.readouterr().out
    assert "crane" in out
    assert "success=True" in out
    assert DownSuggester.instances[0].closed
