import pytest
from wordlebot.config import DEFAULT_ORACLE_URL, Settings


def test_defaults_from_empty_env():
    s = Settings.from_env({})
    assert s.oracle_url == DEFAULT_ORACLE_URL
    assert s.word_size == 6
    assert s.max_attempts == 100
    assert s.api_key is None


def test_env_values_and_overrides():
    s = Settings.from_env({"DEEPSEEK_API_KEY": "sk-x", "WORD_SIZE": "5",
                           "REQUEST_TIMEOUT": "2.5", "BATCH_WORKERS": "3"})
    assert (s.api_key, s.word_size, s.request_timeout, s.batch_workers) == ("sk-x", 5, 2.5, 3)

    o = s.override(word_size=7, max_attempts=None)
    assert o.word_size == 7 and o.max_attempts == 100


@pytest.mark.parametrize("env", [{"WORD_SIZE": "six"}, {"MAX_ATTEMPTS": "0"},
                                 {"REQUEST_TIMEOUT": "soon"}])
def test_bad_env_values_raise(env):
    with pytest.raises(ValueError):
        Settings.from_env(env)
