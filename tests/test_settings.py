import pytest

from noughts.errors import ConfigurationError
from noughts.settings import Settings, load_settings


def test_defaults():
    s = load_settings({})
    assert s == Settings()
    assert s.think_delay_ms == 1000
    assert s.seed is None
    assert s.log_level == "INFO"


def test_env_values():
    s = load_settings({
        "NOUGHTS_THINK_DELAY_MS": "250",
        "NOUGHTS_SEED": "7",
        "NOUGHTS_LOG_LEVEL": "debug",
    })
    assert s.think_delay_ms == 250
    assert s.seed == 7
    assert s.log_level == "DEBUG"


@pytest.mark.parametrize(
    "env",
    [
        {"NOUGHTS_THINK_DELAY_MS": "soon"},
        {"NOUGHTS_THINK_DELAY_MS": "-5"},
        {"NOUGHTS_SEED": "1.5"},
        {"NOUGHTS_LOG_LEVEL": "LOUD"},
    ],
)
def test_bad_env_values(env):
    with pytest.raises(ConfigurationError):
        load_settings(env)


def test_overrides_skip_none():
    s = Settings(think_delay_ms=500, seed=1).with_overrides(think_delay_ms=None, seed=9)
    assert s.think_delay_ms == 500
    assert s.seed == 9
