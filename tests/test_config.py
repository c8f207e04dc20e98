import pytest

from nullshot.config import EngineConfig
from nullshot.constants import CACHE_SIZE, CANDIDATE_LIMIT, ORACLE_TIMEOUT_MS, ORACLE_URL

_VARS = (
    "NULLSHOT_CACHE_SIZE",
    "NULLSHOT_CANDIDATE_LIMIT",
    "NULLSHOT_ORACLE_TIMEOUT_MS",
    "NULLSHOT_RANDOMIZE",
    "NULLSHOT_SEED",
    "NULLSHOT_ORACLE_API_KEY",
    "NULLSHOT_ORACLE_URL",
    "NULLSHOT_ORACLE_MODEL",
    "AI_PROVIDER_API_KEY",
    "ANTHROPIC_API_KEY",
)


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    for var in _VARS:
        monkeypatch.delenv(var, raising=False)
    return monkeypatch


def test_defaults(clean_env: pytest.MonkeyPatch) -> None:
    config = EngineConfig.from_env()
    assert config.cache_size == CACHE_SIZE
    assert config.candidate_limit == CANDIDATE_LIMIT
    assert config.oracle_timeout_ms == ORACLE_TIMEOUT_MS
    assert config.randomize is True
    assert config.seed is None
    assert config.oracle_url == ORACLE_URL
    assert not config.oracle_configured


def test_overrides(clean_env: pytest.MonkeyPatch) -> None:
    clean_env.setenv("NULLSHOT_CACHE_SIZE", "50")
    clean_env.setenv("NULLSHOT_CANDIDATE_LIMIT", "8")
    clean_env.setenv("NULLSHOT_ORACLE_TIMEOUT_MS", "1500")
    clean_env.setenv("NULLSHOT_RANDOMIZE", "false")
    clean_env.setenv("NULLSHOT_SEED", "7")
    config = EngineConfig.from_env()
    assert (config.cache_size, config.candidate_limit, config.oracle_timeout_ms) == (50, 8, 1500)
    assert config.randomize is False
    assert config.seed == 7


def test_api_key_precedence(clean_env: pytest.MonkeyPatch) -> None:
    clean_env.setenv("ANTHROPIC_API_KEY", "anthropic")
    assert EngineConfig.from_env().oracle_api_key == "anthropic"
    clean_env.setenv("AI_PROVIDER_API_KEY", "provider")
    assert EngineConfig.from_env().oracle_api_key == "provider"
    clean_env.setenv("NULLSHOT_ORACLE_API_KEY", "nullshot")
    config = EngineConfig.from_env()
    assert config.oracle_api_key == "nullshot"
    assert config.oracle_configured


def test_bad_numbers_are_rejected(clean_env: pytest.MonkeyPatch) -> None:
    clean_env.setenv("NULLSHOT_CACHE_SIZE", "lots")
    with pytest.raises(ValueError):
        EngineConfig.from_env()


@pytest.mark.parametrize("field", ["cache_size", "candidate_limit", "oracle_timeout_ms"])
def test_non_positive_values_are_rejected(field: str) -> None:
    with pytest.raises(ValueError):
        EngineConfig(**{field: 0})
