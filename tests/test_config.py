import importlib


def test_bool_from_env_true_false(monkeypatch):
    from courtforge import config as cfg
    # default false
    assert cfg._bool_from_env("NON_EXISTENT_FLAG", default=False) is False
    assert cfg._bool_from_env("NON_EXISTENT_FLAG", default=True) is True

    monkeypatch.setenv("FLAG_TRUE", "true")
    monkeypatch.setenv("FLAG_YES", "Yes")
    monkeypatch.setenv("FLAG_ONE", "1")
    monkeypatch.setenv("FLAG_ON", "on")

    assert cfg._bool_from_env("FLAG_TRUE", default=False) is True
    assert cfg._bool_from_env("FLAG_YES", default=False) is True
    assert cfg._bool_from_env("FLAG_ONE", default=False) is True
    assert cfg._bool_from_env("FLAG_ON", default=False) is True

    monkeypatch.setenv("FLAG_FALSE", "false")
    assert cfg._bool_from_env("FLAG_FALSE", default=True) is False


def test_int_from_env_ignores_garbage(monkeypatch):
    from courtforge import config as cfg

    monkeypatch.delenv("RNG_SEED", raising=False)
    assert cfg._int_from_env("RNG_SEED") is None
    monkeypatch.setenv("RNG_SEED", "  ")
    assert cfg._int_from_env("RNG_SEED") is None
    monkeypatch.setenv("RNG_SEED", "forty-two")
    assert cfg._int_from_env("RNG_SEED") is None
    monkeypatch.setenv("RNG_SEED", "42")
    assert cfg._int_from_env("RNG_SEED") == 42


def test_get_settings_reads_env_at_call_time(monkeypatch):
    from courtforge.config import get_settings

    monkeypatch.setenv("DATABASE_URL", "sqlite:///elsewhere.db")
    monkeypatch.setenv("SIM_TICKS", "7")
    monkeypatch.setenv("PERSIST_TO_DB", "yes")
    monkeypatch.setenv("RNG_SEED", "9")

    settings = get_settings()
    assert settings.database_url == "sqlite:///elsewhere.db"
    assert settings.simulate_ticks == 7
    assert settings.persist_to_db is True
    assert settings.rng_seed == 9


def test_settings_defaults(monkeypatch):
    for key in ["DATABASE_URL", "SIM_TICKS", "PERSIST_TO_DB", "RNG_SEED", "ECHO_SQL"]:
        monkeypatch.delenv(key, raising=False)
    from courtforge.config import DEFAULT_DB_URL, get_settings

    settings = get_settings()
    assert settings.database_url == DEFAULT_DB_URL
    assert settings.simulate_ticks == 24
    assert settings.persist_to_db is False
    assert settings.rng_seed is None
    assert settings.echo_sql is False


def test_log_paths_follow_env(monkeypatch, tmp_path):
    from courtforge.config import get_event_log_path, get_memory_log_path

    monkeypatch.setenv("EVENT_LOG_PATH", str(tmp_path / "events.jsonl"))
    monkeypatch.setenv("MEMORY_LOG_PATH", str(tmp_path / "memories.jsonl"))
    assert get_event_log_path() == tmp_path / "events.jsonl"
    assert get_memory_log_path() == tmp_path / "memories.jsonl"


def test_config_flags_defaults(monkeypatch):
    # Clear env vars and reload module
    for key in ["USE_LLM_NARRATION", "LLM_MODEL_NAME", "OPENAI_API_KEY"]:
        monkeypatch.delenv(key, raising=False)

    import courtforge.config as cfg
    importlib.reload(cfg)

    assert cfg.USE_LLM_NARRATION is False
    assert isinstance(cfg.LLM_MODEL_NAME, str) and cfg.LLM_MODEL_NAME
    assert cfg.OPENAI_API_KEY is None


def test_config_flags_enabled(monkeypatch):
    monkeypatch.setenv("USE_LLM_NARRATION", "true")
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    monkeypatch.setenv("LLM_MODEL_NAME", "gpt-4.1-mini")

    import courtforge.config as cfg
    importlib.reload(cfg)

    assert cfg.USE_LLM_NARRATION is True
    assert cfg.OPENAI_API_KEY == "sk-test"
    assert cfg.LLM_MODEL_NAME == "gpt-4.1-mini"
