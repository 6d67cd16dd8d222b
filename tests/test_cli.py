from typer.testing import CliRunner

from courtforge.logging_utils import JsonlEventLogger
from courtforge.types import CourtEvent, Severity
from scripts.run_simulation import app


runner = CliRunner()


def test_run_command_no_db(tmp_path, monkeypatch):
    monkeypatch.delenv("USE_LLM_NARRATION", raising=False)
    monkeypatch.setenv("MEMORY_LOG_PATH", str(tmp_path / "memories.jsonl"))
    events_path = tmp_path / "events.jsonl"

    result = runner.invoke(
        app, ["run", "--no-db", "--ticks", "2", "--seed", "5", "--event-log-path", str(events_path)]
    )

    assert result.exit_code == 0, result.output
    assert "Starting Courtforge simulation for 2 ticks (no-DB (in-memory))..." in result.output
    assert "Done:" in result.output


def test_root_invocation_runs_without_subcommand(tmp_path, monkeypatch):
    monkeypatch.delenv("USE_LLM_NARRATION", raising=False)
    monkeypatch.setenv("EVENT_LOG_PATH", str(tmp_path / "events.jsonl"))
    monkeypatch.setenv("MEMORY_LOG_PATH", str(tmp_path / "memories.jsonl"))

    result = runner.invoke(app, ["--no-db", "--ticks", "1", "--seed", "2"])

    assert result.exit_code == 0, result.output
    assert "for 1 ticks" in result.output


def test_view_court_empty(tmp_path):
    path = tmp_path / "missing.jsonl"
    result = runner.invoke(app, ["view-court", "--event-log-path", str(path)])
    assert result.exit_code == 0
    assert f"No court events found at {path}" in result.output


def test_view_court_summarizes_successions(tmp_path):
    path = tmp_path / "events.jsonl"
    logger = JsonlEventLogger(path)
    logger.write_event(
        CourtEvent(
            tick=3,
            territory_id=1,
            event_type="plot_started",
            title="Court Intrigue",
            description="General Magnus has begun plotting coup...",
            character_id=3,
            plot_type="coup",
        )
    )
    logger.write_event(
        CourtEvent(
            tick=9,
            territory_id=1,
            event_type="succession",
            title="Succession",
            description="General Magnus seized the throne.",
            severity=Severity.CRITICAL,
        )
    )
    logger.write_event(
        CourtEvent(tick=9, territory_id=2, event_type="death", title="Character Death", description="...")
    )

    result = runner.invoke(app, ["view-court", "--event-log-path", str(path)])
    assert result.exit_code == 0, result.output
    assert "Court summary (3 events, ticks 3-9)" in result.output
    assert "Territory 1" in result.output
    assert "coup (1)" in result.output
    assert "t=9: General Magnus seized the throne." in result.output

    only_two = runner.invoke(app, ["view-court", "--event-log-path", str(path), "--territory", "2"])
    assert "Territory 1" not in only_two.output
    assert "death: 1" in only_two.output


def test_seed_command_seeds_once(tmp_path, monkeypatch):
    import sqlalchemy as sa
    from sqlalchemy.orm import sessionmaker

    import courtforge.db as db
    from courtforge import models as m

    engine = sa.create_engine(f"sqlite:///{tmp_path / 'cli.db'}", future=True)
    monkeypatch.setattr(db, "get_engine", lambda echo=None, url=None: engine, raising=True)
    monkeypatch.setattr(
        db,
        "SessionLocal",
        sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False, future=True),
        raising=True,
    )

    first = runner.invoke(app, ["seed", "--seed", "11"])
    assert first.exit_code == 0, first.output
    assert "Valdmark:" in first.output and "of House Aldren and 3 courtiers" in first.output

    second = runner.invoke(app, ["seed"])
    assert second.exit_code == 0
    assert "Database already holds 3 territories; nothing to seed." in second.output

    with db.SessionLocal() as s:
        assert s.query(m.CharacterRow).count() == 12
