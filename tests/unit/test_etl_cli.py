import json
from types import SimpleNamespace

from scripts import etl_cli


def test_sync_arguments():
    args = etl_cli.build_parser().parse_args(["sync", "--limit", "20", "--dry-run", "--no-llm", "--full"])

    assert args.func is etl_cli.cmd_sync
    assert (args.limit, args.dry_run, args.no_llm, args.full) == (20, True, True, True)


def test_sync_defaults():
    args = etl_cli.build_parser().parse_args(["sync"])

    assert (args.limit, args.dry_run, args.no_llm, args.full) == (None, False, False, False)


def test_test_command_is_a_small_dry_run(monkeypatch, capsys):
    calls = []

    def fake_sync(limit, dry_run, use_llm, full):
        calls.append((limit, dry_run, use_llm, full))
        return {"articles_processed": 5}

    monkeypatch.setattr(etl_cli, "_sync", fake_sync)

    assert etl_cli.main(["test", "--no-llm"]) == 0
    assert calls == [(etl_cli.TEST_ARTICLE_LIMIT, True, False, False)]
    assert json.loads(capsys.readouterr().out) == {"articles_processed": 5}


def test_missing_credentials_exit_with_error(monkeypatch):
    monkeypatch.setattr(etl_cli, "init_db", lambda: None)
    monkeypatch.setattr(etl_cli, "settings", SimpleNamespace(airtable_api_key=None, airtable_base_id=None))

    assert etl_cli.main(["sync"]) == 1


def test_clear_db_can_be_cancelled(monkeypatch):
    monkeypatch.setattr("builtins.input", lambda prompt: "no")

    assert etl_cli.main(["clear-db"]) == 1
