"""Tests for database factory functions."""

from pathlib import Path

from fintrxn.database.factories import create_sqlite_database, default_database_path


def test_explicit_path(tmp_path):
    db = create_sqlite_database(str(tmp_path / "ledger.db"))
    assert db.database_url == f"sqlite:///{tmp_path / 'ledger.db'}"


def test_environment_path(tmp_path, monkeypatch):
    monkeypatch.setenv("FINTRXN_DB_PATH", str(tmp_path / "env.db"))
    db = create_sqlite_database()
    assert db.database_url.endswith("env.db")


def test_default_path_in_fintrxn_home(tmp_path, monkeypatch):
    home = tmp_path / "fintrxn-home"
    monkeypatch.delenv("FINTRXN_DB_PATH", raising=False)
    monkeypatch.setenv("FINTRXN_HOME", str(home))

    assert default_database_path() == home / "fintrxn.db"
    assert home.is_dir()
    assert create_sqlite_database().database_url == f"sqlite:///{Path(home) / 'fintrxn.db'}"


def test_in_memory_database():
    db = create_sqlite_database(":memory:")
    db.connect()
    db.initialize_schema()
    account_id = db.create_financial_account(name="Donations", accounting_code="7300")
    assert [a.id for a in db.list_financial_accounts()] == [account_id]
    db.disconnect()
