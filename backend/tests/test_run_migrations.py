"""Tests for the migration runner."""

from pathlib import Path
from unittest.mock import MagicMock

import psycopg2
import pytest

import run_migrations
from run_migrations import (
    Migration,
    apply_migration,
    discover_migrations,
    pending_migrations,
)


def make_conn(applied_rows=()):
    conn = MagicMock()
    cur = conn.cursor.return_value.__enter__.return_value
    cur.fetchall.return_value = list(applied_rows)
    return conn, cur


@pytest.fixture
def migrations_dir(tmp_path):
    (tmp_path / "002_second.sql").write_text("SELECT 2;")
    (tmp_path / "001_first.sql").write_text("SELECT 1;")
    (tmp_path / "notes.txt").write_text("ignored")
    return tmp_path


class TestDiscover:
    def test_sorted_sql_files_only(self, migrations_dir):
        names = [m.name for m in discover_migrations(migrations_dir)]
        assert names == ["001_first.sql", "002_second.sql"]

    def test_missing_directory(self, tmp_path):
        assert discover_migrations(tmp_path / "nope") == []

    def test_checksum_tracks_content(self, migrations_dir):
        before = Migration.from_file(migrations_dir / "001_first.sql")
        (migrations_dir / "001_first.sql").write_text("SELECT 'changed';")
        after = Migration.from_file(migrations_dir / "001_first.sql")
        assert before.checksum != after.checksum

    def test_repository_schema_is_discovered(self):
        names = [m.name for m in discover_migrations()]
        assert "001_initial_schema.sql" in names


class TestPending:
    def test_unapplied_are_pending(self, migrations_dir):
        migrations = discover_migrations(migrations_dir)
        conn, _ = make_conn([("001_first.sql", migrations[0].checksum, None)])

        pending = pending_migrations(conn, migrations)

        assert [m.name for m in pending] == ["002_second.sql"]

    def test_changed_migration_is_not_reapplied(self, migrations_dir):
        migrations = discover_migrations(migrations_dir)
        conn, _ = make_conn([
            ("001_first.sql", "stale-checksum", None),
            ("002_second.sql", migrations[1].checksum, None),
        ])

        assert pending_migrations(conn, migrations) == []


class TestApply:
    def test_dry_run_touches_nothing(self, migrations_dir):
        migration = discover_migrations(migrations_dir)[0]
        conn, _ = make_conn()

        apply_migration(conn, migration, dry_run=True)

        conn.cursor.assert_not_called()
        conn.commit.assert_not_called()

    def test_applies_and_records(self, migrations_dir):
        migration = discover_migrations(migrations_dir)[0]
        conn, cur = make_conn()

        apply_migration(conn, migration)

        assert cur.execute.call_args_list[0].args == ("SELECT 1;",)
        assert cur.execute.call_args_list[1].args[1] == (migration.name, migration.checksum)
        conn.commit.assert_called_once()

    def test_failure_rolls_back(self, migrations_dir):
        migration = discover_migrations(migrations_dir)[0]
        conn, cur = make_conn()
        cur.execute.side_effect = psycopg2.ProgrammingError("syntax error")

        with pytest.raises(psycopg2.ProgrammingError):
            apply_migration(conn, migration)

        conn.rollback.assert_called_once()
        conn.commit.assert_not_called()


def test_connect_requires_database_url(monkeypatch):
    monkeypatch.setattr(
        run_migrations, "get_settings", lambda: MagicMock(supabase_db_url="")
    )
    with pytest.raises(SystemExit):
        run_migrations.connect()


def test_migrations_dir_sits_beside_runner():
    assert run_migrations.MIGRATIONS_DIR == Path(run_migrations.__file__).parent / "migrations"
