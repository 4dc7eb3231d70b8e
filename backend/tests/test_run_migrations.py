"""Tests for run_migrations.py (the parts that don't need a database)."""

from unittest.mock import MagicMock

import psycopg2
import pytest

from run_migrations import (
    MIGRATIONS_DIR,
    Migration,
    apply_migration,
    file_checksum,
    load_migrations,
    plan_migrations,
)


def write(directory, name, content):
    path = directory / name
    path.write_text(content)
    return path


class TestLoadMigrations:
    def test_sorted_sql_files_only(self, tmp_path):
        write(tmp_path, "002_add_index.sql", "CREATE INDEX a ON b (c);")
        write(tmp_path, "001_initial.sql", "CREATE TABLE b (c int);")
        write(tmp_path, "notes.md", "not a migration")

        migrations = load_migrations(tmp_path)

        assert [m.name for m in migrations] == ["001_initial.sql", "002_add_index.sql"]
        assert migrations[0].checksum == file_checksum("CREATE TABLE b (c int);")

    def test_missing_directory(self, tmp_path):
        assert load_migrations(tmp_path / "nope") == []

    def test_shipped_schema(self):
        names = [m.name for m in load_migrations(MIGRATIONS_DIR)]
        assert "001_initial_schema.sql" in names


class TestPlanMigrations:
    def test_pending_and_changed(self, tmp_path):
        first = Migration("001.sql", tmp_path / "001.sql", "aaaa")
        second = Migration("002.sql", tmp_path / "002.sql", "bbbb")
        third = Migration("003.sql", tmp_path / "003.sql", "cccc")

        pending, changed = plan_migrations([first, second, third], {"001.sql": "aaaa", "002.sql": "old"})

        assert pending == [third]
        assert changed == [second]

    def test_nothing_applied(self, tmp_path):
        migration = Migration("001.sql", tmp_path / "001.sql", "aaaa")
        assert plan_migrations([migration], {}) == ([migration], [])


class TestChecksum:
    def test_stable_and_short(self):
        assert file_checksum("SELECT 1;") == file_checksum("SELECT 1;")
        assert file_checksum("SELECT 1;") != file_checksum("SELECT 2;")
        assert len(file_checksum("SELECT 1;")) == 16


class TestApplyMigration:
    def test_commits_on_success(self, tmp_path):
        path = write(tmp_path, "001.sql", "SELECT 1;")
        conn = MagicMock()
        cursor = conn.cursor.return_value.__enter__.return_value

        apply_migration(conn, Migration("001.sql", path, file_checksum("SELECT 1;")))

        assert cursor.execute.call_count == 2
        assert cursor.execute.call_args_list[0].args == ("SELECT 1;",)
        conn.commit.assert_called_once()

    def test_rolls_back_on_failure(self, tmp_path):
        path = write(tmp_path, "001.sql", "SELEC 1;")
        conn = MagicMock()
        cursor = conn.cursor.return_value.__enter__.return_value
        cursor.execute.side_effect = psycopg2.ProgrammingError("syntax error")

        with pytest.raises(psycopg2.ProgrammingError):
            apply_migration(conn, Migration("001.sql", path, "x"))

        conn.rollback.assert_called_once()
        conn.commit.assert_not_called()
