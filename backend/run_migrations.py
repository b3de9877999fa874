#!/usr/bin/env python3
"""
Database migration runner.

Applies the SQL files in migrations/ to the Postgres database behind
Supabase. The API never creates tables itself; run this once per deploy,
before starting any API instance.

Usage:
    uv run python run_migrations.py                    # Apply pending migrations
    uv run python run_migrations.py --status           # Show migration status
    uv run python run_migrations.py --dry-run          # List what would be applied
    uv run python run_migrations.py --force 001        # Re-apply one migration

Configuration:
    SUPABASE_DB_URL=postgresql://postgres.[project-ref]:[password]@[host]:6543/postgres
"""

import argparse
import hashlib
import sys
from dataclasses import dataclass
from pathlib import Path

import psycopg2
from psycopg2 import sql
from rich.console import Console
from rich.table import Table

from shared.config import get_settings

console = Console()

MIGRATIONS_DIR = Path(__file__).parent / "migrations"
MIGRATIONS_TABLE = "_migrations"

# Serialises concurrent runners (e.g. two deploy jobs) on the same database.
ADVISORY_LOCK_ID = 7_341_101


@dataclass(frozen=True)
class Migration:
    name: str
    path: Path
    checksum: str

    @classmethod
    def from_file(cls, path: Path) -> "Migration":
        checksum = hashlib.sha256(path.read_bytes()).hexdigest()[:16]
        return cls(name=path.name, path=path, checksum=checksum)


def discover_migrations(directory: Path = MIGRATIONS_DIR) -> list[Migration]:
    """Return all migration files, ordered by name."""
    if not directory.exists():
        return []
    return [Migration.from_file(p) for p in sorted(directory.glob("*.sql"))]


def connect():
    """Open a connection to the database, exiting with a hint if unconfigured."""
    settings = get_settings()
    if not settings.supabase_db_url:
        console.print("[red]Error:[/red] SUPABASE_DB_URL is not set.")
        console.print("Find it in Supabase Dashboard → Settings → Database → Connection string → URI")
        sys.exit(1)
    try:
        return psycopg2.connect(settings.supabase_db_url)
    except psycopg2.Error as e:
        console.print(f"[red]Database connection failed:[/red] {e}")
        sys.exit(1)


def ensure_migrations_table(conn) -> None:
    with conn.cursor() as cur:
        cur.execute(
            sql.SQL("""
                CREATE TABLE IF NOT EXISTS {} (
                    id SERIAL PRIMARY KEY,
                    name VARCHAR(255) NOT NULL UNIQUE,
                    checksum VARCHAR(64) NOT NULL,
                    applied_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
                )
            """).format(sql.Identifier(MIGRATIONS_TABLE))
        )
    conn.commit()


def applied_migrations(conn) -> dict[str, tuple[str, object]]:
    """Map of migration name to (checksum, applied_at)."""
    with conn.cursor() as cur:
        cur.execute(
            sql.SQL("SELECT name, checksum, applied_at FROM {} ORDER BY name").format(
                sql.Identifier(MIGRATIONS_TABLE)
            )
        )
        return {name: (checksum, applied_at) for name, checksum, applied_at in cur.fetchall()}


def pending_migrations(conn, migrations: list[Migration]) -> list[Migration]:
    applied = applied_migrations(conn)
    pending = []
    for migration in migrations:
        if migration.name not in applied:
            pending.append(migration)
        elif applied[migration.name][0] != migration.checksum:
            console.print(f"[yellow]Warning:[/yellow] {migration.name} changed after it was applied")
    return pending


def apply_migration(conn, migration: Migration, dry_run: bool = False) -> None:
    """Run one migration and record it, in a single transaction."""
    if dry_run:
        console.print(f"[cyan]Would apply:[/cyan] {migration.name}")
        return

    console.print(f"[blue]Applying:[/blue] {migration.name}...")
    try:
        with conn.cursor() as cur:
            cur.execute(migration.path.read_text())
            cur.execute(
                sql.SQL(
                    "INSERT INTO {} (name, checksum) VALUES (%s, %s) "
                    "ON CONFLICT (name) DO UPDATE SET checksum = EXCLUDED.checksum, applied_at = NOW()"
                ).format(sql.Identifier(MIGRATIONS_TABLE)),
                (migration.name, migration.checksum),
            )
        conn.commit()
    except psycopg2.Error as e:
        conn.rollback()
        console.print(f"[red]✗[/red] {migration.name} failed: {e}")
        raise
    console.print(f"[green]✓[/green] {migration.name} applied")


def show_status(conn, migrations: list[Migration]) -> None:
    applied = applied_migrations(conn)
    if not migrations and not applied:
        console.print("[dim]No migrations found.[/dim]")
        return

    table = Table(title="Migration Status")
    table.add_column("Migration", style="cyan")
    table.add_column("Status")
    table.add_column("Applied At")
    table.add_column("Checksum")
    for migration in migrations:
        if migration.name in applied:
            _, applied_at = applied[migration.name]
            table.add_row(
                migration.name,
                "[green]Applied[/green]",
                applied_at.strftime("%Y-%m-%d %H:%M:%S") if applied_at else "",
                migration.checksum,
            )
        else:
            table.add_row(migration.name, "[yellow]Pending[/yellow]", "", migration.checksum)
    console.print(table)


def force_migration(conn, migrations: list[Migration], prefix: str) -> None:
    matches = [m for m in migrations if m.name.startswith(prefix)]
    if len(matches) != 1:
        console.print(f"[red]Error:[/red] '{prefix}' matches {len(matches)} migrations")
        for m in matches:
            console.print(f"  - {m.name}")
        sys.exit(1)

    migration = matches[0]
    console.print(f"[yellow]Warning:[/yellow] re-applying {migration.name}")
    if input("Continue? [y/N] ").lower() != "y":
        console.print("Aborted.")
        return
    apply_migration(conn, migration)


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Apply database migrations for the Secrets API",
    )
    parser.add_argument("--status", action="store_true", help="Show migration status only")
    parser.add_argument("--dry-run", action="store_true", help="List pending migrations only")
    parser.add_argument("--force", metavar="PREFIX", help="Re-apply the migration with this prefix")
    args = parser.parse_args()

    console.print("[bold]Secrets API Database Migrations[/bold]\n")

    migrations = discover_migrations()
    conn = connect()
    try:
        with conn.cursor() as cur:
            cur.execute("SELECT pg_advisory_lock(%s)", (ADVISORY_LOCK_ID,))
        ensure_migrations_table(conn)

        if args.status:
            show_status(conn, migrations)
        elif args.force:
            force_migration(conn, migrations, args.force)
        else:
            pending = pending_migrations(conn, migrations)
            if not pending:
                console.print("[green]All migrations are up to date![/green]")
                return
            console.print(f"Found {len(pending)} pending migration(s)")
            for migration in pending:
                apply_migration(conn, migration, dry_run=args.dry_run)
    finally:
        conn.close()


if __name__ == "__main__":
    main()
