"""Run or create Alembic migrations for the clinic schema.

Usage:
    python scripts/migrate.py                  upgrade to head
    python scripts/migrate.py down [revision]  downgrade (default: one step)
    python scripts/migrate.py current          show the applied revision
    python scripts/migrate.py create <message> autogenerate a revision
"""

import sys

from alembic import command
from alembic.config import Config

ALEMBIC_INI = "alembic.ini"


def _config() -> Config:
    return Config(ALEMBIC_INI)


def upgrade(revision: str = "head") -> None:
    """Apply migrations up to ``revision``."""
    print(f"Upgrading clinic schema to {revision}...")
    command.upgrade(_config(), revision)
    print("✓ Schema is up to date")


def downgrade(revision: str = "-1") -> None:
    """Revert migrations down to ``revision``."""
    print(f"Downgrading clinic schema to {revision}...")
    command.downgrade(_config(), revision)
    print("✓ Downgrade complete")


def create(message: str) -> None:
    """Autogenerate a revision from the table metadata."""
    print(f"Creating migration: {message}")
    command.revision(_config(), message=message, autogenerate=True)
    print("✓ Migration created")


def main(argv: list[str]) -> int:
    try:
        if not argv:
            upgrade()
        elif argv[0] == "down":
            downgrade(argv[1] if len(argv) > 1 else "-1")
        elif argv[0] == "current":
            command.current(_config(), verbose=True)
        elif argv[0] == "create" and len(argv) > 1:
            create(" ".join(argv[1:]))
        else:
            print(__doc__)
            return 2
    except Exception as e:
        print(f"✗ Migration failed: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
