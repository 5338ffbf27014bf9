#!/usr/bin/env python3
"""
Database migration helper script.

Usage:
    python migrate.py create "description of changes"  # Create a new migration
    python migrate.py upgrade                          # Apply all pending migrations
    python migrate.py downgrade                        # Rollback one migration
    python migrate.py current                          # Show current migration version
    python migrate.py history                          # Show migration history
    python migrate.py stamp <revision>                 # Mark database as being at a specific revision
"""

import sys

from pokernight.core import migrations


def print_usage():
    """Print usage information."""
    print(__doc__)


def main():
    """Main entry point."""
    if len(sys.argv) < 2:
        print_usage()
        sys.exit(1)

    cmd = sys.argv[1].lower()

    if cmd == "create":
        if len(sys.argv) < 3:
            print("Error: Please provide a migration message")
            print('Usage: python migrate.py create "description of changes"')
            sys.exit(1)
        migrations.create_revision(sys.argv[2])
        print("Migration created. Review the generated file in alembic/versions/")

    elif cmd == "upgrade":
        migrations.run_migrations()

    elif cmd == "downgrade":
        migrations.downgrade()

    elif cmd == "current":
        print(f"Current migration version: {migrations.get_current_revision()}")

    elif cmd == "history":
        migrations.show_history()

    elif cmd == "stamp":
        if len(sys.argv) < 3:
            print("Error: Please provide a revision")
            print('Usage: python migrate.py stamp <revision>')
            sys.exit(1)
        migrations.stamp_database(sys.argv[2])

    else:
        print(f"Error: Unknown command '{cmd}'")
        print_usage()
        sys.exit(1)


if __name__ == "__main__":
    main()
