#!/usr/bin/env python3
"""
SQL dump (mysqldump) of the configured database.

Writes <DB_NAME>_backup_<timestamp>.sql into ./backups and prints its path.
Connection settings come from DB_HOST, DB_PORT, DB_USER, MYSQL_PWD and DB_NAME,
or from a .env / .env.{APP_ENV} file in the working directory.

Usage:
  python dump_sql.py
  mysql-backup
"""

import argparse
import logging
import sys
from typing import List, Optional

from backup.backup_sql import BackupError, backup_database

__version__ = "0.1.0"


def main(argv: Optional[List[str]] = None) -> int:
    """Run one backup. Returns the process exit status."""
    parser = argparse.ArgumentParser(description="Dump a MySQL database to a timestamped SQL file")
    parser.add_argument('--version', '-v', action='store_true', help='Show version')
    args = parser.parse_args(argv)

    if args.version:
        print(f"mysql-backup version {__version__}")
        return 0

    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    try:
        output_file = backup_database()
    except (BackupError, ValueError) as e:
        print(f"Backup failed: {e}", file=sys.stderr)
        return 1

    print(output_file)
    return 0


def cli_entry():
    """Entry point for console script"""
    sys.exit(main())


if __name__ == "__main__":
    cli_entry()
