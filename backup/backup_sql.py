"""
SQL Backup Utility
Creates MySQL dumps using mysqldump.
"""

import logging
import os
import shutil
import subprocess
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from config import DatabaseConfig, get_backup_root

logger = logging.getLogger(__name__)

DUMP_TIMEOUT_SECONDS = 300


class BackupError(Exception):
    """The dump subprocess failed; no usable artifact was produced."""


def find_mysqldump() -> Optional[str]:
    """
    Find mysqldump executable, checking PATH first, then common MySQL installation directories.

    Returns:
        Path to mysqldump executable if found, None otherwise
    """
    mysqldump = shutil.which("mysqldump")
    if mysqldump:
        return mysqldump

    if os.name == 'nt':  # Windows
        program_files = os.environ.get('ProgramFiles', 'C:\\Program Files')
        mysql_base = Path(program_files) / 'MySQL'

        if mysql_base.exists():
            # Newest server version first
            versions = sorted(
                [d for d in mysql_base.iterdir() if d.is_dir()],
                key=lambda x: x.name,
                reverse=True
            )

            for version_dir in versions:
                dump_path = version_dir / 'bin' / 'mysqldump.exe'
                if dump_path.exists():
                    logger.info(f"Found mysqldump at {dump_path}")
                    return str(dump_path)
    else:
        common_paths = [
            '/usr/bin/mysqldump',
            '/usr/local/bin/mysqldump',
            '/usr/local/mysql/bin/mysqldump',
            '/opt/homebrew/bin/mysqldump',  # macOS Homebrew ARM
            '/usr/local/opt/mysql-client/bin/mysqldump',  # macOS Homebrew Intel
        ]

        for path in common_paths:
            if Path(path).exists():
                logger.info(f"Found mysqldump at {path}")
                return path

    return None


def backup_filename(database: str, now: Optional[datetime] = None) -> str:
    """Artifact name: <database>_backup_<timestamp>.sql"""
    timestamp = (now or datetime.now()).strftime("%Y%m%d_%H%M%S")
    return f"{database}_backup_{timestamp}.sql"


def build_dump_command(mysqldump: str, config: DatabaseConfig, output_file: Path) -> List[str]:
    """
    Build the mysqldump argv.

    The password never appears in argv; it travels as MYSQL_PWD in the child
    environment. --result-file writes the dump directly, stdout is unused.
    """
    return [
        mysqldump,
        "-h", config.host,
        "-P", str(config.port),
        "-u", config.user,
        f"--result-file={output_file}",
        config.database,
    ]


def _artifact_path(backup_path: Path, name: str) -> Path:
    """First free path for name, adding _1, _2, ... before .sql on collision."""
    candidate = backup_path / name
    stem = candidate.stem
    counter = 1
    while candidate.exists():
        candidate = backup_path / f"{stem}_{counter}.sql"
        counter += 1
    return candidate


def _discard(path: Path):
    if path.exists():
        path.unlink()
        logger.info(f"Removed incomplete dump: {path}")


def backup_database(
    backup_dir: Optional[Path] = None,
    config: Optional[DatabaseConfig] = None,
    now: Optional[datetime] = None,
) -> Path:
    """
    Create a MySQL backup dump

    mysqldump writes to a .partial sibling which is renamed into place only on
    success; an existing artifact is never overwritten or removed.

    Args:
        backup_dir: Directory to store backups. If None, uses BACKUP_DIR
        config: Connection parameters. If None, loaded from the environment
        now: Timestamp embedded in the file name. If None, the current time

    Returns:
        Path to backup file

    Raises:
        BackupError: if mysqldump is unavailable, cannot be run, exits non-zero
            or times out, or the backup directory is not writable
    """
    if backup_dir is None:
        backup_dir = get_backup_root()
    if config is None:
        config = DatabaseConfig.from_environment()

    backup_path = Path(backup_dir)

    try:
        try:
            backup_path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise BackupError(f"cannot create backup directory {backup_path}: {e}") from e

        backup_file = _artifact_path(backup_path, backup_filename(config.database, now))
        partial_file = backup_file.with_suffix(".sql.partial")

        mysqldump = find_mysqldump()
        if mysqldump is None:
            logger.warning("⚠️  mysqldump not found in PATH or common MySQL installation directories")
            raise BackupError("mysqldump not available - cannot create backup")

        env = os.environ.copy()
        # Only the configured password reaches the child
        env.pop("MYSQL_PWD", None)
        if config.password:
            env["MYSQL_PWD"] = config.password

        logger.info(f"Dumping {config.safe_description} to {backup_file}...")
        try:
            result = subprocess.run(
                build_dump_command(mysqldump, config, partial_file),
                capture_output=True,
                text=True,
                timeout=DUMP_TIMEOUT_SECONDS,
                env=env
            )
        except subprocess.TimeoutExpired:
            _discard(partial_file)
            raise BackupError(f"mysqldump timed out after {DUMP_TIMEOUT_SECONDS}s") from None
        except OSError as e:
            _discard(partial_file)
            raise BackupError(f"cannot run {mysqldump}: {e}") from e

        if result.returncode != 0:
            _discard(partial_file)
            error_msg = (result.stderr or "").strip() or f"exit status {result.returncode}"
            raise BackupError(f"mysqldump failed: {error_msg}")

        try:
            os.replace(partial_file, backup_file)
        except OSError as e:
            _discard(partial_file)
            raise BackupError(f"cannot finalize {backup_file}: {e}") from e

        logger.info(f"[OK] Backup created: {backup_file}")
        return backup_file

    except BackupError as e:
        logger.error(f"[ERROR] Backup failed: {e}")
        raise
