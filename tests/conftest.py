"""
Pytest configuration and shared fixtures for the MySQL backup tests

Unit tests fake the mysqldump subprocess and need nothing installed.
Tests marked `integration` run the real mysqldump against a seeded MySQL
instance and are skipped when either is unavailable.
"""

import pytest
from pathlib import Path
import sys

import pymysql

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from backup.backup_sql import find_mysqldump
from config import DatabaseConfig
from tests.test_config import TEST_DB_CONFIG
from tests.test_fixtures import seed_database


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "integration: needs mysqldump and a reachable MySQL server"
    )


@pytest.fixture
def clean_db_env(monkeypatch, tmp_path):
    """Run from an empty directory with no DB_* variables exported."""
    for name in ("APP_ENV", "DB_HOST", "DB_PORT", "DB_USER", "DB_NAME", "DB_PASSWORD", "MYSQL_PWD"):
        # setenv first so values loaded from .env files are undone after the test
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture(scope="session")
def mysqldump_path():
    path = find_mysqldump()
    if path is None:
        pytest.skip("mysqldump is not installed")
    return path


@pytest.fixture(scope="session")
def seeded_database(mysqldump_path):
    """Seed the test database once per session and return its DatabaseConfig."""
    try:
        seed_database()
    except pymysql.err.OperationalError as e:
        pytest.skip(f"MySQL not reachable at {TEST_DB_CONFIG['host']}:{TEST_DB_CONFIG['port']}: {e}")

    return DatabaseConfig(
        host=TEST_DB_CONFIG['host'],
        port=TEST_DB_CONFIG['port'],
        database=TEST_DB_CONFIG['database'],
        user=TEST_DB_CONFIG['user'],
        password=TEST_DB_CONFIG['password'],
    )
