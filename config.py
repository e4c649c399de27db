"""
Database configuration for MySQL backups
Environment-aware configuration based on APP_ENV
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Literal, Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# Environment modes
EnvironmentMode = Literal["development", "test", "production"]

# Fixed output directory for backup artifacts (relative to the working directory)
BACKUP_DIR = Path("backups")

REQUIRED_VARIABLES = ("DB_HOST", "DB_USER", "DB_NAME")


def load_app_environment(mode: Optional[str] = None) -> str:
    """
    Load environment variables from the appropriate .env file.

    Priority:
    1. Explicit 'mode' argument
    2. APP_ENV environment variable
    3. Default to 'development'

    Loads .env.{mode} from the working directory if it exists, falling back to .env
    """
    if not mode:
        mode = os.getenv('APP_ENV', 'development')

    base_path = Path.cwd()
    env_file = base_path / f'.env.{mode}'
    if not env_file.exists():
        env_file = base_path / '.env'

    if env_file.exists():
        logger.info(f"Loading config from {env_file}")
        # override=False keeps variables already exported by the shell or CI
        load_dotenv(env_file, override=False)
    else:
        logger.debug(f"No config file found for mode '{mode}' in {base_path}")

    return mode


def get_backup_root() -> Path:
    """Get the directory backup artifacts are written to."""
    return BACKUP_DIR


@dataclass
class DatabaseConfig:
    """MySQL connection parameters for a backup run"""

    host: str
    database: str
    user: str
    password: str = ""
    port: int = 3306

    @property
    def safe_description(self) -> str:
        """Connection target without credentials, for log output"""
        return f"{self.user}@{self.host}:{self.port}/{self.database}"

    @classmethod
    def from_environment(cls, mode: Optional[EnvironmentMode] = None) -> 'DatabaseConfig':
        """
        Load configuration from environment variables

        Environment variables:
        - APP_ENV: Environment mode (development, test, production)
        - DB_HOST: Database host
        - DB_PORT: Database port (default: 3306)
        - DB_NAME: Database name
        - DB_USER: Database user
        - MYSQL_PWD: Database password (DB_PASSWORD is accepted as a fallback)

        Raises:
            ValueError: if a required variable is missing or DB_PORT is not a number
        """
        load_app_environment(mode)

        missing = [name for name in REQUIRED_VARIABLES if not os.getenv(name, '').strip()]
        if missing:
            raise ValueError(f"Missing required environment variables: {', '.join(missing)}")

        port = os.getenv('DB_PORT', '3306')
        try:
            port = int(port)
        except ValueError:
            raise ValueError(f"DB_PORT must be an integer, got '{port}'") from None

        return cls(
            host=os.environ['DB_HOST'].strip(),
            port=port,
            database=os.environ['DB_NAME'].strip(),
            user=os.environ['DB_USER'].strip(),
            password=os.getenv('MYSQL_PWD', os.getenv('DB_PASSWORD', '')),
        )
