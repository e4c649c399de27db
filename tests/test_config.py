"""
Test configuration for the live MySQL integration tests
"""

import os
from pathlib import Path
from dotenv import load_dotenv

# Prioritize .env.test for tests
env_test_path = Path(__file__).parent.parent / '.env.test'
env_path = Path(__file__).parent.parent / '.env'

if env_test_path.exists():
    load_dotenv(env_test_path)
elif env_path.exists():
    load_dotenv(env_path)

TEST_DB_CONFIG = {
    'host': os.getenv('TEST_DB_HOST', os.getenv('DB_HOST', '127.0.0.1')),
    'port': int(os.getenv('TEST_DB_PORT', os.getenv('DB_PORT', '3306'))),
    'database': os.getenv('TEST_DB_NAME', os.getenv('DB_NAME', 'mydatabase')),
    'user': os.getenv('TEST_DB_USER', os.getenv('DB_USER', 'root')),
    'password': os.getenv('TEST_DB_PASSWORD', os.getenv('MYSQL_PWD', '')),
}

SEED_FILE = Path(__file__).parent.parent / 'seed.sql'

# Rows inserted by seed.sql, as mysqldump renders them
SEEDED_ROWS = [
    "('Alice','Engineer',70000)",
    "('Bob','Manager',85000)",
    "('Charlie','Analyst',60000)",
]
