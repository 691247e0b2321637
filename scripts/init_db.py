"""
Database initialization script.

Creates all tables and, when ``ADMIN_EMAIL`` and ``ADMIN_PASSWORD`` are
set, a first admin account.  Production databases should be migrated
with ``alembic upgrade head`` instead.

Usage:
    ADMIN_EMAIL=admin@example.com ADMIN_PASSWORD=... python scripts/init_db.py
"""

import os
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from dotenv import load_dotenv

load_dotenv()

from sqlalchemy.exc import SQLAlchemyError

from coachdesk.core.config import settings
from coachdesk.core.logger import setup_logger
from coachdesk.db.init_db import init_db

if __name__ == "__main__":
    setup_logger(settings.LOG_LEVEL, settings.LOG_FILE)
    print("=" * 50)
    print("CoachDesk Database Initialization")
    print("=" * 50)
    print()

    try:
        init_db(os.environ.get("ADMIN_EMAIL"), os.environ.get("ADMIN_PASSWORD"))
        print()
        print("=" * 50)
        print("SUCCESS: Database initialized!")
        print("=" * 50)
        sys.exit(0)

    except SQLAlchemyError as e:
        print()
        print("=" * 50)
        print("ERROR: Database initialization failed!")
        print(f"Details: {e}")
        print("=" * 50)
        sys.exit(1)
