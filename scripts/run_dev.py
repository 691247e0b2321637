"""
Local CoachDesk server with auto-reload.

Reads ``.env`` first, so ``DATABASE_URL=sqlite:///./coachdesk.db`` there
is enough to try the API without Postgres (create the tables with
``scripts/init_db.py``).

Usage:
    python scripts/run_dev.py [--host 127.0.0.1] [--port 8000] [--no-reload]
"""

import argparse
import sys
from pathlib import Path

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from dotenv import load_dotenv

load_dotenv()

import uvicorn


def main() -> None:
    parser = argparse.ArgumentParser(description="Run the CoachDesk API locally.")
    parser.add_argument("--host", default="127.0.0.1", help="Interface to bind (default: 127.0.0.1)")
    parser.add_argument("--port", type=int, default=8000, help="Port to listen on (default: 8000)")
    parser.add_argument("--no-reload", action="store_true", help="Do not restart on source changes")
    args = parser.parse_args()

    base = f"http://{args.host}:{args.port}"
    print(f"CoachDesk on {base}")
    print(f"  sign in    POST {base}/api/v1/auth/login")
    print(f"  dashboard  GET  {base}/dashboard")
    print(f"  API docs        {base}/docs")

    uvicorn.run("coachdesk.main:app", host=args.host, port=args.port, reload=not args.no_reload, log_level="info")


if __name__ == "__main__":
    main()
