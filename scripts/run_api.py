#!/usr/bin/env python3
"""
Serve the webhook API.

  python scripts/run_api.py
  python scripts/run_api.py --host 0.0.0.0 --port 8080 --reload

Same as: uvicorn src.api.main:app --host 127.0.0.1 --port 8000
"""

import argparse
import os
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

import uvicorn


def main() -> int:
    parser = argparse.ArgumentParser(description="Run the Chatwoot webhook API")
    parser.add_argument("--host", default=os.getenv("HOST", "127.0.0.1"))
    parser.add_argument("--port", type=int, default=int(os.getenv("PORT", "8000")))
    parser.add_argument("--reload", action="store_true", help="Restart on code changes (development)")
    args = parser.parse_args()

    uvicorn.run("src.api.main:app", host=args.host, port=args.port, reload=args.reload)
    return 0


if __name__ == "__main__":
    sys.exit(main())
