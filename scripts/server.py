#!/usr/bin/env python3
"""Serve the cached articles over HTTP.

Usage:
    python scripts/server.py

Environment Variables:
    PORT: Port to listen on (default 3001)
    DD_SITES: Newline-separated site list, used until one is saved via the API
    DD_LOG_LEVEL: structlog level (default INFO)
"""

import os
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

import uvicorn
from dotenv import load_dotenv

from daily_dispatch.api import create_app
from daily_dispatch.config.log import configure_logging


def main():
    load_dotenv()
    configure_logging()

    port = int(os.environ.get("PORT", 3001))

    print("\n" + "=" * 60)
    print("DAILY DISPATCH")
    print("=" * 60)
    print(f"Serving cached articles on http://localhost:{port}/api/news")
    print("Press Ctrl+C to stop")
    print("=" * 60 + "\n")

    uvicorn.run(create_app(), host="0.0.0.0", port=port)


if __name__ == "__main__":
    main()
