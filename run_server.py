#!/usr/bin/env python3
"""FastAPI server entry point for 2e100."""

import argparse

import uvicorn
from dotenv import load_dotenv

DEFAULT_PORT = 3000


def main(argv=None):
    load_dotenv()

    parser = argparse.ArgumentParser(description="2e100 search server")
    parser.add_argument("--host", default="127.0.0.1", help="Host to bind to")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT, help="Port to bind to")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload")

    args = parser.parse_args(argv)

    uvicorn.run(
        "server.app:create_app",
        factory=True,
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level="info",
    )


if __name__ == "__main__":
    main()
