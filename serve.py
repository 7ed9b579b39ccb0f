#!/usr/bin/env python3
"""Serve the assistant's HTTP endpoint.

Usage:
    python serve.py                  # 127.0.0.1:8000
    python serve.py --port 9000
    python serve.py --host 0.0.0.0

Set ANTHROPIC_API_KEY and APP_PASSWORD in .env first.
"""

import argparse
import logging

import uvicorn

from content_assistant import config


def main():
    parser = argparse.ArgumentParser(description="Run the content assistant API server")
    parser.add_argument("--host", default=config.SERVER_HOST)
    parser.add_argument("--port", type=int, default=config.SERVER_PORT)
    args = parser.parse_args()

    logging.basicConfig(level=config.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    log = logging.getLogger("serve")
    if not config.ANTHROPIC_API_KEY:
        log.warning("ANTHROPIC_API_KEY is not set: generation operations will return 500")
    if not config.APP_PASSWORD:
        log.warning("APP_PASSWORD is not set: every login attempt will be refused")

    uvicorn.run("content_assistant.web.server:app", host=args.host, port=args.port, log_level=config.LOG_LEVEL.lower())


if __name__ == "__main__":
    main()
