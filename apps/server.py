#!/usr/bin/env python3
"""Minimal HTTP front for the daily solver.

Endpoints (GET, JSON bodies):
    /                   -> "Hello World!"
    /play/daily         -> round-based loop outcome string
    /smart/play/daily   -> batch presence probe result string

Every request runs its own solving session. No external dependencies beyond
the wordlebot package.

Usage:
    python -m apps.server                    # default port 3000
    python -m apps.server --port 9000
"""

from __future__ import annotations

import argparse
import json
import logging
from http import HTTPStatus
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from urllib.parse import urlparse

from wordlebot.config import Settings, configure_logging
from wordlebot.service import play_daily, play_daily_batch

logger = logging.getLogger("wordlebot.server")


class SolverHandler(BaseHTTPRequestHandler):
    settings: Settings = Settings()

    def do_GET(self):
        path = urlparse(self.path).path.rstrip("/")

        if path == "":
            return self._json_response("Hello World!")

        if path == "/play/daily":
            return self._json_response(play_daily(self.settings).message)

        if path == "/smart/play/daily":
            return self._json_response(play_daily_batch(self.settings).message)

        self._json_response({"error": f"no route for {path}"}, HTTPStatus.NOT_FOUND)

    def _json_response(self, data, status: int = HTTPStatus.OK) -> None:
        body = json.dumps(data, ensure_ascii=False).encode("utf-8")
        self.send_response(status)
        self.send_header("Content-Type", "application/json")
        self.send_header("Cache-Control", "no-cache")
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, format, *args):
        logger.info("%s - %s", self.address_string(), format % args)


def main():
    parser = argparse.ArgumentParser(description="wordlebot HTTP server")
    parser.add_argument("--port", type=int, default=3000, help="Port (default: 3000)")
    parser.add_argument("--host", type=str, default="0.0.0.0", help="Host (default: 0.0.0.0)")
    parser.add_argument("--log-level", default="INFO")
    args = parser.parse_args()

    configure_logging(args.log_level)
    SolverHandler.settings = Settings.from_env()

    server = ThreadingHTTPServer((args.host, args.port), SolverHandler)
    logger.info("listening on http://localhost:%d", args.port)
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        logger.info("shutting down")
        server.shutdown()


if __name__ == "__main__":
    main()
