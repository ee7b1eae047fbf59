#!/usr/bin/env python3
"""
Simple static file server for the track grid editor.

Serves frontend/static without the API, e.g. when the API runs elsewhere.
"""

import functools
import http.server
import logging
import os
import socketserver
from pathlib import Path

logger = logging.getLogger(__name__)

STATIC_DIR = Path(__file__).resolve().parent / "static"
PORT = int(os.getenv("STATIC_PORT", "3194"))


class StaticRequestHandler(http.server.SimpleHTTPRequestHandler):
    def end_headers(self):
        self.send_header('Access-Control-Allow-Origin', '*')
        self.send_header('Access-Control-Allow-Methods', 'GET, POST, OPTIONS')
        self.send_header('Access-Control-Allow-Headers', 'Content-Type')
        super().end_headers()

    def log_message(self, format, *args):
        logger.info("%s - %s", self.address_string(), format % args)


class StaticServer(socketserver.ThreadingMixIn, http.server.HTTPServer):
    daemon_threads = True
    allow_reuse_address = True


def make_server(directory=STATIC_DIR, port=PORT, host=""):
    handler = functools.partial(StaticRequestHandler, directory=str(directory))
    return StaticServer((host, port), handler)


def main():
    logging.basicConfig(
        level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s"
    )
    with make_server() as httpd:
        logger.info("Starting static file server on port %d", httpd.server_address[1])
        logger.info("Editor will be available at: http://localhost:%d", httpd.server_address[1])
        logger.info("Press Ctrl+C to stop the server")
        try:
            httpd.serve_forever()
        except KeyboardInterrupt:
            logger.info("Server stopped by user")


if __name__ == "__main__":
    main()
