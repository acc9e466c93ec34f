# keep_alive.py
import logging
import os
import threading
from http.server import BaseHTTPRequestHandler, HTTPServer

PORT = int(os.environ.get("PORT", 8080))

log = logging.getLogger(__name__)


class _Handler(BaseHTTPRequestHandler):
    def do_GET(self):
        self.send_response(200)
        self.send_header("Content-Type", "text/plain; charset=utf-8")
        self.end_headers()
        self.wfile.write(b"Bot is alive.\n")

    # route request lines to debug instead of stderr
    def log_message(self, format, *args):
        log.debug("keep-alive %s - %s", self.address_string(), format % args)


def build_server(port: int = PORT) -> HTTPServer:
    return HTTPServer(("0.0.0.0", port), _Handler)


def _run_server(server: HTTPServer):
    try:
        server.serve_forever()
    except OSError as e:
        log.warning("Keep-alive server stopped: %s", e)


def keep_alive(port: int = PORT) -> HTTPServer:
    """Call this from your main file to start the tiny webserver in a daemon thread."""
    server = build_server(port)
    t = threading.Thread(target=_run_server, args=(server,), daemon=True)
    t.start()
    log.info("Keep-alive server listening on port %s", server.server_address[1])
    return server
