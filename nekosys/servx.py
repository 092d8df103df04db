"""A small web server for the UI and its API."""

from __future__ import annotations

import json
import logging
import mimetypes
import socket
import threading
import time
from http import HTTPStatus
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from pathlib import Path
from urllib.parse import unquote, urlsplit

from nekosys import nyannel

log = logging.getLogger(__name__)

PORT = 4989
TRAY_CHANNEL = "tray"
HELLO = "servx says hello :)"
_DEFAULT_ROOT = Path(__file__).resolve().parent


class ServxHandler(BaseHTTPRequestHandler):
    """Serves ``index.html``, the ``public`` directory and the API."""

    server_version = "servx"

    def do_GET(self) -> None:
        self._respond(head=False)

    def do_HEAD(self) -> None:
        self._respond(head=True)

    def log_message(self, format: str, *args) -> None:
        log.debug("%s - %s", self.address_string(), format % args)

    def _respond(self, head: bool) -> None:
        path = urlsplit(self.path).path
        root = Path(self.server.root)
        if path == "/api/hello":
            self._send(HTTPStatus.OK, HELLO.encode("utf-8"), "text/plain; charset=utf-8", head)
        elif path == "/":
            self._send_file(root / "index.html", head)
        elif path == "/public" or path.startswith("/public/"):
            self._send_file(self._public_file(root, path[len("/public") :]), head)
        else:
            self._not_found(head)

    @staticmethod
    def _public_file(root: Path, rest: str) -> Path | None:
        parts = [part for part in unquote(rest).split("/") if part]
        if any(part in ("..", ".") or "\\" in part for part in parts):
            return None
        target = root.joinpath("public", *parts)
        if target.is_dir():
            target = target / "index.html"
        return target

    def _send_file(self, path: Path | None, head: bool) -> None:
        if path is None or not path.is_file():
            self._not_found(head)
            return
        content_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
        self._send(HTTPStatus.OK, path.read_bytes(), content_type, head)

    def _not_found(self, head: bool) -> None:
        self._send(HTTPStatus.NOT_FOUND, b"", "text/plain; charset=utf-8", head)

    def _send(self, status: HTTPStatus, body: bytes, content_type: str, head: bool) -> None:
        self.send_response(status)
        self.send_header("Content-Type", content_type)
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        if not head:
            self.wfile.write(body)


def local_ip() -> str:
    """The address of this machine on its local network."""
    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
        sock.connect(("10.254.254.254", 1))
        return sock.getsockname()[0]


def location_message(ip: str, port: int) -> str:
    """The JSON message that tells the tray where the UI is served."""
    return json.dumps({"location": f"http://{ip}:{port}"}, separators=(",", ":"))


def make_server(
    root: str | Path, host: str = "0.0.0.0", port: int = PORT
) -> ThreadingHTTPServer:
    """Create a server for files under ``root``, bound but not yet serving."""
    server = ThreadingHTTPServer((host, port), ServxHandler)
    server.root = Path(root)
    return server


def _announce(message: str) -> None:
    try:
        nyannel.send(TRAY_CHANNEL, message)
    except nyannel.ChannelError as exc:
        log.debug("Failed to send tray message: %s", exc)


def init(root: str | Path | None = None, port: int = PORT) -> None:
    """Create the tray channel, announce the address and serve forever."""
    log.debug("Starting Servx...")
    nyannel.create(TRAY_CHANNEL).close()
    time.sleep(0.2)

    ip = local_ip()
    server = make_server(root if root is not None else _DEFAULT_ROOT, "0.0.0.0", port)
    indent = "\t" * 5
    log.info(
        "hosting on:\n%s - http://localhost:%d\n%s - http://%s:%d", indent, port, indent, ip, port
    )
    threading.Thread(target=_announce, args=(location_message(ip, port),), daemon=True).start()
    with server:
        server.serve_forever()