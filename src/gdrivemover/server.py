"""HTTP front-end: list owned items and accept move requests."""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, field
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Callable
from urllib.parse import parse_qs, urlparse

from gdrivemover.errors import GDriveMoverError
from gdrivemover.models import RemoteFile
from gdrivemover.mover import MoveService
from gdrivemover.util.size import format_size

logger = logging.getLogger(__name__)

_TRANSFER_PATH = re.compile(r"^/(?P<type>[^/]+)/transfer/?$")


@dataclass
class Response:
    status: int
    body: bytes = b""
    headers: dict[str, str] = field(default_factory=dict)

    @classmethod
    def text(cls, status: int, text: str) -> "Response":
        return cls(status, text.encode("utf-8"), {"Content-Type": "text/plain; charset=utf-8"})

    @classmethod
    def json(cls, status: int, payload: object) -> "Response":
        return cls(
            status,
            json.dumps(payload).encode("utf-8"),
            {"Content-Type": "application/json"},
        )

    @classmethod
    def redirect(cls, location: str) -> "Response":
        return cls(302, b"", {"Location": location})


class MoveRouter:
    """
    Routing table for one server instance.

    The router owns a MoveService built from the injected source and target
    accounts; nothing is registered globally.
    """

    def __init__(self, service: MoveService) -> None:
        self._service = service
        self._get_routes: dict[str, Callable[[], Response]] = {
            "/": self._index,
            "/files": lambda: self._listing("files"),
            "/directories": lambda: self._listing("directories"),
        }

    def dispatch(self, method: str, path: str, body: bytes = b"") -> Response:
        path = urlparse(path).path

        match = _TRANSFER_PATH.match(path)
        if match is not None:
            if method != "POST":
                return Response.text(405, "Method not allowed")
            return self._transfer(match.group("type"), body)

        handler = self._get_routes.get(path)
        if handler is None:
            return Response.text(404, "Not found")
        if method != "GET":
            return Response.text(405, "Method not allowed")
        return handler()

    def _index(self) -> Response:
        return Response.text(200, "Server running")

    def _listing(self, list_type: str) -> Response:
        client = self._service.source.client
        try:
            if list_type == "directories":
                items = client.list_owned_folders()
            else:
                items = client.list_owned_files()
        except GDriveMoverError as exc:
            logger.error("Unable to retrieve files: %s", exc)
            if exc.details.get("body"):
                logger.error("Error Body: %s", exc.details["body"])
            return Response.json(502, {"error": str(exc)})

        return Response.json(
            200,
            {"type": list_type, "files": [_listing_entry(f) for f in items]},
        )

    def _transfer(self, move_type: str, body: bytes) -> Response:
        try:
            form = parse_qs(body.decode("utf-8"))
        except UnicodeDecodeError:
            return Response.text(400, "Malformed form body")
        file_ids = form.get("fileId")
        if not file_ids:
            return Response.text(400, "fileId missing")

        try:
            outcomes = self._service.move(move_type, file_ids)
        except GDriveMoverError as exc:
            return Response.text(500, f"Error: {exc}")

        failed = next((o for o in outcomes if not o.ok), None)
        if failed is not None:
            return Response.text(500, f"Error: {failed.error_message}")
        return Response.redirect("/files")


class _MoveRequestHandler(BaseHTTPRequestHandler):
    server: "MoveServer"

    def do_GET(self) -> None:
        self._respond(self.server.router.dispatch("GET", self.path))

    def do_POST(self) -> None:
        length = int(self.headers.get("Content-Length") or 0)
        body = self.rfile.read(length) if length else b""
        self._respond(self.server.router.dispatch("POST", self.path, body))

    def do_PUT(self) -> None:
        self._respond(self.server.router.dispatch("PUT", self.path))

    def do_DELETE(self) -> None:
        self._respond(self.server.router.dispatch("DELETE", self.path))

    def _respond(self, response: Response) -> None:
        self.send_response(response.status)
        for name, value in response.headers.items():
            self.send_header(name, value)
        self.send_header("Content-Length", str(len(response.body)))
        self.end_headers()
        if response.body:
            self.wfile.write(response.body)

    def log_message(self, format: str, *args) -> None:
        logger.info("%s - %s", self.address_string(), format % args)


class MoveServer(ThreadingHTTPServer):
    """HTTP server bound to one MoveRouter."""

    daemon_threads = True

    def __init__(self, address: tuple[str, int], router: MoveRouter) -> None:
        super().__init__(address, _MoveRequestHandler)
        self.router = router


def serve(service: MoveService, host: str, port: int) -> None:
    """Serve until interrupted."""
    with MoveServer((host, port), MoveRouter(service)) as httpd:
        logger.info("Listening on http://%s:%s/", host, port)
        httpd.serve_forever()


def _listing_entry(file: RemoteFile) -> dict:
    return {
        "id": file.file_id,
        "name": file.name,
        "mimeType": file.mime_type,
        "size": format_size(file.size or 0),
        "quotaBytesUsed": format_size(file.quota_bytes_used or 0),
    }
